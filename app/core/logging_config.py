"""
logging.py

애플리케이션 로깅 설정.

- 서버 시작 시 app.main에서 한 번만 호출
- 모든 모듈은 logging.getLogger(__name__)으로 로거를 얻어 사용
- 예외 상세 정보는 서버 로그에만 남기고 응답에는 노출하지 않음

"""

import logging
import sys

from app.core.config import settings


LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] %(message)s"


def setup_logging() -> logging.Logger:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # 외부 라이브러리 로그는 WARNING 이상만
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger("app")
