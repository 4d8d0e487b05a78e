"""
transaction.py

서비스 계층에서 사용하는 트랜잭션 경계 헬퍼.

with transaction(db, "Failed to claim club"):
    ...

- 블록이 정상 종료되면 commit
- 예외가 발생하면 항상 rollback 후 다시 발생
- ServiceError(400/403/404/409)는 그대로 전달
- 그 외 예외는 서버 로그에 남기고 OperationFailed(500)로 변환

"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from app.core.errors import OperationFailed, ServiceError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, failure_message: str) -> Iterator[Session]:
    try:
        yield db
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.exception("%s (%s)", failure_message, type(e).__name__)
        raise OperationFailed(failure_message) from e
