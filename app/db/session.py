"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
애플리케이션 전반에서 공통으로 사용하는 DB 연결을 관리한다.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.
서비스 계층은 이 모듈의 전역 엔진을 직접 참조하지 않고
주입받은 Session만 사용한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- 세션 생성/종료 책임을 명확히 분리
- pool_pre_ping=True로 유휴 연결 오류 방지

관련 파일:
- app.core.config        : DATABASE_URL 설정
- app.core.deps          : get_db 의존성
- app.db.transaction     : 트랜잭션 경계(commit / rollback)

"""

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def build_engine(url: str):
    # SQLite(로컬 개발/테스트)는 풀 옵션을 받지 않음
    if make_url(url).get_backend_name() == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    # pool_pre_ping=True:
    #   장시간 idle 후 끊어진 DB 커넥션을 자동으로 감지/재연결
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


engine = build_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
