import os

# app 모듈 import 전에 설정되어야 하는 값들
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("COORDINATOR_EMAILS", "coordinator@berkeley.net")
os.environ.setdefault("TEACHER_EMAILS", "teacher@berkeley.net,Mentor@Berkeley.net")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app as fastapi_app
from app.core.config import settings
from app.core.deps import get_audit_recorder, get_db
from app.db.base import Base
from app.services.audit import AuditRecorder

# ✅ 모델 import (Base.metadata에 테이블 등록)
import app.models  # noqa: F401


# TEST_DATABASE_URL이 없으면 in-memory SQLite 사용
TEST_DB_URL = settings.TEST_DATABASE_URL or os.getenv("TEST_DATABASE_URL") or "sqlite://"

if make_url(TEST_DB_URL).get_backend_name() == "sqlite":
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(TEST_DB_URL, pool_pre_ping=True)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def override_get_audit_recorder():
    return AuditRecorder(TestingSessionLocal)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트마다 데이터 초기화 (테이블은 유지, row만 삭제)"""
    # FK 순서 역순으로 삭제
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client():
    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_audit_recorder] = override_get_audit_recorder
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
