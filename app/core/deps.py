from typing import Generator

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import SessionLocal
from app.services.audit import AuditRecorder
from app.services.roles import AuthorizationOracle, default_oracle


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# 코디네이터 판단 기준 (DB 역할 + 설정 이메일 목록)
# 테스트에서는 dependency_overrides 로 교체
def get_role_oracle() -> AuthorizationOracle:
    return default_oracle()


# 감사 로그는 요청 세션과 분리된 자체 세션으로 기록
def get_audit_recorder() -> AuditRecorder:
    return AuditRecorder(SessionLocal, enabled=settings.AUDIT_LOG_ENABLED)
