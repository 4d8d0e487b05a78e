"""
services/audit.py

감사 로그 기록 서비스.

이 파일은 동아리 리더십 관련 행위를 audit_log 테이블에 기록하는
AuditRecorder를 제공한다.

설계 원칙:
- 주 트랜잭션이 commit된 뒤에 호출 (라우터에서 BackgroundTasks로 예약)
- 요청 세션과 분리된 별도 세션 / 별도 트랜잭션 사용
- 기록 실패(테이블 없음 포함)는 WARNING 로그만 남기고 무시
- 반환값 없음: 호출 측은 결과를 기다리거나 확인하지 않음

관련 파일:
- app.models.audit_log   : AuditLog 모델
- app.core.deps          : get_audit_recorder 의존성
- app.routers.admin      : 감사 로그 조회 API

"""

import logging
from typing import Any, Callable

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.models.audit_log import AuditAction, AuditLog

logger = logging.getLogger(__name__)


class AuditRecorder:
    def __init__(self, session_factory: Callable[[], Session], enabled: bool = True):
        self.session_factory = session_factory
        self.enabled = enabled

    """
    감사 로그 한 건 기록

    - actor_id    : 행위를 수행한 사용자 ID
    - action      : 수행된 행위 유형
    - target_type : 대상 종류 (club / leadership_request)
    - target_id   : 대상 ID
    - details     : 추가 정보 (선택)

    """
    def record(
        self,
        actor_id: str,
        action: AuditAction | str,
        target_type: str,
        target_id: Any,
        details: dict | None = None,
    ) -> None:
        if not self.enabled:
            return

        action_value = action.value if isinstance(action, AuditAction) else action
        db = None
        try:
            db = self.session_factory()
            db.add(
                AuditLog(
                    user_id=actor_id,
                    action=action_value,
                    target_type=target_type,
                    target_id=str(target_id),
                    details=details or {},
                )
            )
            db.commit()
        except Exception as e:
            logger.warning("Could not write audit log (%s): %s", action_value, type(e).__name__)
            if db is not None:
                try:
                    db.rollback()
                except Exception:
                    logger.debug("Audit session rollback failed", exc_info=True)
        finally:
            if db is not None:
                db.close()


def list_audit_logs(db: Session, limit: int) -> list[AuditLog]:
    return list(db.scalars(
        select(AuditLog).order_by(desc(AuditLog.created_at)).limit(limit)
    ).all())
