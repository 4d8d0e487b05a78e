import uuid
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_audit_recorder, get_db, get_role_oracle
from app.core.errors import PermissionDenied
from app.models.audit_log import AuditAction
from app.schemas.club import AdminTargetRequest
from app.services import leadership, roles
from app.services.audit import AuditRecorder, list_audit_logs
from app.services.roles import AuthorizationOracle


router = APIRouter(prefix="/admin", tags=["admin"])


# 코디네이터가 동아리 회장을 해임하는 엔드포인트 (공동 회장 전원 해임 + 미claim)
@router.post("/clubs/{club_id}/remove-president")
def remove_president(
    club_id: uuid.UUID,
    data: AdminTargetRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.remove_president(
        db, oracle, club_id=club_id, user_id=data.user_id, target_user_id=data.target_user_id
    )
    background_tasks.add_task(
        recorder.record, data.user_id, AuditAction.REMOVE_PRESIDENT, "club", club_id, result.details
    )
    return {"success": True, "message": result.message}


# 코디네이터가 회장이 아닌 회원을 강퇴하는 엔드포인트
@router.post("/clubs/{club_id}/kick-member")
def kick_member(
    club_id: uuid.UUID,
    data: AdminTargetRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.kick_member(
        db, oracle, club_id=club_id, user_id=data.user_id, target_user_id=data.target_user_id
    )
    background_tasks.add_task(
        recorder.record, data.user_id, AuditAction.KICK_MEMBER, "club", club_id, result.details
    )
    return {"success": True, "message": result.message}


# 감사 로그 조회 엔드포인트 (코디네이터 전용)
@router.get("/audit-logs")
def audit_logs(
    user_id: str = Query(..., alias="userId"),
    limit: int = 50,
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
):
    if not roles.is_coordinator(db, user_id, oracle):
        raise PermissionDenied("Only coordinators can view audit logs")

    limit = max(1, min(limit, 200))

    rows = list_audit_logs(db, limit)
    return {
        "success": True,
        "data": [
            {
                "id": str(log.id),
                "user_id": log.user_id,
                "action": log.action,
                "target_type": log.target_type,
                "target_id": log.target_id,
                "details": log.details,
                "created_at": log.created_at.isoformat(),
            }
            for log in rows
        ],
        "meta": {
            "limit": limit,
            "count": len(rows),
        },
    }
