"""
sponsor.py

스폰서(교사) / 코디네이터용 리더십 요청 처리 API.

주요 기능:
- 스폰서로 등록된 동아리 목록 조회
- 처리 대기 중인 리더십 변경 요청 목록 조회
- 리더십 변경 요청 승인 / 거절

설계 원칙:
- 요청 승인 시 상태 변경과 회원 역할 변경은 한 트랜잭션 (서비스 계층에서 보장)
- 이미 처리된 요청은 다시 처리할 수 없음 (409)

관련 파일:
- app.services.leadership : review_request / list_pending_requests
- app.services.roles      : 스폰서 / 코디네이터 판단

"""

import uuid
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_audit_recorder, get_db, get_role_oracle
from app.models.audit_log import AuditAction
from app.schemas.club import ReviewRequest
from app.services import leadership
from app.services.audit import AuditRecorder
from app.services.roles import AuthorizationOracle

router = APIRouter(prefix="/sponsor", tags=["sponsor"])


@router.get("/clubs")
def sponsored_clubs(
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": leadership.list_sponsored_clubs(db, user_id=user_id)}


# 코디네이터는 전체, 스폰서는 본인 동아리의 pending 요청만
@router.get("/requests")
def pending_requests(
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
):
    return {"success": True, "data": leadership.list_pending_requests(db, oracle, user_id=user_id)}


@router.post("/requests/{request_id}")
def review_request(
    request_id: uuid.UUID,
    data: ReviewRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.review_request(
        db,
        oracle,
        request_id=request_id,
        reviewer_id=data.user_id,
        action=data.action,
        rejection_reason=data.rejection_reason,
    )

    audit_action = (
        AuditAction.APPROVE_LEADERSHIP_REQUEST if data.action == "approve"
        else AuditAction.REJECT_LEADERSHIP_REQUEST
    )
    background_tasks.add_task(
        recorder.record, data.user_id, audit_action, "leadership_request", request_id, result.details
    )
    return {"success": True, "message": result.message}
