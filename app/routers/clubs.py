"""
clubs.py

동아리 리더십 API 모음 (회원 / 회장 / 스폰서용).

주요 기능:
- 동아리 일괄 등록 (코디네이터) / 동아리 정보 수정 (대표 회장)
- 동아리 claim (첫 회장 등록)
- 스폰서 claim / 탈퇴 / 스폰서 여부 확인
- 회장 직접 이양 / 회장 사임
- 회원 역할 변경 (공동 회장 지원)
- 동아리 가입 / 탈퇴, 동아리 상세 / 회원 목록 조회
- 리더십 변경 요청 생성

설계 원칙:
- 요청한 사용자 ID는 외부 ID 공급자가 확인한 값을 body/query로 전달받음
- 상태 변경 로직은 app.services.leadership 에 위임하고 라우터는 응답만 조립
- 감사 로그는 주 트랜잭션 commit 이후 BackgroundTasks로 기록

관련 파일:
- app.services.leadership : 리더십 상태 전이
- app.services.audit      : 감사 로그 기록
- app.schemas.club        : 요청 body 스키마

"""

import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_audit_recorder, get_db, get_role_oracle
from app.models.audit_log import AuditAction
from app.schemas.club import (
    ClaimRequest,
    ClaimSponsorRequest,
    ClubImportRequest,
    ClubUpdateRequest,
    JoinRequest,
    LeadershipRequestCreate,
    LeavePresidencyRequest,
    RoleUpdateRequest,
    TransferRequest,
    UserActionRequest,
)
from app.services import leadership
from app.services.audit import AuditRecorder
from app.services.roles import AuthorizationOracle

router = APIRouter(prefix="/clubs", tags=["clubs"])


def _club_audit(background_tasks: BackgroundTasks, recorder: AuditRecorder, actor_id: str,
                action: AuditAction, club_id: uuid.UUID, details: dict) -> None:
    background_tasks.add_task(recorder.record, actor_id, action, "club", club_id, details)


# 동아리 일괄 등록 (코디네이터 전용)
@router.post("/import")
def import_clubs(
    data: ClubImportRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    oracle: AuthorizationOracle = Depends(get_role_oracle),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    summary = leadership.import_clubs(
        db, oracle, user_id=data.user_id, entries=[entry.model_dump() for entry in data.clubs]
    )
    background_tasks.add_task(
        recorder.record,
        data.user_id,
        AuditAction.IMPORT_CLUBS,
        "club",
        "import",
        {"imported": summary["imported"], "errors": summary["errors"]},
    )
    return {"success": True, **summary}


# 동아리 상세 조회 (userId가 있으면 가입 여부 / 역할 포함)
@router.get("/{club_id}")
def get_club(
    club_id: uuid.UUID,
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    data = leadership.get_club_detail(db, club_id=club_id, viewer_id=user_id)
    return {"success": True, "data": data}


@router.get("/{club_id}/members")
def list_members(club_id: uuid.UUID, db: Session = Depends(get_db)):
    return {"success": True, "data": leadership.list_members(db, club_id=club_id)}


# 대표 회장의 동아리 정보 수정 (body에 포함된 필드만 변경)
@router.put("/{club_id}")
def update_club(
    club_id: uuid.UUID,
    data: ClubUpdateRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    changes = data.model_dump(include=data.model_fields_set - {"user_id"})
    result = leadership.update_club(db, club_id=club_id, user_id=data.user_id, changes=changes)
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.UPDATE_CLUB, club_id, result.details)
    return {
        "success": True,
        "message": result.message,
        "data": leadership.get_club_detail(db, club_id=club_id),
    }


# 미claim 동아리 claim
@router.post("/{club_id}/claim")
def claim_club(
    club_id: uuid.UUID,
    data: ClaimRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.claim_club(
        db,
        club_id=club_id,
        user_id=data.user_id,
        user_name=data.user_name,
        user_email=data.user_email,
        user_avatar=data.user_avatar,
    )
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.CLAIM_CLUB, club_id, result.details)
    return {"success": True, "message": result.message}


# 인증된 교사가 스폰서로 등록
@router.post("/{club_id}/claim-sponsor")
def claim_sponsor(
    club_id: uuid.UUID,
    data: ClaimSponsorRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.claim_sponsor(db, club_id=club_id, user_id=data.user_id, confirmed=data.confirmed)
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.CLAIM_SPONSOR, club_id, result.details)
    return {"success": True, "message": result.message}


@router.post("/{club_id}/leave-sponsor")
def leave_sponsor(
    club_id: uuid.UUID,
    data: UserActionRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.leave_sponsor(db, club_id=club_id, user_id=data.user_id)
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.LEAVE_SPONSOR, club_id, result.details)
    return {"success": True, "message": result.message}


@router.get("/{club_id}/check-sponsor")
def check_sponsor(
    club_id: uuid.UUID,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    return {"success": True, "isSponsor": leadership.check_sponsor(db, club_id=club_id, user_id=user_id)}


# 대표 회장이 다른 회원에게 회장직 이양
@router.post("/{club_id}/transfer")
def transfer_presidency(
    club_id: uuid.UUID,
    data: TransferRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.transfer_presidency(
        db, club_id=club_id, from_user_id=data.from_user_id, to_user_id=data.to_user_id
    )
    _club_audit(background_tasks, recorder, data.from_user_id, AuditAction.TRANSFER_PRESIDENCY, club_id, result.details)
    return {"success": True, "message": result.message}


# 회장 사임 (후임자 지정 시 이양, 미지정 시 동아리 탈퇴 + 미claim)
@router.post("/{club_id}/leave-presidency")
def leave_presidency(
    club_id: uuid.UUID,
    data: LeavePresidencyRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.leave_presidency(
        db, club_id=club_id, user_id=data.user_id, new_president_id=data.new_president_id
    )
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.LEAVE_PRESIDENCY, club_id, result.details)
    return {"success": True, "message": result.message}


# 회원 역할 변경 (공동 회장 누구나 가능)
@router.put("/{club_id}/members/{member_id}/role")
def update_member_role(
    club_id: uuid.UUID,
    member_id: str,
    data: RoleUpdateRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.update_member_role(
        db, club_id=club_id, member_id=member_id, new_role=data.role, updated_by=data.updated_by
    )
    _club_audit(background_tasks, recorder, data.updated_by, AuditAction.UPDATE_MEMBER_ROLE, club_id, result.details)
    return {"success": True, "message": result.message}


@router.post("/{club_id}/join")
def join_club(
    club_id: uuid.UUID,
    data: JoinRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.join_club(
        db, club_id=club_id, user_id=data.user_id, user_name=data.user_name, user_email=data.user_email
    )
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.JOIN_CLUB, club_id, result.details)
    return {"success": True, "message": result.message}


@router.post("/{club_id}/leave")
def leave_club(
    club_id: uuid.UUID,
    data: UserActionRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = leadership.leave_club(db, club_id=club_id, user_id=data.user_id)
    _club_audit(background_tasks, recorder, data.user_id, AuditAction.LEAVE_CLUB, club_id, result.details)
    return {"success": True, "message": result.message}


# 리더십 변경 요청 생성 (스폰서/코디네이터 승인 대기)
@router.post("/{club_id}/leadership-requests", status_code=201)
def submit_leadership_request(
    club_id: uuid.UUID,
    data: LeadershipRequestCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    created = leadership.submit_request(
        db,
        club_id=club_id,
        requested_by=data.requested_by,
        target_user_id=data.target_user_id,
        action_type=data.action_type,
        new_role=data.new_role,
    )
    background_tasks.add_task(
        recorder.record,
        data.requested_by,
        AuditAction.SUBMIT_LEADERSHIP_REQUEST,
        "leadership_request",
        created["id"],
        {"actionType": created["action_type"], "targetUserId": created["target_user_id"]},
    )
    return {"success": True, "data": created}
