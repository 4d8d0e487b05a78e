"""

audit_log.py

감사 로그(Audit Log) 모델 정의 파일.

이 파일은 동아리 리더십 관련 주요 행위
(claim, 회장 이양, 회장 해임, 회원 강퇴, 요청 승인/거절 등)를
DB에 기록하기 위한 로그 테이블을 정의한다.

설계 원칙:
- 실제 데이터 변경과 로그 기록을 분리 (별도 세션 / 별도 트랜잭션)
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- actor(행위자)와 target(대상)을 명확히 구분

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.user import _utcnow


#  감사 로그 행위 유형 Enum

class AuditAction(str, Enum):
    CLAIM_CLUB = "claim_club"
    CLAIM_SPONSOR = "claim_sponsor"
    LEAVE_SPONSOR = "leave_sponsor"
    TRANSFER_PRESIDENCY = "transfer_presidency"
    LEAVE_PRESIDENCY = "leave_presidency"
    REMOVE_PRESIDENT = "remove_president"
    KICK_MEMBER = "kick_member"
    UPDATE_MEMBER_ROLE = "update_member_role"
    UPDATE_CLUB = "update_club"
    IMPORT_CLUBS = "import_clubs"
    JOIN_CLUB = "join_club"
    LEAVE_CLUB = "leave_club"
    SUBMIT_LEADERSHIP_REQUEST = "submit_leadership_request"
    APPROVE_LEADERSHIP_REQUEST = "approve_leadership_request"
    REJECT_LEADERSHIP_REQUEST = "reject_leadership_request"


"""
감사 로그 모델

- user_id     : 행위를 수행한 사용자 ID
- action      : 수행된 행위 유형
- target_type : 대상 종류 (club / leadership_request)
- target_id   : 대상 ID
- details     : 추가 정보 (JSON)
- created_at  : 행위 발생 시각 (UTC)

users 테이블과 FK로 묶지 않는다. (claim 직후처럼 사용자 행이 막 생긴 경우에도 기록 가능)

"""

class AuditLog(Base):
    __tablename__ = "audit_log"
    __table_args__ = (
        Index("ix_audit_log_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False)

    target_type: Mapped[str] = mapped_column(String(32), nullable=False)
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)

    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
