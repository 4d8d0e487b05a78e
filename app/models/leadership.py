import uuid
import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.user import _utcnow


class LeadershipAction(str, Enum):
    ADD_PRESIDENT = "add_president"
    REMOVE_PRESIDENT = "remove_president"
    ADD_OFFICER = "add_officer"
    REMOVE_OFFICER = "remove_officer"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeadershipRequest(Base):
    """스폰서/코디네이터 승인이 필요한 리더십 변경 요청.

    pending -> approved | rejected 로만 전이되며, 처리된 요청은 다시 열리지 않는다.
    """

    __tablename__ = "leadership_requests"
    __table_args__ = (
        Index("ix_leadership_requests_club_status", "club_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False)
    requested_by: Mapped[str] = mapped_column(String(255), nullable=False)
    target_user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    action_type: Mapped[str] = mapped_column(String(32), nullable=False)
    new_role: Mapped[str | None] = mapped_column(String(32), nullable=True)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=RequestStatus.PENDING.value)

    reviewed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviewed_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class PresidencyTransfer(Base):
    """회장 직접 이양 기록. 생성 후 수정하지 않는다."""

    __tablename__ = "presidency_transfers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), index=True, nullable=False)
    from_user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    to_user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default="completed")
    completed_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
