"""
club.py

동아리(Club), 동아리 회원(ClubMember), 스폰서(ClubSponsor) 모델 정의 파일.

불변 조건:
- is_claimed == True  <=>  role='president' 인 club_members 행이 1개 이상 존재
- president_id 는 그 회장들 중 한 명("대표 회장")을 가리키거나, 미claim 상태면 NULL
- 공동 회장(co-president)이 있어도 president_id 는 한 명만 가리킴

스폰서 관계는 삭제하지 않고 status='removed'로만 표시하여 이력을 보존한다.

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.user import _utcnow


"""
동아리 내 역할 정의

- MEMBER         : 일반 회원
- OFFICER        : 임원
- VICE_PRESIDENT : 부회장
- PRESIDENT      : 회장 (공동 회장 가능)

"""

class MemberRole(str, Enum):
    MEMBER = "member"
    OFFICER = "officer"
    VICE_PRESIDENT = "vice_president"
    PRESIDENT = "president"


# 이전 버전 데이터에서 officer 대신 쓰이던 값
LEGACY_OFFICER_ROLE = "leader"


class SponsorStatus(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


class Club(Base):
    __tablename__ = "clubs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    meeting_time: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_claimed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    president_id: Mapped[str | None] = mapped_column(String(255), ForeignKey("users.id"), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


"""
동아리 회원 모델

- (club_id, user_id) 복합 키 : 동아리당 사용자 한 명은 한 행만 가짐
- role 은 문자열로 저장 (이전 데이터의 'leader' 값 허용)

"""

class ClubMember(Base):
    __tablename__ = "club_members"
    __table_args__ = (
        Index("ix_club_members_user_id", "user_id"),
        Index("ix_club_members_club_role", "club_id", "role"),
    )

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), ForeignKey("users.id"), primary_key=True)

    role: Mapped[str] = mapped_column(String(32), nullable=False, default=MemberRole.MEMBER.value)

    joined_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class ClubSponsor(Base):
    __tablename__ = "club_sponsors"
    __table_args__ = (
        Index("ix_club_sponsors_club_user", "club_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), ForeignKey("users.id"), nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=SponsorStatus.ACTIVE.value)

    assigned_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


# 동아리 태그 (일괄 등록 시 함께 저장, 같은 태그는 한 번만)
class ClubTag(Base):
    __tablename__ = "club_tags"

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True)
    tag: Mapped[str] = mapped_column(String(64), primary_key=True)
