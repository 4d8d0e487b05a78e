"""
services/roles.py

사용자 권한 조회(Role Query) 서비스.

사용자 ID를 받아 해당 사용자가 가진 권한 묶음
(코디네이터 / 스폰서 / 회장 / 임원)을 계산한다.

주요 기능:
- 권한 스냅샷 조회 (get_user_roles)
- 동아리 단위 권한 판단 (is_sponsor_of_club, is_president_of_club)
- 파생 권한 판단 (can_moderate_club, can_manage_leadership)
- 동아리 회장 / 스폰서 목록 조회

코디네이터 판단:
- user_roles 테이블에 coordinator 행이 있거나 (DB 관리)
- 사용자 이메일이 COORDINATOR_EMAILS 설정에 있으면 (설정 관리)
- 둘 중 하나만 만족해도 코디네이터로 본다.
- 두 기준은 AuthorizationOracle의 백엔드로 분리되어 있어
  설정 기반 목록을 제거해도 호출 측 코드는 바뀌지 않는다.

설계 원칙:
- 조회 실패 시 예외를 올리지 않고 "권한 없음"을 반환 (fail closed)
- 조회 실패가 권한 상승으로 이어지는 경우가 없어야 함
- HTTP / FastAPI 의존성 없음

관련 파일:
- app.models.user        : User / UserRole 모델
- app.models.club        : ClubMember / ClubSponsor 모델
- app.services.leadership : 권한 확인 후 상태 전이 수행

"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.club import ClubMember, ClubSponsor, LEGACY_OFFICER_ROLE, MemberRole, SponsorStatus
from app.models.user import SchoolRole, User, UserRole

logger = logging.getLogger(__name__)


@dataclass
class RoleSnapshot:
    is_coordinator: bool = False
    is_sponsor: bool = False
    sponsored_club_ids: list[uuid.UUID] = field(default_factory=list)
    is_president: bool = False
    president_club_ids: list[uuid.UUID] = field(default_factory=list)
    is_officer: bool = False

    def as_dict(self) -> dict:
        return {
            "isCoordinator": self.is_coordinator,
            "isSponsor": self.is_sponsor,
            "sponsoredClubIds": [str(c) for c in self.sponsored_club_ids],
            "isPresident": self.is_president,
            "presidentClubIds": [str(c) for c in self.president_club_ids],
            "isOfficer": self.is_officer,
        }


# ---------------------------------------------------------------------------
# 코디네이터 판단 백엔드
# ---------------------------------------------------------------------------

class CoordinatorBackend(Protocol):
    def is_coordinator(self, db: Session, user_id: str) -> bool: ...


class PersistedRoleBackend:
    """user_roles 테이블 기반"""

    def is_coordinator(self, db: Session, user_id: str) -> bool:
        row = db.scalar(
            select(UserRole.id)
            .where(UserRole.user_id == user_id, UserRole.role == SchoolRole.COORDINATOR.value)
            .limit(1)
        )
        return row is not None


class StaticEmailBackend:
    """설정 파일의 이메일 목록 기반"""

    def __init__(self, emails: Iterable[str]):
        self.emails = frozenset(e.strip().lower() for e in emails if e.strip())

    def is_coordinator(self, db: Session, user_id: str) -> bool:
        if not self.emails:
            return False
        email = db.scalar(select(User.email).where(User.id == user_id))
        return bool(email) and email.lower() in self.emails


class AuthorizationOracle:
    def __init__(self, backends: Iterable[CoordinatorBackend]):
        self.backends = list(backends)

    def is_coordinator(self, db: Session, user_id: str) -> bool:
        return any(b.is_coordinator(db, user_id) for b in self.backends)


def default_oracle() -> AuthorizationOracle:
    return AuthorizationOracle([
        PersistedRoleBackend(),
        StaticEmailBackend(settings.coordinator_emails),
    ])


def _fail_closed(db: Session, what: str, e: Exception) -> None:
    logger.error("Error checking %s: %s", what, type(e).__name__, exc_info=True)
    db.rollback()


# ---------------------------------------------------------------------------
# 권한 조회
# ---------------------------------------------------------------------------

"""
사용자 권한 스냅샷 조회

- 스폰서 : status='active' 인 스폰서 관계만 포함
- 회장   : role='president' 인 동아리 (공동 회장도 각각 포함)
- 임원   : 어느 동아리든 officer(또는 이전 값 leader)면 True (동아리 구분 없음)
- 조회 중 DB 오류가 나면 빈 스냅샷 반환

"""

def get_user_roles(db: Session, user_id: str, oracle: AuthorizationOracle) -> RoleSnapshot:
    try:
        is_coord = oracle.is_coordinator(db, user_id)

        sponsored = list(db.scalars(
            select(ClubSponsor.club_id).where(
                ClubSponsor.user_id == user_id,
                ClubSponsor.status == SponsorStatus.ACTIVE.value,
            )
        ).all())

        presided = list(db.scalars(
            select(ClubMember.club_id).where(
                ClubMember.user_id == user_id,
                ClubMember.role == MemberRole.PRESIDENT.value,
            )
        ).all())

        officer = db.scalar(
            select(ClubMember.club_id).where(
                ClubMember.user_id == user_id,
                ClubMember.role.in_([MemberRole.OFFICER.value, LEGACY_OFFICER_ROLE]),
            ).limit(1)
        )
    except SQLAlchemyError as e:
        _fail_closed(db, "user roles", e)
        return RoleSnapshot()

    return RoleSnapshot(
        is_coordinator=is_coord,
        is_sponsor=bool(sponsored),
        sponsored_club_ids=sponsored,
        is_president=bool(presided),
        president_club_ids=presided,
        is_officer=officer is not None,
    )


def is_coordinator(db: Session, user_id: str, oracle: AuthorizationOracle) -> bool:
    try:
        return oracle.is_coordinator(db, user_id)
    except SQLAlchemyError as e:
        _fail_closed(db, "coordinator status", e)
        return False


def is_sponsor_of_club(db: Session, user_id: str, club_id: uuid.UUID) -> bool:
    try:
        row = db.scalar(
            select(ClubSponsor.id).where(
                ClubSponsor.user_id == user_id,
                ClubSponsor.club_id == club_id,
                ClubSponsor.status == SponsorStatus.ACTIVE.value,
            ).limit(1)
        )
    except SQLAlchemyError as e:
        _fail_closed(db, "sponsor status", e)
        return False
    return row is not None


def is_president_of_club(db: Session, user_id: str, club_id: uuid.UUID) -> bool:
    try:
        row = db.scalar(
            select(ClubMember.user_id).where(
                ClubMember.user_id == user_id,
                ClubMember.club_id == club_id,
                ClubMember.role == MemberRole.PRESIDENT.value,
            )
        )
    except SQLAlchemyError as e:
        _fail_closed(db, "president status", e)
        return False
    return row is not None


# 코디네이터 또는 해당 동아리 스폰서
def can_moderate_club(db: Session, user_id: str, club_id: uuid.UUID, oracle: AuthorizationOracle) -> bool:
    roles = get_user_roles(db, user_id, oracle)
    return roles.is_coordinator or club_id in roles.sponsored_club_ids


# 코디네이터, 해당 동아리 스폰서 또는 회장
def can_manage_leadership(db: Session, user_id: str, club_id: uuid.UUID, oracle: AuthorizationOracle) -> bool:
    roles = get_user_roles(db, user_id, oracle)
    return (
        roles.is_coordinator
        or club_id in roles.sponsored_club_ids
        or club_id in roles.president_club_ids
    )


def get_club_presidents(db: Session, club_id: uuid.UUID) -> list[str]:
    try:
        return list(db.scalars(
            select(ClubMember.user_id)
            .where(ClubMember.club_id == club_id, ClubMember.role == MemberRole.PRESIDENT.value)
            .order_by(ClubMember.joined_at)
        ).all())
    except SQLAlchemyError as e:
        _fail_closed(db, "club presidents", e)
        return []


def get_club_sponsors(db: Session, club_id: uuid.UUID) -> list[str]:
    try:
        return list(db.scalars(
            select(ClubSponsor.user_id).where(
                ClubSponsor.club_id == club_id,
                ClubSponsor.status == SponsorStatus.ACTIVE.value,
            )
        ).all())
    except SQLAlchemyError as e:
        _fail_closed(db, "club sponsors", e)
        return []
