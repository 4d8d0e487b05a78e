"""
services/leadership.py

동아리 리더십 상태 전이(Leadership Transition) 비즈니스 로직 모음.

이 파일은 동아리 claim, 회장 이양, 회장 사임, 관리자 회장 해임,
회원 강퇴, 회원 역할 변경, 스폰서 claim, 리더십 변경 요청 승인/거절 등
clubs / club_members 테이블의 리더십 상태를 바꾸는 모든 작업을 담당한다.

각 작업의 흐름:
1. 선행 조건(권한, 대상 존재 여부, 현재 상태)을 모두 확인
   - 조건 불충족 시 아무것도 변경하지 않고 예외 발생
2. transaction() 블록 안에서 여러 SQL을 하나의 트랜잭션으로 실행
   - 실패 시 전체 rollback
3. 결과 메시지와 감사 로그용 상세 정보를 반환
   - 감사 로그 기록은 라우터가 commit 이후에 예약

동시성:
- 애플리케이션 락은 사용하지 않는다.
- claim / 회장 이양 / 사임 / 요청 처리처럼 "한 번만" 일어나야 하는 전이는
  UPDATE ... WHERE <기대 상태> 조건부 갱신 후 영향받은 행 수를 확인한다.
  (먼저 읽고 나중에 쓰는 사이에 다른 요청이 끼어들어도 두 번 적용되지 않음)

대표 회장(president_id):
- 공동 회장이 여러 명이어도 clubs.president_id 는 한 명만 가리킨다.
- 직접 이양(transfer)과 사임(leave-presidency)은 대표 회장만 가능하고,
  역할 변경(update role)은 공동 회장 누구나 가능하다.
- 역할 변경 / 요청 승인으로 회장 구성이 바뀌면 _sync_president_pointer()가
  president_id 와 is_claimed 를 다시 맞춘다.

관련 파일:
- app.services.roles     : 권한 조회
- app.services.teachers  : 교사 이메일 확인
- app.db.transaction     : 트랜잭션 경계
- app.routers.clubs / admin / sponsor : HTTP API

"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.orm import Session, aliased

from app.core.errors import Conflict, NotFound, PermissionDenied, ValidationFailed
from app.db.transaction import transaction
from app.models.club import Club, ClubMember, ClubSponsor, ClubTag, MemberRole, SponsorStatus
from app.models.leadership import LeadershipAction, LeadershipRequest, PresidencyTransfer, RequestStatus
from app.models.user import User
from app.services import roles
from app.services.roles import AuthorizationOracle
from app.services.teachers import is_teacher_email

logger = logging.getLogger(__name__)


VALID_ROLES = tuple(r.value for r in MemberRole)

DEFAULT_PRESIDENT_NAME = "Club President"
DEFAULT_MEMBER_NAME = "Club Member"

# add_* 요청에서 new_role 이 비어 있을 때 사용할 역할
_DEFAULT_NEW_ROLE = {
    LeadershipAction.ADD_PRESIDENT.value: MemberRole.PRESIDENT.value,
    LeadershipAction.ADD_OFFICER.value: MemberRole.OFFICER.value,
}


@dataclass
class TransitionResult:
    message: str
    details: dict = field(default_factory=dict)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# 공통 헬퍼
# ---------------------------------------------------------------------------

def _get_club(db: Session, club_id: uuid.UUID) -> Club:
    club = db.get(Club, club_id)
    if not club:
        raise NotFound("Club not found")
    return club


def _get_member(db: Session, club_id: uuid.UUID, user_id: str) -> ClubMember | None:
    return db.get(ClubMember, (club_id, user_id))


def _ensure_user(db: Session, user_id: str, name: str | None = None, email: str | None = None,
                 avatar_url: str | None = None) -> User:
    # 이미 있으면 그대로 둔다 (ON CONFLICT DO NOTHING과 동일)
    user = db.get(User, user_id)
    if user is None:
        user = User(id=user_id, name=name or DEFAULT_PRESIDENT_NAME, email=email, avatar_url=avatar_url)
        db.add(user)
        db.flush()
    return user


"""
동아리 회원 역할 upsert

- 행이 없으면 새로 추가, 있으면 역할만 변경
- claim / 요청 승인(add_president, add_officer)에서 사용

"""

def upsert_member(db: Session, club_id: uuid.UUID, user_id: str, role: str) -> ClubMember:
    member = _get_member(db, club_id, user_id)
    if member is None:
        member = ClubMember(club_id=club_id, user_id=user_id, role=role)
        db.add(member)
    else:
        member.role = role
    return member


def _president_ids(db: Session, club_id: uuid.UUID) -> list[str]:
    return list(db.scalars(
        select(ClubMember.user_id)
        .where(ClubMember.club_id == club_id, ClubMember.role == MemberRole.PRESIDENT.value)
        .order_by(ClubMember.joined_at, ClubMember.user_id)
    ).all())


def _sync_president_pointer(db: Session, club: Club, preferred: str | None = None) -> None:
    """회장 구성이 바뀐 뒤 is_claimed / president_id 를 다시 맞춘다.

    - 회장이 없으면 미claim 상태로
    - 현재 대표 회장이 여전히 회장이면 그대로 유지
    - 아니면 preferred(방금 승격된 사용자)를, 없으면 가장 오래된 회장을 대표로
    """
    db.flush()
    presidents = _president_ids(db, club.id)

    if not presidents:
        club.is_claimed = False
        club.president_id = None
        return

    club.is_claimed = True
    if club.president_id not in presidents:
        club.president_id = preferred if preferred in presidents else presidents[0]


def _hand_over(db: Session, club_id: uuid.UUID, from_user_id: str, to_user_id: str) -> None:
    # 대표 회장이 읽은 시점 이후 바뀌었다면 0행 -> 중복 이양 차단
    moved = db.execute(
        update(Club)
        .where(Club.id == club_id, Club.president_id == from_user_id)
        .values(president_id=to_user_id, is_claimed=True)
    )
    if moved.rowcount != 1:
        raise Conflict("Presidency has already been changed")

    old = _get_member(db, club_id, from_user_id)
    if old is not None:
        old.role = MemberRole.MEMBER.value

    upsert_member(db, club_id, to_user_id, MemberRole.PRESIDENT.value)

    db.add(
        PresidencyTransfer(
            club_id=club_id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status="completed",
            completed_at=_now(),
        )
    )


# ---------------------------------------------------------------------------
# Claim
# ---------------------------------------------------------------------------

"""
동아리 claim (미claim -> claim)

- 동아리가 없으면 404, 이미 claim 상태면 409
- 사용자 행이 없으면 생성
- is_claimed=false 조건부 갱신으로 동시 claim 중 하나만 성공
- claim한 사용자를 president 로 회원 등록

"""

def claim_club(
    db: Session,
    *,
    club_id: uuid.UUID,
    user_id: str,
    user_name: str | None = None,
    user_email: str | None = None,
    user_avatar: str | None = None,
) -> TransitionResult:
    club = _get_club(db, club_id)
    if club.is_claimed:
        raise Conflict("Club is already claimed")

    club_name = club.name

    with transaction(db, "Failed to claim club"):
        _ensure_user(db, user_id, user_name, user_email, user_avatar)

        claimed = db.execute(
            update(Club)
            .where(Club.id == club_id, Club.is_claimed.is_(False))
            .values(is_claimed=True, president_id=user_id)
        )
        if claimed.rowcount != 1:
            raise Conflict("Club is already claimed")

        upsert_member(db, club_id, user_id, MemberRole.PRESIDENT.value)

    logger.info("Club %s claimed by %s", club_id, user_id)
    return TransitionResult(
        message=f"You are now the president of {club_name}!",
        details={"clubName": club_name},
    )


# ---------------------------------------------------------------------------
# 스폰서
# ---------------------------------------------------------------------------

def check_sponsor(db: Session, *, club_id: uuid.UUID, user_id: str) -> bool:
    return roles.is_sponsor_of_club(db, user_id, club_id)


"""
스폰서 claim

- 본인 확인(confirmed) 필수
- 사용자 이메일이 인증된 교사 목록에 있어야 함
- 이미 활성 스폰서면 409
- 회장 여부와 무관 (스폰서만 있고 회장이 없는 동아리도 가능)

"""

def claim_sponsor(db: Session, *, club_id: uuid.UUID, user_id: str, confirmed: bool) -> TransitionResult:
    if not confirmed:
        raise ValidationFailed("Please confirm that you are a sponsor/teacher of this club")

    user = db.get(User, user_id)
    if user is None or not is_teacher_email(user.email):
        raise PermissionDenied("Only verified teachers can claim clubs as sponsors")

    club = _get_club(db, club_id)

    if check_sponsor(db, club_id=club_id, user_id=user_id):
        raise Conflict("You are already a sponsor of this club")

    club_name = club.name

    with transaction(db, "Failed to claim club as sponsor"):
        db.add(ClubSponsor(club_id=club_id, user_id=user_id, status=SponsorStatus.ACTIVE.value))

    logger.info("User %s became sponsor of club %s", user_id, club_id)
    return TransitionResult(
        message=f"You are now a sponsor of {club_name}!",
        details={"clubName": club_name},
    )


# 스폰서 탈퇴 (행은 남기고 status='removed')
def leave_sponsor(db: Session, *, club_id: uuid.UUID, user_id: str) -> TransitionResult:
    if not check_sponsor(db, club_id=club_id, user_id=user_id):
        raise NotFound("You are not a sponsor of this club")

    club = db.get(Club, club_id)
    club_name = club.name if club else "Unknown Club"

    with transaction(db, "Failed to leave sponsorship"):
        db.execute(
            update(ClubSponsor)
            .where(
                ClubSponsor.club_id == club_id,
                ClubSponsor.user_id == user_id,
                ClubSponsor.status == SponsorStatus.ACTIVE.value,
            )
            .values(status=SponsorStatus.REMOVED.value)
        )

    return TransitionResult(
        message="You have left the sponsorship of this club",
        details={"clubName": club_name},
    )


# ---------------------------------------------------------------------------
# 회장 이양 / 사임
# ---------------------------------------------------------------------------

"""
회장 직접 이양

- 대표 회장(clubs.president_id)만 가능 (공동 회장은 이 경로 사용 불가)
- 대상은 기존 회원이어야 함
- 이양 후: 기존 회장 -> member, 대상 -> president, president_id -> 대상
- 다른 공동 회장은 그대로 둠
- presidency_transfers 에 완료 기록 추가

"""

def transfer_presidency(db: Session, *, club_id: uuid.UUID, from_user_id: str, to_user_id: str) -> TransitionResult:
    if from_user_id == to_user_id:
        raise ValidationFailed("Cannot transfer to yourself")

    club = _get_club(db, club_id)

    if club.president_id != from_user_id:
        raise PermissionDenied("Only the president can transfer ownership")

    if _get_member(db, club_id, to_user_id) is None:
        raise ValidationFailed("Target user must be a member of the club")

    with transaction(db, "Failed to transfer presidency"):
        _hand_over(db, club_id, from_user_id, to_user_id)

    logger.info("Presidency of club %s transferred %s -> %s", club_id, from_user_id, to_user_id)
    return TransitionResult(
        message="Presidency transferred successfully",
        details={"fromUserId": from_user_id, "toUserId": to_user_id},
    )


"""
회장 사임

- 후임자 지정 시: 직접 이양과 동일하게 처리 (기존 회장은 member로 남음)
- 후임자 미지정 시: 회장의 회원 행을 삭제(동아리 탈퇴)하고 동아리를 미claim 상태로
  - 단, 다른 공동 회장이 남아 있으면 그 중 가장 오래된 회장이 대표가 되고 claim 상태 유지
  - 공동 회장이 남은 경우 무조건 미claim 처리하지 않음
    (회장 행이 남아 있는데 is_claimed=false 가 되면 clubs 불변 조건이 깨짐)

"""

def leave_presidency(
    db: Session,
    *,
    club_id: uuid.UUID,
    user_id: str,
    new_president_id: str | None = None,
) -> TransitionResult:
    club = _get_club(db, club_id)

    if club.president_id != user_id:
        raise PermissionDenied("Only the president can leave the presidency")

    if new_president_id:
        if new_president_id == user_id:
            raise ValidationFailed("Cannot transfer to yourself")
        if _get_member(db, club_id, new_president_id) is None:
            raise ValidationFailed("New president must be a club member")

        with transaction(db, "Failed to leave presidency"):
            _hand_over(db, club_id, user_id, new_president_id)

        logger.info("President %s left club %s, successor %s", user_id, club_id, new_president_id)
        return TransitionResult(
            message="Presidency transferred successfully",
            details={"newPresidentId": new_president_id},
        )

    remaining = [p for p in _president_ids(db, club_id) if p != user_id]
    successor = remaining[0] if remaining else None

    with transaction(db, "Failed to leave presidency"):
        vacated = db.execute(
            update(Club)
            .where(Club.id == club_id, Club.president_id == user_id)
            .values(is_claimed=successor is not None, president_id=successor)
        )
        if vacated.rowcount != 1:
            raise Conflict("Presidency has already been changed")

        db.execute(
            delete(ClubMember).where(ClubMember.club_id == club_id, ClubMember.user_id == user_id)
        )

    if successor is None:
        logger.info("President %s vacated club %s, club is unclaimed", user_id, club_id)
        return TransitionResult(
            message="Club unclaimed and you have left the club",
            details={"unclaimed": True},
        )

    logger.info("President %s vacated club %s, co-president %s is now primary", user_id, club_id, successor)
    return TransitionResult(
        message="You have left the club and a co-president is now the primary president",
        details={"unclaimed": False, "newPresidentId": successor},
    )


# ---------------------------------------------------------------------------
# 관리자(코디네이터) 작업
# ---------------------------------------------------------------------------

"""
회장 해임 (코디네이터 전용)

- 지정된 대상뿐 아니라 해당 동아리의 모든 회장 행을 삭제
- 동아리는 미claim 상태가 되고 president_id 는 NULL

"""

def remove_president(
    db: Session,
    oracle: AuthorizationOracle,
    *,
    club_id: uuid.UUID,
    user_id: str,
    target_user_id: str,
) -> TransitionResult:
    if not roles.is_coordinator(db, user_id, oracle):
        raise PermissionDenied("Only coordinators can remove presidents")

    _get_club(db, club_id)

    if not roles.is_president_of_club(db, target_user_id, club_id):
        raise ValidationFailed("Target user is not a president of this club")

    removed = _president_ids(db, club_id)

    with transaction(db, "Failed to remove president"):
        db.execute(
            delete(ClubMember).where(
                ClubMember.club_id == club_id,
                ClubMember.role == MemberRole.PRESIDENT.value,
            )
        )
        db.execute(
            update(Club)
            .where(Club.id == club_id)
            .values(is_claimed=False, president_id=None)
        )

    logger.info("Coordinator %s removed presidents %s from club %s", user_id, removed, club_id)
    return TransitionResult(
        message="President removed and club is now unclaimed",
        details={"removedUserId": target_user_id, "removedPresidents": removed},
    )


# 회원 강퇴 (코디네이터 전용, 회장은 remove_president 사용)
def kick_member(
    db: Session,
    oracle: AuthorizationOracle,
    *,
    club_id: uuid.UUID,
    user_id: str,
    target_user_id: str,
) -> TransitionResult:
    if not roles.is_coordinator(db, user_id, oracle):
        raise PermissionDenied("Only coordinators can kick members")

    _get_club(db, club_id)

    member = _get_member(db, club_id, target_user_id)
    if member is None:
        raise ValidationFailed("User is not a member of this club")

    previous_role = member.role
    if previous_role == MemberRole.PRESIDENT.value:
        raise ValidationFailed("Use remove-president endpoint to remove presidents")

    with transaction(db, "Failed to kick member"):
        db.execute(
            delete(ClubMember).where(
                ClubMember.club_id == club_id,
                ClubMember.user_id == target_user_id,
                ClubMember.role != MemberRole.PRESIDENT.value,
            )
        )

    return TransitionResult(
        message="Member removed from club",
        details={"removedUserId": target_user_id, "previousRole": previous_role},
    )


# ---------------------------------------------------------------------------
# 회원 역할 변경
# ---------------------------------------------------------------------------

"""
회원 역할 변경 (회장 전용)

- 공동 회장 누구나 가능
- new_role 은 member / officer / vice_president / president 중 하나
- president 로 승격 시 president_id 가 비어 있으면 승격된 사용자가 대표 회장
- 대표 회장이 강등되면 남은 회장 중 한 명이 대표, 없으면 미claim 상태

"""

def update_member_role(
    db: Session,
    *,
    club_id: uuid.UUID,
    member_id: str,
    new_role: str,
    updated_by: str,
) -> TransitionResult:
    if new_role not in VALID_ROLES:
        raise ValidationFailed("Invalid role")

    club = _get_club(db, club_id)

    if not roles.is_president_of_club(db, updated_by, club_id):
        raise PermissionDenied("Only club presidents can update member roles")

    member = _get_member(db, club_id, member_id)
    if member is None:
        raise NotFound("Member not found")

    previous_role = member.role

    with transaction(db, "Failed to update member role"):
        member.role = new_role
        preferred = member_id if new_role == MemberRole.PRESIDENT.value else None
        _sync_president_pointer(db, club, preferred=preferred)

    return TransitionResult(
        message="Member role updated successfully",
        details={"memberId": member_id, "previousRole": previous_role, "newRole": new_role},
    )


# ---------------------------------------------------------------------------
# 동아리 등록 / 정보 수정
# ---------------------------------------------------------------------------

# 대표 회장이 수정할 수 있는 동아리 정보
CLUB_DETAIL_FIELDS = ("description", "meeting_time", "location", "image_url")

_MISSING_FIELDS_ERROR = "Missing required fields: name, description, category"


"""
동아리 일괄 등록 (코디네이터 전용)

- 항목마다 name / description / category 필수, 누락 시 해당 항목만 건너뜀
- 같은 이름의 동아리가 이미 있으면(같은 요청 안의 앞선 항목 포함) 건너뜀
- 등록된 동아리는 미claim 상태로 시작
- 건너뛴 항목은 errorDetails 로 보고하고 나머지는 하나의 트랜잭션으로 등록

"""

def import_clubs(db: Session, oracle: AuthorizationOracle, *, user_id: str, entries: list[dict]) -> dict:
    if not roles.is_coordinator(db, user_id, oracle):
        raise PermissionDenied("Only coordinators can import clubs")

    if not entries:
        raise ValidationFailed("Clubs array is required")

    names = {(e.get("name") or "").strip() for e in entries} - {""}
    existing = set(db.scalars(select(Club.name).where(Club.name.in_(names))).all()) if names else set()

    results = []
    errors = []

    with transaction(db, "Failed to import clubs"):
        for entry in entries:
            name = (entry.get("name") or "").strip()
            if not name or not entry.get("description") or not entry.get("category"):
                errors.append({"club": name or "Unknown", "error": _MISSING_FIELDS_ERROR})
                continue

            if name in existing:
                errors.append({"club": name, "error": "Club already exists"})
                continue

            club = Club(
                name=name,
                description=entry["description"],
                category=entry["category"],
                image_url=entry.get("image_url"),
                meeting_time=entry.get("meeting_time"),
                location=entry.get("location"),
                is_claimed=False,
            )
            db.add(club)
            db.flush()

            tags = [t.strip() for t in entry.get("tags") or [] if t and t.strip()]
            for tag in dict.fromkeys(tags):
                db.add(ClubTag(club_id=club.id, tag=tag))

            existing.add(name)
            results.append({"id": str(club.id), "name": name})

    logger.info("Coordinator %s imported %d clubs (%d skipped)", user_id, len(results), len(errors))
    return {
        "imported": len(results),
        "errors": len(errors),
        "results": results,
        "errorDetails": errors,
    }


"""
동아리 정보 수정 (대표 회장 전용)

- 동아리가 없으면 404, 대표 회장(president_id)이 아니면 403
- changes 중 CLUB_DETAIL_FIELDS 에 있는 값만 반영, 없으면 400
- 이름 / claim 상태 / 회장 정보는 이 경로로 바꿀 수 없음

"""

def update_club(db: Session, *, club_id: uuid.UUID, user_id: str, changes: dict) -> TransitionResult:
    club = _get_club(db, club_id)

    if club.president_id != user_id:
        raise PermissionDenied("Only the president can update club details")

    fields = {k: v for k, v in changes.items() if k in CLUB_DETAIL_FIELDS}
    if not fields:
        raise ValidationFailed("No fields to update")

    with transaction(db, "Failed to update club"):
        for key, value in fields.items():
            setattr(club, key, value)

    logger.info("Club %s details updated by %s: %s", club_id, user_id, sorted(fields))
    return TransitionResult(
        message="Club updated successfully",
        details={"updatedFields": sorted(fields)},
    )


# ---------------------------------------------------------------------------
# 가입 / 탈퇴
# ---------------------------------------------------------------------------

def join_club(
    db: Session,
    *,
    club_id: uuid.UUID,
    user_id: str,
    user_name: str | None = None,
    user_email: str | None = None,
) -> TransitionResult:
    club = _get_club(db, club_id)
    if _get_member(db, club_id, user_id) is not None:
        raise Conflict("Already a member of this club")

    club_name = club.name

    with transaction(db, "Failed to join club"):
        _ensure_user(db, user_id, user_name, user_email)
        db.add(ClubMember(club_id=club_id, user_id=user_id, role=MemberRole.MEMBER.value))

    return TransitionResult(message=f"You joined {club_name}")


def leave_club(db: Session, *, club_id: uuid.UUID, user_id: str) -> TransitionResult:
    _get_club(db, club_id)

    member = _get_member(db, club_id, user_id)
    if member is None:
        raise ValidationFailed("You are not a member of this club")
    if member.role == MemberRole.PRESIDENT.value:
        raise ValidationFailed("Presidents must use leave-presidency to leave the club")

    previous_role = member.role

    with transaction(db, "Failed to leave club"):
        db.execute(
            delete(ClubMember).where(ClubMember.club_id == club_id, ClubMember.user_id == user_id)
        )

    return TransitionResult(message="You have left the club", details={"previousRole": previous_role})


# ---------------------------------------------------------------------------
# 리더십 변경 요청
# ---------------------------------------------------------------------------

def _request_to_dict(req: LeadershipRequest) -> dict:
    return {
        "id": str(req.id),
        "club_id": str(req.club_id),
        "requested_by": req.requested_by,
        "target_user_id": req.target_user_id,
        "action_type": req.action_type,
        "new_role": req.new_role,
        "status": req.status,
        "reviewed_by": req.reviewed_by,
        "reviewed_at": req.reviewed_at.isoformat() if req.reviewed_at else None,
        "rejection_reason": req.rejection_reason,
        "created_at": req.created_at.isoformat() if req.created_at else None,
    }


"""
리더십 변경 요청 생성

- 요청자 자격은 여기서 검사하지 않음 (승인 단계에서 스폰서/코디네이터가 판단)
- add_* 요청의 new_role 이 없으면 기본 역할 사용
- remove_* 요청은 new_role 을 저장하지 않음

"""

def submit_request(
    db: Session,
    *,
    club_id: uuid.UUID,
    requested_by: str,
    target_user_id: str,
    action_type: str,
    new_role: str | None = None,
) -> dict:
    valid_actions = {a.value for a in LeadershipAction}
    if action_type not in valid_actions:
        raise ValidationFailed("Invalid action type")

    if action_type in _DEFAULT_NEW_ROLE:
        new_role = new_role or _DEFAULT_NEW_ROLE[action_type]
        if new_role not in VALID_ROLES:
            raise ValidationFailed("Invalid role")
    else:
        new_role = None

    _get_club(db, club_id)

    req = LeadershipRequest(
        club_id=club_id,
        requested_by=requested_by,
        target_user_id=target_user_id,
        action_type=action_type,
        new_role=new_role,
        status=RequestStatus.PENDING.value,
        created_at=_now(),
    )

    with transaction(db, "Failed to submit leadership request"):
        db.add(req)
        db.flush()
        data = _request_to_dict(req)

    return data


def _apply_leadership_change(db: Session, req: LeadershipRequest) -> None:
    club = _get_club(db, req.club_id)

    if req.action_type in _DEFAULT_NEW_ROLE:
        role = req.new_role or _DEFAULT_NEW_ROLE[req.action_type]
        _ensure_user(db, req.target_user_id, DEFAULT_MEMBER_NAME)
        upsert_member(db, req.club_id, req.target_user_id, role)
        preferred = req.target_user_id if role == MemberRole.PRESIDENT.value else None
    else:
        # 삭제가 아니라 member 로 강등
        member = _get_member(db, req.club_id, req.target_user_id)
        if member is not None:
            member.role = MemberRole.MEMBER.value
        preferred = None

    _sync_president_pointer(db, club, preferred=preferred)


"""
리더십 변경 요청 승인/거절

- pending 상태의 요청만 처리 가능 (처리된 요청은 409)
- 해당 동아리 활성 스폰서 또는 코디네이터만 가능
- 거절: 상태/처리자/처리시각/거절 사유 기록, 회원 정보 변경 없음
- 승인: 상태 변경 + 회원 역할 변경을 하나의 트랜잭션으로 처리
  (역할 변경이 실패하면 상태도 pending 으로 rollback)

"""

def review_request(
    db: Session,
    oracle: AuthorizationOracle,
    *,
    request_id: uuid.UUID,
    reviewer_id: str,
    action: str,
    rejection_reason: str | None = None,
) -> TransitionResult:
    if action not in ("approve", "reject"):
        raise ValidationFailed("Invalid action. Must be 'approve' or 'reject'")

    req = db.get(LeadershipRequest, request_id)
    if req is None:
        raise NotFound("Request not found")

    if req.status != RequestStatus.PENDING.value:
        raise Conflict("Request has already been processed")

    allowed = roles.is_sponsor_of_club(db, reviewer_id, req.club_id) or roles.is_coordinator(db, reviewer_id, oracle)
    if not allowed:
        raise PermissionDenied("Only sponsors or coordinators can approve/reject requests")

    approve = action == "approve"
    values = {
        "status": RequestStatus.APPROVED.value if approve else RequestStatus.REJECTED.value,
        "reviewed_by": reviewer_id,
        "reviewed_at": _now(),
    }
    if not approve:
        values["rejection_reason"] = rejection_reason or None

    action_type = req.action_type
    target_user_id = req.target_user_id

    with transaction(db, "Failed to process leadership request"):
        flipped = db.execute(
            update(LeadershipRequest)
            .where(LeadershipRequest.id == request_id, LeadershipRequest.status == RequestStatus.PENDING.value)
            .values(**values)
        )
        if flipped.rowcount != 1:
            raise Conflict("Request has already been processed")

        if approve:
            _apply_leadership_change(db, req)

    if approve:
        logger.info("Leadership request %s approved by %s", request_id, reviewer_id)
        return TransitionResult(
            message="Leadership request approved and applied successfully",
            details={"actionType": action_type, "targetUserId": target_user_id},
        )

    return TransitionResult(
        message="Leadership request rejected",
        details={"actionType": action_type, "rejectionReason": rejection_reason or "No reason provided"},
    )


"""
처리 대기 중인 요청 목록

- 코디네이터 : 전체 동아리의 pending 요청
- 스폰서     : 본인이 활성 스폰서인 동아리의 pending 요청
- 그 외      : 빈 목록

"""

def list_pending_requests(db: Session, oracle: AuthorizationOracle, *, user_id: str) -> list[dict]:
    snapshot = roles.get_user_roles(db, user_id, oracle)
    if not snapshot.is_coordinator and not snapshot.sponsored_club_ids:
        return []

    Requester = aliased(User)
    Target = aliased(User)

    stmt = (
        select(LeadershipRequest, Club.name, Requester, Target)
        .join(Club, Club.id == LeadershipRequest.club_id)
        .outerjoin(Requester, Requester.id == LeadershipRequest.requested_by)
        .outerjoin(Target, Target.id == LeadershipRequest.target_user_id)
        .where(LeadershipRequest.status == RequestStatus.PENDING.value)
        .order_by(desc(LeadershipRequest.created_at))
    )
    if not snapshot.is_coordinator:
        stmt = stmt.where(LeadershipRequest.club_id.in_(snapshot.sponsored_club_ids))

    result = []
    for req, club_name, requester, target in db.execute(stmt).all():
        row = _request_to_dict(req)
        row.update({
            "club_name": club_name,
            "requester_name": requester.name if requester else None,
            "requester_email": requester.email if requester else None,
            "target_name": target.name if target else None,
            "target_email": target.email if target else None,
        })
        result.append(row)
    return result


# ---------------------------------------------------------------------------
# 조회
# ---------------------------------------------------------------------------

def _member_count(club_id_col):
    return (
        select(func.count())
        .select_from(ClubMember)
        .where(ClubMember.club_id == club_id_col)
        .scalar_subquery()
    )


def list_sponsored_clubs(db: Session, *, user_id: str) -> list[dict]:
    pending = (
        select(func.count())
        .select_from(LeadershipRequest)
        .where(
            LeadershipRequest.club_id == Club.id,
            LeadershipRequest.status == RequestStatus.PENDING.value,
        )
        .scalar_subquery()
    )

    rows = db.execute(
        select(Club, ClubSponsor.assigned_at, _member_count(Club.id), pending)
        .join(ClubSponsor, ClubSponsor.club_id == Club.id)
        .where(ClubSponsor.user_id == user_id, ClubSponsor.status == SponsorStatus.ACTIVE.value)
        .order_by(Club.name)
    ).all()

    return [
        {
            "id": str(club.id),
            "name": club.name,
            "is_claimed": club.is_claimed,
            "president_id": club.president_id,
            "sponsor_since": assigned_at.isoformat() if assigned_at else None,
            "member_count": member_count,
            "pending_requests": pending_count,
        }
        for club, assigned_at, member_count, pending_count in rows
    ]


def get_club_detail(db: Session, *, club_id: uuid.UUID, viewer_id: str | None = None) -> dict:
    club = _get_club(db, club_id)
    president = db.get(User, club.president_id) if club.president_id else None
    member_count = db.scalar(
        select(func.count()).select_from(ClubMember).where(ClubMember.club_id == club_id)
    )

    data = {
        "id": str(club.id),
        "name": club.name,
        "description": club.description,
        "category": club.category,
        "image_url": club.image_url,
        "meeting_time": club.meeting_time,
        "location": club.location,
        "tags": list(db.scalars(select(ClubTag.tag).where(ClubTag.club_id == club_id).order_by(ClubTag.tag)).all()),
        "is_claimed": club.is_claimed,
        "president_id": club.president_id,
        "president_name": president.name if president else None,
        "president_email": president.email if president else None,
        "president_avatar": president.avatar_url if president else None,
        "member_count": member_count or 0,
        "presidents": roles.get_club_presidents(db, club_id),
        "sponsors": roles.get_club_sponsors(db, club_id),
    }

    if viewer_id:
        membership = _get_member(db, club_id, viewer_id)
        data["isJoined"] = membership is not None
        data["memberRole"] = membership.role if membership else None

    return data


def list_members(db: Session, *, club_id: uuid.UUID) -> list[dict]:
    _get_club(db, club_id)
    rows = db.execute(
        select(ClubMember, User)
        .outerjoin(User, User.id == ClubMember.user_id)
        .where(ClubMember.club_id == club_id)
        .order_by(ClubMember.joined_at)
    ).all()
    return [
        {
            "user_id": m.user_id,
            "name": u.name if u else None,
            "email": u.email if u else None,
            "avatar_url": u.avatar_url if u else None,
            "role": m.role,
            "joined_at": m.joined_at.isoformat() if m.joined_at else None,
        }
        for m, u in rows
    ]
