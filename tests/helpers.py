# tests/helpers.py
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.club import Club, ClubMember, ClubSponsor
from app.models.leadership import LeadershipRequest
from app.models.user import User, UserRole


def new_id(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def create_user(db: Session, user_id: str | None = None, *, name: str = "테스트유저", email: str | None = None) -> User:
    user = User(id=user_id or new_id(), name=name, email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_club(db: Session, *, name: str = "Chess Club") -> Club:
    club = Club(name=name, is_claimed=False, president_id=None)
    db.add(club)
    db.commit()
    db.refresh(club)
    return club


def add_member(db: Session, club: Club, user_id: str, role: str = "member", *, minutes_ago: int = 0) -> ClubMember:
    if db.get(User, user_id) is None:
        db.add(User(id=user_id, name=user_id))
    member = ClubMember(
        club_id=club.id,
        user_id=user_id,
        role=role,
        joined_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    )
    db.add(member)
    db.commit()
    return member


def make_president(db: Session, club: Club, user_id: str, *, primary: bool = True, minutes_ago: int = 0) -> None:
    """claim 된 상태를 직접 구성 (primary=True면 president_id 지정)"""
    add_member(db, club, user_id, "president", minutes_ago=minutes_ago)
    club = db.get(Club, club.id)
    club.is_claimed = True
    if primary:
        club.president_id = user_id
    db.commit()


def make_coordinator(db: Session, user_id: str | None = None) -> str:
    user_id = user_id or new_id("coord")
    if db.get(User, user_id) is None:
        db.add(User(id=user_id, name="Coordinator"))
    db.add(UserRole(user_id=user_id, role="coordinator"))
    db.commit()
    return user_id


def add_sponsor(db: Session, club: Club, user_id: str, status: str = "active") -> ClubSponsor:
    if db.get(User, user_id) is None:
        db.add(User(id=user_id, name="Sponsor", email=f"{user_id}@berkeley.net"))
    sponsor = ClubSponsor(club_id=club.id, user_id=user_id, status=status)
    db.add(sponsor)
    db.commit()
    return sponsor


def create_request(db: Session, club: Club, *, target_user_id: str, action_type: str,
                   new_role: str | None = None, requested_by: str = "requester") -> LeadershipRequest:
    req = LeadershipRequest(
        club_id=club.id,
        requested_by=requested_by,
        target_user_id=target_user_id,
        action_type=action_type,
        new_role=new_role,
        status="pending",
    )
    db.add(req)
    db.commit()
    db.refresh(req)
    return req


# 요청 처리 이후 상태는 항상 DB에서 다시 읽는다
def fresh_club(db: Session, club_id) -> Club:
    db.expire_all()
    return db.get(Club, club_id)


def member_role(db: Session, club_id, user_id: str) -> str | None:
    db.expire_all()
    member = db.get(ClubMember, (club_id, user_id))
    return member.role if member else None


def president_ids(db: Session, club_id) -> list[str]:
    db.expire_all()
    return sorted(db.scalars(
        select(ClubMember.user_id).where(ClubMember.club_id == club_id, ClubMember.role == "president")
    ).all())
