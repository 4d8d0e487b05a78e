"""
회장 이양 / 사임 흐름 테스트.
- 직접 이양: 역할 교체, president_id 이동, 이양 기록
- 대표 회장이 아닌 공동 회장은 직접 이양 불가
- 사임: 후임자 지정 시 기존 회장은 member로 남고, 미지정 시 회원 행 삭제 + 미claim
"""

from sqlalchemy import select

from app.models.leadership import PresidencyTransfer
from tests.helpers import add_member, create_club, fresh_club, make_president, member_role, president_ids


def test_transfer_swaps_roles(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    add_member(db, club, "u-b")

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "u-a", "toUserId": "u-b"})
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "message": "Presidency transferred successfully"}

    club = fresh_club(db, club.id)
    assert club.president_id == "u-b"
    assert club.is_claimed is True
    assert member_role(db, club.id, "u-a") == "member"
    assert member_role(db, club.id, "u-b") == "president"

    transfers = db.scalars(select(PresidencyTransfer).where(PresidencyTransfer.club_id == club.id)).all()
    assert len(transfers) == 1
    assert transfers[0].from_user_id == "u-a"
    assert transfers[0].to_user_id == "u-b"
    assert transfers[0].status == "completed"


def test_transfer_to_self_rejected(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "u-a", "toUserId": "u-a"})
    assert r.status_code == 400
    assert r.json()["error"] == "Cannot transfer to yourself"


def test_transfer_by_non_president_forbidden(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    add_member(db, club, "u-b")
    add_member(db, club, "u-c")

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "u-b", "toUserId": "u-c"})
    assert r.status_code == 403
    assert fresh_club(db, club.id).president_id == "u-a"


def test_transfer_by_co_president_without_pointer_forbidden(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    make_president(db, club, "u-co", primary=False)
    add_member(db, club, "u-b")

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "u-co", "toUserId": "u-b"})
    assert r.status_code == 403
    assert member_role(db, club.id, "u-b") == "member"


def test_transfer_target_must_be_member(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "u-a", "toUserId": "u-outsider"})
    assert r.status_code == 400
    assert r.json()["error"] == "Target user must be a member of the club"
    assert fresh_club(db, club.id).president_id == "u-a"


def test_transfer_keeps_other_co_presidents(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    make_president(db, club, "u-co", primary=False)
    add_member(db, club, "u-b")

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "u-a", "toUserId": "u-b"})
    assert r.status_code == 200, r.text

    assert president_ids(db, club.id) == ["u-b", "u-co"]
    assert member_role(db, club.id, "u-a") == "member"


def test_leave_presidency_with_successor_demotes(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    add_member(db, club, "u-b")

    r = client.post(f"/clubs/{club.id}/leave-presidency", json={"userId": "u-a", "newPresidentId": "u-b"})
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Presidency transferred successfully"

    club = fresh_club(db, club.id)
    assert club.president_id == "u-b"
    assert member_role(db, club.id, "u-a") == "member"
    assert member_role(db, club.id, "u-b") == "president"


def test_leave_presidency_without_successor_vacates(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    add_member(db, club, "u-b")

    r = client.post(f"/clubs/{club.id}/leave-presidency", json={"userId": "u-a"})
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Club unclaimed and you have left the club"

    club = fresh_club(db, club.id)
    assert club.is_claimed is False
    assert club.president_id is None
    assert member_role(db, club.id, "u-a") is None
    assert member_role(db, club.id, "u-b") == "member"


def test_leave_presidency_without_successor_keeps_co_president(client, db):
    club = create_club(db)
    make_president(db, club, "u-a", minutes_ago=10)
    make_president(db, club, "u-co", primary=False, minutes_ago=5)

    r = client.post(f"/clubs/{club.id}/leave-presidency", json={"userId": "u-a"})
    assert r.status_code == 200, r.text

    club = fresh_club(db, club.id)
    assert club.is_claimed is True
    assert club.president_id == "u-co"
    assert member_role(db, club.id, "u-a") is None


def test_leave_presidency_requires_primary_president(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    add_member(db, club, "u-b")

    r = client.post(f"/clubs/{club.id}/leave-presidency", json={"userId": "u-b"})
    assert r.status_code == 403
    assert fresh_club(db, club.id).president_id == "u-a"


def test_leave_presidency_successor_must_be_member(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")

    r = client.post(f"/clubs/{club.id}/leave-presidency", json={"userId": "u-a", "newPresidentId": "u-ghost"})
    assert r.status_code == 400
    assert r.json()["error"] == "New president must be a club member"
    assert member_role(db, club.id, "u-a") == "president"
