"""
동아리 등록 / 정보 수정 테스트.
- 코디네이터 일괄 등록: 필수값 누락, 이름 중복은 항목 단위로 건너뜀
- 등록된 동아리는 미claim 상태이며 바로 claim 가능
- 대표 회장만 정보 수정 가능, 변경할 필드가 없으면 400
"""

import uuid

from sqlalchemy import select

from app.models.club import Club
from tests.helpers import add_member, create_club, create_user, fresh_club, make_coordinator, make_president


def _clubs_by_name(db) -> dict:
    db.expire_all()
    return {c.name: c for c in db.scalars(select(Club)).all()}


def test_coordinator_imports_clubs(client, db):
    coord = make_coordinator(db)
    create_club(db, name="Chess Club")

    r = client.post(
        "/clubs/import",
        json={
            "userId": coord,
            "clubs": [
                {
                    "name": "Robotics",
                    "description": "Build robots",
                    "category": "STEM",
                    "meetingTime": "Tue 3pm",
                    "location": "Room 101",
                    "tags": ["engineering", "engineering", "coding"],
                },
                {"name": "Poetry", "description": "Write poems"},
                {"name": "Chess Club", "description": "Duplicate", "category": "Games"},
                {"name": "Robotics", "description": "Again", "category": "STEM"},
            ],
        },
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["imported"] == 1
    assert body["errors"] == 3
    assert [row["name"] for row in body["results"]] == ["Robotics"]
    assert body["errorDetails"] == [
        {"club": "Poetry", "error": "Missing required fields: name, description, category"},
        {"club": "Chess Club", "error": "Club already exists"},
        {"club": "Robotics", "error": "Club already exists"},
    ]

    clubs = _clubs_by_name(db)
    assert sorted(clubs) == ["Chess Club", "Robotics"]
    robotics = clubs["Robotics"]
    assert robotics.is_claimed is False
    assert robotics.president_id is None
    assert robotics.category == "STEM"

    detail = client.get(f"/clubs/{robotics.id}").json()["data"]
    assert detail["tags"] == ["coding", "engineering"]
    assert detail["meeting_time"] == "Tue 3pm"

    r = client.post(f"/clubs/{robotics.id}/claim", json={"userId": "u-first"})
    assert r.status_code == 200, r.text


def test_import_requires_coordinator(client, db):
    create_user(db, "u-plain")

    r = client.post(
        "/clubs/import",
        json={"userId": "u-plain", "clubs": [{"name": "X", "description": "d", "category": "c"}]},
    )
    assert r.status_code == 403
    assert r.json()["error"] == "Only coordinators can import clubs"
    assert _clubs_by_name(db) == {}


def test_import_requires_clubs(client, db):
    coord = make_coordinator(db)

    r = client.post("/clubs/import", json={"userId": coord, "clubs": []})
    assert r.status_code == 400
    assert r.json()["error"] == "Clubs array is required"


def test_president_updates_club_details(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")

    r = client.put(f"/clubs/{club.id}", json={"userId": "u-a", "location": "Gym", "meetingTime": None})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["location"] == "Gym"

    club = fresh_club(db, club.id)
    assert club.location == "Gym"
    assert club.meeting_time is None
    assert club.description is None
    assert club.name == "Chess Club"


def test_only_primary_president_updates_details(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")
    make_president(db, club, "u-co", primary=False)
    add_member(db, club, "u-m")

    for user_id in ("u-co", "u-m"):
        r = client.put(f"/clubs/{club.id}", json={"userId": user_id, "description": "Hijacked"})
        assert r.status_code == 403
        assert r.json()["error"] == "Only the president can update club details"

    assert fresh_club(db, club.id).description is None


def test_update_without_fields_rejected(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")

    r = client.put(f"/clubs/{club.id}", json={"userId": "u-a"})
    assert r.status_code == 400
    assert r.json()["error"] == "No fields to update"


def test_update_missing_club(client):
    r = client.put(f"/clubs/{uuid.uuid4()}", json={"userId": "u-a", "description": "x"})
    assert r.status_code == 404
