"""
전체 흐름 테스트.
claim -> 가입 -> 회장 이양 -> 코디네이터 회장 해임 -> 재claim 까지
HTTP API만 사용해서 진행하고 단계마다 claim 상태를 확인한다.
"""

from tests.helpers import create_club, fresh_club, make_coordinator, member_role, president_ids


def test_claim_transfer_remove_reclaim(client, db):
    club = create_club(db, name="C1")
    coord = make_coordinator(db, "u-co")

    r = client.post(f"/clubs/{club.id}/claim", json={"userId": "U1", "userName": "User One"})
    assert r.status_code == 200, r.text
    c1 = fresh_club(db, club.id)
    assert c1.is_claimed is True
    assert c1.president_id == "U1"

    r = client.post(f"/clubs/{club.id}/join", json={"userId": "U2", "userName": "User Two"})
    assert r.status_code == 200, r.text
    assert member_role(db, club.id, "U2") == "member"

    r = client.post(f"/clubs/{club.id}/transfer", json={"fromUserId": "U1", "toUserId": "U2"})
    assert r.status_code == 200, r.text
    c1 = fresh_club(db, club.id)
    assert c1.president_id == "U2"
    assert member_role(db, club.id, "U1") == "member"
    assert member_role(db, club.id, "U2") == "president"

    r = client.post(f"/admin/clubs/{club.id}/remove-president", json={"userId": coord, "targetUserId": "U2"})
    assert r.status_code == 200, r.text
    c1 = fresh_club(db, club.id)
    assert c1.is_claimed is False
    assert c1.president_id is None
    assert president_ids(db, club.id) == []

    detail = client.get(f"/clubs/{club.id}", params={"userId": "U1"}).json()["data"]
    assert detail["is_claimed"] is False
    assert detail["presidents"] == []
    assert detail["isJoined"] is True
    assert detail["memberRole"] == "member"

    # 미claim 상태가 되었으므로 다시 claim 가능
    r = client.post(f"/clubs/{club.id}/claim", json={"userId": "U1"})
    assert r.status_code == 200, r.text
    assert fresh_club(db, club.id).president_id == "U1"

    actions = [
        row["action"]
        for row in client.get("/admin/audit-logs", params={"userId": coord}).json()["data"]
    ]
    assert sorted(actions) == sorted([
        "claim_club",
        "join_club",
        "transfer_presidency",
        "remove_president",
        "claim_club",
    ])


def test_join_and_leave_club(client, db):
    club = create_club(db)

    r = client.post(f"/clubs/{club.id}/join", json={"userId": "u-m"})
    assert r.status_code == 200, r.text

    r = client.post(f"/clubs/{club.id}/join", json={"userId": "u-m"})
    assert r.status_code == 409

    members = client.get(f"/clubs/{club.id}/members").json()["data"]
    assert [m["user_id"] for m in members] == ["u-m"]

    r = client.post(f"/clubs/{club.id}/leave", json={"userId": "u-m"})
    assert r.status_code == 200, r.text
    assert member_role(db, club.id, "u-m") is None


def test_president_cannot_use_plain_leave(client, db):
    club = create_club(db)
    client.post(f"/clubs/{club.id}/claim", json={"userId": "u-a"})

    r = client.post(f"/clubs/{club.id}/leave", json={"userId": "u-a"})
    assert r.status_code == 400
    assert member_role(db, club.id, "u-a") == "president"


def test_malformed_club_id_returns_error_envelope(client):
    r = client.post("/clubs/not-a-uuid/claim", json={"userId": "u-a"})
    assert r.status_code == 400
    assert r.json()["success"] is False
