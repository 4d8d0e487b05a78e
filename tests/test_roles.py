"""
권한 조회 테스트.
- 권한 스냅샷 (코디네이터 / 스폰서 / 회장 / 임원)
- 조회 실패 시 빈 스냅샷 (fail closed)
- 파생 권한 (can_moderate_club, can_manage_leadership)
- /users API
"""

import json

from sqlalchemy.exc import OperationalError

from app.core.config import settings
from app.services import roles, teachers
from app.services.roles import AuthorizationOracle, PersistedRoleBackend, RoleSnapshot, StaticEmailBackend
from tests.helpers import add_member, add_sponsor, create_club, create_user, make_coordinator, make_president


class _BrokenBackend:
    def is_coordinator(self, db, user_id):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))


def _oracle(*emails):
    return AuthorizationOracle([PersistedRoleBackend(), StaticEmailBackend(emails)])


def test_snapshot_for_plain_user(db):
    create_user(db, "u-plain")

    snapshot = roles.get_user_roles(db, "u-plain", _oracle())
    assert snapshot == RoleSnapshot()


def test_snapshot_collects_clubs(db):
    led = create_club(db, name="Led")
    sponsored = create_club(db, name="Sponsored")
    dropped = create_club(db, name="Dropped")
    make_president(db, led, "u-x")
    add_sponsor(db, sponsored, "u-x")
    add_sponsor(db, dropped, "u-x", status="removed")

    snapshot = roles.get_user_roles(db, "u-x", _oracle())
    assert snapshot.is_president is True
    assert snapshot.president_club_ids == [led.id]
    assert snapshot.is_sponsor is True
    assert snapshot.sponsored_club_ids == [sponsored.id]
    assert snapshot.is_coordinator is False
    assert snapshot.is_officer is False


def test_legacy_leader_role_counts_as_officer(db):
    club = create_club(db)
    add_member(db, club, "u-old", "leader")

    assert roles.get_user_roles(db, "u-old", _oracle()).is_officer is True


def test_coordinator_from_role_row_or_email(db):
    coord = make_coordinator(db)
    create_user(db, "u-mail", email="Boss@School.org")
    create_user(db, "u-plain", email="plain@school.org")

    oracle = _oracle("boss@school.org")
    assert roles.is_coordinator(db, coord, oracle) is True
    assert roles.is_coordinator(db, "u-mail", oracle) is True
    assert roles.is_coordinator(db, "u-plain", oracle) is False
    assert roles.is_coordinator(db, "u-mail", _oracle()) is False


def test_broken_backend_fails_closed(db):
    coord = make_coordinator(db)
    oracle = AuthorizationOracle([_BrokenBackend(), PersistedRoleBackend()])

    assert roles.is_coordinator(db, coord, oracle) is False
    assert roles.get_user_roles(db, coord, oracle) == RoleSnapshot()


def test_derived_permissions(db):
    club = create_club(db)
    make_president(db, club, "u-pres")
    add_sponsor(db, club, "u-sponsor")
    add_member(db, club, "u-m")
    coord = make_coordinator(db)
    oracle = _oracle()

    assert roles.can_moderate_club(db, coord, club.id, oracle) is True
    assert roles.can_moderate_club(db, "u-sponsor", club.id, oracle) is True
    assert roles.can_moderate_club(db, "u-pres", club.id, oracle) is False

    assert roles.can_manage_leadership(db, "u-pres", club.id, oracle) is True
    assert roles.can_manage_leadership(db, "u-sponsor", club.id, oracle) is True
    assert roles.can_manage_leadership(db, "u-m", club.id, oracle) is False


def test_club_presidents_and_sponsors(db):
    club = create_club(db)
    make_president(db, club, "u-a", minutes_ago=10)
    make_president(db, club, "u-b", primary=False, minutes_ago=5)
    add_sponsor(db, club, "t-1")
    add_sponsor(db, club, "t-2", status="removed")

    assert roles.get_club_presidents(db, club.id) == ["u-a", "u-b"]
    assert roles.get_club_sponsors(db, club.id) == ["t-1"]


def test_user_roles_endpoint(client, db):
    club = create_club(db)
    make_president(db, club, "u-a")

    r = client.get("/users/u-a/roles")
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["isPresident"] is True
    assert data["presidentClubIds"] == [str(club.id)]
    assert data["isCoordinator"] is False
    assert data["sponsoredClubIds"] == []


def test_check_teacher_is_case_insensitive(client):
    r = client.get("/users/check-teacher", params={"email": "MENTOR@berkeley.net"})
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "isTeacher": True, "email": "mentor@berkeley.net"}

    r = client.get("/users/check-teacher", params={"email": "student@berkeley.net"})
    assert r.json()["isTeacher"] is False


def test_check_teacher_requires_email(client):
    r = client.get("/users/check-teacher")
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_teacher_allow_list_file_is_merged(tmp_path, monkeypatch):
    path = tmp_path / "teachers.json"
    path.write_text(json.dumps({"teacherEmails": ["Advisor@School.org"]}), encoding="utf-8")

    monkeypatch.setattr(settings, "TEACHER_EMAILS_FILE", str(path))
    teachers.reload_teacher_emails()
    try:
        assert teachers.is_teacher_email("advisor@school.org") is True
        assert teachers.is_teacher_email("teacher@berkeley.net") is True
        assert teachers.teacher_count() == len(set(settings.teacher_emails) | {"advisor@school.org"})
    finally:
        monkeypatch.undo()
        teachers.reload_teacher_emails()

    assert teachers.is_teacher_email("advisor@school.org") is False
