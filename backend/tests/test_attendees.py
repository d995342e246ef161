"""Tests for the attendee registry — membership upsert, join, grant and RSVP."""
from datetime import date, time

import pytest

from event_planner.auth import Identity
from event_planner.models.attendee import AttendeeRole, EventAttendee, RSVPStatus
from event_planner.models.event import Event
from event_planner.models.user import User
from event_planner.services import attendee_service
from event_planner.services.exceptions import NotFoundError, ValidationError
from tests.conftest import auth_headers, create_test_event, create_test_user


def _seed(db):
    """Organizer, member and one event, written straight through the ORM."""
    organizer = User(email="org@example.com", display_name="Organizer")
    member = User(email="member@example.com", display_name="Member")
    db.add_all([organizer, member])
    db.flush()
    event = Event(
        title="Seeded",
        description="",
        date=date(2026, 12, 1),
        time=time(18, 0),
        location="Hall",
        organizer_id=organizer.id,
    )
    db.add(event)
    db.commit()
    return organizer, member, event


def _memberships(db, event_id, user_id):
    return (
        db.query(EventAttendee)
        .filter(EventAttendee.event_id == event_id, EventAttendee.user_id == user_id)
        .all()
    )


class TestUpsertMembership:
    """Service-level upsert semantics."""

    def test_insert_defaults_to_going(self, db):
        _, member, event = _seed(db)
        row = attendee_service.upsert_membership(db, event.id, member.id, "collaborator")
        assert row.role == AttendeeRole.collaborator
        assert row.status == RSVPStatus.going

    def test_repeated_upsert_keeps_single_row(self, db):
        _, member, event = _seed(db)
        attendee_service.upsert_membership(db, event.id, member.id, "collaborator")
        attendee_service.upsert_membership(db, event.id, member.id, "collaborator")

        rows = _memberships(db, event.id, member.id)
        assert len(rows) == 1
        assert rows[0].role == AttendeeRole.collaborator

    def test_role_overwritten_status_untouched(self, db):
        _, member, event = _seed(db)
        row = attendee_service.upsert_membership(db, event.id, member.id, AttendeeRole.attendee)
        row.status = RSVPStatus.maybe
        db.commit()

        row = attendee_service.upsert_membership(db, event.id, member.id, AttendeeRole.organizer)
        assert row.role == AttendeeRole.organizer
        assert row.status == RSVPStatus.maybe

        row = attendee_service.upsert_membership(db, event.id, member.id, AttendeeRole.attendee)
        assert row.role == AttendeeRole.attendee
        assert row.status == RSVPStatus.maybe
        assert len(_memberships(db, event.id, member.id)) == 1

    def test_unknown_role_rejected_before_write(self, db):
        _, member, event = _seed(db)
        with pytest.raises(ValidationError):
            attendee_service.upsert_membership(db, event.id, member.id, "manager")
        assert _memberships(db, event.id, member.id) == []

    def test_set_status_without_membership(self, db):
        _, member, event = _seed(db)
        identity = Identity(user_id=member.id, email=member.email)
        with pytest.raises(NotFoundError):
            attendee_service.set_status(db, identity, event.id, "maybe")


class TestJoin:
    def test_join_event(self, client):
        organizer = create_test_user(client, email="org@example.com")
        guest = create_test_user(client, email="guest@example.com")
        event = create_test_event(client, organizer)

        resp = client.post(f"/api/events/{event['id']}/join", headers=auth_headers(guest))
        assert resp.status_code == 200
        assert resp.json()["role"] == "attendee"
        assert resp.json()["status"] == "going"

    def test_join_twice_single_record(self, client):
        organizer = create_test_user(client, email="org@example.com")
        guest = create_test_user(client, email="guest@example.com")
        event = create_test_event(client, organizer)

        client.post(f"/api/events/{event['id']}/join", headers=auth_headers(guest))
        client.post(f"/api/events/{event['id']}/join", headers=auth_headers(guest))

        attendees = client.get(f"/api/events/{event['id']}/attendees").json()
        assert [a["user_id"] for a in attendees].count(guest["id"]) == 1

    def test_join_missing_event(self, client):
        guest = create_test_user(client, email="guest@example.com")
        resp = client.post("/api/events/9999/join", headers=auth_headers(guest))
        assert resp.status_code == 404

    def test_join_requires_identity(self, client):
        organizer = create_test_user(client, email="org@example.com")
        event = create_test_event(client, organizer)
        resp = client.post(f"/api/events/{event['id']}/join")
        assert resp.status_code == 401

    def test_attendees_newest_first(self, client):
        organizer = create_test_user(client, email="org@example.com")
        first = create_test_user(client, email="first@example.com")
        second = create_test_user(client, email="second@example.com")
        event = create_test_event(client, organizer)
        client.post(f"/api/events/{event['id']}/join", headers=auth_headers(first))
        client.post(f"/api/events/{event['id']}/join", headers=auth_headers(second))

        attendees = client.get(f"/api/events/{event['id']}/attendees").json()
        assert [a["user_id"] for a in attendees] == [second["id"], first["id"], organizer["id"]]


class TestGrantMembership:
    """Organizer adds a registered user directly."""

    def test_organizer_grants_collaborator(self, client):
        organizer = create_test_user(client, email="org@example.com")
        helper = create_test_user(client, email="helper@example.com")
        event = create_test_event(client, organizer)

        resp = client.post(
            f"/api/events/{event['id']}/invite",
            json={"user_id": helper["id"], "role": "collaborator"},
            headers=auth_headers(organizer),
        )
        assert resp.status_code == 200
        assert resp.json()["role"] == "collaborator"

    def test_non_organizer_cannot_grant(self, client):
        organizer = create_test_user(client, email="org@example.com")
        other = create_test_user(client, email="other@example.com")
        event = create_test_event(client, organizer)

        resp = client.post(
            f"/api/events/{event['id']}/invite",
            json={"user_id": other["id"], "role": "attendee"},
            headers=auth_headers(other),
        )
        assert resp.status_code == 403
        assert "only the event creator" in resp.json()["detail"]["message"]

    def test_grant_bad_role(self, client):
        organizer = create_test_user(client, email="org@example.com")
        helper = create_test_user(client, email="helper@example.com")
        event = create_test_event(client, organizer)

        resp = client.post(
            f"/api/events/{event['id']}/invite",
            json={"user_id": helper["id"], "role": "manager"},
            headers=auth_headers(organizer),
        )
        assert resp.status_code == 400

    def test_grant_unknown_user(self, client):
        organizer = create_test_user(client, email="org@example.com")
        event = create_test_event(client, organizer)

        resp = client.post(
            f"/api/events/{event['id']}/invite",
            json={"user_id": 9999, "role": "attendee"},
            headers=auth_headers(organizer),
        )
        assert resp.status_code == 404


class TestAttendance:
    """RSVP status updates by the member."""

    def test_member_updates_status(self, client):
        organizer = create_test_user(client, email="org@example.com")
        event = create_test_event(client, organizer)

        resp = client.put(
            f"/api/events/{event['id']}/attendance",
            json={"status": "not_going"},
            headers=auth_headers(organizer),
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "not_going"
        assert resp.json()["role"] == "organizer"

    def test_status_without_membership_not_found(self, client):
        organizer = create_test_user(client, email="org@example.com")
        stranger = create_test_user(client, email="stranger@example.com")
        event = create_test_event(client, organizer)

        resp = client.put(
            f"/api/events/{event['id']}/attendance",
            json={"status": "maybe"},
            headers=auth_headers(stranger),
        )
        assert resp.status_code == 404
        assert resp.json()["detail"]["code"] == "attendance_not_found"

    def test_invalid_status(self, client):
        organizer = create_test_user(client, email="org@example.com")
        event = create_test_event(client, organizer)

        resp = client.put(
            f"/api/events/{event['id']}/attendance",
            json={"status": "sleeping"},
            headers=auth_headers(organizer),
        )
        assert resp.status_code == 400

    def test_rejoin_keeps_rsvp(self, client):
        organizer = create_test_user(client, email="org@example.com")
        guest = create_test_user(client, email="guest@example.com")
        event = create_test_event(client, organizer)
        client.post(f"/api/events/{event['id']}/join", headers=auth_headers(guest))
        client.put(
            f"/api/events/{event['id']}/attendance",
            json={"status": "maybe"},
            headers=auth_headers(guest),
        )

        resp = client.post(f"/api/events/{event['id']}/join", headers=auth_headers(guest))
        assert resp.json()["status"] == "maybe"

    def test_my_attending_events(self, client):
        organizer = create_test_user(client, email="org@example.com")
        guest = create_test_user(client, email="guest@example.com")
        joined = create_test_event(client, organizer, title="Joined", date="2026-05-01")
        create_test_event(client, organizer, title="Skipped")
        client.post(f"/api/events/{joined['id']}/join", headers=auth_headers(guest))

        resp = client.get("/api/events/my/attending", headers=auth_headers(guest))
        assert resp.status_code == 200
        data = resp.json()
        assert [e["title"] for e in data] == ["Joined"]
        assert data[0]["role"] == "attendee"
        assert data[0]["status"] == "going"

        titles = [e["title"] for e in client.get("/api/events/my/attending", headers=auth_headers(organizer)).json()]
        assert titles == ["Skipped", "Joined"]
