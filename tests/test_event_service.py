"""
Tests for event creation, listing, review and mutation
"""

from datetime import timedelta

import pytest

from careernest.errors import EventNotFound, Forbidden, NotFound, ValidationFailed
from careernest.services.event_service import EventService, generate_event_code, validate_event_fields

from conftest import NOW, caller_for, run


def fields(**overrides):
    base = {
        "title": "Hack Night",
        "type": "hackathon",
        "start_date": NOW + timedelta(days=10),
        "end_date": NOW + timedelta(days=11),
        "registration_deadline": NOW + timedelta(days=5),
        "venue": "Lab 1",
        "max_participants": 50,
        "visibility": "public",
    }
    base.update(overrides)
    return base


@pytest.fixture
def events(store):
    return EventService(store)


class TestCreate:

    def test_organization_event_is_approved(self, events, campus):
        org = caller_for(campus["org1"])
        event = run(events.create_organization_event(org, fields()))
        assert event["approval_status"] == "approved"
        assert event["organization_id"] == org.user_id
        assert event["approved_by"] == org.user_id
        assert event["event_code"] is None

    def test_private_event_gets_code(self, events, campus):
        event = run(events.create_organization_event(caller_for(campus["org1"]), fields(visibility="private")))
        code = event["event_code"]
        assert len(code) == 6
        assert code == code.upper() and code.isalnum()

    def test_admin_event_is_global_and_public(self, events, campus):
        event = run(events.create_admin_event(caller_for(campus["admin"]), fields(visibility="private")))
        assert event["organization_id"] is None
        assert event["visibility"] == "public"
        assert event["event_code"] is None
        assert event["created_by_role"] == "admin"

    def test_student_event_is_pending(self, events, campus):
        event = run(events.create_student_event(caller_for(campus["student1"]), fields()))
        assert event["approval_status"] == "pending"
        assert event["organization_id"] == campus["org1"]["id"]

    def test_student_without_organization(self, events, campus):
        with pytest.raises(NotFound):
            run(events.create_student_event(caller_for(campus["loner"]), fields()))

    def test_end_before_start(self, events, campus):
        with pytest.raises(ValidationFailed):
            run(events.create_organization_event(
                caller_for(campus["org1"]), fields(end_date=NOW + timedelta(days=1))
            ))

    def test_required_fields(self, events, campus):
        with pytest.raises(ValidationFailed):
            run(events.create_organization_event(caller_for(campus["org1"]), {"title": "No dates"}))

    def test_code_clash_draws_again(self, events, seed, campus, monkeypatch):
        seed.event(campus["org1"], campus["org1"], visibility="private", event_code="AAAAAA")
        codes = iter(["AAAAAA", "BBBBBB"])
        monkeypatch.setattr("careernest.services.event_service.generate_event_code", lambda: next(codes))
        event = run(events.create_organization_event(caller_for(campus["org1"]), fields(visibility="private")))
        assert event["event_code"] == "BBBBBB"


class TestListing:

    def test_student_sees_approved_events_in_scope(self, events, seed, campus):
        seed.event(campus["org1"], campus["org1"], title="Org1 event")
        seed.event(campus["org2"], campus["org2"], title="Org2 event")
        seed.event(campus["admin"], title="Global event")
        seed.event(campus["student1"], campus["org1"], title="Pending idea", approval_status="pending")

        listed = run(events.list_events(caller_for(campus["student1"])))
        assert sorted(e["title"] for e in listed) == ["Global event", "Org1 event"]
        assert all(e["registered_count"] == 0 and e["is_registered"] is False for e in listed)

    def test_organization_sees_its_pending_events(self, events, seed, campus):
        seed.event(campus["org1"], campus["org1"], title="Org1 event")
        seed.event(campus["student1"], campus["org1"], title="Pending idea", approval_status="pending")
        seed.event(campus["org2"], campus["org2"], title="Org2 event")

        listed = run(events.list_events(caller_for(campus["org1"])))
        assert sorted(e["title"] for e in listed) == ["Org1 event", "Pending idea"]

    def test_registration_flags(self, events, seed, campus):
        event = seed.event(campus["admin"], title="Global event")
        student = caller_for(campus["student1"])
        run(events.guard.register(event["id"], student.user_id, now=NOW))

        listed = run(events.list_events(student))
        assert listed[0]["registered_count"] == 1
        assert listed[0]["is_registered"] is True
        assert [e["id"] for e in run(events.registered_events(student))] == [event["id"]]

    def test_upcoming(self, events, seed, campus):
        seed.event(campus["admin"], title="Past", start_date=NOW - timedelta(days=1))
        seed.event(campus["admin"], title="Later", start_date=NOW + timedelta(days=9))
        seed.event(campus["admin"], title="Soon", start_date=NOW + timedelta(days=2))
        upcoming = run(events.upcoming_events(caller_for(campus["student1"]), limit=5, now=NOW))
        assert [e["title"] for e in upcoming] == ["Soon", "Later"]

    def test_admin_view(self, events, seed, campus):
        seed.event(campus["admin"], title="Global event")
        seed.event(campus["org1"], campus["org1"], title="Org1 event")
        listed = {e["title"]: e for e in run(events.list_all_events())}
        assert listed["Global event"]["organization_name"] == "Global Admin Event"
        assert listed["Global event"]["is_global"] is True
        assert listed["Org1 event"]["organization_name"] == "Org One"

    def test_pending_and_created_events(self, events, seed, campus):
        seed.event(campus["student1"], campus["org1"], title="Pending idea", approval_status="pending")
        pending = run(events.pending_student_events(caller_for(campus["org1"])))
        assert [e["title"] for e in pending] == ["Pending idea"]
        assert pending[0]["created_by_name"] == campus["student1"]["username"]

        created = run(events.created_events(caller_for(campus["student1"])))
        assert [e["title"] for e in created] == ["Pending idea"]


class TestReview:

    def test_approve(self, events, seed, campus):
        event = seed.event(campus["student1"], campus["org1"], approval_status="pending")
        reviewed = run(events.review_student_event(caller_for(campus["org1"]), event["id"], "approved", "Nice"))
        assert reviewed["approval_status"] == "approved"
        assert reviewed["approval_feedback"] == "Nice"
        assert reviewed["approved_by"] == campus["org1"]["id"]

    def test_other_organization(self, events, seed, campus):
        event = seed.event(campus["student1"], campus["org1"], approval_status="pending")
        with pytest.raises(NotFound):
            run(events.review_student_event(caller_for(campus["org2"]), event["id"], "approved"))

    def test_invalid_decision(self, events, seed, campus):
        event = seed.event(campus["student1"], campus["org1"], approval_status="pending")
        with pytest.raises(ValidationFailed):
            run(events.review_student_event(caller_for(campus["org1"]), event["id"], "maybe"))


class TestMutation:

    def test_switch_to_private_and_back(self, events, seed, campus):
        event = seed.event(campus["org1"], campus["org1"])
        org = caller_for(campus["org1"])
        private = run(events.update_event(org, event["id"], {"visibility": "private"}))
        assert len(private["event_code"]) == 6

        public = run(events.update_event(org, event["id"], {"visibility": "public"}))
        assert public["event_code"] is None

    def test_global_events_stay_public(self, events, seed, campus):
        event = seed.event(campus["admin"])
        with pytest.raises(ValidationFailed):
            run(events.update_event(caller_for(campus["admin"]), event["id"], {"visibility": "private"}))

    def test_non_owner(self, events, seed, campus):
        event = seed.event(campus["org1"], campus["org1"])
        with pytest.raises(Forbidden):
            run(events.update_event(caller_for(campus["org2"]), event["id"], {"title": "Mine now"}))

    def test_student_author_while_pending(self, events, seed, campus):
        event = seed.event(campus["student1"], campus["org1"], approval_status="pending")
        student = caller_for(campus["student1"])
        assert run(events.update_event(student, event["id"], {"title": "Better title"}))["title"] == "Better title"

        run(events.review_student_event(caller_for(campus["org1"]), event["id"], "approved"))
        with pytest.raises(Forbidden):
            run(events.update_event(student, event["id"], {"title": "Too late"}))

    def test_dates_checked_against_existing_values(self, events, seed, campus):
        event = seed.event(campus["org1"], campus["org1"])
        with pytest.raises(ValidationFailed):
            run(events.update_event(caller_for(campus["org1"]), event["id"], {"end_date": NOW}))

    def test_empty_update(self, events, seed, campus):
        event = seed.event(campus["org1"], campus["org1"])
        with pytest.raises(ValidationFailed):
            run(events.update_event(caller_for(campus["org1"]), event["id"], {}))

    def test_delete_removes_registrations(self, events, store, seed, campus):
        event = seed.event(campus["org1"], campus["org1"])
        run(events.guard.register(event["id"], campus["student1"]["id"], now=NOW))
        run(events.delete_event(caller_for(campus["org1"]), event["id"]))
        assert run(store.get("events", event["id"])) is None
        assert run(store.count("event_registrations", {"event_id": event["id"]})) == 0


class TestRegistrationEntryPoints:

    def test_only_students_register(self, events, seed, campus):
        event = seed.event(campus["admin"])
        with pytest.raises(Forbidden):
            run(events.register(caller_for(campus["org1"]), event["id"]))

    def test_missing_event(self, events, campus):
        with pytest.raises(EventNotFound):
            run(events.register(caller_for(campus["student1"]), "missing"))

    def test_register_member_requires_organization(self, events, seed, campus):
        event = seed.event(campus["admin"])
        with pytest.raises(Forbidden):
            run(events.register_member(caller_for(campus["admin"]), event["id"], campus["student1"]["id"]))


def test_validate_event_fields_drops_unknown_keys():
    cleaned = validate_event_fields({"title": "T", "organization_id": "x", "approval_status": "approved"})
    assert cleaned == {"title": "T"}


def test_generate_event_code():
    assert len(generate_event_code()) == 6
