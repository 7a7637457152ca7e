"""
Tests for organization requests, rosters and dashboards
"""

import pytest

from careernest.errors import Conflict, Forbidden, NotFound, ValidationFailed
from careernest.services.organization_service import OrganizationService

from conftest import NOW, caller_for, run


@pytest.fixture
def organizations(store):
    return OrganizationService(store)


@pytest.fixture
def org1(campus):
    return caller_for(campus["org1"])


class TestRequests:

    def test_submit(self, organizations):
        request = run(organizations.submit_request({"organization_name": " Tech Club ", "email": "Club@Example.com"}))
        assert request["status"] == "pending"
        assert request["email"] == "club@example.com"
        assert request["organization_name"] == "Tech Club"

    def test_pending_duplicate(self, organizations):
        run(organizations.submit_request({"organization_name": "Tech Club", "email": "club@example.com"}))
        with pytest.raises(Conflict):
            run(organizations.submit_request({"organization_name": "Other", "email": "club@example.com"}))

    def test_existing_account(self, organizations, campus):
        with pytest.raises(Conflict):
            run(organizations.submit_request({"organization_name": "Again", "email": campus["org1"]["email"]}))


class TestRoster:

    def test_add_student(self, organizations, store, org1):
        student = run(organizations.add_student(org1, {
            "name": "Asha Rao", "email": "Asha@Example.com", "roll_number": "CS001", "year": "2nd Year",
        }))
        assert student["username"] == "CS001"
        assert len(student["temporary_password"]) == 8
        assert run(store.exists("organization_students", {"organization_id": org1.user_id, "student_id": student["id"]}))

    def test_username_falls_back_to_email(self, organizations, org1):
        student = run(organizations.add_student(org1, {"name": "Ben", "email": "ben.li@example.com"}))
        assert student["username"] == "ben.li"

    def test_duplicate_email(self, organizations, store, campus, org1):
        before = run(store.count("users"))
        with pytest.raises(Conflict):
            run(organizations.add_student(org1, {"name": "Copy", "email": campus["student2"]["email"]}))
        assert run(store.count("users")) == before

    def test_list_students_is_scoped(self, organizations, campus, org1):
        students = run(organizations.list_students(org1))
        assert [s["id"] for s in students] == [campus["student1"]["id"]]
        assert students[0]["joined_at"] is not None

    def test_link_by_email(self, organizations, campus, org1):
        linked = run(organizations.link_student_by_email(org1, campus["loner"]["email"].upper()))
        assert linked["id"] == campus["loner"]["id"]
        assert [s["id"] for s in run(organizations.list_students(org1))].count(campus["loner"]["id"]) == 1

    def test_link_student_of_another_organization(self, organizations, campus, org1):
        with pytest.raises(Conflict):
            run(organizations.link_student_by_email(org1, campus["student2"]["email"]))

    def test_link_twice(self, organizations, campus, org1):
        with pytest.raises(Conflict):
            run(organizations.link_student_by_email(org1, campus["student1"]["email"]))

    def test_link_unknown_email(self, organizations, org1):
        with pytest.raises(NotFound):
            run(organizations.link_student_by_email(org1, "nobody@example.com"))

    def test_delete_student_removes_orphan(self, organizations, store, seed, campus, org1):
        event = seed.event(campus["admin"])
        run(organizations.events.guard.register(event["id"], campus["student1"]["id"], now=NOW))

        run(organizations.delete_student(org1, campus["student1"]["id"]))
        assert run(store.get("users", campus["student1"]["id"])) is None
        assert run(store.count("event_registrations", {"student_id": campus["student1"]["id"]})) == 0

    def test_delete_keeps_student_with_other_memberships(self, organizations, store, seed, campus, org1):
        seed.membership(campus["org1"], campus["student2"], status="inactive")
        run(organizations.delete_student(org1, campus["student2"]["id"]))
        assert run(store.get("users", campus["student2"]["id"])) is not None

    def test_delete_unknown_student(self, organizations, campus, org1):
        with pytest.raises(NotFound):
            run(organizations.delete_student(org1, campus["student2"]["id"]))

    def test_delete_all(self, organizations, store, seed, campus, org1):
        seed.student(campus["org1"])
        assert run(organizations.delete_all_students(org1)) == 2
        assert run(organizations.list_students(org1)) == []
        assert run(store.get("users", campus["student2"]["id"])) is not None


class TestBulk:

    def test_rows_succeed_or_fail_independently(self, organizations, campus, org1):
        rows = [
            {"row": 2, "name": "Asha", "email": "asha@example.com", "roll_number": "R1"},
            {"row": 3, "name": "Asha Again", "email": "asha2@example.com", "roll_number": "R1"},
            {"row": 4, "name": "Taken", "email": campus["student2"]["email"], "roll_number": "R2"},
            {"row": 5, "name": "", "email": "blank@example.com"},
            {"row": 6, "name": "Ben", "email": "ben@example.com"},
        ]
        results = run(organizations.add_students_bulk(org1, rows))
        assert [s["email"] for s in results["successful"]] == ["asha@example.com", "ben@example.com"]
        failed = {f["row"]: f["reason"] for f in results["failed"]}
        assert failed[3] == "Duplicate roll number R1 found in file"
        assert failed[4] == "Email already registered"
        assert failed[5] == "Name and email are required"

    def test_empty(self, organizations, org1):
        with pytest.raises(ValidationFailed):
            run(organizations.add_students_bulk(org1, []))


class TestDashboardAndReport:

    def test_dashboard(self, organizations, seed, campus, org1):
        seed.event(campus["org1"], campus["org1"], start_date=NOW.replace(year=2999))
        seed.announcement(campus["org1"], campus["org1"])
        seed.announcement(campus["admin"])
        dashboard = run(organizations.dashboard(org1))
        assert dashboard["total_students"] == 1
        assert dashboard["total_events"] == 1
        assert dashboard["total_announcements"] == 1
        assert len(dashboard["recent_announcements"]) == 2
        assert len(dashboard["upcoming_events"]) == 1

    def test_credentials_report(self, organizations, org1):
        pdf = run(organizations.credentials_report(org1, [{"name": "Asha", "email": "a@x.com", "password": "pw"}]))
        assert pdf.startswith(b"%PDF")

    def test_students_cannot_list_students(self, organizations, campus):
        with pytest.raises(Forbidden):
            run(organizations.list_students(caller_for(campus["student1"])))
