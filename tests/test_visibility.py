"""
Tests for the visibility policy and membership resolver
"""

from datetime import timedelta

import pytest

from careernest.auth import Caller
from careernest.errors import Forbidden
from careernest.services.course_service import CourseService
from careernest.services.membership import MembershipResolver
from careernest.services.visibility import (
    ANNOUNCEMENTS,
    COURSES,
    EVENTS,
    STUDENTS,
    UNRESTRICTED,
    ScopeFilter,
    VisibilityPolicy,
    can_mutate,
    authorize_mutation,
    is_global,
    scope_filter,
)

from conftest import NOW, caller_for, run


@pytest.fixture
def courses(seed, campus):
    """One course per organization plus one admin course"""
    return {
        "c1": seed.course(campus["org1"], campus["org1"], title="Org1 course"),
        "c2": seed.course(campus["org2"], campus["org2"], title="Org2 course"),
        "c3": seed.course(campus["admin"], title="Admin course"),
    }


def titles(items):
    return sorted(item["title"] for item in items)


class TestScopeFilter:

    def test_admin_is_unrestricted(self, campus):
        scope = scope_filter(caller_for(campus["admin"]), EVENTS)
        assert scope is UNRESTRICTED
        assert scope.as_any_of() is None
        assert scope.matches({"organization_id": "anything"})

    def test_organization_sees_own_and_admin_content(self, campus):
        org = caller_for(campus["org1"])
        scope = scope_filter(org, COURSES)
        assert scope.matches({"organization_id": org.user_id, "created_by_role": "organization"})
        assert scope.matches({"organization_id": None, "created_by_role": "admin"})
        assert not scope.matches({"organization_id": campus["org2"]["id"], "created_by_role": "organization"})

    def test_student_without_organization_sees_only_admin_content(self, campus):
        scope = scope_filter(caller_for(campus["loner"]), ANNOUNCEMENTS, None)
        assert scope.as_any_of() == [{"created_by_role": "admin"}]
        assert not scope.matches({"organization_id": campus["org1"]["id"], "created_by_role": "organization"})

    def test_students_cannot_list_students(self, campus):
        with pytest.raises(Forbidden):
            scope_filter(caller_for(campus["student1"]), STUDENTS)

    def test_organization_student_scope_is_its_roster(self, campus):
        scope = scope_filter(caller_for(campus["org2"]), STUDENTS)
        assert scope.as_any_of() == [{"organization_id": campus["org2"]["id"]}]

    def test_unknown_resource_class(self, campus):
        with pytest.raises(ValueError):
            scope_filter(caller_for(campus["admin"]), "widgets")

    def test_empty_filter_matches_nothing(self):
        assert not ScopeFilter(()).matches({"created_by_role": "admin"})
        assert ScopeFilter(()).as_any_of() == []


class TestCourseVisibilityScenario:
    """Org1 and Org2 each own a course; the admin owns a third"""

    def test_student_of_org1(self, store, campus, courses):
        listed = run(CourseService(store).list_courses(caller_for(campus["student1"])))
        assert titles(listed) == ["Admin course", "Org1 course"]

    def test_student_of_org2(self, store, campus, courses):
        listed = run(CourseService(store).list_courses(caller_for(campus["student2"])))
        assert titles(listed) == ["Admin course", "Org2 course"]

    def test_student_without_organization(self, store, campus, courses):
        listed = run(CourseService(store).list_courses(caller_for(campus["loner"])))
        assert titles(listed) == ["Admin course"]

    def test_organization(self, store, campus, courses):
        listed = run(CourseService(store).list_courses(caller_for(campus["org1"])))
        assert titles(listed) == ["Admin course", "Org1 course"]

    def test_admin(self, store, campus, courses):
        listed = run(CourseService(store).list_courses(caller_for(campus["admin"])))
        assert titles(listed) == ["Admin course", "Org1 course", "Org2 course"]

    def test_inactive_membership_hides_organization_content(self, store, seed, campus, courses):
        former = seed.student()
        seed.membership(campus["org1"], former, status="graduated")
        listed = run(CourseService(store).list_courses(caller_for(former)))
        assert titles(listed) == ["Admin course"]


class TestPolicy:

    def test_is_visible(self, store, campus, courses):
        policy = VisibilityPolicy(store)
        student = caller_for(campus["student1"])
        assert run(policy.is_visible(student, COURSES, courses["c1"]))
        assert run(policy.is_visible(student, COURSES, courses["c3"]))
        assert not run(policy.is_visible(student, COURSES, courses["c2"]))

    def test_is_global(self, campus, courses):
        assert is_global(courses["c3"])
        assert not is_global(courses["c1"])


class TestCanMutate:

    def test_admin_may_change_anything(self, campus, courses):
        assert can_mutate(caller_for(campus["admin"]), courses["c1"], COURSES)

    def test_owner_organization(self, campus, courses):
        assert can_mutate(caller_for(campus["org1"]), courses["c1"], COURSES)
        assert not can_mutate(caller_for(campus["org2"]), courses["c1"], COURSES)
        assert not can_mutate(caller_for(campus["org1"]), courses["c3"], COURSES)

    def test_students_never_change_courses(self, campus, courses):
        assert not can_mutate(caller_for(campus["student1"]), courses["c1"], COURSES)

    def test_student_author_of_pending_event(self, seed, campus):
        student = campus["student1"]
        pending = seed.event(student, campus["org1"], approval_status="pending")
        approved = seed.event(student, campus["org1"], approval_status="approved")
        assert can_mutate(caller_for(student), pending, EVENTS)
        assert not can_mutate(caller_for(student), approved, EVENTS)
        assert not can_mutate(caller_for(campus["student2"]), pending, EVENTS)

    def test_authorize_mutation_raises(self, campus, courses):
        with pytest.raises(Forbidden):
            authorize_mutation(caller_for(campus["org2"]), courses["c1"], COURSES)

    def test_unowned_resource_class(self, campus):
        with pytest.raises(ValueError):
            can_mutate(caller_for(campus["admin"]), {}, ANNOUNCEMENTS)


class TestMembershipResolver:

    def test_active_membership(self, store, campus):
        resolver = MembershipResolver(store)
        assert run(resolver.resolve_active_organization(campus["student1"]["id"])) == campus["org1"]["id"]
        assert run(resolver.resolve_active_organization(campus["loner"]["id"])) is None

    def test_most_recent_membership_wins(self, store, seed, campus):
        student = seed.student()
        seed.membership(campus["org1"], student, joined=NOW)
        seed.membership(campus["org2"], student, joined=NOW + timedelta(days=1))
        resolver = MembershipResolver(store)
        assert run(resolver.resolve_active_organization(student["id"])) == campus["org2"]["id"]

    def test_lookup_failure_means_no_organization(self, store, campus):
        class BrokenStore:
            async def find(self, *args, **kwargs):
                raise RuntimeError("connection lost")

        resolver = MembershipResolver(BrokenStore())
        assert run(resolver.resolve_active_organization(campus["student1"]["id"])) is None

    def test_unknown_role_caller_sees_nothing(self):
        scope = scope_filter(Caller(user_id="x", role="guest"), EVENTS)
        assert scope.as_any_of() == []
