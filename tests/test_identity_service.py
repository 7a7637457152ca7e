"""
Tests for accounts, login and profiles
"""

import pytest

from careernest.auth import decode_access_token
from careernest.errors import Conflict, Forbidden, NotFound, Unauthorized, ValidationFailed
from careernest.services.identity_service import IdentityService, public_user

from conftest import caller_for, run


@pytest.fixture
def identity(store):
    return IdentityService(store)


@pytest.fixture
def asha(identity):
    return run(identity.create_user({
        "username": "asha",
        "email": "Asha@Example.com",
        "password": "secret123",
        "name": "Asha Rao",
        "role": "student",
        "roll_number": "CS001",
    }))


class TestCreateUser:

    def test_stores_hash_and_lower_cased_email(self, asha):
        assert asha["email"] == "asha@example.com"
        assert asha["password_hash"] != "secret123"
        assert asha["is_active"] is True

    def test_duplicates(self, identity, asha):
        with pytest.raises(Conflict) as exc:
            run(identity.create_user({"username": "asha", "email": "new@example.com", "password": "x", "role": "student"}))
        assert exc.value.message == "Username already taken"

        with pytest.raises(Conflict) as exc:
            run(identity.create_user({"username": "new", "email": "ASHA@example.com", "password": "x", "role": "student"}))
        assert exc.value.message == "Email already registered"

    def test_invalid_role(self, identity):
        with pytest.raises(ValidationFailed):
            run(identity.create_user({"username": "x", "email": "x@example.com", "password": "x", "role": "guest"}))

    def test_required_fields(self, identity):
        with pytest.raises(ValidationFailed):
            run(identity.create_user({"username": "x", "role": "student"}))


class TestLogin:

    @pytest.mark.parametrize("identifier", ["asha", "asha@example.com", "ASHA@EXAMPLE.COM", "CS001"])
    def test_student_identifiers(self, identity, asha, identifier):
        result = run(identity.login(identifier, "secret123", "student"))
        assert result["user"]["id"] == asha["id"]
        assert result["redirect"] == "/Student_Dashboard"
        assert "password_hash" not in result["user"]
        assert decode_access_token(result["token"])["user_id"] == asha["id"]

    def test_role_must_match(self, identity, asha):
        with pytest.raises(Unauthorized) as exc:
            run(identity.login("asha", "secret123", "organization"))
        assert exc.value.message == "Invalid credentials or role"

    def test_organizations_use_username_only(self, identity, seed):
        run(identity.create_user({"username": "techhub", "email": "hub@example.com", "password": "pw123456", "role": "organization"}))
        assert run(identity.login("techhub", "pw123456", "organization"))["redirect"] == "/Organization_Dashboard"
        with pytest.raises(Unauthorized):
            run(identity.login("hub@example.com", "pw123456", "organization"))

    def test_wrong_password(self, identity, asha):
        with pytest.raises(Unauthorized) as exc:
            run(identity.login("asha", "nope", "student"))
        assert exc.value.message == "Invalid credentials"

    def test_deactivated(self, identity, store, asha):
        run(store.update("users", asha["id"], {"is_active": False}))
        with pytest.raises(Forbidden):
            run(identity.login("asha", "secret123", "student"))

    def test_deactivated_with_wrong_password(self, identity, store, asha):
        run(store.update("users", asha["id"], {"is_active": False}))
        with pytest.raises(Unauthorized) as exc:
            run(identity.login("asha", "nope", "student"))
        assert exc.value.message == "Invalid credentials"

    def test_includes_organization(self, identity, seed, asha):
        org = seed.organization(name="Tech Club")
        seed.membership(org, asha)
        user = run(identity.login("asha", "secret123", "student"))["user"]
        assert user["organization_id"] == org["id"]
        assert user["organization_name"] == "Tech Club"


class TestRegister:

    def test_students_only(self, identity):
        with pytest.raises(Forbidden):
            run(identity.register({"username": "boss", "email": "b@example.com", "password": "x", "role": "admin"}))

    def test_returns_token(self, identity):
        result = run(identity.register({"username": "ben", "email": "ben@example.com", "password": "secret123"}))
        assert result["user"]["role"] == "student"
        assert decode_access_token(result["token"])["username"] == "ben"


class TestProfile:

    def test_get_profile(self, identity, asha):
        profile = run(identity.get_profile(caller_for(asha)))
        assert profile["username"] == "asha"
        assert "password_hash" not in profile

    def test_missing_user(self, identity, asha):
        with pytest.raises(NotFound):
            run(identity.get_user("missing"))

    def test_update_username(self, identity, asha):
        assert run(identity.update_profile(caller_for(asha), " asha.rao "))["username"] == "asha.rao"

    def test_username_taken(self, identity, seed, asha):
        seed.student(username="taken")
        with pytest.raises(Conflict):
            run(identity.update_profile(caller_for(asha), "taken"))

    def test_keeping_own_username(self, identity, asha):
        assert run(identity.update_profile(caller_for(asha), "asha"))["username"] == "asha"

    def test_empty_username(self, identity, asha):
        with pytest.raises(ValidationFailed):
            run(identity.update_profile(caller_for(asha), "  "))


def test_public_user():
    assert public_user({"id": "1", "password_hash": "h"}) == {"id": "1"}
    assert public_user(None) is None
