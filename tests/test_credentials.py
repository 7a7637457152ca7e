"""
Tests for passwords, tokens, generated credentials, the credentials email and the PDF report
"""

import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from careernest.auth import (
    AdjectiveNounCredentialGenerator,
    create_access_token,
    decode_access_token,
    generate_random_password,
    hash_password,
    issue_token,
    verify_password,
)
from careernest.services.credentials_report import CredentialsReport, _row_values, build_credentials_pdf
from careernest.services.email_service import EmailService

from conftest import run


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)

    def test_missing_values_never_verify(self):
        assert not verify_password("", hash_password("x"))
        assert not verify_password("x", None)

    def test_random_password(self):
        password = generate_random_password()
        assert len(password) == 8
        assert password.isalnum() and password == password.lower()
        assert len(generate_random_password(12)) == 12


class TestTokens:

    def test_issue_and_decode(self):
        token = issue_token({"id": "u1", "username": "ann", "role": "student"})
        payload = decode_access_token(token)
        assert payload["user_id"] == "u1"
        assert payload["username"] == "ann"
        assert payload["role"] == "student"
        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token({"user_id": "u1", "role": "admin"}, expires_delta=timedelta(seconds=-5))
        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401

    def test_garbage_token(self):
        with pytest.raises(HTTPException):
            decode_access_token("not.a.token")


class TestCredentialGenerator:

    def test_seeded_generator_is_deterministic(self):
        first = AdjectiveNounCredentialGenerator(random.Random(7)).generate()
        second = AdjectiveNounCredentialGenerator(random.Random(7)).generate()
        assert first == second

    def test_shape(self):
        generator = AdjectiveNounCredentialGenerator(random.Random(1))
        for _ in range(20):
            username, password = generator.generate()
            assert username == username.lower()
            assert username[-1].isdigit()
            prefix, _, digits = password.rpartition("@")
            assert prefix == username
            assert digits.isdigit() and 0 <= int(digits) < 1000


class TestEmail:

    def test_message(self):
        message = EmailService.build_credentials_message("org@example.com", "Tech Club", "techhub7", "techhub7@42")
        assert message["To"] == "org@example.com"
        text, html = [part.get_payload(decode=True).decode() for part in message.get_payload()]
        assert "techhub7@42" in text
        assert "Tech Club" in html

    def test_development_preview(self):
        assert run(EmailService.send_credentials_email("org@example.com", "Tech Club", "u", "p")) is True

    def test_no_recipient(self):
        assert run(EmailService.send_credentials_email("", "Tech Club", "u", "p")) is False


class TestCredentialsReport:

    def test_row_values(self):
        values = _row_values(3, {"name": "Asha", "email": "a@x.com", "rollNumber": 17, "password": "pw"})
        assert values == ["3", "Asha", "a@x.com", "17", "pw", "", ""]

    def test_long_lists_paginate(self):
        report = CredentialsReport("Tech Club", datetime(2025, 1, 1, tzinfo=timezone.utc))
        credentials = [{"name": f"Student {i}", "email": f"s{i}@x.com", "password": "pw"} for i in range(120)]
        pages = report.render_pages(credentials)
        assert len(pages) > 1
        assert pages[0].size == (1240, 1754)

    def test_pdf_bytes(self):
        pdf = build_credentials_pdf([{"name": "Asha", "email": "a@x.com", "password": "pw"}], "Tech Club")
        assert pdf.startswith(b"%PDF")
