"""
Authentication Module
Password hashing, credential generation and JWT token management
"""

from careernest.auth.caller import Caller, ADMIN, ORGANIZATION, STUDENT, ROLES
from careernest.auth.password import hash_password, verify_password, generate_random_password
from careernest.auth.credentials import (
    CredentialGenerator,
    GeneratedCredentials,
    AdjectiveNounCredentialGenerator,
)
from careernest.auth.dependencies import (
    create_access_token,
    decode_access_token,
    issue_token,
    get_current_user,
    require_roles,
    get_admin,
    get_organization,
    get_student,
)

__all__ = [
    "Caller",
    "ADMIN",
    "ORGANIZATION",
    "STUDENT",
    "ROLES",
    "hash_password",
    "verify_password",
    "generate_random_password",
    "CredentialGenerator",
    "GeneratedCredentials",
    "AdjectiveNounCredentialGenerator",
    "create_access_token",
    "decode_access_token",
    "issue_token",
    "get_current_user",
    "require_roles",
    "get_admin",
    "get_organization",
    "get_student",
]
