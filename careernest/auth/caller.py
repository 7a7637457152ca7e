"""
Caller Identity
The authenticated principal passed explicitly into every service call
"""

from dataclasses import dataclass

STUDENT = "student"
ORGANIZATION = "organization"
ADMIN = "admin"

ROLES = (STUDENT, ORGANIZATION, ADMIN)


@dataclass(frozen=True)
class Caller:
    """Who is making the request"""
    user_id: str
    role: str
    username: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    @property
    def is_organization(self) -> bool:
        return self.role == ORGANIZATION

    @property
    def is_student(self) -> bool:
        return self.role == STUDENT
