"""Domain entity representing a portal identity."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_STUDENT = "student"
ROLE_FACULTY = "faculty"
ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_STUDENT, ROLE_FACULTY)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    username: str
    email: str
    password: str
    role: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def is_student(self) -> bool:
        return self.has_role(ROLE_STUDENT)


__all__ = ["ROLES", "ROLE_ADMIN", "ROLE_FACULTY", "ROLE_STUDENT", "User"]
