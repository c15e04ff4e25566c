"""Shared fixtures: a SQLite database reset per test and a recording broadcaster."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "campus_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "Asia/Kolkata"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import ROLE_ADMIN, ROLE_STUDENT, User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.models import CourseModel, StudentModel  # noqa: E402
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import create_user_token, get_password_hash  # noqa: E402

PASSWORD = "Secret123"
_PASSWORD_HASH = get_password_hash(PASSWORD)


class RecordingBroadcaster:
    """Live session double that keeps every emitted event."""

    def __init__(self) -> None:
        self.identity_events: list[tuple[int, dict[str, Any]]] = []
        self.room_events: list[tuple[str, dict[str, Any]]] = []

    def emit_to_identity(self, user_id: int, event: dict[str, Any]) -> None:
        self.identity_events.append((user_id, event))

    def emit_to_room(self, room: str, event: dict[str, Any]) -> None:
        self.room_events.append((room, event))

    @property
    def identities(self) -> list[int]:
        return [user_id for user_id, _ in self.identity_events]


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine, checkfirst=True)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine, checkfirst=True)


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture()
def make_user(db_session):
    def _make_user(
        username: str, *, role: str = ROLE_STUDENT, is_active: bool = True
    ) -> User:
        return UserRepository(db_session).create(
            User(
                id=None,
                username=username,
                email=f"{username}@example.com",
                password=_PASSWORD_HASH,
                role=role,
                is_active=is_active,
            )
        )

    return _make_user


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin", role=ROLE_ADMIN)


@pytest.fixture()
def make_course(db_session):
    def _make_course(code: str) -> int:
        course = CourseModel(course_code=code, course_name=f"Course {code}")
        db_session.add(course)
        db_session.commit()
        return course.id

    return _make_course


@pytest.fixture()
def make_student(db_session, make_user):
    """Create a student identity plus its academic record; returns the identity."""

    def _make_student(
        username: str,
        *,
        course_id: int | None = None,
        batch_year: int | None = None,
        semester: int | None = None,
        academic_status: str = "Active",
    ) -> User:
        user = make_user(username, role=ROLE_STUDENT)
        db_session.add(
            StudentModel(
                user_id=user.id,
                student_code=f"STU-{username}",
                full_name=username.title(),
                course_id=course_id,
                batch_year=batch_year,
                semester=semester,
                academic_status=academic_status,
            )
        )
        db_session.commit()
        return user

    return _make_student


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _auth_headers


@pytest.fixture()
def password() -> str:
    return PASSWORD
