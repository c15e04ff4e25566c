"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_STUDENT, User
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone

from .validators import ensure_role, ensure_username


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: str = ROLE_STUDENT,
) -> User:
    """Create a new user ensuring unique usernames and e-mail addresses."""

    repository = UserRepository(session)
    username = ensure_username(username)
    role = ensure_role(role)
    if not password:
        raise ValidationError("Password is required")

    if repository.get_by_login(username) or repository.get_by_login(email):
        raise ValidationError("A user with that username or e-mail already exists")

    user = User(
        id=None,
        username=username,
        email=email.strip().lower(),
        password=get_password_hash(password),
        role=role,
        is_active=True,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
