"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import LiveSessionBroadcaster
from app.domain.entities import User
from app.domain.exceptions import ForbiddenError
from app.infrastructure.database import get_db
from app.infrastructure.notifications import notification_publisher
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    subject = payload.get("sub")
    signature = payload.get("pwd_sig")
    if not isinstance(subject, str) or not isinstance(signature, str):
        raise _credentials_error()
    try:
        user_id = int(subject)
    except ValueError as exc:
        raise _credentials_error() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_error("User not found")
    if signature != password_signature(user):
        raise _credentials_error()
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise ForbiddenError("Admin access required")
    return current_user


def get_broadcaster() -> LiveSessionBroadcaster:
    """Return the process-wide live session publisher."""

    return notification_publisher
