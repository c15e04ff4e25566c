"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.domain.entities import User

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(user: User) -> str:
    """Fingerprint of the stored hash and active flag.

    Tokens carry it so that changing either invalidates outstanding tokens.
    """

    return sha256(f"{user.password}:{int(user.is_active)}".encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def create_user_token(user: User, expires_delta: timedelta | None = None) -> str:
    return create_access_token(
        {"sub": str(user.id), "role": user.role, "pwd_sig": password_signature(user)},
        expires_delta=expires_delta,
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
