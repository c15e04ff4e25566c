"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from app.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a portal identity."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="student", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["UserModel"]
