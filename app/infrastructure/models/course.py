"""SQLAlchemy model for the course catalog."""

from sqlalchemy import Boolean, Column, Integer, String

from app.infrastructure.database import Base


class CourseModel(Base):
    """Course a student can be enrolled in."""

    __tablename__ = "course"

    id = Column(Integer, primary_key=True, index=True)
    course_code = Column(String(20), nullable=False, unique=True)
    course_name = Column(String(120), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)


__all__ = ["CourseModel"]
