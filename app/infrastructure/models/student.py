"""SQLAlchemy model for student records."""

from sqlalchemy import Column, ForeignKey, Integer, String

from app.infrastructure.database import Base


class StudentModel(Base):
    """Academic record linked to a portal identity."""

    __tablename__ = "student"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, unique=True
    )
    student_code = Column(String(30), nullable=False, unique=True)
    full_name = Column(String(120), nullable=False)
    course_id = Column(Integer, ForeignKey("course.id"), nullable=True, index=True)
    batch_year = Column(Integer, nullable=True)
    semester = Column(Integer, nullable=True)
    academic_status = Column(String(20), nullable=False, default="Active")


__all__ = ["StudentModel"]
