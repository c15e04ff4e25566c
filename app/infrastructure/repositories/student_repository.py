"""Read access to the student directory."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import ACADEMIC_STATUS_ACTIVE, StudentSnapshot
from app.infrastructure.models import StudentModel


class StudentRepository:
    """Query student records as plain :class:`StudentSnapshot` values."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(
        self,
        *,
        course_ids: Iterable[int] | None = None,
        batch_years: Iterable[int] | None = None,
    ) -> list[StudentSnapshot]:
        """Return students with an ``Active`` academic status in a single query.

        ``course_ids`` and ``batch_years`` narrow the result when provided; an
        empty iterable matches nothing.
        """

        query = self.session.query(StudentModel).filter(
            StudentModel.academic_status == ACADEMIC_STATUS_ACTIVE
        )
        if course_ids is not None:
            query = query.filter(StudentModel.course_id.in_(set(course_ids)))
        if batch_years is not None:
            query = query.filter(StudentModel.batch_year.in_(set(batch_years)))
        return [self._to_snapshot(model) for model in query.order_by(StudentModel.id).all()]

    def get_by_user_id(self, user_id: int) -> StudentSnapshot | None:
        model = (
            self.session.query(StudentModel)
            .filter(StudentModel.user_id == user_id)
            .first()
        )
        return self._to_snapshot(model) if model else None

    @staticmethod
    def _to_snapshot(model: StudentModel) -> StudentSnapshot:
        return StudentSnapshot(
            student_id=model.id,
            user_id=model.user_id,
            course_id=model.course_id,
            batch_year=model.batch_year,
            semester=model.semester,
            academic_status=model.academic_status,
        )


__all__ = ["StudentRepository"]
