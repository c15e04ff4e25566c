"""Read-only views over the student and identity directories."""

from __future__ import annotations

from dataclasses import dataclass, field

ACADEMIC_STATUS_ACTIVE = "Active"
ACADEMIC_STATUSES: tuple[str, ...] = (
    ACADEMIC_STATUS_ACTIVE,
    "Completed",
    "Discontinued",
    "On Leave",
    "Suspended",
)


@dataclass(frozen=True)
class StudentSnapshot:
    """The subset of a student record used for audience targeting."""

    student_id: int
    user_id: int | None
    course_id: int | None
    batch_year: int | None
    semester: int | None = None
    academic_status: str = ACADEMIC_STATUS_ACTIVE

    def is_active(self) -> bool:
        return self.academic_status == ACADEMIC_STATUS_ACTIVE


@dataclass(frozen=True)
class DirectorySnapshot:
    """Point-in-time copy of the identity and student directories."""

    active_user_ids: frozenset[int] = field(default_factory=frozenset)
    students: tuple[StudentSnapshot, ...] = ()


__all__ = [
    "ACADEMIC_STATUSES",
    "ACADEMIC_STATUS_ACTIVE",
    "DirectorySnapshot",
    "StudentSnapshot",
]
