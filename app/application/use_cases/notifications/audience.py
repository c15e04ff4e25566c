"""Resolve a notification's targeting rule into concrete recipient identities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    TARGET_ALL,
    TARGET_BATCH,
    TARGET_COURSE,
    TARGET_INDIVIDUAL,
    TARGET_STUDENTS,
    DirectorySnapshot,
    StudentSnapshot,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import StudentRepository, UserRepository


def coerce_target_ids(target_type: str, target_ids: Iterable[object] | None) -> list[int]:
    """Return ``target_ids`` as integers, keeping their order and duplicates.

    Course ids, batch years and user ids are all integral references.
    """

    coerced: list[int] = []
    for raw in target_ids or ():
        if isinstance(raw, bool):
            raise ValidationError(f"Invalid target id for '{target_type}': {raw!r}")
        try:
            coerced.append(int(str(raw).strip()))
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid target id for '{target_type}': {raw!r}"
            ) from exc
    return coerced


def _linked_identities(students: Iterable[StudentSnapshot]) -> set[int]:
    # Students without a linked identity cannot receive anything.
    return {student.user_id for student in students if student.user_id is not None}


def resolve_audience(
    target_type: str,
    target_ids: Sequence[int],
    directory: DirectorySnapshot,
) -> frozenset[int]:
    """Return the deduplicated identities addressed by ``target_type``.

    Unknown target types resolve to an empty audience.
    """

    if target_type == TARGET_ALL:
        return frozenset(directory.active_user_ids)

    active_students = [student for student in directory.students if student.is_active()]

    if target_type == TARGET_STUDENTS:
        return frozenset(_linked_identities(active_students))

    if target_type == TARGET_COURSE:
        courses = set(target_ids)
        return frozenset(
            _linked_identities(s for s in active_students if s.course_id in courses)
        )

    if target_type == TARGET_BATCH:
        batches = set(target_ids)
        return frozenset(
            _linked_identities(s for s in active_students if s.batch_year in batches)
        )

    if target_type == TARGET_INDIVIDUAL:
        return frozenset(target_ids)

    return frozenset()


def load_directory_snapshot(
    session: Session, target_type: str, target_ids: Sequence[int]
) -> DirectorySnapshot:
    """Read only the directory slice ``target_type`` needs, in batch queries."""

    if target_type == TARGET_ALL:
        return DirectorySnapshot(
            active_user_ids=frozenset(UserRepository(session).list_active_ids())
        )

    students = StudentRepository(session)
    if target_type == TARGET_STUDENTS:
        return DirectorySnapshot(students=tuple(students.list_active()))
    if target_type == TARGET_COURSE:
        return DirectorySnapshot(students=tuple(students.list_active(course_ids=target_ids)))
    if target_type == TARGET_BATCH:
        return DirectorySnapshot(students=tuple(students.list_active(batch_years=target_ids)))
    return DirectorySnapshot()


def order_receivers(audience: frozenset[int], target_ids: Sequence[int]) -> list[int]:
    """Return ``audience`` in a stable order, honouring explicit targets first."""

    ordered: list[int] = []
    seen: set[int] = set()
    for user_id in target_ids:
        if user_id in audience and user_id not in seen:
            seen.add(user_id)
            ordered.append(user_id)
    ordered.extend(sorted(audience - seen))
    return ordered


__all__ = [
    "coerce_target_ids",
    "load_directory_snapshot",
    "order_receivers",
    "resolve_audience",
]
