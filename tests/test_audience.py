"""Unit tests for audience resolution over directory snapshots."""

import pytest

from app.application.use_cases.notifications import coerce_target_ids, resolve_audience
from app.application.use_cases.notifications.audience import order_receivers
from app.domain.entities import DirectorySnapshot, StudentSnapshot
from app.domain.exceptions import ValidationError


def _student(student_id, user_id, *, course_id=None, batch_year=None, status="Active"):
    return StudentSnapshot(
        student_id=student_id,
        user_id=user_id,
        course_id=course_id,
        batch_year=batch_year,
        academic_status=status,
    )


DIRECTORY = DirectorySnapshot(
    active_user_ids=frozenset({1, 2, 3, 10, 11}),
    students=(
        _student(1, 10, course_id=5, batch_year=2023),
        _student(2, 11, course_id=5, batch_year=2024),
        _student(3, 12, course_id=6, batch_year=2023, status="Suspended"),
        _student(4, None, course_id=5, batch_year=2023),
    ),
)


def test_all_targets_every_active_identity():
    assert resolve_audience("all", [], DIRECTORY) == frozenset({1, 2, 3, 10, 11})


def test_students_skips_inactive_and_unlinked_records():
    assert resolve_audience("students", [], DIRECTORY) == frozenset({10, 11})


def test_course_filters_by_course_id():
    assert resolve_audience("course", [5], DIRECTORY) == frozenset({10, 11})
    assert resolve_audience("course", [6], DIRECTORY) == frozenset()


def test_batch_filters_by_batch_year():
    assert resolve_audience("batch", [2023], DIRECTORY) == frozenset({10})


def test_individual_is_taken_verbatim_and_deduplicated():
    assert resolve_audience("individual", [7, 8, 7], DIRECTORY) == frozenset({7, 8})


def test_unknown_target_type_resolves_to_nobody():
    assert resolve_audience("faculty", [1], DIRECTORY) == frozenset()


def test_order_receivers_keeps_explicit_order_first():
    assert order_receivers(frozenset({3, 1, 2}), [2, 3, 2]) == [2, 3, 1]


def test_coerce_target_ids_accepts_numeric_strings():
    assert coerce_target_ids("batch", ["2023", 2024, " 7 "]) == [2023, 2024, 7]
    assert coerce_target_ids("all", None) == []


@pytest.mark.parametrize("raw", ["abc", True, None])
def test_coerce_target_ids_rejects_non_numeric(raw):
    with pytest.raises(ValidationError):
        coerce_target_ids("course", [raw])


def test_identity_with_several_student_records_appears_once():
    directory = DirectorySnapshot(
        students=(
            _student(20, 9, course_id=5, batch_year=2023),
            _student(21, 9, course_id=5, batch_year=2024),
            _student(22, 10, course_id=5, batch_year=2023),
        )
    )

    assert resolve_audience("course", [5], directory) == frozenset({9, 10})
    assert resolve_audience("students", [], directory) == frozenset({9, 10})
    assert resolve_audience("batch", [2023, 2024], directory) == frozenset({9, 10})
