# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from task_manager.tasks.task_models import TaskPriority, TaskStatistics, as_utc


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("High", TaskPriority.HIGH),
        ("urgent", TaskPriority.URGENT),
        (" low ", TaskPriority.LOW),
        (0, TaskPriority.LOW),
        ("1", TaskPriority.MEDIUM),
        (TaskPriority.HIGH, TaskPriority.HIGH),
        ("Critical", None),
        ("²", None),
        ("٣", None),
        (4, None),
        (True, None),
        (None, None),
    ],
)
def test_priority_parse(raw, expected) -> None:
    assert TaskPriority.parse(raw) is expected


def test_priority_ordinals_follow_declaration_order() -> None:
    assert [p.ordinal for p in TaskPriority] == [0, 1, 2, 3]
    assert [p.value for p in TaskPriority] == ["Low", "Medium", "High", "Urgent"]


def test_priority_from_db_defaults_to_medium() -> None:
    assert TaskPriority.from_db(None) is TaskPriority.MEDIUM
    assert TaskPriority.from_db("garbage") is TaskPriority.MEDIUM
    assert TaskPriority.from_db("Urgent") is TaskPriority.URGENT


def test_as_utc() -> None:
    naive = datetime(2026, 5, 1, 8, 0)
    assert as_utc(naive) == datetime(2026, 5, 1, 8, 0, tzinfo=UTC)

    minus_five = timezone(timedelta(hours=-5))
    converted = as_utc(datetime(2026, 5, 1, 22, 0, tzinfo=minus_five))
    assert converted.utcoffset() == timedelta(0)
    assert (converted.day, converted.hour) == (2, 3)


def test_pending_is_derived() -> None:
    stats = TaskStatistics(total_tasks=5, completed_tasks=2)
    assert stats.pending_tasks == 3
