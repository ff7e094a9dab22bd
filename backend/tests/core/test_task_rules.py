"""Task rules — pure status, description, due date and changeset handling.

Design Decisions:
    - Pure core functions: no mocks, no fixtures, just data in → data out
"""

from datetime import datetime, timezone

import pytest

from taskflow.core.domain_types import TaskStatus
from taskflow.core.errors import InvalidArgumentError
from taskflow.core.task_rules import (
    build_changes, canonical_description, deleted_message,
    normalize_due_date, parse_status, updated_message,
)


@pytest.mark.parametrize("raw,expected", [
    ("in-progress", TaskStatus.IN_PROGRESS),
    ("COMPLETED", TaskStatus.COMPLETED),
    (" In-Progress ", TaskStatus.IN_PROGRESS),
    (TaskStatus.COMPLETED, TaskStatus.COMPLETED),
])
def test_parse_status_accepts_known_values(raw, expected):
    assert parse_status(raw) is expected


@pytest.mark.parametrize("raw", ["done", "", None, 1, "in_progress"])
def test_parse_status_rejects_everything_else(raw):
    with pytest.raises(InvalidArgumentError) as exc:
        parse_status(raw)
    assert exc.value.field == "status"
    assert exc.value.http_status == 400


def test_canonical_description_lowercases_without_trimming():
    assert canonical_description("  Fix The Bug ") == "  fix the bug "


@pytest.mark.parametrize("raw", ["", "   ", None, 42])
def test_canonical_description_rejects_blank(raw):
    with pytest.raises(InvalidArgumentError):
        canonical_description(raw)


@pytest.mark.parametrize("raw,expected", [
    ("2023-12-31", "2023-12-31T00:00:00.000Z"),
    ("2023-12-31T23:59:59Z", "2023-12-31T23:59:59.000Z"),
    ("2024-01-01T01:30:00+02:00", "2023-12-31T23:30:00.000Z"),
    ("2024-05-05T12:00:00.123456", "2024-05-05T12:00:00.123Z"),
    ("0999-06-01", "0999-06-01T00:00:00.000Z"),
    ("0001-01-01T05:00:00+02:00", "0001-01-01T03:00:00.000Z"),
])
def test_normalize_due_date(raw, expected):
    assert normalize_due_date(raw) == expected


def test_normalize_due_date_accepts_datetime():
    value = datetime(2025, 7, 4, 18, 0, tzinfo=timezone.utc)
    assert normalize_due_date(value) == "2025-07-04T18:00:00.000Z"


@pytest.mark.parametrize("raw", [
    "31/12/2023", "tomorrow", "", None,
    "0001-01-01T00:00:00+01:00", "9999-12-31T23:30:00-02:00",
])
def test_normalize_due_date_rejects_unparsable(raw):
    with pytest.raises(InvalidArgumentError) as exc:
        normalize_due_date(raw)
    assert exc.value.field == "due_date"


def test_build_changes_canonicalizes_present_fields_only():
    changes = build_changes({"status": "Completed", "due_date": "2030-01-01"})
    assert changes == {
        "status": "completed",
        "due_date": "2030-01-01T00:00:00.000Z",
    }


def test_build_changes_keeps_explicit_unassignment():
    assert build_changes({"assigned_to_id": None}) == {"assigned_to_id": None}


def test_build_changes_rejects_project_id():
    with pytest.raises(InvalidArgumentError) as exc:
        build_changes({"project_id": "p2"})
    assert exc.value.field == "project_id"


def test_build_changes_rejects_unknown_fields():
    with pytest.raises(InvalidArgumentError):
        build_changes({"priority": "high"})


def test_notification_messages():
    assert updated_message("ship it") == "'ship it' updated!"
    assert deleted_message("ship it") == "'ship it' deleted!"
