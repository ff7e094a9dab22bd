"""Task Rules — pure validation and canonicalization of task fields.

Invariants:
    - Status accepted case-insensitively, persisted as a TaskStatus value
    - Description persisted lowercased; blank descriptions rejected
    - Due dates persisted as UTC instants formatted YYYY-MM-DDTHH:MM:SS.mmmZ
    - Due dates whose UTC instant falls outside datetime range are rejected
    - Naive due dates are interpreted as UTC
    - project_id never appears in an update changeset

Design Decisions:
    - Pure functions raising InvalidArgumentError: the service boundary turns
      them into 400 envelopes, tests need no fixtures
    - ISO-8601 only for due dates (date or datetime, optional offset or Z)
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from taskflow.core.domain_types import TaskStatus
from taskflow.core.errors import InvalidArgumentError

_STATUS_DETAILS = "status must be 'in-progress' or 'completed'!"

# Fields a caller may change after creation
MUTABLE_TASK_FIELDS = frozenset({
    "description", "status", "due_date", "assigned_to_id",
})


def parse_status(raw: Any) -> TaskStatus:
    """Return the TaskStatus for raw, or raise InvalidArgumentError."""
    if isinstance(raw, TaskStatus):
        return raw
    if not isinstance(raw, str):
        raise InvalidArgumentError("Invalid status!", "status", _STATUS_DETAILS)
    try:
        return TaskStatus(raw.strip().lower())
    except ValueError:
        raise InvalidArgumentError("Invalid status!", "status", _STATUS_DETAILS)


def canonical_description(raw: Any) -> str:
    """Lowercase a description for storage and uniqueness comparison."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidArgumentError(
            "Invalid description!", "description",
            "description must be a non-empty string!",
        )
    return raw.lower()


def normalize_due_date(raw: Any) -> str:
    """Parse raw into a canonical UTC instant string.

    Accepts datetime objects and ISO-8601 strings ("2023-12-31",
    "2023-12-31T10:00:00+02:00", "2023-12-31T08:00:00Z").
    """
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str) and raw.strip():
        try:
            parsed = datetime.fromisoformat(raw.strip())
        except ValueError:
            raise InvalidArgumentError(
                "Invalid dueDate!", "due_date",
                f"dueDate '{raw}' is not a valid ISO-8601 date!",
            )
    else:
        raise InvalidArgumentError(
            "Invalid dueDate!", "due_date", "dueDate is required!",
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        utc = parsed.astimezone(timezone.utc)
    except OverflowError:
        raise InvalidArgumentError(
            "Invalid dueDate!", "due_date",
            f"dueDate '{raw}' is outside the supported date range!",
        )
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc:%H:%M:%S}.{utc.microsecond // 1000:03d}Z"
    )


def build_changes(body: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and canonicalize an update/patch body into store fields."""
    if "project_id" in body:
        raise InvalidArgumentError(
            "Error updating task", "project_id",
            "projectId cannot be changed after creation!",
        )
    unknown = set(body) - MUTABLE_TASK_FIELDS
    if unknown:
        raise InvalidArgumentError(
            "Error updating task", sorted(unknown)[0],
            f"Unknown task fields: {', '.join(sorted(unknown))}",
        )
    changes: dict[str, Any] = {}
    if "status" in body:
        changes["status"] = parse_status(body["status"]).value
    if "description" in body:
        changes["description"] = canonical_description(body["description"])
    if "due_date" in body:
        changes["due_date"] = normalize_due_date(body["due_date"])
    if "assigned_to_id" in body:
        changes["assigned_to_id"] = body["assigned_to_id"]
    return changes


def updated_message(description: str) -> str:
    return f"'{description}' updated!"


def deleted_message(description: str) -> str:
    return f"'{description}' deleted!"
