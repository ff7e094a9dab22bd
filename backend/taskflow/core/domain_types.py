"""Domain Types — identity types and enums shared across the task lifecycle.

Invariants:
    - TaskId, ProjectId, UserId are opaque strings assigned by the store
    - TaskStatus holds exactly two values: in-progress, completed
    - EntityKind names every entity the Repository port can address

Design Decisions:
    - NewType over wrappers: zero runtime cost, type-checker support
    - str Enums: values serialize to JSON as-is
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", str)
ProjectId = NewType("ProjectId", str)
UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task states. Any transition between them is allowed."""
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class EntityKind(str, Enum):
    """Entities reachable through the Repository port."""
    TASK = "task"
    PROJECT = "project"
    USER = "user"
    NOTIFICATION = "notification"


class NotificationPolicy(str, Enum):
    """How a failed dispatch affects the envelope of a committed mutation.

    WARN keeps the primary result and attaches the dispatch outcome.
    PROPAGATE replaces the primary result with the dispatch outcome.
    """
    WARN = "warn"
    PROPAGATE = "propagate"


# Task relationships resolved by read operations
TASK_JOINS: tuple[str, ...] = ("project", "assigned_to")
