"""Task ORM — a unit of work inside a project, optionally assigned to a user.

Invariants:
    - description is stored lowercased and is UNIQUE (uq_tasks_description)
    - status is one of TaskStatus values (enforced by the service, not the DB)
    - due_date is a canonical UTC instant string (YYYY-MM-DDTHH:MM:SS.mmmZ)
    - project_id is required; assigned_to_id is nullable

Design Decisions:
    - Unique constraint on description closes the create check-then-act race:
      the service pre-check is a fast path, the constraint is the guarantee
    - due_date as String: the canonical text form is the stored representation
    - assigned_to_id SET NULL on user delete: the task survives its assignee
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskflow.db.base import Base


class Task(Base):
    """Task entity — mutated only through TaskService."""
    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint("description", name="uq_tasks_description"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    due_date: Mapped[str] = mapped_column(String(30), nullable=False)
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    assigned_to_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    project: Mapped["Project"] = relationship(
        "Project", back_populates="tasks",
    )
    assigned_to: Mapped["User | None"] = relationship("User")
