"""Project ORM — owner of tasks.

Invariants:
    - id is an opaque string primary key (UUID4 text)
    - Deleting a project deletes its tasks

Design Decisions:
    - The task core only reads Project.id; name/description serve the thin
      project routes
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskflow.db.base import Base


class Project(Base):
    """Project aggregate — groups tasks."""
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="project", cascade="all, delete-orphan",
    )
