"""Task Schemas — request bodies for the task routes.

Invariants:
    - TaskCreate requires description, status, dueDate, projectId
    - TaskReplace (PUT) requires every mutable field; TaskPatch requires none
    - projectId is not a field of TaskReplace/TaskPatch (extra="forbid")

Design Decisions:
    - status and dueDate typed as str: invalid values reach the service and
      come back as its 400 envelope, same as any other caller
    - to_service() dumps by field name with exclude_unset so PATCH bodies
      stay partial
"""

from pydantic import BaseModel, ConfigDict, Field


class _TaskBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_service(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskCreate(_TaskBody):
    """POST /tasks body."""
    description: str = Field(min_length=1, max_length=10_000)
    status: str
    due_date: str = Field(alias="dueDate")
    project_id: str = Field(alias="projectId")
    assigned_to_id: str | None = Field(None, alias="assignedToId")

    def to_service(self) -> dict:
        return self.model_dump()


class TaskReplace(_TaskBody):
    """PUT /tasks/{id} body — replaces every mutable field."""
    description: str = Field(min_length=1, max_length=10_000)
    status: str
    due_date: str = Field(alias="dueDate")
    assigned_to_id: str | None = Field(None, alias="assignedToId")

    def to_service(self) -> dict:
        return self.model_dump()


class TaskPatch(_TaskBody):
    """PATCH /tasks/{id} body — any subset of the mutable fields."""
    description: str | None = Field(None, min_length=1, max_length=10_000)
    status: str | None = None
    due_date: str | None = Field(None, alias="dueDate")
    assigned_to_id: str | None = Field(None, alias="assignedToId")


class TaskStatusUpdate(_TaskBody):
    """PATCH /tasks/{id}/status body."""
    status: str
