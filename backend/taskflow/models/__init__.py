"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Primary keys are opaque UUID4 strings

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from taskflow.models.project import Project  # noqa: F401
from taskflow.models.user import User  # noqa: F401
from taskflow.models.task import Task  # noqa: F401
from taskflow.models.notification import Notification  # noqa: F401
