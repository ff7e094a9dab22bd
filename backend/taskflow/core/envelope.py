"""Result Envelope — the uniform {code, message, details} shape every operation returns.

Invariants:
    - code is an HTTP-equivalent integer status; 2xx means success
    - notification is present only when a dispatch was attempted
    - A notification outcome never alters code/message/details by itself

Design Decisions:
    - Dataclass over dict: callers get attribute access, to_dict() is the wire form
    - Dispatch outcome is a separate optional field, so a committed mutation is
      never reported as failed because a side effect failed
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class Envelope:
    """Outcome of a service operation or of a notification dispatch."""
    code: int
    message: str
    details: Any = None
    notification: "Envelope | None" = None

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300

    def to_dict(self) -> dict:
        body = {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }
        if self.notification is not None:
            body["notification"] = self.notification.to_dict()
        return body
