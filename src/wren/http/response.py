"""Response carrier for hosts without their own response object.

Responders write to it in place; ``sent`` flips once a body is set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Response:
    """A mutable response written by the responder."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    sent: bool = False

    def set_header(self, name: str, value: str) -> Response:
        self.headers[name.lower()] = value
        return self

    def send(self, body: Any, status: int | None = None) -> Response:
        if self.sent:
            msg = "Response already sent"
            raise RuntimeError(msg)
        if status is not None:
            self.status = status
        self.body = body
        self.sent = True
        return self

    def json(self, data: Any, status: int | None = None) -> Response:
        """Send *data* as the body with a JSON content type.

        Serialization is left to the host; the body keeps the object.
        """
        self.set_header("content-type", "application/json")
        return self.send(data, status)
