"""Message and error contract types exchanged over an RPC session."""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

type MessageUnit = dict[str, Any]


class EndOfStream(Enum):
    """Sentinel type marking the end of a session's message stream."""

    TOKEN = "end-of-stream"

    def __repr__(self) -> str:
        return "END_OF_STREAM"


END_OF_STREAM = EndOfStream.TOKEN

type Frame = MessageUnit | EndOfStream


class ServerErrorKind(StrEnum):
    """Error categories a server may report; values are the wire tag names."""

    INVALID_REQUEST = "Invalid_request"
    CODE_ERROR = "Code_error"
    VERSION_ERROR = "Version_error"


class ServerError(BaseModel):
    """Structured error returned by the server inside a response message.

    Carried as ``{"error": {"message": ..., "kind": ...}}`` in a message unit.
    """

    message: str = Field(description="Human-readable error description")
    kind: ServerErrorKind = Field(description="Error category reported by the server")

    @classmethod
    def from_message(cls, unit: MessageUnit) -> ServerError | None:
        """Extract a server error from *unit*, or ``None`` when it carries none."""
        payload = unit.get("error")
        if not isinstance(payload, dict):
            return None
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return None


__all__ = [
    "END_OF_STREAM",
    "EndOfStream",
    "Frame",
    "MessageUnit",
    "ServerError",
    "ServerErrorKind",
]
