"""Request, read-projection, and command-response shapes.

These are pure data shapes: no ORM or persistence concerns. Every domain
service returns a CommandResponse from its mutating operations, so that
validation failures and missing records travel back as data rather than as
raised exceptions. Callers branch on is_successful only; both outcomes
always carry a message.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Request(BaseModel):
    """Editable request payload. id is 0 for records not yet persisted."""

    id: int = Field(default=0, ge=0)


class Response(BaseModel):
    """Read projection of a persisted entity. Never persisted itself."""

    model_config = ConfigDict(frozen=True)

    id: int
    guid: str | None = None


class CommandResponse(BaseModel):
    """Outcome of a mutating operation: fully successful or fully failed."""

    model_config = ConfigDict(frozen=True)

    is_successful: bool
    message: str = Field(min_length=1)
    id: int | None = None

    @model_validator(mode="after")
    def _failed_response_has_no_id(self) -> CommandResponse:
        if not self.is_successful and self.id is not None:
            raise ValueError("a failed CommandResponse must not carry an id")
        return self

    @classmethod
    def success(cls, message: str, id: int | None = None) -> CommandResponse:
        return cls(is_successful=True, message=message, id=id)

    @classmethod
    def error(cls, message: str) -> CommandResponse:
        return cls(is_successful=False, message=message)
