"""Wire representation of a service error body."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from werror.schema.base import TypedBaseModel
from werror.utilities.final import final_class


@final_class
class ErrorPayload(TypedBaseModel):
    """Serialized error body.

    The HTTP status is deliberately absent: it travels on the response status
    line, not in the body.
    """

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    sub_errors: list[ErrorPayload] | None = Field(
        None,
        alias="subErrors",
        description="Sub-errors that led to this error",
    )
    metadata: dict[str, Any] | None = Field(
        None,
        description="Error metadata",
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump using wire field names, dropping absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = ["ErrorPayload"]
