"""Shared Pydantic base class for every werror schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TypedBaseModel(BaseModel):
    """Common base so payload and message schemas share one configuration.

    Schemas are immutable value objects: they are built once (a catalog entry,
    a serialized error) and then only read, possibly from several threads.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )
