"""Pydantic schemas for the serialized error body."""

from __future__ import annotations

from .base import TypedBaseModel
from .payload import ErrorPayload

__all__ = ["ErrorPayload", "TypedBaseModel"]
