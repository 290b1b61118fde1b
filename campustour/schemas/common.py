"""Shared response envelope and camelCase base model."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Reads ORM objects and speaks camelCase JSON; snake_case names still accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[DataT]):
    """Success envelope: ``{"status": "success", "message"?, "data"}``."""

    status: str = "success"
    message: str | None = None
    data: DataT


class ErrorEnvelope(BaseModel):
    """Failure envelope; ``status`` is "fail" for 4xx and "error" for 5xx."""

    status: str
    message: str
