"""Activity completion schemas."""

from __future__ import annotations

from campustour.schemas.common import CamelModel


class CompletionStatusOut(CamelModel):
    all_completed: bool
    completed_count: int
    total_count: int
