"""Reward schemas."""

from __future__ import annotations

from datetime import datetime

from campustour.schemas.common import CamelModel


class RedeemRequest(CamelModel):
    # Optional so a missing token reaches the service and gets its own message.
    qr_token: str | None = None


class RewardOut(CamelModel):
    reward_id: int
    user_id: int
    activity_id: int
    qr_token: str
    is_redeemed: bool
    created_at: datetime
    redeemed_at: datetime | None
    expires_at: datetime
    qr_code_url: str | None = None


class RewardStatusOut(CamelModel):
    has_reward_assigned: bool
    is_redeemed: bool
    redeemed_at: datetime | None
    is_expired: bool
    qr_token: str | None
    qr_code_url: str | None = None
    poll_interval_seconds: int | None = None


class RewardStatisticsOut(CamelModel):
    total: int
    redeemed: int
    not_redeemed: int
