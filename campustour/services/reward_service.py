"""Reward issuance and redemption.

A user gets at most one reward row, ever (``uq_rewards_user``). Generation is
idempotent while that reward is still redeemable; redemption is a single
conditional UPDATE so concurrent scans of one token succeed exactly once.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campustour.core.config import settings
from campustour.core.errors import (
    AlreadyIssuedError,
    AlreadyRedeemedError,
    ExpiredError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from campustour.models.reward import Reward
from campustour.services.activity_service import latest_activity_id
from campustour.services.qr_service import reward_qr_code_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardStatus:
    has_reward_assigned: bool
    is_redeemed: bool = False
    redeemed_at: datetime | None = None
    is_expired: bool = False
    qr_token: str | None = None
    qr_code_url: str | None = None


@dataclass(frozen=True)
class RewardStatistics:
    total: int
    redeemed: int
    not_redeemed: int


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(reward: Reward, now: datetime | None = None) -> bool:
    return _as_utc(reward.expires_at) < (now or utcnow())


def is_redeemable(reward: Reward, now: datetime | None = None) -> bool:
    return not reward.is_redeemed and not is_expired(reward, now)


def _find_reward_for_user(db: Session, user_id: int) -> Reward | None:
    return db.execute(select(Reward).where(Reward.user_id == user_id)).scalar_one_or_none()


def _find_reward_by_token(db: Session, qr_token: str) -> Reward | None:
    return db.execute(select(Reward).where(Reward.qr_token == qr_token)).scalar_one_or_none()


def get_redeemable_reward(db: Session, user_id: int, *, now: datetime | None = None) -> Reward | None:
    """The user's reward if it can still be redeemed, otherwise None."""
    reward = _find_reward_for_user(db, user_id)
    if reward is not None and is_redeemable(reward, now):
        return reward
    return None


def _reuse_or_reject(reward: Reward, now: datetime) -> Reward:
    if is_redeemable(reward, now):
        logger.info("reward_reused user_id=%s reward_id=%s", reward.user_id, reward.id)
        return reward
    logger.warning(
        "reward_generate_rejected user_id=%s reward_id=%s redeemed=%s",
        reward.user_id,
        reward.id,
        reward.is_redeemed,
    )
    raise AlreadyIssuedError(
        "Reward already issued for this user",
        {"user_id": reward.user_id, "reward_id": reward.id},
    )


def generate_reward(db: Session, user_id: int, *, now: datetime | None = None) -> tuple[Reward, bool]:
    """Issue the user's reward, or return the one they already hold.

    Returns ``(reward, created)``. The caller must already have checked that
    every activity is completed.
    """
    now = now or utcnow()

    existing = _find_reward_for_user(db, user_id)
    if existing is not None:
        return _reuse_or_reject(existing, now), False

    reward = Reward(
        user_id=user_id,
        activity_id=latest_activity_id(db),
        qr_token=str(uuid.uuid4()),
        is_redeemed=False,
        created_at=now,
        expires_at=now + timedelta(hours=settings.reward_ttl_hours),
    )
    db.add(reward)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request for the same user inserted first.
        db.rollback()
        winner = _find_reward_for_user(db, user_id)
        if winner is None:
            raise
        logger.info("reward_generate_race user_id=%s reward_id=%s", user_id, winner.id)
        return _reuse_or_reject(winner, now), False

    db.refresh(reward)
    logger.info("reward_generated user_id=%s reward_id=%s", user_id, reward.id)
    return reward, True


def redeem_reward(db: Session, qr_token: str | None, *, now: datetime | None = None) -> Reward:
    """Mark the reward behind ``qr_token`` redeemed. Possession of the token is the only credential."""
    if not qr_token or not qr_token.strip():
        raise ValidationError("QR token is required")
    qr_token = qr_token.strip()
    now = now or utcnow()

    result = db.execute(
        update(Reward)
        .where(
            Reward.qr_token == qr_token,
            Reward.is_redeemed.is_(False),
            Reward.expires_at >= now,
        )
        .values(is_redeemed=True, redeemed_at=now)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        db.rollback()
        reward = _find_reward_by_token(db, qr_token)
        if reward is None:
            logger.warning("reward_redeem_unknown_token")
            raise NotFoundError("Invalid QR token")
        if reward.is_redeemed:
            logger.warning("reward_redeem_repeat reward_id=%s", reward.id)
            raise AlreadyRedeemedError("Reward already redeemed", {"reward_id": reward.id})
        if is_expired(reward, now):
            logger.warning("reward_redeem_expired reward_id=%s", reward.id)
            raise ExpiredError("Reward has expired", {"reward_id": reward.id})
        raise InternalError("Failed to redeem reward", {"reward_id": reward.id})

    db.commit()
    reward = _find_reward_by_token(db, qr_token)
    logger.info("reward_redeemed reward_id=%s user_id=%s", reward.id, reward.user_id)
    return reward


def _status_of(reward: Reward | None, now: datetime, *, include_qr: bool) -> RewardStatus:
    if reward is None:
        return RewardStatus(has_reward_assigned=False)
    qr_code_url = None
    if include_qr and is_redeemable(reward, now):
        qr_code_url = reward_qr_code_url(reward.qr_token)
    return RewardStatus(
        has_reward_assigned=True,
        is_redeemed=reward.is_redeemed,
        redeemed_at=reward.redeemed_at,
        is_expired=is_expired(reward, now),
        qr_token=reward.qr_token,
        qr_code_url=qr_code_url,
    )


def get_status_by_token(db: Session, qr_token: str, *, now: datetime | None = None) -> RewardStatus:
    if not qr_token or not qr_token.strip():
        raise ValidationError("QR token is required")
    reward = _find_reward_by_token(db, qr_token.strip())
    return _status_of(reward, now or utcnow(), include_qr=False)


def get_status_by_user(db: Session, user_id: int, *, now: datetime | None = None) -> RewardStatus:
    """Status of the user's own reward; includes the QR image while it can still be redeemed."""
    reward = _find_reward_for_user(db, user_id)
    return _status_of(reward, now or utcnow(), include_qr=True)


def list_rewards(db: Session) -> list[Reward]:
    result = db.execute(select(Reward).order_by(Reward.created_at.desc(), Reward.id.desc()))
    return list(result.scalars().all())


def get_reward(db: Session, reward_id: int) -> Reward:
    reward = db.get(Reward, reward_id)
    if not reward:
        raise NotFoundError(f"Reward with ID {reward_id} not found")
    return reward


def get_reward_statistics(db: Session) -> RewardStatistics:
    total = db.execute(select(func.count(Reward.id))).scalar_one()
    redeemed = db.execute(select(func.count(Reward.id)).where(Reward.is_redeemed.is_(True))).scalar_one()
    return RewardStatistics(total=total, redeemed=redeemed, not_redeemed=total - redeemed)
