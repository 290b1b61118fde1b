"""Rewards API.

``/redeem`` deliberately takes no session: the staff scanner presents the QR
token and the token alone authorizes redemption.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from campustour.core.config import settings
from campustour.core.deps import get_current_user, get_optional_user, require_staff
from campustour.core.errors import ActivitiesIncompleteError, ValidationError
from campustour.db.session import get_db
from campustour.models.reward import Reward
from campustour.models.user import User
from campustour.schemas.common import Envelope
from campustour.schemas.reward import RedeemRequest, RewardOut, RewardStatisticsOut, RewardStatusOut
from campustour.services.activity_service import check_completion
from campustour.services.qr_service import reward_qr_code_url
from campustour.services.reward_service import (
    generate_reward,
    get_redeemable_reward,
    get_reward,
    get_reward_statistics,
    get_status_by_token,
    get_status_by_user,
    list_rewards,
    redeem_reward,
)

router = APIRouter(prefix="/api/rewards", tags=["rewards"])
logger = logging.getLogger(__name__)


def _reward_out(reward: Reward, qr_code_url: str | None = None) -> RewardOut:
    return RewardOut(
        reward_id=reward.id,
        user_id=reward.user_id,
        activity_id=reward.activity_id,
        qr_token=reward.qr_token,
        is_redeemed=reward.is_redeemed,
        created_at=reward.created_at,
        redeemed_at=reward.redeemed_at,
        expires_at=reward.expires_at,
        qr_code_url=qr_code_url,
    )


def require_activities_completed(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> User:
    """Gate reward generation on every activity being completed.

    A player already holding a redeemable reward passes straight through so a
    repeat request always gets the same QR code back.
    """
    if get_redeemable_reward(db, current_user.id) is not None:
        return current_user
    completion = check_completion(db, current_user.id)
    if not completion.all_completed:
        logger.warning(
            "reward_generate_blocked user_id=%s completed=%s total=%s",
            current_user.id,
            completion.completed_count,
            completion.total_count,
        )
        raise ActivitiesIncompleteError(
            "Complete all activities before claiming a reward",
            {"completed": completion.completed_count, "total": completion.total_count},
        )
    return current_user


@router.post("/generate", response_model=Envelope[RewardOut], status_code=status.HTTP_201_CREATED)
def generate(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_activities_completed),
):
    reward, created = generate_reward(db, current_user.id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return Envelope(
        message="Reward generated successfully" if created else "Reward already generated",
        data=_reward_out(reward, qr_code_url=reward_qr_code_url(reward.qr_token)),
    )


@router.post("/redeem", response_model=Envelope[RewardOut])
def redeem(
    data: RedeemRequest | None = None,
    db: Session = Depends(get_db),
):
    reward = redeem_reward(db, data.qr_token if data else None)
    return Envelope(message="Reward redeemed successfully", data=_reward_out(reward))


@router.get("/status", response_model=Envelope[RewardStatusOut])
def reward_status(
    qr_token: str | None = Query(default=None, alias="qrToken"),
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    """Polled by the owner's client while their QR code is on screen."""
    if qr_token is not None:
        reward_state = get_status_by_token(db, qr_token)
    elif current_user is not None:
        reward_state = get_status_by_user(db, current_user.id)
    else:
        raise ValidationError("QR token is required and must be a string")
    out = RewardStatusOut.model_validate(reward_state)
    out.poll_interval_seconds = settings.reward_status_poll_seconds
    return Envelope(data=out)


@router.get("/stats", response_model=Envelope[RewardStatisticsOut])
def reward_statistics(
    db: Session = Depends(get_db),
    _staff: User = Depends(require_staff),
):
    stats = get_reward_statistics(db)
    return Envelope(message="Reward statistics retrieved successfully", data=RewardStatisticsOut.model_validate(stats))


@router.get("", response_model=Envelope[list[RewardOut]])
def all_rewards(
    db: Session = Depends(get_db),
    _staff: User = Depends(require_staff),
):
    return Envelope(data=[_reward_out(r) for r in list_rewards(db)])


@router.get("/{reward_id}", response_model=Envelope[RewardOut])
def reward_by_id(
    reward_id: int,
    db: Session = Depends(get_db),
    _staff: User = Depends(require_staff),
):
    return Envelope(data=_reward_out(get_reward(db, reward_id)))
