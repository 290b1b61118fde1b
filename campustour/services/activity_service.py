"""Activity completion lookups used as the reward precondition."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campustour.core.errors import NotFoundError
from campustour.models.activity import Activity, UserActivity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionStatus:
    all_completed: bool
    completed_count: int
    total_count: int


def check_completion(db: Session, user_id: int) -> CompletionStatus:
    """Count the reward-gating activities the user has finished against the full gating set."""
    total = db.execute(
        select(func.count(Activity.id)).where(Activity.counts_toward_reward.is_(True))
    ).scalar_one()
    if total == 0:
        raise NotFoundError("No activities found in the system")

    completed = db.execute(
        select(func.count(func.distinct(UserActivity.activity_id)))
        .join(Activity, Activity.id == UserActivity.activity_id)
        .where(
            UserActivity.user_id == user_id,
            Activity.counts_toward_reward.is_(True),
        )
    ).scalar_one()

    logger.debug("completion_checked user_id=%s completed=%s total=%s", user_id, completed, total)
    return CompletionStatus(
        all_completed=completed == total,
        completed_count=completed,
        total_count=total,
    )


def latest_activity_id(db: Session) -> int:
    """Highest reward-gating activity id; rewards are stamped with it."""
    activity_id = db.execute(
        select(func.max(Activity.id)).where(Activity.counts_toward_reward.is_(True))
    ).scalar_one_or_none()
    if activity_id is None:
        raise NotFoundError("No activities found in the system")
    return activity_id


def get_or_create_activity(
    db: Session,
    name: str,
    description: str | None = None,
    *,
    counts_toward_reward: bool = True,
) -> Activity:
    activity = db.execute(select(Activity).where(Activity.name == name).limit(1)).scalar_one_or_none()
    if activity:
        return activity
    activity = Activity(
        name=name,
        description=description,
        order=0,
        counts_toward_reward=counts_toward_reward,
    )
    db.add(activity)
    db.flush()
    return activity


def record_activity_points(db: Session, user_id: int, activity_id: int, points: int) -> UserActivity:
    """Mark the activity completed for the user, adding points to any existing row.

    Flushes but does not commit; callers own the transaction.
    """
    row = db.execute(
        select(UserActivity).where(
            UserActivity.user_id == user_id,
            UserActivity.activity_id == activity_id,
        )
    ).scalar_one_or_none()
    if row:
        row.points += points
        db.flush()
        return row

    row = UserActivity(user_id=user_id, activity_id=activity_id, points=points)
    db.add(row)
    db.flush()
    return row
