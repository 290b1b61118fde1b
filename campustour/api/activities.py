"""Activity completion API."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campustour.core.deps import get_current_user
from campustour.db.session import get_db
from campustour.models.user import User
from campustour.schemas.activity import CompletionStatusOut
from campustour.schemas.common import Envelope
from campustour.services.activity_service import check_completion

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("/check-completion", response_model=Envelope[CompletionStatusOut])
def get_completion(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    completion = check_completion(db, current_user.id)
    return Envelope(data=CompletionStatusOut.model_validate(completion))
