import logging
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth import get_current_user
from config import MOOD_MIN, MOOD_MAX
from database import get_db
from errors import UnlateError
from services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/feedback", tags=["Feedback"])


class FeedbackSave(BaseModel):
    content: Optional[str] = None
    mood: Optional[int] = Field(None, ge=MOOD_MIN, le=MOOD_MAX)


def today() -> date:
    return datetime.now(timezone.utc).date()


@router.post("")
async def save_feedback(body: FeedbackSave, user_id: int = Depends(get_current_user),
                        db: Session = Depends(get_db)):
    """Create or overwrite today's reflection."""
    try:
        entry = FeedbackService.upsert(db, user_id, today(), body.content, body.mood)
        return entry.to_dict()
    except UnlateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error saving feedback")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/today")
async def get_today_feedback(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    entry = FeedbackService.get_for_day(db, user_id, today())
    return entry.to_dict() if entry else None


@router.get("/history")
async def feedback_history(days: int = Query(14, ge=1, le=365),
                           user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return [e.to_dict() for e in FeedbackService.history(db, user_id, today(), days)]
