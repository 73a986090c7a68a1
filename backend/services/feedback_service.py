"""
feedback_service.py — Daily reflection
One feedback record per user per day, written with upsert semantics.
"""

import logging
from datetime import date, datetime, timezone, timedelta

from sqlalchemy.orm import Session

from config import MOOD_MIN, MOOD_MAX
from errors import ValidationError
from models.daily_feedback import DailyFeedback

logger = logging.getLogger(__name__)


class FeedbackService:
    @staticmethod
    def upsert(db: Session, user_id: int, day: date, content: str | None, mood: int | None = None) -> DailyFeedback:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Content is required")
        if mood is not None and not MOOD_MIN <= mood <= MOOD_MAX:
            raise ValidationError(f"Mood must be between {MOOD_MIN} and {MOOD_MAX}")

        try:
            entry = db.query(DailyFeedback).filter_by(user_id=user_id, date=day).first()
            if entry:
                entry.content = content
                entry.mood = mood
                entry.updated_at = datetime.now(timezone.utc)
            else:
                entry = DailyFeedback(user_id=user_id, date=day, content=content, mood=mood)
                db.add(entry)
            db.commit()
            db.refresh(entry)
            return entry
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def get_for_day(db: Session, user_id: int, day: date) -> DailyFeedback | None:
        return db.query(DailyFeedback).filter_by(user_id=user_id, date=day).first()

    @staticmethod
    def history(db: Session, user_id: int, reference: date, days: int = 14) -> list[DailyFeedback]:
        start_date = reference - timedelta(days=days - 1)
        return db.query(DailyFeedback).filter(
            DailyFeedback.user_id == user_id,
            DailyFeedback.date >= start_date,
            DailyFeedback.date <= reference
        ).order_by(DailyFeedback.date.desc()).all()
