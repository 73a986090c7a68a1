"""
personality_service.py — Onboarding quiz results
Stores the lateness personality a user landed on and remembers it on the profile.
"""

import json
import logging

from sqlalchemy.orm import Session

from config import PERSONALITY_TYPES
from errors import NotFoundError, ValidationError
from models.personality_result import PersonalityTestResult
from models.user import User

logger = logging.getLogger(__name__)


class PersonalityService:
    @staticmethod
    def save_result(db: Session, user_id: int, personality: str | None, answers: dict | None = None) -> PersonalityTestResult:
        if personality not in PERSONALITY_TYPES:
            raise ValidationError(f"Unknown personality type: {personality}")

        user = db.query(User).filter_by(id=user_id).first()
        if not user:
            raise NotFoundError("User not found")

        try:
            user.personality_type = personality
            result = PersonalityTestResult(
                user_id=user_id,
                personality=personality,
                answers=json.dumps(answers or {}),
            )
            db.add(result)
            db.commit()
            db.refresh(result)
            logger.info("User %s saved personality %s", user_id, personality)
            return result
        except Exception:
            db.rollback()
            raise
