import logging
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from errors import UnlateError
from services.habit_service import HabitService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/habits", tags=["Habits"])


class HabitCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


def today() -> date:
    return datetime.now(timezone.utc).date()


@router.get("")
async def list_habits(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Active habits with today's entries."""
    try:
        return HabitService.list_active(db, user_id, today())
    except Exception:
        logger.exception("Error fetching habits")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", status_code=201)
async def create_habit(habit_data: HabitCreate, user_id: int = Depends(get_current_user),
                       db: Session = Depends(get_db)):
    try:
        h = HabitService.create(db, user_id, habit_data.model_dump(exclude_unset=True))
        return h.to_dict()
    except UnlateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error creating habit")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/progress")
async def habit_progress(window_days: int = Query(7, ge=1, le=365),
                         user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Today's completion, streaks and completion rate over the last `window_days` days."""
    try:
        return HabitService.progress(db, user_id, today(), window_days)
    except Exception:
        logger.exception("Error computing progress")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/{habit_id}/toggle")
async def toggle_habit(habit_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        entry = HabitService.toggle(db, user_id, habit_id, today())
        return entry.to_dict()
    except UnlateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error toggling habit")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{habit_id}/history")
async def habit_history(habit_id: int, days: int = Query(30, ge=1, le=365),
                        user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return HabitService.get_history(db, user_id, habit_id, today(), days)
    except UnlateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error fetching habit history")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{habit_id}")
async def retire_habit(habit_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        h = HabitService.retire(db, user_id, habit_id)
        return {"status": "success", "data": h.to_dict()}
    except UnlateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error retiring habit")
        raise HTTPException(status_code=500, detail="Internal server error")
