"""
habit_service.py — Habits & daily entries
Creates and retires habits, toggles the (habit, day) entry, and assembles the
progress summary from the progress engine.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from config import DEFAULT_HABIT_COLOR
from errors import NotFoundError, ValidationError
from models.habit import Habit
from models.habit_entry import HabitEntry
from services import progress_engine

logger = logging.getLogger(__name__)


class HabitService:
    @staticmethod
    def create(db: Session, user_id: int, data: dict) -> Habit:
        title = (data.get("title") or "").strip()
        if not title:
            raise ValidationError("Title is required")
        try:
            h = Habit(
                user_id=user_id,
                title=title,
                description=(data.get("description") or "").strip() or None,
                color=data.get("color") or DEFAULT_HABIT_COLOR,
            )
            db.add(h)
            db.commit()
            db.refresh(h)
            logger.info("Created habit %s for user %s", h.id, user_id)
            return h
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def get_owned(db: Session, user_id: int, habit_id: int) -> Habit:
        h = db.query(Habit).filter_by(id=habit_id, user_id=user_id).first()
        if not h:
            raise NotFoundError("Habit not found")
        return h

    @staticmethod
    def list_active(db: Session, user_id: int, day: date) -> list[dict]:
        """Active habits, oldest first, each carrying its entries for `day`."""
        habits = db.query(Habit).filter_by(user_id=user_id, is_active=True)\
                   .order_by(Habit.created_at.asc(), Habit.id.asc()).all()
        if not habits:
            return []

        entries = db.query(HabitEntry).filter(
            HabitEntry.habit_id.in_([h.id for h in habits]),
            HabitEntry.date == day
        ).all()
        by_habit = {}
        for e in entries:
            by_habit.setdefault(e.habit_id, []).append(e)

        return [h.to_dict(entries=by_habit.get(h.id, [])) for h in habits]

    @staticmethod
    def toggle(db: Session, user_id: int, habit_id: int, day: date) -> HabitEntry:
        """First action of the day creates a completed entry, later ones flip it."""
        HabitService.get_owned(db, user_id, habit_id)
        try:
            entry = db.query(HabitEntry).filter_by(habit_id=habit_id, date=day).first()
            if entry:
                entry.completed = not entry.completed
            else:
                entry = HabitEntry(habit_id=habit_id, date=day, completed=True)
                db.add(entry)
            db.commit()
            db.refresh(entry)
            return entry
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def retire(db: Session, user_id: int, habit_id: int) -> Habit:
        """Soft-delete: the habit and its history stay, it just stops being listed."""
        h = HabitService.get_owned(db, user_id, habit_id)
        try:
            h.is_active = False
            db.commit()
            db.refresh(h)
            logger.info("Retired habit %s for user %s", habit_id, user_id)
            return h
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def progress(db: Session, user_id: int, reference: date, window_days: int = 7) -> dict:
        """Dashboard bundle: today's completion, per-habit streaks and window rates."""
        habits = db.query(Habit).filter_by(user_id=user_id, is_active=True)\
                   .order_by(Habit.created_at.asc(), Habit.id.asc()).all()
        start = progress_engine.window_start(reference, window_days)

        history = {h.id: [] for h in habits}
        if habits:
            rows = db.query(HabitEntry).filter(
                HabitEntry.habit_id.in_(list(history)),
                HabitEntry.date <= reference
            ).order_by(HabitEntry.date.desc()).all()
            for e in rows:
                history[e.habit_id].append(e)

        snapshots = [{"id": h.id, "entries": history[h.id]} for h in habits]
        daily = progress_engine.compute_daily_completion(snapshots, reference)

        per_habit = []
        window_completed = 0
        for h in habits:
            in_window = [e for e in history[h.id] if e.date >= start]
            window_completed += sum(1 for e in in_window if e.completed)
            per_habit.append({
                "habit_id": h.id,
                "title": h.title,
                "color": h.color,
                "completed_today": any(e.completed and e.date == reference for e in history[h.id]),
                "streak": progress_engine.compute_streak(history[h.id], reference),
                "best_streak": progress_engine.compute_best_streak(history[h.id]),
                "window_rate": progress_engine.compute_window_completion(in_window, window_days),
            })

        return {
            "date": reference.isoformat(),
            "total_habits": daily["total_habits"],
            "completed_habits": daily["completed_habits"],
            "completion_rate": progress_engine.compute_completion_rate(
                daily["completed_habits"], daily["total_habits"]
            ),
            "window_days": window_days,
            "window_start": start.isoformat(),
            "window_rate": progress_engine.compute_completion_rate(
                window_completed, len(habits) * window_days
            ),
            "habits": per_habit,
        }

    @staticmethod
    def get_history(db: Session, user_id: int, habit_id: int, reference: date, days: int = 30) -> list:
        HabitService.get_owned(db, user_id, habit_id)
        start_date = reference - timedelta(days=days - 1)
        logs = db.query(HabitEntry).filter(
            HabitEntry.habit_id == habit_id,
            HabitEntry.date >= start_date,
            HabitEntry.date <= reference
        ).order_by(HabitEntry.date.asc()).all()
        return [e.to_dict() for e in logs]
