# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.habit import Habit
from models.habit_entry import HabitEntry
from models.daily_feedback import DailyFeedback
from models.personality_result import PersonalityTestResult
from models.session import UserSession

__all__ = [
    "User",
    "Habit",
    "HabitEntry",
    "DailyFeedback",
    "PersonalityTestResult",
    "UserSession",
]
