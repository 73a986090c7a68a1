from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from database import Base


class PersonalityTestResult(Base):
    __tablename__ = "personality_test_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    personality = Column(String(20), nullable=False)
    answers = Column(Text, nullable=True)  # JSON object, question id -> chosen option
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
