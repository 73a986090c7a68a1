import os
from dotenv import load_dotenv

load_dotenv()

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "720"))  # 30 days

# bcrypt work factor; tests drop this to keep hashing fast
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# --- Database ---
# Default to local SQLite, but prefer environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/unlate.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- HTTP ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# --- App ---
APP_NAME = os.getenv("APP_NAME", "Unlate")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_HABIT_COLOR = os.getenv("DEFAULT_HABIT_COLOR", "#3B82F6")

MOOD_MIN = 1
MOOD_MAX = 5

PERSONALITY_TYPES = ("anxious", "optimistic", "procrastinator", "external")
