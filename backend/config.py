import os
from dotenv import load_dotenv

load_dotenv()

# --- AI provider keys (comma-separated for rotation) ---
OPENROUTER_API_KEYS = [k.strip() for k in os.getenv("OPENROUTER_API_KEYS", "").split(",") if k.strip()]
GROQ_API_KEYS = [k.strip() for k in os.getenv("GROQ_API_KEYS", "").split(",") if k.strip()]

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_HOURS = 720  # 30 days

# --- Database ---
# Default to local SQLite, but prefer environment variable for PostgreSQL deployments
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/gratitude.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

SEED_ACHIEVEMENTS = os.getenv("SEED_ACHIEVEMENTS", "true").lower() in ("true", "1", "yes")

# --- Journal ---
# Python weekday number (Monday=0) that starts a calendar week. 6 = Sunday.
WEEK_STARTS_ON = int(os.getenv("WEEK_STARTS_ON", "6"))
DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 100

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
