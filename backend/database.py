import os
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import sessionmaker, declarative_base
from config import DATABASE_URL, LOG_LEVEL, SEED_ACHIEVEMENTS
import logging

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Only use connect_args if we are using SQLite
engine_args = {}
if DATABASE_URL.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False, "timeout": 30}
else:
    # Production settings for PostgreSQL
    engine_args.update({
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
    })

try:
    engine = create_engine(
        DATABASE_URL,
        **engine_args,
        echo=False,
    )
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
except Exception as e:
    logger.error(f"Failed to create engine: {e}")
    raise e

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a database session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def insert_ignore(db, model, **values) -> bool:
    """INSERT ... ON CONFLICT DO NOTHING for `model`.

    Runs inside the caller's transaction and does not commit. Returns True
    when this statement inserted the row, False when a row with the same
    key already existed.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values).on_conflict_do_nothing()
    else:
        raise NotImplementedError(f"insert_ignore is not supported on {dialect}")
    result = db.execute(stmt)
    return result.rowcount == 1


def _sqlite_path(url: str) -> str | None:
    prefix = "sqlite:///"
    if not url.startswith(prefix) or url.endswith(":memory:"):
        return None
    return url[len(prefix):]


def init_db():
    """Create the SQLite directory if needed, create all tables, seed reference data."""
    db_path = _sqlite_path(DATABASE_URL)
    if db_path and os.path.dirname(db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)

    # Import all models so they register with Base.metadata
    from models.user import User
    from models.journal import JournalEntry
    from models.user_streak import UserStreak
    from models.achievement import Achievement
    from models.user_achievement import UserAchievement
    from models.daily_prompt import DailyPrompt

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized successfully.")

    if SEED_ACHIEVEMENTS:
        from seed_data import seed_defaults
        db = SessionLocal()
        try:
            seed_defaults(db)
        finally:
            db.close()
