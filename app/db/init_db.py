"""
Database initialization utilities.
"""
import logging
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import make_url

from app.db.models import Base
from app.db.database import engine

logger = logging.getLogger(__name__)


def ensure_sqlite_directory():
    """Create the parent directory of a file-based SQLite database."""
    url = make_url(str(engine.url))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def create_tables():
    """Create all tables defined in models."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("All tables created successfully")


def drop_all_tables():
    """Drop all tables (useful for testing)."""
    logger.info("Dropping all database tables...")
    Base.metadata.drop_all(bind=engine)
    logger.info("All tables dropped successfully")


def reset_database():
    """Drop and recreate all tables."""
    logger.info("Resetting database...")
    drop_all_tables()
    create_tables()
    logger.info("Database reset complete")


def init_database():
    """Complete database initialization."""
    logger.info("Initializing database...")
    ensure_sqlite_directory()
    create_tables()
    logger.info("Database initialization complete")


def check_connection(session):
    """Run a trivial query against the session's database."""
    result = session.execute(text("SELECT 1"))
    return result.scalar() == 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
