# unit_registry/database.py
"""
Engine, sessions and table creation for the three collections.
PostgreSQL in deployment; a sqlite:// URL works for local runs and tests.
create_tables() imports every model so one call creates all tables.
"""

import uuid

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from unit_registry.config import settings

if settings.DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=False,
    )
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from unit_registry.models.vehicle import Vehicle               # noqa
    from unit_registry.models.asset import Asset                   # noqa
    from unit_registry.models.calendar_event import CalendarEvent  # noqa

    Base.metadata.create_all(bind=engine)


def generate_id() -> str:
    """Opaque string id for a new record."""
    return uuid.uuid4().hex
