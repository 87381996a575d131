"""Database initialization for headit."""

from pathlib import Path

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine

from headit.db.models import Base


def init_db(db_path: Path) -> Engine:
    """Initialize the SQLite database with all tables and return its engine."""
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    Base.metadata.create_all(engine)
    _migrate(engine)
    return engine


def _migrate(engine: Engine) -> None:
    """Add missing columns to existing tables (lightweight migration)."""
    insp = inspect(engine)
    if "storage_items" in insp.get_table_names():
        columns = {col["name"] for col in insp.get_columns("storage_items")}
        if "updated_at" not in columns:
            with engine.begin() as conn:
                conn.execute(text("ALTER TABLE storage_items ADD COLUMN updated_at DATETIME"))
