"""Database initialization utilities."""

import logging

from sqlalchemy import Engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from garage_manager.db import models  # noqa: F401 - ensure model metadata is registered
from garage_manager.db.session import Base

logger = logging.getLogger(__name__)

# Indexes the reports rely on. Databases created before they were declared
# on the models do not get them from create_all, which skips existing tables.
REPORT_INDEXES = (
    ("maintenance", "ix_maintenance_garage_date", ["garage_id", "scheduled_date"]),
    ("car_garages", "ix_car_garages_garage_id", ["garage_id"]),
)


def _table_exists(engine: Engine, table_name: str) -> bool:
    inspector = inspect(engine)
    return table_name in inspector.get_table_names()


def _ensure_index(engine: Engine, table_name: str, index_name: str, columns: list[str]) -> None:
    if not _table_exists(engine, table_name):
        return

    columns_sql = ", ".join(columns)
    with engine.begin() as connection:
        connection.execute(
            text(
                f"CREATE INDEX IF NOT EXISTS {index_name} "
                f"ON {table_name} ({columns_sql})"
            )
        )


def init_db(engine: Engine) -> None:
    """Create missing tables and indexes, leaving existing data untouched."""
    try:
        Base.metadata.create_all(bind=engine)

        for table_name, index_name, columns in REPORT_INDEXES:
            _ensure_index(engine, table_name=table_name, index_name=index_name, columns=columns)
    except SQLAlchemyError:
        logger.exception("Database initialization failed.")
        raise
