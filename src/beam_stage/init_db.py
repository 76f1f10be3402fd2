"""Create the database schema without running migrations.

Useful for local SQLite databases; production schemas are managed by Alembic.
"""

import logging

from beam_stage.core.settings import settings
from beam_stage.db.session import create_tables

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    init_db()
    logger.info("Database initialized at %s", settings.database_url)
