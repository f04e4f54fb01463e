"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from fan_archive.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(migrations_dir: Path = MIGRATIONS_DIR) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(str(migrations_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(migrations_dir))
    # Alembic runs synchronously; use the psycopg form of the URL.
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Upgrading database schema to head")
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()
