"""Programmatic access to the Alembic migrations under ``alembic/``."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from libs.common.logging import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"


def alembic_config(database_url: Optional[str] = None) -> Config:
    """
    Build an Alembic Config pointing at this project's migrations.

    ``database_url`` overrides the URL env.py would read from settings.
    """
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    # Leave the caller's logging setup alone
    config.attributes["skip_logging_config"] = True
    return config


def _run_command(func, *args) -> None:
    # env.py drives its own event loop, so keep it off the caller's thread
    with ThreadPoolExecutor(max_workers=1) as executor:
        executor.submit(func, *args).result()


def migrate_latest(database_url: Optional[str] = None) -> None:
    """Apply every migration up to head."""
    logger.debug("Migrating database to head")
    _run_command(command.upgrade, alembic_config(database_url), "head")


def rollback_all(database_url: Optional[str] = None) -> None:
    """Roll back every applied migration, leaving an empty schema."""
    logger.debug("Rolling database back to base")
    _run_command(command.downgrade, alembic_config(database_url), "base")
