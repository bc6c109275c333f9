"""Startup for the Events Service: settings, logging and a database check.

Run ``python -m services.events_service.app.main`` to validate the
environment and confirm the configured database answers.
"""
import asyncio
import sys

from libs.common.config import ConfigValidationError, Settings, get_settings
from libs.common.logging import configure_logging, get_logger

logger = get_logger(__name__)


def startup() -> Settings:
    """
    Validate configuration and configure logging.

    Raises:
        ConfigValidationError: the environment is missing or has malformed variables.
    """
    settings = get_settings()
    configure_logging()
    logger.info(
        "Events service configured for %s (database %s on %s)",
        settings.NODE_ENV,
        settings.database_name,
        settings.HOST,
    )
    return settings


async def check_database() -> bool:
    """Run ``SELECT 1`` against the configured database."""
    from sqlalchemy import text

    from libs.db.config import engine
    from libs.db.session import session_scope

    try:
        async with session_scope() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1
    finally:
        await engine.dispose()


def main() -> int:
    try:
        startup()
    except ConfigValidationError as exc:
        print(exc, file=sys.stderr)
        return 1

    if not asyncio.run(check_database()):
        logger.error("Database check failed")
        return 1

    logger.info("Database reachable")
    return 0


if __name__ == "__main__":
    sys.exit(main())
