"""Standalone schema bootstrap for the players table.

Verifies the store is reachable and creates the table when missing. Use it
for stage/prod deployments where the app does not create tables on startup.

Usage:
    python -m player_stats.cli.init_db

Exit codes:
    0 - Success
    1 - Failure (check logs for details)
"""

import asyncio
import logging
import sys

from player_stats.config import settings
from player_stats.logging_config import setup_logging
from player_stats.utils.db_async import Database

logger = logging.getLogger("player_stats.cli.init_db")


async def main() -> int:
    database = Database.from_settings(settings)
    database.connect()
    logger.info(f"DB target: {database.description}")

    try:
        await database.ping()
        await database.create_schema()
        logger.info("players table ready")
        return 0
    except Exception as e:
        logger.error(f"Schema bootstrap failed: {e}", exc_info=True)
        return 1
    finally:
        await database.dispose()


if __name__ == "__main__":
    setup_logging(level=settings.log_level, access_log=False)
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
