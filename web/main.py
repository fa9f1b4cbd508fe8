"""Entry point: configure logging, migrate the database, serve the web app."""

import asyncio
import structlog
from config.logging_config import setup_logging
from storage.database import close_pool, run_migrations
from web.app import start_web

log = structlog.get_logger(__name__)


async def start() -> None:
    setup_logging()
    log.info("starting_connectpro")

    await run_migrations()
    try:
        await start_web()
    finally:
        log.info("shutting_down")
        await close_pool()


def main() -> None:
    """Run the web service."""
    asyncio.run(start())


if __name__ == "__main__":
    main()
