#!/usr/bin/env python3
"""
Entry point for the Todo API.
Supports serving the API and applying migrations on their own.
"""

import asyncio
import logging
import sys

import db
from config import ConfigError, Settings, get_settings
from logging_utils import configure_logging

logger = logging.getLogger(__name__)


def log_startup(settings: Settings) -> None:
    """Log a single startup line for process managers."""
    logger.info(
        "Starting on %s:%s (MIGRATIONS_DIR=%s)",
        settings.host,
        settings.port,
        settings.migrations_dir,
    )


def run_server(settings: Settings) -> None:
    """Serve the API until the process is terminated."""
    import uvicorn

    log_startup(settings)
    # uvicorn exits non-zero itself when the lifespan fails or the port cannot be bound.
    uvicorn.run(
        "todo_main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


async def run_migrate(settings: Settings) -> None:
    """Apply pending migrations and exit."""
    pool = await db.init_db(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    try:
        applied = await db.run_migrations(pool, settings.migrations_dir)
    finally:
        await db.close_db()
    logger.info("Applied %s migration(s): %s", len(applied), ", ".join(applied) or "-")


def show_help():
    print("""
Todo API - Launch Utility

Usage:
  python run.py [command]

Commands:
  serve      - Apply migrations and serve on 0.0.0.0:8080 (default)
  migrate    - Apply pending migrations and exit
  help       - Show this help message
    """.strip())


def main():
    mode = sys.argv[1].lower() if len(sys.argv) > 1 else "serve"

    if mode in ["help", "-h", "--help"]:
        show_help()
        return

    try:
        settings = get_settings()
    except ConfigError as e:
        configure_logging()
        logger.error("Configuration error: %s", e)
        sys.exit(1)
    configure_logging(settings.log_level)

    try:
        if mode == "serve":
            run_server(settings)
        elif mode == "migrate":
            asyncio.run(run_migrate(settings))
        else:
            print(f"Unknown mode: {mode}")
            show_help()
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutdown requested...")
        sys.exit(0)
    except db.StoreError as e:
        logger.error("Database error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
