"""Database utilities for todo persistence.

Smoke check:
  - Set DATABASE_URL, start the app, POST /todos, restart the server,
    then GET /todos/{id}.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import asyncpg

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.Pool] = None

MIGRATIONS_TABLE = "schema_migrations"


class StoreError(Exception):
    """Any failure talking to the database, collapsed into one category."""


async def init_db(database_url: str, *, min_size: int = 1, max_size: int = 5) -> asyncpg.Pool:
    global _pool

    if _pool is not None:
        return _pool

    try:
        _pool = await asyncpg.create_pool(dsn=database_url, min_size=min_size, max_size=max_size)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise StoreError(f"Failed to connect to database: {exc}") from exc
    logger.info("Database connected (pool min=%s max=%s)", min_size, max_size)
    return _pool


async def close_db() -> None:
    global _pool

    if _pool is None:
        return

    await _pool.close()
    _pool = None
    logger.info("Database pool closed")


def list_migrations(directory: Path) -> List[Path]:
    """Return the SQL scripts in ``directory`` in lexicographic order."""
    if not directory.is_dir():
        raise StoreError(f"Migrations directory not found: {directory}")
    return sorted(path for path in directory.iterdir() if path.suffix == ".sql" and path.is_file())


async def run_migrations(pool: asyncpg.Pool, directory: Path) -> List[str]:
    """Apply pending migrations and return the versions applied by this call."""
    scripts = list_migrations(directory)
    applied: List[str] = []
    try:
        async with pool.acquire() as conn:
            await conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {MIGRATIONS_TABLE} (
                    version TEXT PRIMARY KEY,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                );
                """
            )
            rows = await conn.fetch(f"SELECT version FROM {MIGRATIONS_TABLE}")
            done = {row["version"] for row in rows}
            for script in scripts:
                version = script.name
                if version in done:
                    continue
                sql = script.read_text(encoding="utf-8")
                async with conn.transaction():
                    await conn.execute(sql)
                    await conn.execute(
                        f"INSERT INTO {MIGRATIONS_TABLE} (version) VALUES ($1)",
                        version,
                    )
                logger.info("Applied migration %s", version)
                applied.append(version)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise StoreError(f"Migration failed: {exc}") from exc
    logger.info("Migrations applied (%s new, %s total)", len(applied), len(scripts))
    return applied
