#!/usr/bin/env python3
"""Load the starter quote catalog into the configured database.

Usage:
    python seed.py                      # seeds quotefeed/data/catalog.yaml
    python seed.py path/to/catalog.yaml # seeds a custom catalog

Safe to run repeatedly: only missing rows are inserted.
"""

import asyncio
import sys
from pathlib import Path

import structlog

from quotefeed.config import settings
from quotefeed.db.database import Base, async_session_factory, engine
from quotefeed.logging_config import setup_logging
from quotefeed.services.seed_service import DEFAULT_CATALOG, load_catalog, seed_service

logger = structlog.get_logger()


async def run(catalog_path: Path) -> None:
    import quotefeed.models  # noqa: F401

    catalog = load_catalog(catalog_path)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        async with async_session_factory() as session:
            report = await seed_service.seed_catalog(session, catalog)
            await session.commit()
    finally:
        await engine.dispose()

    print(
        f"Seeded {report.categories} categories, "
        f"{report.subcategories} subcategories, {report.quotes} quotes."
    )


def main() -> None:
    setup_logging(json_mode=settings.LOG_JSON, level=settings.LOG_LEVEL)
    catalog_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CATALOG
    try:
        asyncio.run(run(catalog_path))
    except FileNotFoundError as exc:
        logger.error("catalog_missing", error=str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
