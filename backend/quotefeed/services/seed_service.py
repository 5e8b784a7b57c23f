"""Seed service - loads the starter catalog from YAML into the database.

Seeding is idempotent: categories and subcategories are matched by name and
quotes by (text, subcategory), so re-running only inserts what is missing.
"""

from pathlib import Path

import structlog
import yaml
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.models.category import Category, Subcategory
from quotefeed.models.quote import Quote
from quotefeed.schemas.catalog import Catalog, SeedReport

logger = structlog.get_logger()

DEFAULT_CATALOG = Path(__file__).parent.parent / "data" / "catalog.yaml"


def load_catalog(path: Path = DEFAULT_CATALOG) -> Catalog:
    """Parse and validate a catalog YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return Catalog.model_validate(raw)


class SeedService:
    @staticmethod
    async def _get_or_create_category(
        db: AsyncSession, name: str, description: str | None
    ) -> tuple[Category, bool]:
        result = await db.execute(select(Category).where(Category.name == name))
        category = result.scalar_one_or_none()
        if category is not None:
            return category, False
        category = Category(name=name, description=description)
        db.add(category)
        await db.flush()
        return category, True

    @staticmethod
    async def _get_or_create_subcategory(
        db: AsyncSession, category_id: int, name: str
    ) -> tuple[Subcategory, bool]:
        result = await db.execute(
            select(Subcategory).where(
                Subcategory.category_id == category_id, Subcategory.name == name
            )
        )
        subcategory = result.scalar_one_or_none()
        if subcategory is not None:
            return subcategory, False
        subcategory = Subcategory(category_id=category_id, name=name)
        db.add(subcategory)
        await db.flush()
        return subcategory, True

    @staticmethod
    async def seed_catalog(db: AsyncSession, catalog: Catalog) -> SeedReport:
        """Insert whatever part of the catalog is not in the database yet."""
        report = SeedReport()

        for cat in catalog.categories:
            category, created = await SeedService._get_or_create_category(
                db, cat.name, cat.description
            )
            report.categories += int(created)

            for sub in cat.subcategories:
                subcategory, created = await SeedService._get_or_create_subcategory(
                    db, category.id, sub.name
                )
                report.subcategories += int(created)

                result = await db.execute(
                    select(Quote.text).where(Quote.subcategory_id == subcategory.id)
                )
                existing = set(result.scalars().all())
                for q in sub.quotes:
                    if q.text in existing:
                        continue
                    db.add(
                        Quote(
                            text=q.text,
                            author=q.author,
                            subcategory_id=subcategory.id,
                            visibility=q.visibility,
                        )
                    )
                    existing.add(q.text)
                    report.quotes += 1

        await db.flush()
        logger.info("catalog_seeded", **report.model_dump())
        return report


seed_service = SeedService()
