"""Feed service - composes the home timeline and the plain public listings."""

import random
from dataclasses import dataclass
from enum import Enum

import structlog
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.config import FeedConfig
from quotefeed.core.sampling import shuffle
from quotefeed.models.category import Category, Subcategory
from quotefeed.models.quote import Quote
from quotefeed.schemas.quote import QuoteOut
from quotefeed.services.affinity_service import CategoryAffinity, affinity_service
from quotefeed.services.candidate_service import (
    CandidatePools,
    candidate_service,
    quote_listing_query,
    to_quote_out,
)
from quotefeed.services.ledger_service import ledger_service

logger = structlog.get_logger()


class FeedPath(str, Enum):
    COLD_START = "cold_start"
    PERSONALIZED = "personalized"


@dataclass
class Timeline:
    path: FeedPath
    quotes: list[QuoteOut]
    affinity: CategoryAffinity


class FeedService:
    @staticmethod
    def compose(pools: CandidatePools, rng: random.Random) -> tuple[FeedPath, list[QuoteOut]]:
        """Merge candidate pools into the final feed order."""
        if pools.is_cold_start:
            # Already capped and randomized by the sampler
            return FeedPath.COLD_START, list(pools.cold_start)

        # Reshuffle so affinity-matched items are not clustered at the front
        combined = shuffle(pools.affinity_matched + pools.exploratory, rng)
        return FeedPath.PERSONALIZED, combined

    @staticmethod
    async def compose_timeline(
        db: AsyncSession,
        actor_id: str | None,
        config: FeedConfig,
        rng: random.Random,
    ) -> Timeline:
        """Build one actor's home timeline.

        Store failures propagate; there is no retry and no partial feed.
        """
        records = []
        if actor_id:
            records = await ledger_service.recent_interactions(
                db, actor_id, config.history_window
            )
        affinity = affinity_service.score(records, config)

        pools = await candidate_service.select_candidates(db, affinity.ranked, config, rng)
        path, quotes = FeedService.compose(pools, rng)

        logger.info(
            "timeline_composed",
            path=path.value,
            size=len(quotes),
            history=len(records),
            categories=len(affinity.ranked),
        )
        return Timeline(path=path, quotes=quotes, affinity=affinity)

    @staticmethod
    async def discover(
        db: AsyncSession, config: FeedConfig, rng: random.Random
    ) -> list[QuoteOut]:
        """Random visible quotes, no scoring."""
        return await candidate_service.sample_pool(
            db, config.discovery_cap, rng, config.candidate_scan_limit
        )

    @staticmethod
    async def latest(db: AsyncSession, config: FeedConfig) -> list[QuoteOut]:
        """Most recent visible quotes."""
        if config.latest_cap <= 0:
            return []
        result = await db.execute(
            quote_listing_query()
            .order_by(Quote.created_at.desc(), Quote.id.desc())
            .limit(config.latest_cap)
        )
        return [to_quote_out(*row) for row in result.all()]

    @staticmethod
    async def search(db: AsyncSession, term: str, config: FeedConfig) -> list[QuoteOut]:
        """Visible quotes whose text, author or taxonomy names contain `term`."""
        term = term.strip()
        if not term or config.search_cap <= 0:
            return []

        pattern = f"%{term}%"
        result = await db.execute(
            quote_listing_query()
            .where(
                or_(
                    Quote.text.ilike(pattern),
                    Quote.author.ilike(pattern),
                    Subcategory.name.ilike(pattern),
                    Category.name.ilike(pattern),
                )
            )
            .order_by(Quote.created_at.desc(), Quote.id.desc())
            .limit(config.search_cap)
        )
        return [to_quote_out(*row) for row in result.all()]


feed_service = FeedService()
