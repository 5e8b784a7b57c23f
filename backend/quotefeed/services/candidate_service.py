"""Candidate service - builds the quote pools the timeline is composed from.

Each pool is drawn in two steps: a deterministic, filtered read of visible
quote ids (category membership passed as a bound parameter), then a uniform
in-memory sample of those ids, whose rows are loaded in sampled order.
"""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.config import FeedConfig
from quotefeed.core.sampling import sample
from quotefeed.core.visibility import is_visible, visible_quote_clause
from quotefeed.models.category import Category, Subcategory
from quotefeed.models.quote import Quote
from quotefeed.schemas.quote import QuoteOut


@dataclass
class CandidatePools:
    affinity_matched: list[QuoteOut] = field(default_factory=list)
    exploratory: list[QuoteOut] = field(default_factory=list)
    # Set only when there was no affinity signal at all
    cold_start: list[QuoteOut] | None = None

    @property
    def is_cold_start(self) -> bool:
        return self.cold_start is not None


def quote_listing_query() -> Select:
    """Visible quotes joined with their subcategory and category names."""
    return (
        select(Quote, Subcategory.name, Category.name)
        .join(Subcategory, Quote.subcategory_id == Subcategory.id)
        .join(Category, Subcategory.category_id == Category.id)
        .where(visible_quote_clause())
    )


def to_quote_out(quote: Quote, subcategory_name: str, category_name: str) -> QuoteOut:
    """Convert a listing row to the response schema."""
    return QuoteOut(
        id=quote.id,
        text=quote.text,
        author=quote.author,
        subcategory_id=quote.subcategory_id,
        background_color=quote.background_color,
        text_color=quote.text_color,
        font_family=quote.font_family,
        visibility=quote.visibility,
        user_id=quote.user_id,
        created_at=quote.created_at,
        category_name=category_name,
        subcategory_name=subcategory_name,
    )


class CandidateService:
    @staticmethod
    async def visible_ids(
        db: AsyncSession,
        scan_limit: int,
        include_categories: Sequence[int] | None = None,
        exclude_categories: Sequence[int] | None = None,
    ) -> list[int]:
        """Ids of visible quotes, newest first, optionally split by category."""
        stmt = (
            select(Quote.id)
            .join(Subcategory, Quote.subcategory_id == Subcategory.id)
            .join(Category, Subcategory.category_id == Category.id)
            .where(visible_quote_clause())
        )
        if include_categories is not None:
            stmt = stmt.where(Category.id.in_(list(include_categories)))
        if exclude_categories is not None:
            stmt = stmt.where(Category.id.not_in(list(exclude_categories)))
        stmt = stmt.order_by(Quote.created_at.desc(), Quote.id.desc()).limit(scan_limit)

        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def load_quotes(db: AsyncSession, quote_ids: Sequence[int]) -> list[QuoteOut]:
        """Load visible quotes by id, keeping the order of `quote_ids`.

        Every returned row also passes is_visible() in memory.
        """
        if not quote_ids:
            return []
        result = await db.execute(quote_listing_query().where(Quote.id.in_(list(quote_ids))))
        by_id = {
            quote.id: to_quote_out(quote, subcategory_name, category_name)
            for quote, subcategory_name, category_name in result.all()
            if is_visible(quote)
        }
        return [by_id[quote_id] for quote_id in quote_ids if quote_id in by_id]

    @staticmethod
    async def sample_pool(
        db: AsyncSession,
        cap: int,
        rng: random.Random,
        scan_limit: int,
        include_categories: Sequence[int] | None = None,
        exclude_categories: Sequence[int] | None = None,
    ) -> list[QuoteOut]:
        """Up to `cap` visible quotes drawn uniformly from the filtered set."""
        if cap <= 0:
            return []
        ids = await CandidateService.visible_ids(
            db,
            scan_limit,
            include_categories=include_categories,
            exclude_categories=exclude_categories,
        )
        return await CandidateService.load_quotes(db, sample(ids, cap, rng))

    @staticmethod
    async def select_candidates(
        db: AsyncSession,
        ranked_categories: Sequence[int],
        config: FeedConfig,
        rng: random.Random,
    ) -> CandidatePools:
        """Affinity-matched and exploratory pools, or the cold-start pool.

        Ranking only decides pool membership; order inside a pool is random.
        The two personalized pools are disjoint since they split on category.
        """
        if not ranked_categories:
            cold_start = await CandidateService.sample_pool(
                db, config.cold_start_cap, rng, config.candidate_scan_limit
            )
            return CandidatePools(cold_start=cold_start)

        affinity_matched = await CandidateService.sample_pool(
            db,
            config.affinity_pool_cap,
            rng,
            config.candidate_scan_limit,
            include_categories=ranked_categories,
        )
        exploratory = await CandidateService.sample_pool(
            db,
            config.exploratory_pool_cap,
            rng,
            config.candidate_scan_limit,
            exclude_categories=ranked_categories,
        )
        return CandidatePools(affinity_matched=affinity_matched, exploratory=exploratory)


candidate_service = CandidateService()
