"""Quote feed endpoints - personalized timeline and public listings."""

import random

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.api.deps import get_actor, get_feed_config, get_rng
from quotefeed.config import FeedConfig
from quotefeed.db.database import get_db
from quotefeed.schemas.quote import QuoteOut
from quotefeed.services.feed_service import feed_service
from quotefeed.services.identity_service import ResolvedActor

router = APIRouter()


@router.get("/timeline", response_model=list[QuoteOut])
async def get_timeline(
    actor: ResolvedActor = Depends(get_actor),
    config: FeedConfig = Depends(get_feed_config),
    rng: random.Random = Depends(get_rng),
    db: AsyncSession = Depends(get_db),
):
    """Home timeline personalized for the resolved actor."""
    timeline = await feed_service.compose_timeline(db, actor.actor_id, config, rng)
    return timeline.quotes


@router.get("/discovery", response_model=list[QuoteOut])
async def get_discovery(
    config: FeedConfig = Depends(get_feed_config),
    rng: random.Random = Depends(get_rng),
    db: AsyncSession = Depends(get_db),
):
    """Random public quotes."""
    return await feed_service.discover(db, config, rng)


@router.get("/latest", response_model=list[QuoteOut])
async def get_latest(
    config: FeedConfig = Depends(get_feed_config),
    db: AsyncSession = Depends(get_db),
):
    """Newest public quotes."""
    return await feed_service.latest(db, config)


@router.get("/search", response_model=list[QuoteOut])
async def search_quotes(
    q: str = "",
    config: FeedConfig = Depends(get_feed_config),
    db: AsyncSession = Depends(get_db),
):
    """Public quotes matching `q` in text, author, subcategory or category."""
    return await feed_service.search(db, q, config)
