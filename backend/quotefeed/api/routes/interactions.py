"""Interaction endpoints - record views, likes, shares and remixes."""

import redis.asyncio as aioredis
import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.api.deps import get_actor, rate_limit_key
from quotefeed.config import settings
from quotefeed.core.rate_limit import RateLimiter
from quotefeed.db.database import get_db
from quotefeed.db.redis import get_rate_limit_store
from quotefeed.schemas.interaction import InteractionCreate, InteractionRecorded
from quotefeed.services.identity_service import ResolvedActor
from quotefeed.services.interaction_service import interaction_service

logger = structlog.get_logger()

router = APIRouter()

RATE_LIMIT_SCOPE = "interactions"


@router.post("", response_model=InteractionRecorded)
async def record_interaction(
    data: InteractionCreate,
    request: Request,
    actor: ResolvedActor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_rate_limit_store),
):
    """Append one interaction for the resolved actor (guest or registered)."""
    limiter = RateLimiter(
        redis, settings.INTERACTION_RATE_LIMIT, settings.INTERACTION_RATE_WINDOW
    )
    client_key = rate_limit_key(request, actor)
    if not await limiter.hit(RATE_LIMIT_SCOPE, client_key):
        retry_after = await limiter.retry_after(RATE_LIMIT_SCOPE, client_key)
        logger.warning("interaction_rate_limited", actor_kind=actor.kind)
        raise HTTPException(
            status_code=429,
            detail="Too many requests",
            headers={"Retry-After": str(retry_after)},
        )

    interaction = await interaction_service.record(
        db, actor, data.quote_id, data.interaction_type
    )
    if interaction is None:
        raise HTTPException(status_code=404, detail="Quote not found")

    return InteractionRecorded(success=True)
