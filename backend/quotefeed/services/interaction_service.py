"""Interaction service - appends interactions to the ledger."""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.models.interaction import Interaction
from quotefeed.models.quote import Quote
from quotefeed.models.user import User, GUEST_ROLE
from quotefeed.services.identity_service import ResolvedActor

logger = structlog.get_logger()


class InteractionService:
    @staticmethod
    async def ensure_actor(db: AsyncSession, actor: ResolvedActor) -> User:
        """Return the actor's user row, creating a guest row on first sight."""
        user = await db.get(User, actor.actor_id)
        if user is None:
            user = User(
                id=actor.actor_id,
                role=actor.role or GUEST_ROLE,
                is_verified=actor.is_verified,
            )
            db.add(user)
            await db.flush()
        return user

    @staticmethod
    async def record(
        db: AsyncSession,
        actor: ResolvedActor,
        quote_id: int,
        interaction_type: str,
    ) -> Interaction | None:
        """Record one interaction. Returns None if the quote is gone."""
        result = await db.execute(
            select(Quote.id).where(Quote.id == quote_id, Quote.deleted_at.is_(None))
        )
        if result.scalar_one_or_none() is None:
            return None

        await InteractionService.ensure_actor(db, actor)

        interaction = Interaction(
            user_id=actor.actor_id,
            quote_id=quote_id,
            interaction_type=interaction_type,
        )
        db.add(interaction)
        await db.flush()

        logger.info(
            "interaction_recorded",
            quote_id=quote_id,
            interaction_type=interaction_type,
            actor_kind=actor.kind,
        )
        return interaction


interaction_service = InteractionService()
