"""Ledger service - reads an actor's recent interactions for affinity scoring."""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quotefeed.core.visibility import visible_quote_clause
from quotefeed.models.category import Category, Subcategory
from quotefeed.models.interaction import Interaction
from quotefeed.models.quote import Quote


@dataclass(frozen=True)
class InteractionRecord:
    interaction_type: str
    category_id: int


class LedgerService:
    @staticmethod
    async def recent_interactions(
        db: AsyncSession, actor_id: str, limit: int
    ) -> list[InteractionRecord]:
        """Up to `limit` interactions by this actor, newest first.

        Interactions whose quote is no longer feed-visible, or whose taxonomy
        chain is broken, are dropped by the joins.
        """
        if limit <= 0:
            return []

        result = await db.execute(
            select(Interaction.interaction_type, Category.id)
            .join(Quote, Interaction.quote_id == Quote.id)
            .join(Subcategory, Quote.subcategory_id == Subcategory.id)
            .join(Category, Subcategory.category_id == Category.id)
            .where(Interaction.user_id == actor_id, visible_quote_clause())
            .order_by(Interaction.created_at.desc(), Interaction.id.desc())
            .limit(limit)
        )
        return [
            InteractionRecord(interaction_type=interaction_type, category_id=category_id)
            for interaction_type, category_id in result.all()
        ]


ledger_service = LedgerService()
