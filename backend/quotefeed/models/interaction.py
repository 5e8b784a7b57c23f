"""Interaction model - append-only log of what an actor did with a quote."""

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from quotefeed.db.database import Base

INTERACTION_TYPES = ("view", "like", "share", "remix")


class Interaction(Base):
    __tablename__ = "user_interactions"
    __table_args__ = (
        Index("idx_user_interactions_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"))
    quote_id: Mapped[int] = mapped_column(ForeignKey("quotes.id"))
    interaction_type: Mapped[str] = mapped_column(String(20))

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
