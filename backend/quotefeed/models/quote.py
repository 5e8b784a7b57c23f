"""Quote model - the content item shown in feeds."""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from quotefeed.db.database import Base

VISIBILITY_PUBLIC = "public"
VISIBILITY_UNLISTED = "unlisted"
VISIBILITY_PRIVATE = "private"
VISIBILITIES = (VISIBILITY_PUBLIC, VISIBILITY_UNLISTED, VISIBILITY_PRIVATE)


class Quote(Base):
    __tablename__ = "quotes"
    __table_args__ = (
        Index("idx_quotes_visibility", "visibility"),
        Index("idx_quotes_deleted_at", "deleted_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    text: Mapped[str] = mapped_column(Text)
    author: Mapped[str | None] = mapped_column(String(100), nullable=True)
    subcategory_id: Mapped[int] = mapped_column(ForeignKey("subcategories.id"))

    # Presentation
    background_color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    text_color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    font_family: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # NULL predates the column and counts as public
    visibility: Mapped[str | None] = mapped_column(
        String(20), nullable=True, default=VISIBILITY_PUBLIC
    )
    user_id: Mapped[str | None] = mapped_column(ForeignKey("users.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )
    # Soft deletion: rows are never removed, only stamped
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
