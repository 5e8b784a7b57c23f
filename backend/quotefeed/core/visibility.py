"""Visibility guard - the filter every feed-facing read must apply.

A quote is feed-visible when it is not soft-deleted and its visibility is
public. Rows written before the visibility column existed carry NULL and
are treated as public.
"""

from sqlalchemy import ColumnElement, and_, func

from quotefeed.models.quote import Quote, VISIBILITY_PUBLIC


def visible_quote_clause() -> ColumnElement[bool]:
    """SQL predicate for feed-visible quotes."""
    return and_(
        Quote.deleted_at.is_(None),
        func.coalesce(Quote.visibility, VISIBILITY_PUBLIC) == VISIBILITY_PUBLIC,
    )


def is_visible(quote) -> bool:
    """In-memory twin of visible_quote_clause() for rows and response models."""
    if quote.deleted_at is not None:
        return False
    return (quote.visibility or VISIBILITY_PUBLIC) == VISIBILITY_PUBLIC
