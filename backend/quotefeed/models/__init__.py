"""Database models package."""

from quotefeed.models.user import User
from quotefeed.models.category import Category, Subcategory
from quotefeed.models.quote import Quote
from quotefeed.models.interaction import Interaction

__all__ = ["User", "Category", "Subcategory", "Quote", "Interaction"]
