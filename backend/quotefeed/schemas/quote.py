"""Quote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel


class QuoteOut(BaseModel):
    """A feed item: quote columns joined with its taxonomy display names."""
    id: int
    text: str
    author: str | None
    subcategory_id: int
    background_color: str | None = None
    text_color: str | None = None
    font_family: str | None = None
    visibility: str | None = None
    user_id: str | None = None
    created_at: datetime
    category_name: str
    subcategory_name: str

    model_config = {"from_attributes": True}
