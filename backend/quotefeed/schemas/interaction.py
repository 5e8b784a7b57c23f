"""Interaction-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field

InteractionType = Literal["view", "like", "remix", "share"]


class InteractionCreate(BaseModel):
    """Body of POST /api/interactions (camelCase on the wire)."""
    quote_id: int = Field(alias="quoteId", gt=0)
    interaction_type: InteractionType = Field(alias="interactionType")

    model_config = {"populate_by_name": True}


class InteractionRecorded(BaseModel):
    success: bool = True
