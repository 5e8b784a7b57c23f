"""Seed catalog schemas - the YAML shape of categories, subcategories and quotes."""

from typing import Literal

from pydantic import BaseModel, Field


class CatalogQuote(BaseModel):
    text: str = Field(min_length=1, max_length=1000)
    author: str | None = Field(default=None, max_length=100)
    visibility: Literal["public", "unlisted", "private"] = "public"


class CatalogSubcategory(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    quotes: list[CatalogQuote] = []


class CatalogCategory(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    subcategories: list[CatalogSubcategory] = []


class Catalog(BaseModel):
    categories: list[CatalogCategory] = []


class SeedReport(BaseModel):
    categories: int = 0
    subcategories: int = 0
    quotes: int = 0
