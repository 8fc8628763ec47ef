"""Pydantic models decoded from the marketplace search API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """One product row of a search response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str
    price: float = Field(ge=0)
    thumbnail_url: str | None = Field(default=None, alias="thumbnail")


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[Item]


__all__ = ["Item", "SearchResponse"]
