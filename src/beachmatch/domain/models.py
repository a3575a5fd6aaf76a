"""
Domain models (Pydantic).

These types are the stable "contract" between layers:
- data-access rows (`CategoryScore`, `OptionCategory`, `BeachOption`, `BeachMetadata`)
- intermediate scoring state (`BeachFeatureSet`, `BeachMatch`, `CategoryMatch`)
- presentation output (`EnrichedBeachMatch`, `RecommendationResult`)

Keeping them in one place gives validation at the data-access seam and a
consistent JSON shape across CLI/API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

FeatureSource = Literal["derived", "default"]


class PreferenceCategory(BaseModel):
    """A semantic axis of beach appeal (scenery, activities, facilities, ...)."""

    id: int
    name: str
    information: str | None = None
    default_score: float | None = None


class CategoryScore(BaseModel):
    """A user's raw importance score for one category."""

    model_config = ConfigDict(frozen=True)

    category_name: str
    raw_score: float


class OptionCategory(BaseModel):
    """Reference row: a selectable option and the category it belongs to."""

    model_config = ConfigDict(frozen=True)

    option_id: int
    category_name: str


class BeachOption(BaseModel):
    """One beach/option association from either the derived or the default stream."""

    model_config = ConfigDict(frozen=True)

    beach_id: int
    option_id: int
    total_votes: int | None = None


class BeachFeatureSet(BaseModel):
    """The options characterizing one beach, taken from exactly one source."""

    model_config = ConfigDict(frozen=True)

    beach_id: int
    option_ids: frozenset[int]
    source: FeatureSource


class CategoryMatch(BaseModel):
    """Explainable per-category contribution to a beach's score."""

    category: str
    weight: float = Field(..., ge=0, le=1)
    user_options: list[int]
    matched_options: list[int]
    score: float = Field(..., ge=0, le=1)


class BeachMatch(BaseModel):
    beach_id: int
    match_percentage: int = Field(..., ge=0, le=100)
    source: FeatureSource | None = None
    categories: list[CategoryMatch] = Field(default_factory=list)


class BeachMetadata(BaseModel):
    """Descriptive beach record supplied by the data-access layer."""

    id: int
    name: str | None = None
    description: str | None = None
    contact_name: str | None = None
    official_website: str | None = None
    rating_average: float | None = None
    estimate_price: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    district: str | None = None
    city: str | None = None
    province: str | None = None
    image_path: str | None = None


class EnrichedBeachMatch(BaseModel):
    """One ranked output item: match score + presentation metadata."""

    beach_id: int
    match_percentage: int = Field(..., ge=0, le=100)
    source: FeatureSource | None = None
    name: str = ""
    description: str = ""
    contact_name: str = "-"
    official_website: str = "-"
    rating_average: float = 0
    estimate_price: float = 0
    latitude: float = 0
    longitude: float = 0
    district: str = ""
    city: str = ""
    province: str = ""
    image_url: str | None = None
    categories: list[CategoryMatch] = Field(default_factory=list)


class RecommendationRequest(BaseModel):
    """HTTP request payload for a recommendation run."""

    user_id: int
    option_ids: list[Any] = Field(default_factory=list)
    top_n: int | None = None


class RecommendationResult(BaseModel):
    """Top-N recommendations plus the query that produced them."""

    generated_at: datetime
    user_id: int
    selected_option_ids: list[int]
    top_n: int
    results: list[EnrichedBeachMatch]
    meta: dict[str, Any] = Field(default_factory=dict)
