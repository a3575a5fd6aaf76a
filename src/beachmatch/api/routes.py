"""
API routes.

Endpoints:
- POST `/api/recommendations/beaches`: main recommender entrypoint.
- GET  `/api/preferences/categories`: a user's ranked (or personality default) categories.
- GET  `/api/settings`: public settings (database URL redacted).
- GET  `/api/health`: liveness probe.

Session handling lives in the surrounding gateway; the user ID arrives in the payload.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, HTTPException, Query

from beachmatch.config.settings import get_settings
from beachmatch.core.errors import RecommendationError
from beachmatch.data.factory import build_data_source
from beachmatch.data.source import BeachDataSource, read_dataset
from beachmatch.domain.models import PreferenceCategory, RecommendationRequest, RecommendationResult
from beachmatch.recommender.recommend import build_recommendation

router = APIRouter()


@lru_cache
def _data_source() -> BeachDataSource:
    return build_data_source(get_settings())


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}


@router.post("/api/recommendations/beaches", response_model=RecommendationResult)
def post_beach_recommendations(request: RecommendationRequest) -> RecommendationResult:
    """Score every beach against the user's selected options and return the top-N."""
    try:
        return build_recommendation(
            request.user_id,
            request.option_ids,
            request.top_n,
            source=_data_source(),
            settings=get_settings(),
        )
    except RecommendationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict()) from e


@router.get("/api/preferences/categories", response_model=list[PreferenceCategory])
def get_preference_categories(user_id: int = Query(..., ge=1)) -> list[PreferenceCategory]:
    """Return the categories the recommender will weight for this user."""
    source = _data_source()
    try:
        categories = read_dataset("preference_categories", lambda: source.get_preference_categories(user_id))
    except RecommendationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict()) from e
    if not categories:
        raise HTTPException(
            status_code=404,
            detail={"error": "PREFERENCES_NOT_FOUND", "message": "No preference categories found", "details": {}},
        )
    return categories


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return safe-to-expose settings (connection strings removed)."""
    data = get_settings().model_dump(mode="json")
    data.get("data", {}).pop("database_url", None)
    return {
        "app": {"name": data["app"]["name"], "timezone": data["app"]["timezone"]},
        "data": {"backend": data["data"]["backend"]},
        "scoring": data.get("scoring", {}),
        "features": data.get("features", {}),
    }
