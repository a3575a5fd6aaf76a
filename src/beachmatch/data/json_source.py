"""
JSON dataset adapter.

A local JSON file (default: `data/beaches.sample.json`) mirroring the platform
tables the recommender reads. We validate it into typed Pydantic models so the
rest of the pipeline can assume a consistent shape. The file is re-read on every
call; nothing is cached between requests.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from beachmatch.core.env import resolve_project_path
from beachmatch.domain.models import (
    BeachMetadata,
    BeachOption,
    CategoryScore,
    OptionCategory,
    PreferenceCategory,
)


class _OptionRow(BaseModel):
    id: int
    name: str = ""
    category_id: int


class _ScoreRow(BaseModel):
    user_id: int
    category_id: int
    score: float


class _UserRow(BaseModel):
    id: int
    personality_id: int | None = None


class _DefaultPreferenceRow(BaseModel):
    personality_id: int
    category_id: int
    score: float


class _BeachOptionRow(BaseModel):
    beach_id: int
    option_id: int
    total_votes: int | None = None


class JsonDataset(BaseModel):
    preference_categories: list[PreferenceCategory] = Field(default_factory=list)
    options: list[_OptionRow] = Field(default_factory=list)
    users: list[_UserRow] = Field(default_factory=list)
    user_preferences: list[_ScoreRow] = Field(default_factory=list)
    default_preferences: list[_DefaultPreferenceRow] = Field(default_factory=list)
    review_summary: list[_BeachOptionRow] = Field(default_factory=list)
    default_options: list[_BeachOptionRow] = Field(default_factory=list)
    beaches: list[BeachMetadata] = Field(default_factory=list)


def load_dataset(path: str | Path) -> JsonDataset:
    """Load and validate a JSON dataset file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    return JsonDataset.model_validate(payload)


class JsonBeachDataSource:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> JsonDataset:
        return load_dataset(self.path)

    def _user_rows(self, ds: JsonDataset, user_id: int) -> list[tuple[PreferenceCategory, float]]:
        categories = {c.id: c for c in ds.preference_categories}
        rows = [(r.category_id, r.score) for r in ds.user_preferences if r.user_id == user_id]
        if not rows:
            # Fall back to the defaults of the user's personality.
            user = next((u for u in ds.users if u.id == user_id), None)
            if user is None or user.personality_id is None:
                return []
            rows = [
                (r.category_id, r.score)
                for r in ds.default_preferences
                if r.personality_id == user.personality_id
            ]
        return [(categories[cid], score) for cid, score in rows if cid in categories]

    def get_user_category_scores(self, user_id: int) -> list[CategoryScore]:
        ds = self._load()
        return [
            CategoryScore(category_name=category.name, raw_score=score)
            for category, score in self._user_rows(ds, user_id)
        ]

    def get_preference_categories(self, user_id: int) -> list[PreferenceCategory]:
        ds = self._load()
        return [
            category.model_copy(update={"default_score": score})
            for category, score in self._user_rows(ds, user_id)
        ]

    def get_option_category_map(self) -> list[OptionCategory]:
        ds = self._load()
        names = {c.id: c.name for c in ds.preference_categories}
        return [
            OptionCategory(option_id=o.id, category_name=names[o.category_id])
            for o in ds.options
            if o.category_id in names
        ]

    def get_derived_beach_options(self) -> list[BeachOption]:
        return [BeachOption(**r.model_dump()) for r in self._load().review_summary]

    def get_default_beach_options(self) -> list[BeachOption]:
        return [BeachOption(**r.model_dump()) for r in self._load().default_options]

    def get_beach_metadata(self, beach_ids: list[int]) -> list[BeachMetadata]:
        wanted = set(beach_ids)
        return [b for b in self._load().beaches if b.id in wanted]
