"""
SQL adapter over the platform database.

Reads the tables maintained by the surrounding services (reviews, onboarding,
beach admin) with SQLAlchemy Core. Every call checks out its own pooled
connection, so the four recommendation reads can run concurrently.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.engine import Engine

from beachmatch.domain.models import (
    BeachMetadata,
    BeachOption,
    CategoryScore,
    OptionCategory,
    PreferenceCategory,
)

logger = logging.getLogger(__name__)

USER_PREFERENCES_SQL = text(
    """
    SELECT pc.id, pc.name, pc.information, up.score AS default_score
    FROM user_preferences up
    INNER JOIN preference_categories pc ON pc.id = up.preference_categories_id
    WHERE up.users_id = :user_id
    ORDER BY pc.id
    """
)

USER_PERSONALITY_SQL = text("SELECT user_personality_id FROM users WHERE id = :user_id")

DEFAULT_PREFERENCES_SQL = text(
    """
    SELECT pc.id, pc.name, pc.information, dp.default_score
    FROM default_preferences dp
    INNER JOIN preference_categories pc ON dp.preference_categories_id = pc.id
    WHERE dp.user_personalites_id = :personality_id
    ORDER BY pc.id
    """
)

OPTION_CATEGORIES_SQL = text(
    """
    SELECT o.id, pc.name
    FROM options o
    JOIN preference_categories pc ON o.preference_categories_id = pc.id
    ORDER BY o.id
    """
)

DERIVED_OPTIONS_SQL = text(
    "SELECT beaches_id, options_id, total_votes FROM review_summary ORDER BY beaches_id, options_id"
)

DEFAULT_OPTIONS_SQL = text(
    "SELECT beaches_id, options_id FROM beaches_default_options ORDER BY beaches_id, options_id"
)

BEACH_METADATA_SQL = text(
    """
    SELECT b.id, b.beach_name, b.descriptions, b.cp_name, b.official_website,
           b.rating_average, b.estimate_price, b.latitude, b.longitude,
           k.name AS kecamatan, kk.name AS kota, p.name AS province, c.path
    FROM beaches b
    INNER JOIN kecamatans k ON k.id = b.kecamatans_id
    INNER JOIN kabupatens_kotas kk ON kk.id = k.kabupatens_id
    INNER JOIN provinsis p ON p.id = kk.provinsis_id
    LEFT JOIN contents c ON c.beaches_id = b.id
    WHERE b.id IN :beach_ids
    ORDER BY b.id, c.id
    """
).bindparams(bindparam("beach_ids", expanding=True))


def build_engine(database_url: str, *, pool_recycle_seconds: int = 300) -> Engine:
    return create_engine(database_url, pool_pre_ping=True, pool_recycle=pool_recycle_seconds)


def _category(row: Any) -> PreferenceCategory:
    return PreferenceCategory(
        id=row.id,
        name=row.name,
        information=row.information,
        default_score=float(row.default_score) if row.default_score is not None else None,
    )


def _num(value: Any) -> float | None:
    # DECIMAL columns come back as Decimal.
    return float(value) if value is not None else None


class SqlBeachDataSource:
    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str, *, pool_recycle_seconds: int = 300) -> "SqlBeachDataSource":
        return cls(build_engine(database_url, pool_recycle_seconds=pool_recycle_seconds))

    def get_preference_categories(self, user_id: int) -> list[PreferenceCategory]:
        """The user's ranked categories, or their personality's defaults when unranked."""
        with self.engine.connect() as conn:
            rows = conn.execute(USER_PREFERENCES_SQL, {"user_id": user_id}).all()
            if rows:
                return [_category(r) for r in rows]

            personality_id = conn.execute(USER_PERSONALITY_SQL, {"user_id": user_id}).scalar()
            if personality_id is None:
                logger.info("User %s has no preferences and no personality", user_id)
                return []
            rows = conn.execute(DEFAULT_PREFERENCES_SQL, {"personality_id": personality_id}).all()
            return [_category(r) for r in rows]

    def get_user_category_scores(self, user_id: int) -> list[CategoryScore]:
        return [
            CategoryScore(category_name=c.name, raw_score=c.default_score or 0.0)
            for c in self.get_preference_categories(user_id)
        ]

    def get_option_category_map(self) -> list[OptionCategory]:
        with self.engine.connect() as conn:
            rows = conn.execute(OPTION_CATEGORIES_SQL).all()
        return [OptionCategory(option_id=r.id, category_name=r.name) for r in rows]

    def get_derived_beach_options(self) -> list[BeachOption]:
        with self.engine.connect() as conn:
            rows = conn.execute(DERIVED_OPTIONS_SQL).all()
        return [
            BeachOption(beach_id=r.beaches_id, option_id=r.options_id, total_votes=r.total_votes)
            for r in rows
        ]

    def get_default_beach_options(self) -> list[BeachOption]:
        with self.engine.connect() as conn:
            rows = conn.execute(DEFAULT_OPTIONS_SQL).all()
        return [BeachOption(beach_id=r.beaches_id, option_id=r.options_id) for r in rows]

    def get_beach_metadata(self, beach_ids: list[int]) -> list[BeachMetadata]:
        if not beach_ids:
            return []
        with self.engine.connect() as conn:
            rows = conn.execute(BEACH_METADATA_SQL, {"beach_ids": list(beach_ids)}).all()
        return [
            BeachMetadata(
                id=r.id,
                name=r.beach_name,
                description=r.descriptions,
                contact_name=r.cp_name,
                official_website=r.official_website,
                rating_average=_num(r.rating_average),
                estimate_price=_num(r.estimate_price),
                latitude=_num(r.latitude),
                longitude=_num(r.longitude),
                district=r.kecamatan,
                city=r.kota,
                province=r.province,
                image_path=r.path,
            )
            for r in rows
        ]
