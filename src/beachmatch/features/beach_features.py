"""
Beach feature resolver (beach-level).

Each beach is described by a set of option IDs. Two streams can supply them:
- derived: option votes aggregated from user reviews (the review summary)
- default: a curated baseline per beach

Precedence is all-or-nothing per beach: a beach that appears in the derived
stream uses ONLY its derived options; every other beach uses ONLY its default
options. The streams are never merged for one beach, because a union would
silently change scores for reviewed beaches.
"""

from __future__ import annotations

import logging
from typing import Iterable

from beachmatch.domain.models import BeachFeatureSet, BeachOption, FeatureSource

logger = logging.getLogger(__name__)


def _as_pair(row: BeachOption | tuple[int, int]) -> tuple[int, int]:
    if isinstance(row, BeachOption):
        return row.beach_id, row.option_id
    beach_id, option_id = row
    return int(beach_id), int(option_id)


def _passes_vote_threshold(row: BeachOption | tuple[int, int], min_votes: int) -> bool:
    # Rows without a vote count (plain pairs, or sources that do not track votes) always pass.
    if min_votes <= 1 or not isinstance(row, BeachOption) or row.total_votes is None:
        return True
    return row.total_votes >= min_votes


def _group(rows: Iterable[tuple[int, int]]) -> dict[int, set[int]]:
    grouped: dict[int, set[int]] = {}
    for beach_id, option_id in rows:
        grouped.setdefault(beach_id, set()).add(option_id)
    return grouped


def resolve_beach_features(
    derived: Iterable[BeachOption | tuple[int, int]],
    default: Iterable[BeachOption | tuple[int, int]],
    *,
    min_derived_votes: int = 1,
) -> dict[int, BeachFeatureSet]:
    """Resolve one feature set per beach, preferring derived data over defaults."""
    derived_rows = [_as_pair(r) for r in derived if _passes_vote_threshold(r, min_derived_votes)]
    derived_by_beach = _group(derived_rows)

    # Defaults only count for beaches the derived stream never mentions.
    default_rows = [p for p in (_as_pair(r) for r in default) if p[0] not in derived_by_beach]
    default_by_beach = _group(default_rows)

    streams: list[tuple[FeatureSource, dict[int, set[int]]]] = [
        ("derived", derived_by_beach),
        ("default", default_by_beach),
    ]
    resolved: dict[int, BeachFeatureSet] = {}
    for source, grouped in streams:
        for beach_id, option_ids in grouped.items():
            resolved[beach_id] = BeachFeatureSet(
                beach_id=beach_id, option_ids=frozenset(option_ids), source=source
            )

    if derived_by_beach:
        logger.info(
            "Resolved features for %d beaches (%d derived, %d default)",
            len(resolved),
            len(derived_by_beach),
            len(default_by_beach),
        )
    else:
        logger.info("No derived beach data; using defaults for all %d beaches", len(resolved))

    # Stable beach order for downstream iteration and logging.
    return dict(sorted(resolved.items()))


def feature_map(features: dict[int, BeachFeatureSet]) -> dict[int, set[int]]:
    """Plain `beach_id -> set(option_id)` view of resolved features."""
    return {beach_id: set(fs.option_ids) for beach_id, fs in features.items()}


def source_counts(features: dict[int, BeachFeatureSet]) -> dict[str, int]:
    counts = {"derived": 0, "default": 0}
    for fs in features.values():
        counts[fs.source] += 1
    return counts
