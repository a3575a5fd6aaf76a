"""
Preference weight calculator.

A user ranks preference categories (explicitly, or via personality defaults).
The raw scores are only meaningful relative to each other, so we turn them into
weights: `weight = raw_score / sum(raw_scores)`.

An empty result means "no usable preferences"; the recommender reports that as
a `ConfigurationError`.
"""

from __future__ import annotations

import logging
from typing import Iterable

from beachmatch.domain.models import CategoryScore
from beachmatch.scoring.composite import normalize_weights

logger = logging.getLogger(__name__)


def compute_category_weights(
    scores: Iterable[CategoryScore | tuple[str, float]],
) -> dict[str, float]:
    """Normalize raw category scores into weights summing to 1.0."""
    raw: dict[str, float] = {}
    for item in scores:
        if isinstance(item, CategoryScore):
            name, value = item.category_name, item.raw_score
        else:
            name, value = item
        # Repeated categories add up so the sum-to-one invariant still holds.
        raw[name] = raw.get(name, 0.0) + max(0.0, float(value))

    weights = normalize_weights(raw)
    if not weights:
        logger.debug("No positive category scores (%d rows); weights are empty", len(raw))
        return {}

    total = sum(raw.values())
    for name, weight in weights.items():
        logger.debug("W[%s] = %s/%s = %.3f", name, raw[name], total, weight)
    return weights
