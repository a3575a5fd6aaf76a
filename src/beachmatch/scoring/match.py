"""
Match scorer (beach-level).

For each beach we measure how well its feature set covers the options the user
selected, category by category, and blend the categories with the user's weights:

    category_score = |user options in category ∩ beach options| / |user options in category|
    similarity     = Σ category_score * weight / Σ weight      (positive-weight categories only)
    match_%        = round_half_up(similarity * 100)

The denominator of `category_score` is always the user's option count (precision
against the selection, not a symmetric Jaccard index). Categories the user did
not select anything in, or gave no weight to, are left out of both sums, so a
user who cares about two categories is scored purely on those two.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Mapping

from beachmatch.domain.models import BeachFeatureSet, BeachMatch, CategoryMatch
from beachmatch.scoring.composite import clamp01, normalize_weights, to_match_percentage
from beachmatch.scoring.option_index import OptionCategoryIndex, PartitionedOptions

logger = logging.getLogger(__name__)


def _options_of(features: BeachFeatureSet | AbstractSet[int]) -> tuple[AbstractSet[int], str | None]:
    if isinstance(features, BeachFeatureSet):
        return features.option_ids, features.source
    return features, None


def score_beach(
    beach_id: int,
    beach_options: AbstractSet[int],
    *,
    user_options: PartitionedOptions,
    weights: Mapping[str, float],
    source: str | None = None,
) -> BeachMatch:
    """Score a single beach against an already-partitioned user selection.

    Weights may be raw scores; they are normalized here so each reported
    `CategoryMatch.weight` is the category's share of the user's total weight.
    """
    shares = normalize_weights(dict(weights))
    total_weighted_score = 0.0
    total_possible_weight = 0.0
    categories: list[CategoryMatch] = []

    for category, selected in user_options.by_category.items():
        weight = shares.get(category, 0.0)
        if weight <= 0:
            continue

        matched = [opt for opt in selected if opt in beach_options]
        category_score = len(matched) / len(selected)

        total_weighted_score += category_score * weight
        total_possible_weight += weight
        categories.append(
            CategoryMatch(
                category=category,
                weight=weight,
                user_options=list(selected),
                matched_options=matched,
                score=clamp01(category_score),
            )
        )

    similarity = total_weighted_score / total_possible_weight if total_possible_weight > 0 else 0.0
    return BeachMatch(
        beach_id=beach_id,
        match_percentage=to_match_percentage(similarity),
        source=source,
        categories=categories,
    )


def _trace_beach(
    match: BeachMatch,
    beach_options: AbstractSet[int],
    *,
    index: OptionCategoryIndex,
    position: int,
    total: int,
) -> None:
    logger.debug("Beach %s (%d/%d) features: %s", match.beach_id, position, total, sorted(beach_options))
    for cm in match.categories:
        beach_in_category = sorted(o for o in beach_options if index.category_of(o) == cm.category)
        logger.debug(
            "  %s: user=%s beach=%s matched=%s score=%d/%d=%.3f weight=%.3f weighted=%.4f",
            cm.category,
            cm.user_options,
            beach_in_category,
            cm.matched_options,
            len(cm.matched_options),
            len(cm.user_options),
            cm.score,
            cm.weight,
            cm.score * cm.weight,
        )
    logger.debug("  -> match %d%%", match.match_percentage)


def score_beach_matches(
    selected_option_ids: Iterable[int],
    *,
    index: OptionCategoryIndex,
    weights: Mapping[str, float],
    features: Mapping[int, BeachFeatureSet | AbstractSet[int]],
    detail_beach_count: int = 0,
) -> list[BeachMatch]:
    """Score every beach in `features`; returns one unsorted `BeachMatch` per beach."""
    user_options = index.partition(selected_option_ids)
    if user_options.unknown:
        logger.debug("Ignoring options without a category: %s", user_options.unknown)
    for category, options in user_options.by_category.items():
        logger.debug("User options [%s] = %s", category, options)

    results: list[BeachMatch] = []
    total = len(features)
    for position, (beach_id, beach_features) in enumerate(features.items(), start=1):
        beach_options, source = _options_of(beach_features)
        match = score_beach(
            beach_id,
            beach_options,
            user_options=user_options,
            weights=weights,
            source=source,
        )
        if position <= detail_beach_count and logger.isEnabledFor(logging.DEBUG):
            _trace_beach(match, beach_options, index=index, position=position, total=total)
        results.append(match)

    logger.info("Calculated matches for %d beaches", len(results))
    return results
