from __future__ import annotations

# Orchestrator for the beach recommendation pipeline:
# - validate the request
# - load the four read-only inputs (possibly concurrently)
# - weights + option index -> feature resolution -> scoring
# - rank, truncate to top-N, then fetch metadata for the survivors only

import logging
import time
from datetime import datetime
from typing import Any, Sequence
from zoneinfo import ZoneInfo

from beachmatch.config.settings import Settings, get_settings
from beachmatch.core.errors import ConfigurationError, InvalidInputError
from beachmatch.data.source import BeachDataSource, load_inputs, read_dataset
from beachmatch.domain.models import EnrichedBeachMatch, RecommendationResult
from beachmatch.features.beach_features import resolve_beach_features, source_counts
from beachmatch.recommender.assemble import assemble_results, rank_matches
from beachmatch.scoring.match import score_beach_matches
from beachmatch.scoring.option_index import build_option_category_index
from beachmatch.scoring.weights import compute_category_weights

logger = logging.getLogger(__name__)


def _validate_option_ids(selected_option_ids: Any) -> list[int]:
    if not isinstance(selected_option_ids, (list, tuple)) or not selected_option_ids:
        raise InvalidInputError("No user options provided")
    malformed = [
        v for v in selected_option_ids if isinstance(v, bool) or not isinstance(v, int) or v < 1
    ]
    if malformed:
        raise InvalidInputError(
            "Option IDs must be positive integers",
            details={"malformed": [repr(v) for v in malformed]},
        )
    return list(selected_option_ids)


def _effective_top_n(top_n: Any, settings: Settings) -> int:
    if top_n is None:
        return int(settings.scoring.top_n_default)
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
        raise InvalidInputError("top_n must be a positive integer", details={"top_n": repr(top_n)})
    if top_n > settings.scoring.top_n_max:
        raise InvalidInputError(
            f"top_n must not exceed {settings.scoring.top_n_max}",
            details={"top_n": top_n, "top_n_max": settings.scoring.top_n_max},
        )
    return int(top_n)


def build_recommendation(
    user_id: int,
    selected_option_ids: Sequence[int],
    top_n: int | None = None,
    *,
    source: BeachDataSource,
    settings: Settings | None = None,
) -> RecommendationResult:
    """Run the full pipeline and return results plus explainable metadata."""
    settings = settings or get_settings()
    t0 = time.monotonic()
    timings_ms: dict[str, int] = {}

    # ---- Step 1: validate the request before touching any data ----
    option_ids = _validate_option_ids(selected_option_ids)
    effective_top_n = _effective_top_n(top_n, settings)
    logger.info("Recommendation run: user=%s options=%s top_n=%d", user_id, option_ids, effective_top_n)

    # ---- Step 2: load all four inputs; a failure in any of them aborts the run ----
    inputs = load_inputs(source, user_id, parallel=settings.data.parallel_reads)
    timings_ms["load_inputs"] = int((time.monotonic() - t0) * 1000)

    # ---- Step 3: weights + option index (independent of each other) ----
    weights = compute_category_weights(inputs.category_scores)
    if not weights:
        raise ConfigurationError("User preferences not found", details={"user_id": user_id})
    index = build_option_category_index(inputs.option_categories)

    # ---- Step 4: resolve one feature set per beach (derived beats default) ----
    features = resolve_beach_features(
        inputs.derived_options,
        inputs.default_options,
        min_derived_votes=settings.features.min_derived_votes,
    )

    # ---- Step 5: score every beach ----
    t_score = time.monotonic()
    matches = score_beach_matches(
        option_ids,
        index=index,
        weights=weights,
        features=features,
        detail_beach_count=settings.tracing.detail_beach_count,
    )
    timings_ms["score"] = int((time.monotonic() - t_score) * 1000)

    # ---- Step 6: rank, truncate, then enrich only the top-N ----
    ranked = rank_matches(matches, top_n=effective_top_n)
    if logger.isEnabledFor(logging.DEBUG):
        for position, m in enumerate(rank_matches(matches, top_n=settings.tracing.top_matches_logged), start=1):
            logger.debug("%d. Beach %s: %d%%", position, m.beach_id, m.match_percentage)

    beach_ids = [m.beach_id for m in ranked]
    metadata = read_dataset("beach_metadata", lambda: source.get_beach_metadata(beach_ids)) if beach_ids else []
    results = assemble_results(ranked, metadata, contents_base_url=settings.media.contents_base_url)
    timings_ms["total"] = int((time.monotonic() - t0) * 1000)

    partitioned = index.partition(option_ids)
    meta = {
        "weights": dict(sorted(weights.items())),
        "ignored_option_ids": partitioned.unknown,
        "options_by_category": partitioned.by_category,
        "beaches_scored": len(matches),
        "feature_sources": source_counts(features),
        "timings_ms": timings_ms,
    }
    if not results:
        logger.info("No beach recommendations found for user %s", user_id)

    return RecommendationResult(
        generated_at=datetime.now(ZoneInfo(settings.app.timezone)),
        user_id=user_id,
        selected_option_ids=option_ids,
        top_n=effective_top_n,
        results=results,
        meta=meta,
    )


def recommend_beaches(
    user_id: int,
    selected_option_ids: Sequence[int],
    top_n: int | None = None,
    *,
    source: BeachDataSource,
    settings: Settings | None = None,
) -> list[EnrichedBeachMatch]:
    """Return the top-N beaches for a user's selected options, best first."""
    result = build_recommendation(user_id, selected_option_ids, top_n, source=source, settings=settings)
    return result.results
