"""
Shared scoring utilities.

Small, reusable helpers used across the scorers:
- `clamp01`: keep values within 0..1 for stable output
- `normalize_weights`: convert non-negative weights into a 1.0-summing distribution
- `to_match_percentage`: turn a 0..1 similarity into an integer percentage
"""

from __future__ import annotations

import math


def clamp01(x: float) -> float:
    """Clamp a number into the [0.0, 1.0] range."""
    return max(0.0, min(1.0, float(x)))


def normalize_weights(weights: dict[str, float]) -> dict[str, float]:
    """Normalize a dict of weights so they sum to 1.0.

    Negative weights count as zero. If nothing is positive there is no
    meaningful distribution, so an empty dict is returned.
    """
    cleaned = {k: max(0.0, float(v)) for k, v in weights.items()}
    total = sum(cleaned.values())
    if total <= 0:
        return {}
    return {k: v / total for k, v in cleaned.items()}


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero for positive input."""
    return int(math.floor(x + 0.5))


def to_match_percentage(similarity: float) -> int:
    """Convert a similarity in 0..1 into an integer percentage in 0..100."""
    return max(0, min(100, round_half_up(clamp01(similarity) * 100)))
