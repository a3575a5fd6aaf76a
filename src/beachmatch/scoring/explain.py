"""
Small explainability formatting helpers.

Used by the CLI to print compact summaries of recommendation results.
"""

from __future__ import annotations

from beachmatch.domain.models import CategoryMatch


def one_line_summary(match_percentage: int, categories: list[CategoryMatch]) -> str:
    """Render a compact single-line summary for a beach's score breakdown."""
    parts = [f"match={match_percentage}%"]
    for cm in categories:
        parts.append(
            f"{cm.category}={len(cm.matched_options)}/{len(cm.user_options)} (w={cm.weight:.2f})"
        )
    return " | ".join(parts)
