"""
Result assembler.

Ranks scored beaches and joins the top ones with descriptive metadata.
Ordering is fully deterministic: match percentage descending, then beach ID
ascending, so equal scores never depend on dict/set iteration order.
"""

from __future__ import annotations

from typing import Iterable

from beachmatch.domain.models import BeachMatch, BeachMetadata, EnrichedBeachMatch


def rank_matches(matches: Iterable[BeachMatch], *, top_n: int | None = None) -> list[BeachMatch]:
    """Sort matches best-first and optionally truncate to `top_n`."""
    ranked = sorted(matches, key=lambda m: (-m.match_percentage, m.beach_id))
    if top_n is not None:
        ranked = ranked[: max(0, int(top_n))]
    return ranked


def _image_url(image_path: str | None, base_url: str) -> str | None:
    if not image_path:
        return None
    return base_url.rstrip("/") + "/" + image_path.lstrip("/")


def enrich_match(
    match: BeachMatch, metadata: BeachMetadata | None, *, contents_base_url: str = ""
) -> EnrichedBeachMatch:
    """Combine a match with its metadata, defaulting every missing field."""
    md = metadata or BeachMetadata(id=match.beach_id)
    return EnrichedBeachMatch(
        beach_id=match.beach_id,
        match_percentage=match.match_percentage,
        source=match.source,
        name=md.name or "",
        description=md.description or "",
        contact_name=md.contact_name or "-",
        official_website=md.official_website or "-",
        rating_average=md.rating_average or 0,
        estimate_price=md.estimate_price or 0,
        latitude=md.latitude or 0,
        longitude=md.longitude or 0,
        district=md.district or "",
        city=md.city or "",
        province=md.province or "",
        image_url=_image_url(md.image_path, contents_base_url),
        categories=list(match.categories),
    )


def assemble_results(
    ranked: list[BeachMatch],
    metadata: Iterable[BeachMetadata],
    *,
    contents_base_url: str = "",
) -> list[EnrichedBeachMatch]:
    """Enrich already-ranked (and truncated) matches, preserving their order."""
    by_id: dict[int, BeachMetadata] = {}
    for record in metadata:
        # Several rows per beach (one per image): keep the first.
        by_id.setdefault(record.id, record)
    return [
        enrich_match(m, by_id.get(m.beach_id), contents_base_url=contents_base_url) for m in ranked
    ]
