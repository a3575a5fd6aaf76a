"""
BeachMatch CLI entrypoint.

Intended for local demos and for checking scores against the platform database
without going through the HTTP layer. All recommendation logic is delegated to
`beachmatch.recommender.recommend`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from beachmatch.config.settings import get_settings
from beachmatch.core.errors import RecommendationError
from beachmatch.core.logging import configure_logging
from beachmatch.data.factory import build_data_source
from beachmatch.data.source import read_dataset
from beachmatch.features.beach_features import resolve_beach_features
from beachmatch.recommender.recommend import build_recommendation
from beachmatch.scoring.explain import one_line_summary


def _cmd_recommend(args: argparse.Namespace) -> int:
    """Handle the `recommend` subcommand."""
    settings = get_settings()
    source = build_data_source(settings)

    result = build_recommendation(
        int(args.user_id),
        list(args.option),
        int(args.top_n) if args.top_n is not None else None,
        source=source,
        settings=settings,
    )

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Generated at: {result.generated_at.isoformat()}")
    ignored = result.meta.get("ignored_option_ids") or []
    if ignored:
        print(f"Ignored options (no category): {ignored}")
    if not result.results:
        print("No beach recommendations found.")
        return 0
    print("Top results:")
    for i, item in enumerate(result.results, start=1):
        where = ", ".join(p for p in (item.city, item.province) if p)
        print(f"{i:>2}. {item.name or f'Beach {item.beach_id}'} ({where or '-'})  [{item.source}]")
        print(f"    {one_line_summary(item.match_percentage, item.categories)}")
    return 0


def _cmd_features(args: argparse.Namespace) -> int:
    """Handle the `features` subcommand: show which source each beach is scored from."""
    settings = get_settings()
    source = build_data_source(settings)
    derived = read_dataset("derived_beach_options", source.get_derived_beach_options)
    default = read_dataset("default_beach_options", source.get_default_beach_options)
    features = resolve_beach_features(derived, default, min_derived_votes=settings.features.min_derived_votes)

    wanted = set(args.beach_id or [])
    for beach_id, fs in features.items():
        if wanted and beach_id not in wanted:
            continue
        print(f"{beach_id:>5}  {fs.source:<8} {sorted(fs.option_ids)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the BeachMatch CLI."""
    parser = argparse.ArgumentParser(prog="beachmatch")
    parser.add_argument("--log-level", default=None, help="Override BEACHMATCH_LOG_LEVEL (e.g. DEBUG for tracing)")
    sub = parser.add_subparsers(dest="command", required=True)

    rec = sub.add_parser("recommend", help="Recommend beaches for a user's selected options.")
    rec.add_argument("--user-id", required=True, type=int)
    rec.add_argument("--option", required=True, type=int, action="append", help="Repeatable option ID.")
    rec.add_argument("--top-n", type=int, default=None)
    rec.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    rec.set_defaults(func=_cmd_recommend)

    feat = sub.add_parser("features", help="Show resolved beach feature sets and their source.")
    feat.add_argument("--beach-id", type=int, action="append", default=[])
    feat.set_defaults(func=_cmd_features)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m beachmatch.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except RecommendationError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
