"""
Data-access contract for the recommendation core.

The core never talks to a database directly. It consumes read-only snapshots
through a `BeachDataSource` and loads the four inputs it needs in one place
(`load_inputs`), so scoring itself stays pure and testable without I/O.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Protocol, TypeVar

from beachmatch.core.errors import DataUnavailableError, RecommendationError
from beachmatch.domain.models import (
    BeachMetadata,
    BeachOption,
    CategoryScore,
    OptionCategory,
    PreferenceCategory,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BeachDataSource(Protocol):
    def get_user_category_scores(self, user_id: int) -> list[CategoryScore]: ...

    def get_option_category_map(self) -> list[OptionCategory]: ...

    def get_derived_beach_options(self) -> list[BeachOption]: ...

    def get_default_beach_options(self) -> list[BeachOption]: ...

    def get_beach_metadata(self, beach_ids: list[int]) -> list[BeachMetadata]: ...

    def get_preference_categories(self, user_id: int) -> list[PreferenceCategory]: ...


@dataclass(frozen=True)
class RecommendationInputs:
    """The four read-only snapshots one recommendation run needs."""

    category_scores: list[CategoryScore]
    option_categories: list[OptionCategory]
    derived_options: list[BeachOption]
    default_options: list[BeachOption]


def read_dataset(name: str, fetch: Callable[[], T]) -> T:
    """Run one data-access call, reporting any failure as `DataUnavailableError`."""
    try:
        return fetch()
    except RecommendationError:
        raise
    except Exception as e:
        reason = str(e) or e.__class__.__name__
        logger.warning("Reading %s failed: %s", name, reason)
        raise DataUnavailableError(name, reason) from e


def load_inputs(source: BeachDataSource, user_id: int, *, parallel: bool = True) -> RecommendationInputs:
    """Load all four inputs; any failure aborts the whole run."""
    fetchers: dict[str, Callable[[], list]] = {
        "user_category_scores": lambda: source.get_user_category_scores(user_id),
        "option_category_map": source.get_option_category_map,
        "derived_beach_options": source.get_derived_beach_options,
        "default_beach_options": source.get_default_beach_options,
    }

    if parallel:
        # The reads are independent; each adapter call opens its own connection/file handle.
        with ThreadPoolExecutor(max_workers=len(fetchers), thread_name_prefix="beachmatch-read") as pool:
            futures = {name: pool.submit(read_dataset, name, fetch) for name, fetch in fetchers.items()}
            loaded = {name: future.result() for name, future in futures.items()}
    else:
        loaded = {name: read_dataset(name, fetch) for name, fetch in fetchers.items()}

    logger.debug(
        "Loaded inputs for user %s: %s",
        user_id,
        {name: len(rows) for name, rows in loaded.items()},
    )
    return RecommendationInputs(
        category_scores=list(loaded["user_category_scores"]),
        option_categories=list(loaded["option_category_map"]),
        derived_options=list(loaded["derived_beach_options"]),
        default_options=list(loaded["default_beach_options"]),
    )
