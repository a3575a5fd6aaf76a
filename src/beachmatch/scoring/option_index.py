"""
Option -> category lookup.

Every selectable option belongs to exactly one preference category. The matcher
needs that mapping both for the user's selection and for a beach's feature set.
Unknown option IDs simply have no category; callers drop them instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from beachmatch.domain.models import OptionCategory


@dataclass(frozen=True)
class PartitionedOptions:
    """A user's selection grouped by category, plus the IDs that had no category."""

    by_category: dict[str, list[int]] = field(default_factory=dict)
    unknown: list[int] = field(default_factory=list)


class OptionCategoryIndex:
    """Read-only mapping of option ID to category name."""

    def __init__(self, mapping: Mapping[int, str]):
        self._mapping = dict(mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, option_id: object) -> bool:
        return option_id in self._mapping

    def category_of(self, option_id: int) -> str | None:
        return self._mapping.get(option_id)

    def partition(self, option_ids: Iterable[int]) -> PartitionedOptions:
        """Group options by category; duplicates collapse and unknown IDs are set aside."""
        by_category: dict[str, set[int]] = {}
        unknown: set[int] = set()
        for option_id in option_ids:
            category = self._mapping.get(option_id)
            if category is None:
                unknown.add(option_id)
                continue
            by_category.setdefault(category, set()).add(option_id)
        return PartitionedOptions(
            by_category={c: sorted(ids) for c, ids in sorted(by_category.items())},
            unknown=sorted(unknown),
        )

    def as_dict(self) -> dict[int, str]:
        return dict(self._mapping)


def build_option_category_index(
    rows: Iterable[OptionCategory | tuple[int, str]],
) -> OptionCategoryIndex:
    """Build the index from `(option_id, category_name)` pairs; later pairs win."""
    mapping: dict[int, str] = {}
    for row in rows:
        if isinstance(row, OptionCategory):
            mapping[row.option_id] = row.category_name
        else:
            option_id, category_name = row
            mapping[int(option_id)] = category_name
    return OptionCategoryIndex(mapping)
