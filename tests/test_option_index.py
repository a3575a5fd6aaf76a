from beachmatch.domain.models import OptionCategory
from beachmatch.scoring.option_index import build_option_category_index


def test_lookup_known_and_unknown_options():
    index = build_option_category_index([(1, "Scenery"), (4, "Facilities")])
    assert index.category_of(1) == "Scenery"
    assert index.category_of(4) == "Facilities"
    assert index.category_of(999) is None
    assert 1 in index and 999 not in index
    assert len(index) == 2


def test_builds_from_models_and_later_rows_win():
    index = build_option_category_index(
        [
            OptionCategory(option_id=1, category_name="Scenery"),
            OptionCategory(option_id=1, category_name="Activities"),
        ]
    )
    assert index.as_dict() == {1: "Activities"}


def test_partition_groups_dedupes_and_sets_aside_unknown():
    index = build_option_category_index([(1, "Scenery"), (2, "Scenery"), (4, "Facilities")])
    parts = index.partition([2, 1, 2, 4, 77, 77])
    assert parts.by_category == {"Facilities": [4], "Scenery": [1, 2]}
    assert parts.unknown == [77]


def test_partition_of_only_unknown_options_is_empty():
    index = build_option_category_index([(1, "Scenery")])
    parts = index.partition([5, 6])
    assert parts.by_category == {}
    assert parts.unknown == [5, 6]
