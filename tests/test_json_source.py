import json

import pytest
from pydantic import ValidationError

from beachmatch.data.json_source import JsonBeachDataSource

SAMPLE = "data/beaches.sample.json"


def test_explicit_user_preferences():
    source = JsonBeachDataSource(SAMPLE)
    scores = {s.category_name: s.raw_score for s in source.get_user_category_scores(1)}
    assert scores == {"Scenery": 4, "Activities": 3, "Facilities": 2, "Atmosphere": 1}


def test_personality_defaults_when_user_has_no_ranking():
    source = JsonBeachDataSource(SAMPLE)
    scores = {s.category_name: s.raw_score for s in source.get_user_category_scores(2)}
    assert scores == {"Activities": 4, "Facilities": 2, "Atmosphere": 1}

    categories = source.get_preference_categories(2)
    assert [(c.name, c.default_score) for c in categories] == [
        ("Activities", 4),
        ("Facilities", 2),
        ("Atmosphere", 1),
    ]


def test_unknown_user_or_no_personality_has_no_scores():
    source = JsonBeachDataSource(SAMPLE)
    assert source.get_user_category_scores(3) == []
    assert source.get_user_category_scores(404) == []


def test_option_map_and_beach_streams():
    source = JsonBeachDataSource(SAMPLE)
    options = {o.option_id: o.category_name for o in source.get_option_category_map()}
    assert options[1] == "Scenery"
    assert options[12] == "Atmosphere"
    assert len(options) == 12

    derived = source.get_derived_beach_options()
    assert {r.beach_id for r in derived} == {1, 2}
    assert all(r.total_votes for r in derived)
    assert {r.beach_id for r in source.get_default_beach_options()} == {1, 2, 3, 4, 5}


def test_metadata_is_filtered_to_requested_ids():
    source = JsonBeachDataSource(SAMPLE)
    records = source.get_beach_metadata([5, 2, 77])
    assert sorted(r.id for r in records) == [2, 5]


def test_options_of_unknown_categories_are_skipped(tmp_path):
    path = tmp_path / "ds.json"
    path.write_text(
        json.dumps(
            {
                "preference_categories": [{"id": 1, "name": "Scenery"}],
                "options": [{"id": 1, "category_id": 1}, {"id": 2, "category_id": 9}],
            }
        ),
        encoding="utf-8",
    )
    source = JsonBeachDataSource(path)
    assert [(o.option_id, o.category_name) for o in source.get_option_category_map()] == [(1, "Scenery")]
    assert source.get_derived_beach_options() == []


def test_file_is_reread_on_every_call(tmp_path):
    path = tmp_path / "ds.json"
    path.write_text(json.dumps({"default_options": [{"beach_id": 1, "option_id": 1}]}), encoding="utf-8")
    source = JsonBeachDataSource(path)
    assert len(source.get_default_beach_options()) == 1

    path.write_text(json.dumps({"default_options": []}), encoding="utf-8")
    assert source.get_default_beach_options() == []


def test_invalid_rows_fail_validation(tmp_path):
    path = tmp_path / "ds.json"
    path.write_text(json.dumps({"review_summary": [{"beach_id": "x", "option_id": 1}]}), encoding="utf-8")
    with pytest.raises(ValidationError):
        JsonBeachDataSource(path).get_derived_beach_options()
