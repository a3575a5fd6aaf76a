import pytest
from sqlalchemy import text

from beachmatch.config.settings import get_settings
from beachmatch.data.sql_source import SqlBeachDataSource
from beachmatch.recommender.recommend import recommend_beaches

SCHEMA = [
    "CREATE TABLE preference_categories (id INTEGER PRIMARY KEY, name TEXT, information TEXT)",
    "CREATE TABLE options (id INTEGER PRIMARY KEY, name TEXT, preference_categories_id INTEGER)",
    "CREATE TABLE users (id INTEGER PRIMARY KEY, user_personality_id INTEGER)",
    "CREATE TABLE user_preferences (id INTEGER PRIMARY KEY, users_id INTEGER, preference_categories_id INTEGER, score REAL)",
    "CREATE TABLE default_preferences (id INTEGER PRIMARY KEY, user_personalites_id INTEGER, preference_categories_id INTEGER, default_score REAL)",
    "CREATE TABLE review_summary (id INTEGER PRIMARY KEY, beaches_id INTEGER, options_id INTEGER, total_votes INTEGER)",
    "CREATE TABLE beaches_default_options (id INTEGER PRIMARY KEY, beaches_id INTEGER, options_id INTEGER)",
    "CREATE TABLE provinsis (id INTEGER PRIMARY KEY, name TEXT)",
    "CREATE TABLE kabupatens_kotas (id INTEGER PRIMARY KEY, name TEXT, provinsis_id INTEGER)",
    "CREATE TABLE kecamatans (id INTEGER PRIMARY KEY, name TEXT, kabupatens_id INTEGER)",
    "CREATE TABLE beaches (id INTEGER PRIMARY KEY, beach_name TEXT, descriptions TEXT, cp_name TEXT,"
    " official_website TEXT, rating_average REAL, estimate_price REAL, latitude REAL, longitude REAL,"
    " kecamatans_id INTEGER)",
    "CREATE TABLE contents (id INTEGER PRIMARY KEY, beaches_id INTEGER, options_id INTEGER, path TEXT)",
]

ROWS = [
    "INSERT INTO preference_categories VALUES (1, 'Scenery', 'Views'), (2, 'Facilities', 'Amenities')",
    "INSERT INTO options VALUES (1, 'White sand', 1), (2, 'Clear water', 1), (3, 'Toilets', 2), (4, 'Orphan', 99)",
    "INSERT INTO users VALUES (1, 1), (2, 7), (3, NULL)",
    "INSERT INTO user_preferences VALUES (1, 1, 1, 3), (2, 1, 2, 1)",
    "INSERT INTO default_preferences VALUES (1, 7, 2, 5)",
    "INSERT INTO review_summary VALUES (1, 10, 1, 4), (2, 10, 3, 1)",
    "INSERT INTO beaches_default_options VALUES (1, 10, 2), (2, 11, 1), (3, 11, 2), (4, 12, 3)",
    "INSERT INTO provinsis VALUES (1, 'Bali')",
    "INSERT INTO kabupatens_kotas VALUES (1, 'Badung', 1)",
    "INSERT INTO kecamatans VALUES (1, 'Kuta', 1)",
    "INSERT INTO beaches VALUES (10, 'Pantai Kuta', 'Surf', NULL, NULL, 4.3, 0, -8.71, 115.16, 1),"
    " (11, 'Pantai Nusa Dua', 'Calm', 'Pak Made', 'https://nusadua.example.id', 4.5, 15000, -8.79, 115.23, 1),"
    " (12, 'Pantai Tanpa Wilayah', 'No region', NULL, NULL, NULL, NULL, NULL, NULL, 99)",
    "INSERT INTO contents VALUES (1, 10, NULL, 'kuta-1.jpg'), (2, 10, NULL, 'kuta-2.jpg')",
]


@pytest.fixture
def source(tmp_path):
    src = SqlBeachDataSource.from_url(f"sqlite:///{tmp_path / 'beach.db'}")
    with src.engine.begin() as conn:
        for stmt in [*SCHEMA, *ROWS]:
            conn.execute(text(stmt))
    yield src
    src.engine.dispose()


def test_user_scores_prefer_explicit_ranking(source):
    scores = {s.category_name: s.raw_score for s in source.get_user_category_scores(1)}
    assert scores == {"Scenery": 3.0, "Facilities": 1.0}


def test_user_scores_fall_back_to_personality_defaults(source):
    scores = [(s.category_name, s.raw_score) for s in source.get_user_category_scores(2)]
    assert scores == [("Facilities", 5.0)]


def test_user_without_preferences_or_personality(source):
    assert source.get_user_category_scores(3) == []
    assert source.get_preference_categories(404) == []


def test_option_map_uses_inner_join(source):
    rows = [(o.option_id, o.category_name) for o in source.get_option_category_map()]
    assert rows == [(1, "Scenery"), (2, "Scenery"), (3, "Facilities")]


def test_beach_option_streams(source):
    derived = source.get_derived_beach_options()
    assert [(r.beach_id, r.option_id, r.total_votes) for r in derived] == [(10, 1, 4), (10, 3, 1)]
    default = source.get_default_beach_options()
    assert [(r.beach_id, r.option_id) for r in default] == [(10, 2), (11, 1), (11, 2), (12, 3)]


def test_beach_metadata_joins_regions_and_images(source):
    records = source.get_beach_metadata([10, 11, 12])
    # Beach 12 has no region rows, so the inner joins drop it; beach 10 has two images.
    assert [(r.id, r.image_path) for r in records] == [(10, "kuta-1.jpg"), (10, "kuta-2.jpg"), (11, None)]
    nusa = records[-1]
    assert nusa.province == "Bali"
    assert nusa.city == "Badung"
    assert nusa.district == "Kuta"
    assert nusa.estimate_price == 15000
    assert source.get_beach_metadata([]) == []


def test_recommendation_against_sql_source(source):
    results = recommend_beaches(1, [1, 2, 3], top_n=5, source=source, settings=get_settings())

    # Weights: Scenery 0.75, Facilities 0.25.
    # Beach 10 is derived {1, 3}: Scenery 1/2, Facilities 1/1 -> 0.375 + 0.25 = 62.5 -> 63.
    # Beach 11 is default {1, 2}: Scenery 2/2 -> 75.  Beach 12 is default {3}: 25.
    assert [(r.beach_id, r.match_percentage, r.source) for r in results] == [
        (11, 75, "default"),
        (10, 63, "derived"),
        (12, 25, "default"),
    ]
    assert results[0].official_website == "https://nusadua.example.id"
    assert results[1].contact_name == "-"
    assert results[1].image_url == "/uploads/contents/kuta-1.jpg"
    assert results[2].name == ""
