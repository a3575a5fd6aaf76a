import pytest

from beachmatch.domain.models import CategoryScore
from beachmatch.scoring.weights import compute_category_weights


@pytest.mark.parametrize(
    "scores",
    [
        [("Scenery", 1)],
        [("Scenery", 4), ("Activities", 3), ("Facilities", 2), ("Atmosphere", 1)],
        [("Scenery", 0.1), ("Activities", 0.2), ("Facilities", 0.7)],
        [("A", 7), ("B", 13), ("C", 1e-6), ("D", 123456.789)],
    ],
)
def test_weights_sum_to_one(scores):
    weights = compute_category_weights(scores)
    assert set(weights) == {name for name, _ in scores}
    assert abs(sum(weights.values()) - 1.0) < 1e-9


def test_weight_is_raw_score_over_total():
    weights = compute_category_weights([("Scenery", 3), ("Facilities", 1)])
    assert weights == pytest.approx({"Scenery": 0.75, "Facilities": 0.25})


def test_accepts_category_score_models():
    weights = compute_category_weights(
        [CategoryScore(category_name="Scenery", raw_score=2), CategoryScore(category_name="Activities", raw_score=2)]
    )
    assert weights == pytest.approx({"Scenery": 0.5, "Activities": 0.5})


def test_empty_input_gives_empty_weights():
    assert compute_category_weights([]) == {}


def test_all_zero_scores_do_not_divide_by_zero():
    assert compute_category_weights([("Scenery", 0), ("Activities", 0)]) == {}


def test_duplicate_categories_are_summed():
    weights = compute_category_weights([("Scenery", 1), ("Scenery", 1), ("Activities", 2)])
    assert weights == pytest.approx({"Scenery": 0.5, "Activities": 0.5})
    assert abs(sum(weights.values()) - 1.0) < 1e-9


def test_negative_scores_count_as_zero():
    weights = compute_category_weights([("Scenery", 2), ("Activities", -5)])
    assert weights == pytest.approx({"Scenery": 1.0, "Activities": 0.0})
