import pytest

from animal_derby.engine import DEFAULT_ROSTER, SAMPLE_TIMES, TOTAL_RACE_TIME, distance_at, max_distance, time_to_reach
from animal_derby.engine.motion import raw_distance_at


def test_cheetah_phase_boundaries():
    assert distance_at("cheetah", 5) == 600
    assert distance_at("cheetah", 10) == 2100
    assert distance_at("cheetah", 15) == 2700
    assert distance_at("cheetah", 17) == 3200


def test_rabbit_does_not_move_while_napping():
    assert distance_at("rabbit", 5) == 1250
    assert distance_at("rabbit", 8) == 1250
    assert distance_at("rabbit", 10) == 1250
    assert distance_at("rabbit", 19) == 3203


def test_dog_uses_closed_form():
    assert distance_at("dog", 10) == 1690
    assert distance_at("dog", 17.5) == 3206


def test_turtle_and_snail_checkpoints():
    assert distance_at("turtle", 20) == 1200
    assert distance_at("snail", 8) == 120
    assert distance_at("snail", 10) == 620
    assert distance_at("snail", 20) == 770


def test_distance_is_floored_once_at_the_end():
    # 150 * 5 + 1.9 * 25 = 797.5
    assert raw_distance_at("dog", 5) == pytest.approx(797.5)
    assert distance_at("dog", 5) == 797


def test_distance_is_monotonic_for_every_animal():
    grid = [k / 10 for k in range(0, 201)]
    for competitor in DEFAULT_ROSTER:
        values = [distance_at(competitor.id, t) for t in grid]
        assert values == sorted(values), competitor.id


def test_time_is_clamped_to_race_window():
    for competitor in DEFAULT_ROSTER:
        assert distance_at(competitor.id, 25) == distance_at(competitor.id, 20)
        assert distance_at(competitor.id, -3) == 0
    assert max_distance("cheetah") == 3950


def test_unknown_competitor_stands_still():
    assert distance_at("unicorn", 10) == 0
    assert time_to_reach("unicorn", 10) is None


def test_sample_grid_is_exact_one_decimal_values():
    assert len(SAMPLE_TIMES) == 200
    assert SAMPLE_TIMES[0] == 0.1
    assert SAMPLE_TIMES[2] == 0.3
    assert SAMPLE_TIMES[-1] == TOTAL_RACE_TIME


def test_turtle_inverse_is_tightly_bracketed():
    t = time_to_reach("turtle", 1200)
    assert t == pytest.approx(20.0)
    assert distance_at("turtle", t) >= 1200
    assert distance_at("turtle", t - 0.1) < 1200


@pytest.mark.parametrize(
    "competitor_id, expected",
    [("cheetah", 4.2), ("dog", 3.3), ("rabbit", 2.0), ("turtle", 8.4), ("snail", 9.6)],
)
def test_time_to_reach_500(competitor_id, expected):
    assert time_to_reach(competitor_id, 500) == pytest.approx(expected)


def test_time_to_reach_returns_first_qualifying_sample():
    t = time_to_reach("cheetah", 3200)
    assert t == pytest.approx(17.0)
    assert distance_at("cheetah", 16.9) < 3200


def test_snail_never_reaches_5000():
    assert time_to_reach("snail", 5000) is None
    assert time_to_reach("turtle", 1201) is None
