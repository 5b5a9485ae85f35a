from animal_derby.engine import (
    CompetitorRoster,
    DEFAULT_ROSTER,
    fixed_distance_winner,
    fixed_time_winner,
    rank_by_distance,
    rank_by_time,
)


def test_fixed_time_ranking_at_ten_seconds():
    standings = rank_by_distance(10)
    assert [(s.competitor.id, s.distance) for s in standings] == [
        ("cheetah", 2100),
        ("dog", 1690),
        ("rabbit", 1250),
        ("snail", 620),
        ("turtle", 600),
    ]
    # No randomness: repeated calls agree.
    assert [s.distance for s in rank_by_distance(10)] == [s.distance for s in standings]


def test_fixed_time_winner_changes_with_time():
    assert fixed_time_winner(5).id == "rabbit"
    assert fixed_time_winner(10).id == "cheetah"
    assert fixed_time_winner(15).id == "cheetah"
    assert fixed_time_winner(20).id == "cheetah"


def test_fixed_time_tie_keeps_first_roster_entry():
    roster = DEFAULT_ROSTER.subset(["turtle", "cheetah"])
    assert fixed_time_winner(0, roster).id == "turtle"


def test_fixed_distance_winner_at_500():
    assert fixed_distance_winner(500).id == "rabbit"


def test_fixed_distance_excludes_animals_that_never_arrive():
    roster = DEFAULT_ROSTER.subset(["snail", "turtle"])
    assert fixed_distance_winner(1200, roster).id == "turtle"
    assert fixed_distance_winner(5000, roster) is None


def test_rank_by_time_lists_unfinished_last():
    standings = rank_by_time(3200)
    assert [s.competitor.id for s in standings] == ["cheetah", "dog", "rabbit", "turtle", "snail"]
    assert [s.reached for s in standings] == [True, True, True, False, False]
    assert standings[0].time == 17.0


def test_empty_roster_has_no_winner():
    empty = CompetitorRoster([])
    assert fixed_time_winner(10, empty) is None
    assert fixed_distance_winner(500, empty) is None
