from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .data_models import Competitor
from .motion import distance_at, time_to_reach
from .roster import DEFAULT_ROSTER


@dataclass(frozen=True)
class DistanceStanding:
    competitor: Competitor
    distance: int


@dataclass(frozen=True)
class TimeStanding:
    competitor: Competitor
    time: Optional[float]

    @property
    def reached(self) -> bool:
        return self.time is not None


def fixed_time_winner(race_time: float, roster: Iterable[Competitor] = DEFAULT_ROSTER) -> Optional[Competitor]:
    """Animal that got furthest in ``race_time``; the earlier roster entry wins a tie."""
    winner: Optional[Competitor] = None
    best = -1
    for competitor in roster:
        distance = distance_at(competitor.id, race_time)
        if distance > best:
            best = distance
            winner = competitor
    return winner


def fixed_distance_winner(target_distance: float, roster: Iterable[Competitor] = DEFAULT_ROSTER) -> Optional[Competitor]:
    """Animal that reached ``target_distance`` first; animals that never arrive cannot win."""
    winner: Optional[Competitor] = None
    best: Optional[float] = None
    for competitor in roster:
        finish = time_to_reach(competitor.id, target_distance)
        if finish is None:
            continue
        if best is None or finish < best:
            best = finish
            winner = competitor
    return winner


def rank_by_distance(race_time: float, roster: Iterable[Competitor] = DEFAULT_ROSTER) -> List[DistanceStanding]:
    standings = [DistanceStanding(competitor, distance_at(competitor.id, race_time)) for competitor in roster]
    standings.sort(key=lambda item: -item.distance)
    return standings


def rank_by_time(target_distance: float, roster: Iterable[Competitor] = DEFAULT_ROSTER) -> List[TimeStanding]:
    standings = [TimeStanding(competitor, time_to_reach(competitor.id, target_distance)) for competitor in roster]
    standings.sort(key=lambda item: (item.time is None, item.time or 0.0))
    return standings
