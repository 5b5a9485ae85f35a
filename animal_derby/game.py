from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from animal_derby.config import get_config
from animal_derby.engine import distance_at, fixed_distance_winner, fixed_time_winner, time_to_reach
from animal_derby.engine.data_models import Competitor
from animal_derby.engine.roster import DEFAULT_ROSTER, CompetitorRoster
from animal_derby.practice import PracticeRecord, fastest_record, generate_records

CORRECT_POINTS = int(get_config("scoring.correct_points", 10))
WRONG_POINTS = int(get_config("scoring.wrong_points", -1))
MINIMUM_SCORE = int(get_config("scoring.minimum_score", 0))

TIME_OPTIONS = tuple(get_config("modes.time_options", [5, 10, 15, 20]))
DISTANCE_OPTIONS = tuple(get_config("modes.distance_options", [500, 1500, 2000, 3200]))


class GameMode(Enum):
    TIME_MATCH = "time_match"
    DISTANCE_MATCH = "distance_match"
    ALL_RECORDS = "all_records"


class RoundClosedError(Exception):
    """Raised when guessing on a round that was already answered correctly."""


@dataclass
class GuessResult:
    correct: bool
    points: int
    score: int
    winner_id: Optional[str]
    message: str


class QuizRound:
    mode: GameMode

    def __init__(self, roster: CompetitorRoster = DEFAULT_ROSTER) -> None:
        self.roster = roster
        self.closed = False
        self.attempts = 0

    def winner_id(self) -> Optional[str]:
        raise NotImplementedError

    def is_correct(self, competitor_id: str) -> bool:
        return competitor_id == self.winner_id()


class TimeMatchRound(QuizRound):
    """Everyone runs for the same time; who went furthest?"""

    mode = GameMode.TIME_MATCH

    def __init__(self, race_time: float, roster: CompetitorRoster = DEFAULT_ROSTER) -> None:
        if race_time not in TIME_OPTIONS:
            raise ValueError(f"Race time must be one of {TIME_OPTIONS}, got {race_time}")
        super().__init__(roster)
        self.race_time = race_time

    def distances(self) -> Dict[str, int]:
        return {competitor.id: distance_at(competitor.id, self.race_time) for competitor in self.roster}

    def winner_id(self) -> Optional[str]:
        winner = fixed_time_winner(self.race_time, self.roster)
        return winner.id if winner else None


class DistanceMatchRound(QuizRound):
    """Everyone runs to the same line; who got there first?"""

    mode = GameMode.DISTANCE_MATCH

    def __init__(self, target_distance: float, roster: CompetitorRoster = DEFAULT_ROSTER) -> None:
        if target_distance not in DISTANCE_OPTIONS:
            raise ValueError(f"Distance must be one of {DISTANCE_OPTIONS}, got {target_distance}")
        super().__init__(roster)
        self.target_distance = target_distance

    def finish_times(self) -> Dict[str, Optional[float]]:
        return {competitor.id: time_to_reach(competitor.id, self.target_distance) for competitor in self.roster}

    def winner_id(self) -> Optional[str]:
        winner = fixed_distance_winner(self.target_distance, self.roster)
        return winner.id if winner else None


class AllRecordsRound(QuizRound):
    """Different times and distances; compare speed = distance / time."""

    mode = GameMode.ALL_RECORDS

    def __init__(
        self,
        records: Optional[Sequence[PracticeRecord]] = None,
        roster: CompetitorRoster = DEFAULT_ROSTER,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(roster)
        self.records: List[PracticeRecord] = list(records) if records is not None else generate_records(roster, rng)

    def winner_id(self) -> Optional[str]:
        best = fastest_record(self.records)
        return best.competitor.id if best else None

    def is_correct(self, competitor_id: str) -> bool:
        # Any animal sharing the top speed counts as a right answer.
        if not self.records:
            return False
        top = max(record.speed for record in self.records)
        return any(r.competitor.id == competitor_id and r.speed == top for r in self.records)


@dataclass
class GameSession:
    player_id: str
    score: int = 0
    history: List[GuessResult] = field(default_factory=list)

    def apply_points(self, points: int) -> int:
        self.score = max(MINIMUM_SCORE, self.score + points)
        return self.score

    def submit_guess(self, quiz: QuizRound, competitor_id: str) -> GuessResult:
        if quiz.closed:
            raise RoundClosedError("This round is already solved. Start a new one!")
        competitor: Competitor = quiz.roster.get_competitor(competitor_id)

        quiz.attempts += 1
        correct = quiz.is_correct(competitor.id)
        points = CORRECT_POINTS if correct else WRONG_POINTS
        self.apply_points(points)
        if correct:
            quiz.closed = True
            message = f"Ding dong! {competitor.name} was the fastest! {points:+d} points"
        else:
            message = f"Not quite! Think it over once more. {points:+d} point"

        result = GuessResult(
            correct=correct,
            points=points,
            score=self.score,
            winner_id=quiz.winner_id(),
            message=message,
        )
        self.history.append(result)
        return result
