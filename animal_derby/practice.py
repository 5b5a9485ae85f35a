# practice.py
# Randomised "all records" generator for the free-comparison mode.
# Speeds here are NOT produced by the motion model: each record is
# base_speed * random factor, so the cheetah does not always win.

from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from animal_derby.config import get_config
from animal_derby.engine.data_models import Competitor
from animal_derby.engine.roster import DEFAULT_ROSTER

SPEED_FACTOR_MIN = float(get_config("practice.speed_factor_min", 0.5))
SPEED_FACTOR_MAX = float(get_config("practice.speed_factor_max", 1.5))
TIME_CHOICES = tuple(get_config("practice.time_choices", [5, 8, 10, 12, 15, 20]))


@dataclass(frozen=True)
class PracticeRecord:
    competitor: Competitor
    time: int
    distance: int
    speed: int


def generate_record(competitor: Competitor, rng: random.Random = random) -> PracticeRecord:
    factor = rng.uniform(SPEED_FACTOR_MIN, SPEED_FACTOR_MAX)
    speed = int(math.floor(competitor.base_speed * factor))
    race_time = rng.choice(TIME_CHOICES)
    return PracticeRecord(competitor=competitor, time=race_time, distance=speed * race_time, speed=speed)


def generate_records(roster: Iterable[Competitor] = DEFAULT_ROSTER, rng: Optional[random.Random] = None) -> List[PracticeRecord]:
    rng = rng or random.Random()
    return [generate_record(competitor, rng) for competitor in roster]


def fastest_record(records: Iterable[PracticeRecord]) -> Optional[PracticeRecord]:
    """Highest speed wins; the first record keeps a tie."""
    best: Optional[PracticeRecord] = None
    for record in records:
        if best is None or record.speed > best.speed:
            best = record
    return best
