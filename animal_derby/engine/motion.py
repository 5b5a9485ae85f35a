"""
Deterministic motion model shared by the animation, the quizzes and scoring.

Every animal follows a hand-authored schedule (see ``roster.PROFILES``).
``distance_at`` is the forward function; ``time_to_reach`` inverts it by
scanning a fixed one-decimal time grid, so the answer is always a time the
forward function can be evaluated at to reproduce the comparison.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

from animal_derby.config import BALANCE_CONFIG

from .data_models import MotionProfile, ProfileKind
from .roster import PROFILES


def _race_config() -> Dict[str, float]:
    if not isinstance(BALANCE_CONFIG, dict):
        return {}
    config = BALANCE_CONFIG.get("race")
    if not isinstance(config, dict):
        return {}
    return config


_RACE_CONFIG = _race_config()

TOTAL_RACE_TIME = float(_RACE_CONFIG.get("total_race_time", 20))
TIME_SEARCH_STEP = float(_RACE_CONFIG.get("time_search_step", 0.1))

# Samples are built as k / rate rather than by repeated addition so every
# grid point is the exact one-decimal value (0.3, not 0.30000000000000004).
_SAMPLES_PER_SECOND = max(1, int(round(1.0 / TIME_SEARCH_STEP)))
SAMPLE_TIMES: Tuple[float, ...] = tuple(
    k / _SAMPLES_PER_SECOND for k in range(1, int(round(TOTAL_RACE_TIME * _SAMPLES_PER_SECOND)) + 1)
)


def clamp_time(elapsed_time: float) -> float:
    return min(max(float(elapsed_time), 0.0), TOTAL_RACE_TIME)


def _accumulate(profile: MotionProfile, t: float) -> float:
    if profile.kind is ProfileKind.CLOSED_FORM:
        linear, quadratic = profile.coefficients
        return linear * t + quadratic * t * t

    distance = 0.0
    for phase in profile.phases:
        if t <= phase.start:
            break
        distance += phase.contribution(t)
    return distance


def raw_distance_at(competitor_id: str, elapsed_time: float) -> float:
    """Unfloored accumulation; used for plotting smooth curves."""
    profile = PROFILES.get(competitor_id)
    if profile is None:
        return 0.0
    return _accumulate(profile, clamp_time(elapsed_time))


def distance_at(competitor_id: str, elapsed_time: float) -> int:
    """
    Distance covered by ``competitor_id`` after ``elapsed_time`` simulated seconds.

    Time is clamped to ``[0, TOTAL_RACE_TIME]``. Unknown competitors stand still
    (0) rather than raising. The sum is floored once, after all phases.
    """
    return int(math.floor(raw_distance_at(competitor_id, elapsed_time)))


def time_to_reach(competitor_id: str, target_distance: float) -> Optional[float]:
    """
    First grid time at which ``distance_at`` meets or exceeds the target.

    Returns ``None`` when the animal does not get there before the race ends.
    """
    for t in SAMPLE_TIMES:
        if distance_at(competitor_id, t) >= target_distance:
            return t
    return None


def max_distance(competitor_id: str) -> int:
    return distance_at(competitor_id, TOTAL_RACE_TIME)


def sample_times() -> Tuple[float, ...]:
    return SAMPLE_TIMES
