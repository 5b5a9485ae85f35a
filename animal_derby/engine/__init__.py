"""
Race engine package for the animal speed races.

The package is split into data models, the deterministic motion model,
winner resolution and the race loop that drives live animation. The bot
layer composes these pieces for each game mode.
"""

from .data_models import Competitor, MotionProfile, ProfileKind, RatePhase, Trait  # noqa: F401
from .motion import (  # noqa: F401
    SAMPLE_TIMES,
    TIME_SEARCH_STEP,
    TOTAL_RACE_TIME,
    distance_at,
    max_distance,
    time_to_reach,
)
from .narrative import NarrativeCue, NarrativeTracker  # noqa: F401
from .race_loop import ManualClock, RaceClock, RaceSession, RaceStatus, TickSnapshot, position_pct, run_headless  # noqa: F401
from .resolution import (  # noqa: F401
    fixed_distance_winner,
    fixed_time_winner,
    rank_by_distance,
    rank_by_time,
)
from .roster import ANIMALS, DEFAULT_ROSTER, PROFILES, CompetitorRoster  # noqa: F401
from .telemetry import TelemetryCollector, TelemetryFrame, TelemetryRacerFrame  # noqa: F401

__all__ = [
    "Competitor",
    "MotionProfile",
    "ProfileKind",
    "RatePhase",
    "Trait",
    "SAMPLE_TIMES",
    "TIME_SEARCH_STEP",
    "TOTAL_RACE_TIME",
    "distance_at",
    "max_distance",
    "time_to_reach",
    "NarrativeCue",
    "NarrativeTracker",
    "ManualClock",
    "RaceClock",
    "RaceSession",
    "RaceStatus",
    "TickSnapshot",
    "position_pct",
    "run_headless",
    "fixed_distance_winner",
    "fixed_time_winner",
    "rank_by_distance",
    "rank_by_time",
    "ANIMALS",
    "DEFAULT_ROSTER",
    "PROFILES",
    "CompetitorRoster",
    "TelemetryCollector",
    "TelemetryFrame",
    "TelemetryRacerFrame",
]
