from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from animal_derby.config import get_config

from .data_models import Competitor
from .motion import TOTAL_RACE_TIME, clamp_time, distance_at, time_to_reach
from .narrative import NarrativeCue, NarrativeTracker
from .roster import DEFAULT_ROSTER
from .telemetry import TelemetryCollector, TelemetryFrame, TelemetryRacerFrame

MAX_VISUAL_DISTANCE = float(get_config("display.max_visual_distance", 3300))
TRACK_WIDTH_PCT = float(get_config("display.track_width_pct", 90))

OPENING_RACE_MULTIPLIER = float(get_config("modes.opening_race_multiplier", 1.0))
DISTANCE_MATCH_MULTIPLIER = float(get_config("modes.distance_match_multiplier", 1.5))


class RaceStatus(Enum):
    READY = "ready"
    RUNNING = "running"
    FINISHED = "finished"


def position_pct(distance: float) -> float:
    """Maps a distance onto the track as a percentage of screen width."""
    if distance <= 0:
        return 0.0
    return min((distance / MAX_VISUAL_DISTANCE) * TRACK_WIDTH_PCT, TRACK_WIDTH_PCT)


class RaceClock:
    """Turns wall-clock seconds into simulated race seconds."""

    def __init__(self, speed_multiplier: float = 1.0, clock: Callable[[], float] = time.monotonic) -> None:
        if speed_multiplier <= 0:
            raise ValueError("Speed multiplier must be positive.")
        self.speed_multiplier = speed_multiplier
        self._clock = clock
        self._started_at: Optional[float] = None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        self._started_at = self._clock()

    def reset(self) -> None:
        self._started_at = None

    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        real = self._clock() - self._started_at
        return clamp_time(real * self.speed_multiplier)

    def expired(self) -> bool:
        return self.elapsed() >= TOTAL_RACE_TIME


@dataclass
class TickRacerSnapshot:
    competitor_id: str
    name: str
    emoji: str
    distance: int
    position_pct: float
    finished: bool = False
    finish_time: Optional[float] = None
    cues: List[NarrativeCue] = field(default_factory=list)


@dataclass
class TickSnapshot:
    tick: int
    time: float
    status: RaceStatus
    racers: List[TickRacerSnapshot] = field(default_factory=list)

    def by_id(self) -> Dict[str, TickRacerSnapshot]:
        return {racer.competitor_id: racer for racer in self.racers}

    def leaderboard(self) -> List[TickRacerSnapshot]:
        return sorted(self.racers, key=lambda racer: racer.distance, reverse=True)


class RaceSession:
    """
    One race attempt: owns the clock and polls the motion model every tick.

    With ``target_distance`` set (distance match) a runner that crosses the
    target is frozen on the finish line and keeps the finish time from
    ``time_to_reach``. Without it the runners simply move for the full race.
    """

    def __init__(
        self,
        roster: Iterable[Competitor] = DEFAULT_ROSTER,
        target_distance: Optional[float] = None,
        speed_multiplier: float = OPENING_RACE_MULTIPLIER,
        clock: Callable[[], float] = time.monotonic,
        telemetry: Optional[TelemetryCollector] = None,
        narrate: bool = True,
    ) -> None:
        if target_distance is not None and target_distance <= 0:
            raise ValueError(f"Target distance must be positive, got {target_distance}")
        self.competitors: List[Competitor] = list(roster)
        self.target_distance = target_distance
        self.clock = RaceClock(speed_multiplier, clock)
        self.telemetry = telemetry
        self.narrative = NarrativeTracker(competitor_ids=[c.id for c in self.competitors]) if narrate else None
        self.status = RaceStatus.READY
        self.tick_index = 0
        self._last_distance: Dict[str, int] = {c.id: 0 for c in self.competitors}
        self._finish_times: Dict[str, Optional[float]] = {}
        if target_distance is not None:
            self._finish_times = {c.id: time_to_reach(c.id, target_distance) for c in self.competitors}

    def start(self) -> None:
        if self.status is not RaceStatus.READY:
            raise RuntimeError(f"Race already {self.status.value}; reset it first.")
        self.clock.start()
        self.status = RaceStatus.RUNNING

    def reset(self) -> None:
        self.clock.reset()
        self.status = RaceStatus.READY
        self.tick_index = 0
        self._last_distance = {c.id: 0 for c in self.competitors}
        if self.narrative:
            self.narrative.reset()
        if self.telemetry:
            self.telemetry.clear()

    def snapshot_at(self, race_time: float) -> TickSnapshot:
        """Positions at ``race_time`` without touching the clock or cues."""
        t = clamp_time(race_time)
        racers = []
        for competitor in self.competitors:
            distance = distance_at(competitor.id, t)
            racer = TickRacerSnapshot(
                competitor_id=competitor.id,
                name=competitor.name,
                emoji=competitor.emoji,
                distance=distance,
                position_pct=position_pct(distance),
            )
            if self.target_distance is not None and distance >= self.target_distance:
                racer.finished = True
                racer.position_pct = position_pct(self.target_distance)
                racer.finish_time = self._finish_times.get(competitor.id)
            racers.append(racer)
        return TickSnapshot(tick=self.tick_index, time=t, status=self.status, racers=racers)

    def tick(self) -> TickSnapshot:
        if self.status is RaceStatus.READY:
            raise RuntimeError("Race has not been started.")

        t = self.clock.elapsed()
        if t >= TOTAL_RACE_TIME:
            self.status = RaceStatus.FINISHED
        snapshot = self.snapshot_at(t)

        if self.narrative:
            by_id = snapshot.by_id()
            for cue in self.narrative.due(t):
                by_id[cue.competitor_id].cues.append(cue)

        if self.telemetry is not None:
            self._record(snapshot)
        for racer in snapshot.racers:
            self._last_distance[racer.competitor_id] = racer.distance
        self.tick_index += 1
        return snapshot

    def winner_id(self) -> Optional[str]:
        if self.target_distance is None:
            return None
        reached = [(t, cid) for cid, t in self._finish_times.items() if t is not None]
        if not reached:
            return None
        order = {c.id: idx for idx, c in enumerate(self.competitors)}
        reached.sort(key=lambda item: (item[0], order[item[1]]))
        return reached[0][1]

    def _record(self, snapshot: TickSnapshot) -> None:
        frame = TelemetryFrame(tick=snapshot.tick, time=snapshot.time, status=snapshot.status.value)
        for racer in snapshot.racers:
            frame.racers.append(
                TelemetryRacerFrame(
                    competitor_id=racer.competitor_id,
                    name=racer.name,
                    distance=racer.distance,
                    distance_delta=racer.distance - self._last_distance.get(racer.competitor_id, 0),
                    position_pct=racer.position_pct,
                    finished=racer.finished,
                    finish_time=racer.finish_time,
                    cues=[cue.key for cue in racer.cues],
                )
            )
        self.telemetry.record_frame(frame)


class ManualClock:
    """Clock that only moves when told to; drives headless replays."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def run_headless(
    roster: Iterable[Competitor] = DEFAULT_ROSTER,
    target_distance: Optional[float] = None,
    speed_multiplier: float = OPENING_RACE_MULTIPLIER,
    dt: float = 1.0 / 15.0,
    telemetry: Optional[TelemetryCollector] = None,
) -> List[TickSnapshot]:
    """Runs a whole race at ``dt`` wall-seconds per tick without sleeping."""
    if dt <= 0:
        raise ValueError("dt must be positive.")
    clock = ManualClock()
    session = RaceSession(
        roster=roster,
        target_distance=target_distance,
        speed_multiplier=speed_multiplier,
        clock=clock,
        telemetry=telemetry,
    )
    session.start()
    snapshots = [session.tick()]
    while session.status is not RaceStatus.FINISHED:
        clock.advance(dt)
        snapshots.append(session.tick())
    return snapshots
