from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple


class Trait(Enum):
    """Personality tag shown next to an animal in embeds."""

    STEADY = "steady"
    ERRATIC = "erratic"
    LAZY = "lazy"
    FAST = "fast"

    @classmethod
    def from_str(cls, value: str) -> "Trait":
        try:
            return cls(value.lower())
        except ValueError as exc:
            raise ValueError(f"Unknown trait: {value}") from exc


class ProfileKind(Enum):
    """How a motion profile is evaluated."""

    PHASES = "phases"
    CLOSED_FORM = "closed_form"


@dataclass(frozen=True)
class Competitor:
    id: str
    name: str
    emoji: str
    base_speed: float
    description: str
    trait: Trait = Trait.STEADY
    color: int = 0xFFFFFF

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.name}"


@dataclass(frozen=True)
class RatePhase:
    """Constant-rate interval; ``end=None`` keeps running until the race clock stops."""

    start: float
    end: Optional[float]
    rate: float

    @property
    def is_open(self) -> bool:
        return self.end is None

    def contribution(self, t: float) -> float:
        if t <= self.start:
            return 0.0
        stop = t if self.end is None else min(t, self.end)
        return (stop - self.start) * self.rate


@dataclass(frozen=True)
class MotionProfile:
    kind: ProfileKind
    phases: Tuple[RatePhase, ...] = field(default_factory=tuple)
    coefficients: Tuple[float, ...] = field(default_factory=tuple)

    @classmethod
    def from_phases(cls, phases: Sequence[Tuple[float, Optional[float], float]]) -> "MotionProfile":
        built = tuple(RatePhase(start=float(s), end=None if e is None else float(e), rate=float(r)) for s, e, r in phases)
        if not built:
            raise ValueError("A phase profile needs at least one phase.")
        if built[0].start != 0.0:
            raise ValueError(f"First phase must start at 0, got {built[0].start}")
        for prev, nxt in zip(built, built[1:]):
            if prev.end is None:
                raise ValueError("Only the last phase may be open-ended.")
            if prev.end != nxt.start:
                raise ValueError(f"Phases are not contiguous: {prev.end} != {nxt.start}")
        for phase in built:
            if phase.rate < 0:
                raise ValueError(f"Negative rate {phase.rate} would make distance decrease.")
            if phase.end is not None and phase.end <= phase.start:
                raise ValueError(f"Empty phase [{phase.start}, {phase.end})")
        return cls(kind=ProfileKind.PHASES, phases=built)

    @classmethod
    def closed_form(cls, linear: float, quadratic: float) -> "MotionProfile":
        if linear < 0 or quadratic < 0:
            raise ValueError("Closed-form coefficients must be non-negative.")
        return cls(kind=ProfileKind.CLOSED_FORM, coefficients=(float(linear), float(quadratic)))

    def boundaries(self) -> Tuple[float, ...]:
        """Phase change times (excluding 0); empty for closed-form profiles."""
        if self.kind is not ProfileKind.PHASES:
            return ()
        return tuple(phase.end for phase in self.phases if phase.end is not None)
