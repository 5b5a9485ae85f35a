from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class TelemetryRacerFrame:
    competitor_id: str
    name: str
    distance: int
    distance_delta: int
    position_pct: float
    finished: bool
    finish_time: Optional[float] = None
    cues: List[str] = field(default_factory=list)


@dataclass
class TelemetryFrame:
    tick: int
    time: float
    status: str
    racers: List[TelemetryRacerFrame] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TelemetryCollector:
    def __init__(self) -> None:
        self.frames: List[TelemetryFrame] = []

    def record_frame(self, frame: TelemetryFrame) -> None:
        self.frames.append(frame)

    def export(self) -> Sequence[TelemetryFrame]:
        return tuple(self.frames)

    def to_json_ready(self) -> List[Dict[str, Any]]:
        return [frame.to_dict() for frame in self.frames]

    def clear(self) -> None:
        self.frames.clear()
