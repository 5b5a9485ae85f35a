from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set


@dataclass(frozen=True)
class NarrativeCue:
    key: str
    competitor_id: str
    after: float
    bubble: str
    sfx: Optional[str] = None


# Lines up with the phase changes in roster.PROFILES.
DEFAULT_CUES: Sequence[NarrativeCue] = (
    NarrativeCue("rabbit_sleep", "rabbit", 5.0, "Zzz... 💤"),
    NarrativeCue("rabbit_wake", "rabbit", 10.0, "Oh no, I overslept!! 💦", sfx="💨"),
    NarrativeCue("cheetah_sprint1", "cheetah", 5.0, "Time to really run!! 🔥", sfx="⚡️"),
    NarrativeCue("cheetah_jog", "cheetah", 10.0, "Let me catch my breath~ 🎵"),
    NarrativeCue("cheetah_sprint2", "cheetah", 15.0, "Final sprint!! 🚀", sfx="🔥"),
    NarrativeCue("snail_boost", "snail", 8.0, "Super booster!! 🌪️", sfx="✨"),
    NarrativeCue("dog_lead", "dog", 14.0, "I'm in first place!! 🐶"),
)

RACE_PHRASES = (
    "Heave ho!",
    "Shall we start running?!",
    "I'm number one!",
    "Just a little more!",
    "Whoosh~ whoosh~",
    "Out of my way~",
    "Catch me if you can~",
    "Hup hup!",
)


class NarrativeTracker:
    """Hands out each cue once, the first time the race clock passes it."""

    def __init__(self, cues: Sequence[NarrativeCue] = DEFAULT_CUES, competitor_ids: Optional[Sequence[str]] = None) -> None:
        if competitor_ids is not None:
            allowed = set(competitor_ids)
            cues = [cue for cue in cues if cue.competitor_id in allowed]
        self.cues = tuple(cues)
        self._fired: Set[str] = set()

    def due(self, race_time: float) -> List[NarrativeCue]:
        fired = []
        for cue in self.cues:
            if cue.key in self._fired:
                continue
            if race_time > cue.after:
                self._fired.add(cue.key)
                fired.append(cue)
        return fired

    def reset(self) -> None:
        self._fired.clear()
