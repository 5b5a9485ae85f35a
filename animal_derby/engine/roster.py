from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .data_models import Competitor, MotionProfile, Trait

ANIMALS: Tuple[Competitor, ...] = (
    Competitor(
        id="cheetah",
        name="Cheetah",
        emoji="🐆",
        base_speed=190,
        description="full of confidence",
        trait=Trait.FAST,
        color=0xFACC15,
    ),
    Competitor(
        id="dog",
        name="Puppy",
        emoji="🐕",
        base_speed=180,
        description="always cheerful",
        trait=Trait.STEADY,
        color=0xFB923C,
    ),
    Competitor(
        id="rabbit",
        name="Rabbit",
        emoji="🐇",
        base_speed=170,
        description="smiling a little too much",
        trait=Trait.LAZY,
        color=0xF9A8D4,
    ),
    Competitor(
        id="turtle",
        name="Turtle",
        emoji="🐢",
        base_speed=60,
        description="a bit of a daydreamer",
        trait=Trait.STEADY,
        color=0x22C55E,
    ),
    Competitor(
        id="snail",
        name="Snail",
        emoji="🐌",
        base_speed=20,
        description="crawling with all its might",
        trait=Trait.STEADY,
        color=0x60A5FA,
    ),
)

# --- Hand-authored motion profiles, one per animal ---
# cheetah: 3200 @ 17s, rabbit: 3200 @ 19s, dog: ~3200 @ 17.5s

PROFILES: Dict[str, MotionProfile] = {
    "cheetah": MotionProfile.from_phases(
        [
            (0, 5, 120),  # jog
            (5, 10, 300),  # sprint
            (10, 15, 120),  # jog
            (15, None, 250),  # final sprint
        ]
    ),
    "rabbit": MotionProfile.from_phases(
        [
            (0, 5, 250),  # fast start
            (5, 10, 0),  # nap
            (10, None, 217),  # 1950 left over 9s
        ]
    ),
    "dog": MotionProfile.closed_form(linear=150, quadratic=1.9),
    "turtle": MotionProfile.from_phases([(0, None, 60)]),
    "snail": MotionProfile.from_phases(
        [
            (0, 8, 15),
            (8, 10, 250),  # booster
            (10, None, 15),
        ]
    ),
}


class CompetitorRoster:
    """Ordered, read-only view over the competitors taking part in a race."""

    def __init__(self, competitors: Optional[Iterable[Competitor]] = None) -> None:
        members = tuple(competitors) if competitors is not None else ANIMALS
        index: Dict[str, Competitor] = {}
        for competitor in members:
            if competitor.id in index:
                raise ValueError(f"Duplicate competitor id '{competitor.id}'")
            index[competitor.id] = competitor
        self._members: Tuple[Competitor, ...] = members
        self._index = index

    def __iter__(self) -> Iterator[Competitor]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, competitor_id: object) -> bool:
        return competitor_id in self._index

    @property
    def ids(self) -> List[str]:
        return [competitor.id for competitor in self._members]

    def get(self, competitor_id: str) -> Optional[Competitor]:
        return self._index.get(competitor_id)

    def get_competitor(self, competitor_id: str) -> Competitor:
        competitor = self._index.get(competitor_id)
        if competitor is None:
            raise KeyError(f"Competitor '{competitor_id}' is not on the roster")
        return competitor

    def find(self, identifier: str) -> Optional[Competitor]:
        """Looks a competitor up by id, name or emoji (case-insensitive)."""
        if not identifier:
            return None
        lowered = identifier.strip().lower()
        for competitor in self._members:
            if lowered in (competitor.id, competitor.name.lower(), competitor.emoji):
                return competitor
        return None

    def subset(self, competitor_ids: Sequence[str]) -> "CompetitorRoster":
        return CompetitorRoster(self.get_competitor(cid) for cid in competitor_ids)


def get_profile(competitor_id: str) -> Optional[MotionProfile]:
    return PROFILES.get(competitor_id)


DEFAULT_ROSTER = CompetitorRoster()
