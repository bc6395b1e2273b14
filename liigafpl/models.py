"""Data models for the liigafpl scoring engine."""

from dataclasses import dataclass, field, replace
from typing import Dict, List


@dataclass(frozen=True)
class PlayerLite:
    """Catalog reference for a player: id and position only."""
    id: int
    position: str  # GK, DEF, MID or FWD


@dataclass
class TeamData:
    """A manager's squad selection for a game."""
    starting_xi_ids: List[int] = field(default_factory=list)
    bench_ids: List[int] = field(default_factory=list)  # priority order, slot 0 is the GK


@dataclass
class PlayerEvents:
    """Match event record for one player in one game.

    The default record is a player who did not play.
    """
    minutes: str = '0'  # '0', '1_59' or '60+'
    goals: int = 0
    assists: int = 0
    clean_sheet: bool = False
    penalties_missed: int = 0
    penalties_saved: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    own_goals: int = 0


@dataclass(frozen=True)
class PositionCounts:
    """Players on the pitch per position.

    Frozen so a tentative substitution builds a new value with add()
    and only replaces the committed counts once it is accepted.
    """
    GK: int = 0
    DEF: int = 0
    MID: int = 0
    FWD: int = 0

    def get(self, position: str) -> int:
        return getattr(self, position)

    def add(self, position: str, delta: int = 1) -> 'PositionCounts':
        return replace(self, **{position: self.get(position) + delta})

    def as_dict(self) -> Dict[str, int]:
        return {'GK': self.GK, 'DEF': self.DEF, 'MID': self.MID, 'FWD': self.FWD}


@dataclass
class AutosubResult:
    """Outcome of scoring one squad for one game."""
    total: int = 0
    subs_used: List[int] = field(default_factory=list)  # bench ids brought on, in order
    subs_out: List[int] = field(default_factory=list)   # starter ids they replaced
    final_starting_xi_ids: List[int] = field(default_factory=list)
    final_bench_ids: List[int] = field(default_factory=list)
    counts: PositionCounts = field(default_factory=PositionCounts)
    player_points: Dict[int, int] = field(default_factory=dict)  # credited points per player id


@dataclass
class PlayerScore:
    """Container for a single player's score breakdown."""
    player_id: int
    position: str
    total_points: int = 0
    breakdown: Dict[str, int] = field(default_factory=dict)
    found_in_events: bool = False
    played: bool = False
