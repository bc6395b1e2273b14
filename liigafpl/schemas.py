"""Pydantic schemas for JSON data validation."""

import logging
import math
import re
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import BENCH_SIZE, DNP_MINUTES, MINUTES_BUCKETS, STARTING_XI_SIZE
from .models import PlayerEvents, PlayerLite, TeamData

logger = logging.getLogger('liigafpl.schemas')

COUNTER_FIELDS = (
    'goals',
    'assists',
    'penalties_missed',
    'penalties_saved',
    'yellow_cards',
    'red_cards',
    'own_goals',
)


def _to_count(value: Any) -> int:
    """Truncate to a non-negative int; anything non-numeric counts as 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(0, value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number):
        return 0
    return max(0, int(number))


def _parse_player_id(key: Any) -> int | None:
    """Parse a positive integer player id from an int or numeric string key."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key > 0 else None
    text = str(key).strip()
    if not re.fullmatch(r'\d+', text, re.ASCII):
        return None
    player_id = int(text)
    return player_id if player_id > 0 else None


class PlayerEventInput(BaseModel):
    """
    Admin-entered match events for one player.

    Accepts the stored short keys (penMissed, yellow, ...) or the field
    names. Input is normalized rather than rejected: an unknown minutes
    bucket becomes '0' and counters are truncated to non-negative ints.
    """

    minutes: str = DNP_MINUTES
    goals: int = 0
    assists: int = 0
    clean_sheet: bool = Field(default=False, alias='cleanSheet')
    penalties_missed: int = Field(default=0, alias='penMissed')
    penalties_saved: int = Field(default=0, alias='penSaved')
    yellow_cards: int = Field(default=0, alias='yellow')
    red_cards: int = Field(default=0, alias='red')
    own_goals: int = Field(default=0, alias='ownGoals')

    @field_validator('minutes', mode='before')
    @classmethod
    def normalize_minutes(cls, v):
        """Force minutes into one of the known buckets."""
        if isinstance(v, str) and v in MINUTES_BUCKETS:
            return v
        return DNP_MINUTES

    @field_validator(*COUNTER_FIELDS, mode='before')
    @classmethod
    def normalize_counter(cls, v):
        return _to_count(v)

    @field_validator('clean_sheet', mode='before')
    @classmethod
    def normalize_clean_sheet(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ('true', '1', 'yes')
        return bool(v)

    def to_events(self) -> PlayerEvents:
        return PlayerEvents(**self.model_dump())

    class Config:
        populate_by_name = True
        extra = 'ignore'


def normalize_events_by_id(raw: Any) -> dict[int, PlayerEvents]:
    """
    Normalize a raw eventsById payload for one game.

    Keys that are not positive integer ids are dropped. A value that is not
    an object is treated as an empty record, i.e. did not play.

    Args:
        raw: Mapping of player id (str or int) to event dict

    Returns:
        Dict mapping int player id to PlayerEvents

    Raises:
        ValueError: If raw is not a mapping
    """
    if not isinstance(raw, dict):
        raise ValueError('eventsById must be an object')

    normalized: dict[int, PlayerEvents] = {}
    for key, value in raw.items():
        player_id = _parse_player_id(key)
        if player_id is None:
            logger.warning(f'Skipping events for invalid player id: {key!r}')
            continue
        payload = value if isinstance(value, dict) else {}
        normalized[player_id] = PlayerEventInput.model_validate(payload).to_events()

    return normalized


class SquadSelection(BaseModel):
    """Saved squad for a manager: starting XI and bench in priority order."""

    starting_xi_ids: list[int] = Field(
        ..., alias='startingXIIds', max_length=STARTING_XI_SIZE
    )
    bench_ids: list[int] = Field(default_factory=list, alias='benchIds', max_length=BENCH_SIZE)

    @field_validator('starting_xi_ids', 'bench_ids')
    @classmethod
    def validate_ids(cls, v):
        """Ids must be positive and unique within the list."""
        if any(player_id <= 0 for player_id in v):
            raise ValueError('Ids must be positive')
        if len(set(v)) != len(v):
            raise ValueError('Ids must be unique')
        return v

    @model_validator(mode='after')
    def validate_no_overlap(self):
        """A bench player cannot also be in the starting XI."""
        overlap = set(self.starting_xi_ids) & set(self.bench_ids)
        if overlap:
            raise ValueError(f'benchIds cannot include starting XI players: {sorted(overlap)}')
        return self

    def to_team_data(self) -> TeamData:
        return TeamData(
            starting_xi_ids=list(self.starting_xi_ids),
            bench_ids=list(self.bench_ids),
        )

    class Config:
        populate_by_name = True
        extra = 'forbid'


class SquadsFile(BaseModel):
    """Complete squads.json file structure."""

    squads: dict[str, SquadSelection]

    class Config:
        extra = 'forbid'


class CatalogPlayer(BaseModel):
    """Player in the player catalog."""

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    position: str = Field(..., pattern=r'^(GK|DEF|MID|FWD)$')
    team_id: int | None = Field(default=None, alias='teamId')
    value: float | None = Field(default=None, ge=0)

    def to_lite(self) -> PlayerLite:
        return PlayerLite(id=self.id, position=self.position)

    class Config:
        populate_by_name = True
        extra = 'ignore'


class PlayersFile(BaseModel):
    """Complete players.json file structure."""

    players: list[CatalogPlayer]

    @field_validator('players')
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure no player id appears twice."""
        seen = set()
        for player in v:
            if player.id in seen:
                raise ValueError(f'Duplicate player id: {player.id}')
            seen.add(player.id)
        return v

    class Config:
        extra = 'forbid'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    league_name: str = Field(..., min_length=1)
    current_season: int = Field(..., ge=2020, le=2100)
    managers: list[str] = Field(..., min_length=1)
    rounds: dict[str, list[int]] = Field(default_factory=dict)

    @field_validator('managers')
    @classmethod
    def validate_managers(cls, v):
        """Manager names are compared case-insensitively, so they must be unique that way."""
        lowered = [name.strip().lower() for name in v]
        if any(not name for name in lowered):
            raise ValueError('Manager names cannot be blank')
        if len(set(lowered)) != len(lowered):
            raise ValueError('Manager names must be unique')
        return v

    @field_validator('rounds')
    @classmethod
    def validate_rounds(cls, v):
        """Round keys are round numbers and game ids are positive."""
        for round_key, game_ids in v.items():
            if not round_key.isdigit() or int(round_key) < 1:
                raise ValueError(f'Invalid round: {round_key}')
            if any(game_id < 1 for game_id in game_ids):
                raise ValueError(f'Invalid game id in round {round_key}')
        return v

    class Config:
        extra = 'forbid'
