"""League configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    The result is cached; call clear_config_cache() after editing the file.

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If the config file has an invalid structure

    Example:
        from liigafpl.config import get_config
        print(get_config().managers)
    """
    return load_json(CONFIG_PATH, schema=LeagueConfig)


def get_league_name() -> str:
    return get_config().league_name


def get_current_season() -> int:
    """Get the current season from config."""
    return get_config().current_season


def get_managers() -> list[str]:
    """Get the managers whose squads are scored, in config order."""
    return list(get_config().managers)


def get_round_games(round_number: int) -> list[int]:
    """Get the game ids scheduled for a round (empty if the round is unknown)."""
    return list(get_config().rounds.get(str(round_number), []))


def clear_config_cache() -> None:
    """Clear the configuration cache so the next get_config() rereads the file."""
    get_config.cache_clear()
