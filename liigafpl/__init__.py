from .models import (
    AutosubResult,
    PlayerEvents,
    PlayerLite,
    PlayerScore,
    PositionCounts,
    TeamData,
)
from .scoring import calculate_points, score_player
from .autosub import played, score_team_with_autosub
from .schemas import PlayerEventInput, SquadSelection, normalize_events_by_id
from .base_scorer import GameScorer
from .finalize import (
    finalize_game,
    finalize_round,
    find_game_result_paths,
    load_game_events,
    load_player_catalog,
    load_squads,
    save_game_results,
    save_round_totals,
    update_leaderboard,
)

__all__ = [
    # Models
    'AutosubResult',
    'PlayerEvents',
    'PlayerLite',
    'PlayerScore',
    'PositionCounts',
    'TeamData',
    # Scoring
    'calculate_points',
    'score_player',
    'played',
    'score_team_with_autosub',
    'GameScorer',
    # Input normalization
    'PlayerEventInput',
    'SquadSelection',
    'normalize_events_by_id',
    # Finalization
    'finalize_game',
    'finalize_round',
    'find_game_result_paths',
    'load_game_events',
    'load_player_catalog',
    'load_squads',
    'save_game_results',
    'save_round_totals',
    'update_leaderboard',
]
