"""Game finalization, round totals and the leaderboard.

Squads, the player catalog and game events are read from JSON files in the
data directory. Finalized results are written back as JSON, one file per
game, and rounds and the leaderboard are reduced from those files.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

from .base_scorer import GameScorer
from .models import AutosubResult, PlayerEvents, PlayerLite, TeamData
from .schemas import PlayersFile, SquadsFile, normalize_events_by_id
from .utils import load_json, save_json

logger = logging.getLogger('liigafpl.finalize')

GAME_RESULT_PATTERN = re.compile(r'^game_(\d+)\.json$')


def load_player_catalog(players_path: str | Path) -> dict[int, PlayerLite]:
    """Load the player catalog from players.json.

    Returns:
        Dict mapping player id to PlayerLite
    """
    catalog = load_json(players_path, schema=PlayersFile)
    return {player.id: player.to_lite() for player in catalog.players}


def load_squads(
    squads_path: str | Path, managers: Optional[list[str]] = None
) -> dict[str, TeamData]:
    """Load saved squads from squads.json.

    Args:
        squads_path: Path to squads.json
        managers: If given, return exactly these managers in this order.
            Names match case-insensitively and a manager without a saved
            squad gets an empty one, which scores 0.

    Returns:
        Dict mapping manager name to TeamData
    """
    squads_file = load_json(squads_path, schema=SquadsFile)
    squads = {name: squad.to_team_data() for name, squad in squads_file.squads.items()}

    if managers is None:
        return squads

    by_canonical = {name.strip().lower(): team for name, team in squads.items()}
    selected = {}
    for manager in managers:
        team = by_canonical.get(manager.strip().lower())
        if team is None:
            logger.warning(f'No saved squad for {manager}')
            team = TeamData()
        selected[manager] = team
    return selected


def load_game_events(events_path: str | Path, game_id: int) -> dict[int, PlayerEvents]:
    """Load and normalize the event records for a game.

    Args:
        events_path: Path to the game's events file (e.g., data/games/game_3_events.json)
        game_id: Game id (for validation)

    Returns:
        Dict mapping player id to PlayerEvents
    """
    data = load_json(events_path)
    if not isinstance(data, dict):
        raise ValueError(f'Events file must hold an object: {events_path}')

    if data.get('gameId') != game_id:
        logger.warning(
            f"Events file game ({data.get('gameId')}) doesn't match expected game ({game_id})"
        )

    raw = data.get('eventsById', data.get('events'))
    if raw is None:
        logger.warning(f'No events recorded for game {game_id}')
        raw = {}
    return normalize_events_by_id(raw)


def finalize_game(
    game_id: int,
    squads: dict[str, TeamData],
    players_by_id: dict[int, PlayerLite],
    events_by_id: dict[int, PlayerEvents],
    verbose: bool = True,
) -> dict[str, AutosubResult]:
    """Score every manager's squad for a game.

    Returns:
        Dict mapping manager name to AutosubResult
    """
    scorer = GameScorer(game_id, players_by_id, events_by_id)
    return scorer.score_managers(squads, verbose=verbose)


def save_game_results(
    output_path: str | Path,
    game_id: int,
    results: dict[str, AutosubResult],
) -> None:
    """Save a finalized game's results to JSON.

    Args:
        output_path: Path to output JSON file
        game_id: Game id
        results: Results from finalize_game()
    """
    rows: list[dict[str, Any]] = [
        {
            'manager': manager,
            'points': result.total,
            'subsUsed': result.subs_used,
            'subsOut': result.subs_out,
            'finalStartingXIIds': result.final_starting_xi_ids,
            'finalBenchIds': result.final_bench_ids,
            'counts': result.counts.as_dict(),
        }
        for manager, result in results.items()
    ]

    for rank, row in enumerate(sorted(rows, key=lambda r: r['points'], reverse=True), 1):
        row['rank'] = rank

    save_json(
        output_path,
        {
            'game_id': game_id,
            'finalized_at': datetime.now(timezone.utc).isoformat(),
            'results': rows,
        },
    )
    logger.info(f'Game {game_id} results saved to {output_path}')


def load_game_points(result_path: str | Path) -> dict[str, int]:
    """Read manager -> points from a saved game result file."""
    data = load_json(result_path)
    return {row['manager']: int(row.get('points', 0)) for row in data.get('results', [])}


def find_game_result_paths(results_dir: str | Path) -> list[Path]:
    """List finalized game result files in game id order."""
    results_dir = Path(results_dir)
    if not results_dir.exists():
        return []

    found = []
    for path in results_dir.iterdir():
        match = GAME_RESULT_PATTERN.match(path.name)
        if match:
            found.append((int(match.group(1)), path))
    return [path for _, path in sorted(found)]


def _sum_points(game_result_paths: Iterable[str | Path]) -> tuple[dict[str, int], dict[str, int], int]:
    """Sum points per manager over result files, skipping missing ones.

    Returns:
        Tuple of (totals, games_played_per_manager, games_counted)
    """
    totals: dict[str, int] = {}
    games: dict[str, int] = {}
    counted = 0

    for result_path in game_result_paths:
        result_path = Path(result_path)
        if not result_path.exists():
            logger.warning(f'Game result not found, skipping: {result_path}')
            continue

        counted += 1
        for manager, points in load_game_points(result_path).items():
            totals[manager] = totals.get(manager, 0) + points
            games[manager] = games.get(manager, 0) + 1

    return totals, games, counted


def finalize_round(round_number: int, game_result_paths: Iterable[str | Path]) -> dict[str, int]:
    """Total each manager's points over the games of a round.

    Args:
        round_number: Round (gameweek) number
        game_result_paths: Result files of the round's games

    Returns:
        Dict mapping manager name to round total
    """
    totals, _, counted = _sum_points(game_result_paths)
    logger.info(f'Round {round_number}: totals over {counted} games')
    return totals


def save_round_totals(
    output_path: str | Path,
    round_number: int,
    totals: dict[str, int],
    game_ids: list[int],
) -> None:
    """Save round totals to JSON."""
    save_json(
        output_path,
        {
            'round': round_number,
            'game_ids': game_ids,
            'finalized_at': datetime.now(timezone.utc).isoformat(),
            'results': [
                {'manager': manager, 'points': points} for manager, points in totals.items()
            ],
        },
    )


def update_leaderboard(
    leaderboard_path: str | Path,
    game_result_paths: Iterable[str | Path],
) -> list[dict[str, Any]]:
    """Rebuild the leaderboard from all finalized games.

    Rows are sorted by total descending, then manager name.

    Args:
        leaderboard_path: Path to leaderboard.json output
        game_result_paths: Result files of every finalized game

    Returns:
        Leaderboard rows with manager, total, games and rank
    """
    totals, games, counted = _sum_points(game_result_paths)

    rows = [
        {'manager': manager, 'total': total, 'games': games[manager]}
        for manager, total in totals.items()
    ]
    rows.sort(key=lambda r: (-r['total'], r['manager'].lower()))
    for rank, row in enumerate(rows, 1):
        row['rank'] = rank

    save_json(
        leaderboard_path,
        {
            'updated_at': datetime.now(timezone.utc).isoformat(),
            'games_finalized': counted,
            'rows': rows,
        },
    )

    return rows
