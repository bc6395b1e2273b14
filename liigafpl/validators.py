"""Validation functions for squads and scoring results."""

from typing import Mapping

from .constants import (
    BENCH_GK_SLOT,
    BENCH_SIZE,
    FORMATION_LIMITS,
    OUTFIELD_POSITIONS,
    POSITIONS,
    STARTING_XI_SIZE,
)
from .models import AutosubResult, PlayerLite, PlayerScore, TeamData


def _duplicates(ids: list[int]) -> list[int]:
    seen = set()
    duplicates = set()
    for player_id in ids:
        if player_id in seen:
            duplicates.add(player_id)
        seen.add(player_id)
    return sorted(duplicates)


def validate_squad(
    manager: str, team: TeamData, players_by_id: Mapping[int, PlayerLite]
) -> list[str]:
    """
    Validate that a squad selection is a legal lineup.

    Checks:
    - Starting XI has 11 players and the bench 4
    - No duplicate ids, no player both starting and on the bench
    - Every id is in the player catalog
    - Exactly one starting goalkeeper
    - Starting outfield counts within formation limits
    - Bench slot 0 is a goalkeeper, the other bench slots are outfield

    The scoring engine copes with squads failing these checks; this is
    for reporting bad data before a game is finalized.

    Args:
        manager: Manager name (used in messages)
        team: Squad selection to validate
        players_by_id: Player catalog keyed by id

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    starters = team.starting_xi_ids
    bench = team.bench_ids

    if len(starters) != STARTING_XI_SIZE:
        errors.append(f'{manager} has {len(starters)} starters (expected {STARTING_XI_SIZE})')
    if len(bench) != BENCH_SIZE:
        errors.append(f'{manager} has {len(bench)} bench players (expected {BENCH_SIZE})')

    for label, ids in (('starting XI', starters), ('bench', bench)):
        duplicates = _duplicates(ids)
        if duplicates:
            errors.append(f'{manager} {label} has duplicate ids: {duplicates}')

    overlap = sorted(set(starters) & set(bench))
    if overlap:
        errors.append(f'{manager} has players both starting and on the bench: {overlap}')

    unknown = [pid for pid in starters + bench if pid not in players_by_id]
    if unknown:
        errors.append(f'{manager} has unknown player ids: {unknown}')

    # Starting formation
    starting_counts = {pos: 0 for pos in POSITIONS}
    for pid in starters:
        player = players_by_id.get(pid)
        if player and player.position in starting_counts:
            starting_counts[player.position] += 1

    if starting_counts['GK'] != 1:
        errors.append(f'{manager} starts {starting_counts["GK"]} GK (expected 1)')

    for pos in OUTFIELD_POSITIONS:
        low, high = FORMATION_LIMITS[pos]
        count = starting_counts[pos]
        if count < low:
            errors.append(f'{manager} starts {count} {pos} (min {low})')
        elif count > high:
            errors.append(f'{manager} starts {count} {pos} (max {high})')

    # Bench shape
    for slot, pid in enumerate(bench):
        player = players_by_id.get(pid)
        if player is None:
            continue
        if slot == BENCH_GK_SLOT and player.position != 'GK':
            errors.append(f'{manager} bench slot {slot} must be a GK, got {player.position}')
        elif slot != BENCH_GK_SLOT and player.position == 'GK':
            errors.append(f'{manager} bench slot {slot} must be an outfield player')

    return errors


def validate_player_score(score: PlayerScore) -> list[str]:
    """
    Check that a player's score is reasonable and internally consistent.

    Sanity checks:
    - Total points in reasonable range (-15 to 50)
    - Breakdown adds up to the total
    - A player who did not play has no points

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    if score.total_points > 50:
        warnings.append(
            f'Player {score.player_id} scored {score.total_points} pts (unusually high - check events)'
        )
    elif score.total_points < -15:
        warnings.append(
            f'Player {score.player_id} scored {score.total_points} pts (unusually low - check events)'
        )

    breakdown_sum = sum(score.breakdown.values())
    if breakdown_sum != score.total_points:
        warnings.append(
            f'Player {score.player_id} breakdown sum ({breakdown_sum}) != total ({score.total_points})'
        )

    if not score.played and score.total_points != 0:
        warnings.append(
            f'Player {score.player_id} did not play but has {score.total_points} pts'
        )

    return warnings


def validate_game_result(manager: str, result: AutosubResult) -> tuple[list[str], list[str]]:
    """
    Check a squad's game result.

    Errors mean the substitution rules were broken; warnings flag
    results worth a second look.

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    for pos, (_, high) in FORMATION_LIMITS.items():
        count = result.counts.get(pos)
        if count > high:
            errors.append(f'{manager} ends with {count} {pos} on the pitch (max {high})')

    duplicates = _duplicates(result.subs_used)
    if duplicates:
        errors.append(f'{manager} has bench players subbed on twice: {duplicates}')

    if len(result.subs_used) != len(result.subs_out):
        errors.append(
            f'{manager} has {len(result.subs_used)} subs on but {len(result.subs_out)} off'
        )

    credited = sum(result.player_points.values())
    if credited != result.total:
        errors.append(f'{manager} credited points ({credited}) != total ({result.total})')

    if len(result.final_starting_xi_ids) < STARTING_XI_SIZE:
        warnings.append(
            f'{manager} finished with {len(result.final_starting_xi_ids)} players on the pitch'
        )
    if result.total < 0:
        warnings.append(f'{manager} scored {result.total} pts (negative total)')
    elif result.total > 150:
        warnings.append(f'{manager} scored {result.total} pts (unusually high - check events)')

    return errors, warnings


def validate_all_results(results: dict[str, AutosubResult]) -> tuple[list[str], list[str]]:
    """
    Validate every manager's result for a game.

    Args:
        results: Dict of manager -> AutosubResult

    Returns:
        Tuple of (errors, warnings)
        - errors: Broken results that should stop finalization
        - warnings: Issues to review but not block finalization
    """
    errors: list[str] = []
    warnings: list[str] = []

    for manager, result in results.items():
        result_errors, result_warnings = validate_game_result(manager, result)
        errors.extend(result_errors)
        warnings.extend(result_warnings)

    return errors, warnings
