"""Automatic substitutions and team scoring for a single game."""

import logging
from typing import Dict, List, Mapping, Optional, Union

from .constants import (
    DNP_MINUTES,
    FORMATION_LIMITS,
    OUTFIELD_POSITIONS,
    SUB_FALLBACK_ORDER,
)
from .models import AutosubResult, PlayerEvents, PlayerLite, PositionCounts, TeamData
from .scoring import calculate_points

logger = logging.getLogger('liigafpl.autosub')

EventsById = Mapping[Union[int, str], PlayerEvents]


def played(events: Optional[PlayerEvents]) -> bool:
    """A player played if they have an event record with minutes other than '0'."""
    return events is not None and events.minutes != DNP_MINUTES


def within_max(counts: PositionCounts) -> bool:
    """Check no position is above its maximum on the pitch."""
    return all(counts.get(pos) <= limit for pos, (_, limit) in FORMATION_LIMITS.items())


def can_reach_minimums(counts: PositionCounts, remaining_slots: int) -> bool:
    """
    Check the outfield minimums can still be met.

    The shortfall below each outfield minimum has to fit in the DNP
    starter slots that are still waiting for a replacement.
    """
    shortfall = sum(
        max(0, FORMATION_LIMITS[pos][0] - counts.get(pos)) for pos in OUTFIELD_POSITIONS
    )
    return shortfall <= remaining_slots


def get_events(events_by_id: EventsById, player_id: int) -> Optional[PlayerEvents]:
    """Look up a player's events by int or string key."""
    events = events_by_id.get(player_id)
    if events is None:
        events = events_by_id.get(str(player_id))
    return events


def score_team_with_autosub(
    team: TeamData,
    players_by_id: Mapping[int, PlayerLite],
    events_by_id: EventsById,
) -> AutosubResult:
    """
    Score a squad for one game, bringing bench players on for starters who did not play.

    The goalkeeper slot is resolved first: the starting GK if they played,
    else the bench GK if they played, else nobody. Outfield starters who
    played are credited directly and the rest queue up per position in
    starting XI order. Bench outfield players are then tried strictly in
    bench order; each one is accepted only if the formation stays within
    its maximums and the remaining minimums can still be reached with the
    DNP slots left over. An accepted substitute replaces the first DNP
    starter of their own position, falling back through SUB_FALLBACK_ORDER.

    Unknown player ids are skipped and missing event records count as
    did not play. Illegal substitutions are skipped, never raised.

    Args:
        team: Starting XI and bench ids
        players_by_id: Player catalog keyed by id
        events_by_id: Event records keyed by player id (int or str)

    Returns:
        AutosubResult with the total, substitutions and final lineup
    """
    starters = list(team.starting_xi_ids or [])
    bench = list(team.bench_ids or [])

    def position_of(player_id: int) -> Optional[str]:
        player = players_by_id.get(player_id)
        return player.position if player else None

    result = AutosubResult(final_bench_ids=list(bench))
    counts = PositionCounts()

    def credit(player_id: int, position: str, events: PlayerEvents) -> None:
        points = calculate_points(position, events)
        result.player_points[player_id] = points
        result.final_starting_xi_ids.append(player_id)
        result.total += points

    def swap_into_bench(bench_id: int, starter_id: int) -> None:
        for i, slot_id in enumerate(result.final_bench_ids):
            if slot_id == bench_id:
                result.final_bench_ids[i] = starter_id
                break

    starter_gk = next((pid for pid in starters if position_of(pid) == 'GK'), None)
    bench_gk = next((pid for pid in bench if position_of(pid) == 'GK'), None)

    # Goalkeeper slot
    if starter_gk is not None:
        gk_events = get_events(events_by_id, starter_gk)
        bench_gk_events = get_events(events_by_id, bench_gk) if bench_gk is not None else None
        if played(gk_events):
            credit(starter_gk, 'GK', gk_events)
            counts = counts.add('GK')
        elif played(bench_gk_events):
            logger.debug(f'GK {starter_gk} did not play, bench GK {bench_gk} comes on')
            credit(bench_gk, 'GK', bench_gk_events)
            counts = counts.add('GK')
            result.subs_used.append(bench_gk)
            result.subs_out.append(starter_gk)
            swap_into_bench(bench_gk, starter_gk)
        else:
            logger.debug(f'No goalkeeper played for squad with GK {starter_gk}')

    # Outfield starters
    dnp_starters: Dict[str, List[int]] = {pos: [] for pos in OUTFIELD_POSITIONS}
    for starter_id in starters:
        position = position_of(starter_id)
        if position is None or position == 'GK':
            continue

        events = get_events(events_by_id, starter_id)
        if played(events):
            credit(starter_id, position, events)
            counts = counts.add(position)
        else:
            dnp_starters[position].append(starter_id)

    # Bench outfield players in priority order
    for bench_id in bench:
        position = position_of(bench_id)
        if position is None or position == 'GK' or bench_id in result.subs_used:
            continue

        events = get_events(events_by_id, bench_id)
        if not played(events):
            continue

        missing = sum(len(queue) for queue in dnp_starters.values())
        if missing == 0:
            break

        tentative = counts.add(position)
        if not within_max(tentative):
            logger.debug(f'Bench {position} {bench_id} rejected: formation maximum exceeded')
            continue
        if not can_reach_minimums(tentative, missing - 1):
            logger.debug(f'Bench {position} {bench_id} rejected: minimums no longer reachable')
            continue

        replaced_position = next(pos for pos in SUB_FALLBACK_ORDER[position] if dnp_starters[pos])
        out_id = dnp_starters[replaced_position].pop(0)

        counts = tentative
        credit(bench_id, position, events)
        result.subs_used.append(bench_id)
        result.subs_out.append(out_id)
        swap_into_bench(bench_id, out_id)
        logger.debug(f'Bench {position} {bench_id} replaces {replaced_position} {out_id}')

    result.counts = counts
    return result
