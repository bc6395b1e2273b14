"""Per-player point calculation."""

from typing import Dict, Tuple

from .constants import (
    ASSIST_POINTS,
    CLEAN_SHEET_POINTS,
    GOAL_POINTS,
    MINUTES_POINTS,
    OWN_GOAL_POINTS,
    PENALTY_MISS_POINTS,
    PENALTY_SAVE_POINTS,
    RED_CARD_POINTS,
    YELLOW_CARD_POINTS,
)
from .models import PlayerEvents


def score_player(position: str, events: PlayerEvents) -> Tuple[int, Dict[str, int]]:
    """
    Score one player's match events.

    Scoring:
        - Minutes: 1-59 minutes 1 pt, 60+ minutes 2 pts
        - Goals: GK 10 pts, DEF 6 pts, MID 5 pts, FWD 4 pts each
        - Assists: 3 pts each
        - Clean sheet: GK/DEF 4 pts, MID 1 pt, FWD 0 pts
        - Penalty saved: 3 pts each (goalkeepers only)
        - Penalty missed: -2 pts each
        - Yellow card: -1 pt each
        - Red card: -3 pts each
        - Own goal: -2 pts each

    Counters are expected to be non-negative integers already; see
    schemas.PlayerEventInput for normalizing raw input. The total is
    never clamped, so a red card alone scores negative.

    Args:
        position: GK, DEF, MID or FWD
        events: The player's event record for the game

    Returns:
        Tuple of (points, breakdown) where breakdown only holds non-zero rules
    """
    points = 0
    breakdown = {}

    # Minutes played
    minutes_pts = MINUTES_POINTS.get(events.minutes, 0)
    if minutes_pts:
        breakdown['minutes'] = minutes_pts
    points += minutes_pts

    # Goals
    if events.goals > 0:
        goal_pts = events.goals * GOAL_POINTS.get(position, 0)
        if goal_pts:
            breakdown['goals'] = goal_pts
        points += goal_pts

    # Assists
    assist_pts = events.assists * ASSIST_POINTS
    if assist_pts:
        breakdown['assists'] = assist_pts
    points += assist_pts

    # Clean sheet
    if events.clean_sheet:
        cs_pts = CLEAN_SHEET_POINTS.get(position, 0)
        if cs_pts:
            breakdown['clean_sheet'] = cs_pts
        points += cs_pts

    # Penalties
    pen_saved_pts = events.penalties_saved * PENALTY_SAVE_POINTS.get(position, 0)
    if pen_saved_pts:
        breakdown['penalties_saved'] = pen_saved_pts
    points += pen_saved_pts

    pen_missed_pts = events.penalties_missed * PENALTY_MISS_POINTS
    if pen_missed_pts:
        breakdown['penalties_missed'] = pen_missed_pts
    points += pen_missed_pts

    # Discipline
    yellow_pts = events.yellow_cards * YELLOW_CARD_POINTS
    if yellow_pts:
        breakdown['yellow_cards'] = yellow_pts
    points += yellow_pts

    red_pts = events.red_cards * RED_CARD_POINTS
    if red_pts:
        breakdown['red_cards'] = red_pts
    points += red_pts

    own_goal_pts = events.own_goals * OWN_GOAL_POINTS
    if own_goal_pts:
        breakdown['own_goals'] = own_goal_pts
    points += own_goal_pts

    return points, breakdown


def calculate_points(position: str, events: PlayerEvents) -> int:
    """Total fantasy points for one player's match events."""
    points, _ = score_player(position, events)
    return points
