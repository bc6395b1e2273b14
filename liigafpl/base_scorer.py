"""Game scorer shared by the finalization flow and the CLI."""

import logging
from typing import Mapping

from .autosub import EventsById, get_events, played, score_team_with_autosub
from .models import AutosubResult, PlayerLite, PlayerScore, TeamData
from .scoring import score_player

logger = logging.getLogger('liigafpl.base_scorer')


class GameScorer:
    """
    Scores squads for one game.

    Holds the player catalog and the game's event records so every
    manager's squad is scored against the same data.
    """

    def __init__(
        self,
        game_id: int,
        players_by_id: Mapping[int, PlayerLite],
        events_by_id: EventsById,
    ):
        """
        Initialize scorer.

        Args:
            game_id: Game being scored
            players_by_id: Player catalog keyed by id
            events_by_id: Event records for this game keyed by player id
        """
        self.game_id = game_id
        self.players_by_id = players_by_id
        self.events_by_id = events_by_id

    def score_player(self, player_id: int) -> PlayerScore:
        """
        Score a single player regardless of squad or substitutions.

        Unknown players score 0 with position 'UNKNOWN'.
        """
        player = self.players_by_id.get(player_id)
        if player is None:
            return PlayerScore(player_id=player_id, position='UNKNOWN')

        result = PlayerScore(player_id=player_id, position=player.position)
        events = get_events(self.events_by_id, player_id)
        if events is not None:
            result.found_in_events = True
            result.played = played(events)
            result.total_points, result.breakdown = score_player(player.position, events)
        return result

    def score_squad(self, team: TeamData) -> AutosubResult:
        """Score one squad with automatic substitutions."""
        return score_team_with_autosub(team, self.players_by_id, self.events_by_id)

    def score_managers(
        self, squads: Mapping[str, TeamData], verbose: bool = True
    ) -> dict[str, AutosubResult]:
        """
        Score every manager's squad for this game.

        Args:
            squads: Dict mapping manager name to squad selection
            verbose: Whether to print detailed output

        Returns:
            Dict mapping manager name to AutosubResult, in squads order
        """
        if verbose:
            print(f'\nGame {self.game_id}: scoring {len(squads)} squads')

        results = {}

        for manager, team in squads.items():
            result = self.score_squad(team)
            results[manager] = result
            logger.info(
                f'Game {self.game_id} {manager}: {result.total} pts, subs {result.subs_used}'
            )

            if verbose:
                print(f'\n{"=" * 60}')
                print(f'Scoring: {manager}')
                print('=' * 60)
                for player_id in result.final_starting_xi_ids:
                    player = self.players_by_id[player_id]
                    sub_mark = ' [SUB]' if player_id in result.subs_used else ''
                    print(
                        f'  {player.position} {player_id}: '
                        f'{result.player_points[player_id]} pts{sub_mark}'
                    )
                for out_id, in_id in zip(result.subs_out, result.subs_used):
                    print(f'      {out_id} -> {in_id}')
                print(f'\n  TOTAL: {result.total} points')

        return results
