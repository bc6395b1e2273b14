#!/usr/bin/env python3
"""
Liiga Fantasy Autoscorer CLI

Finalizes games, totals rounds and rebuilds the leaderboard from the JSON
files in the data directory.

Inputs:
    data/players.json                  player catalog
    data/squads.json                   saved squads per manager
    data/games/game_{N}_events.json    admin-entered events for game N

Outputs:
    data/results/game_{N}.json         points and substitutions per manager
    data/results/round_{R}.json        round totals
    data/results/leaderboard.json      totals over all finalized games

Usage:
    python autoscorer.py --game 3
    python autoscorer.py --game 3 --update-leaderboard
    python autoscorer.py --round 1
    python autoscorer.py --round 1 --games 1 2 3
"""

import argparse
import logging
import sys
from pathlib import Path

from liigafpl import (
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
from liigafpl.config import get_league_name, get_managers, get_round_games
from liigafpl.logging_config import setup_logging
from liigafpl.validators import validate_all_results, validate_squad


def run_game(args, data_dir: Path, results_dir: Path, logger: logging.Logger) -> int:
    """Finalize one game. Returns the process exit code."""
    players_path = data_dir / "players.json"
    squads_path = data_dir / "squads.json"
    events_path = data_dir / "games" / f"game_{args.game}_events.json"
    output_path = Path(args.output) if args.output else results_dir / f"game_{args.game}.json"

    for path in (players_path, squads_path):
        if not path.exists():
            print(f"❌ Required file not found: {path}")
            return 1

    if not events_path.exists():
        print(f"⚠️  Events file not found: {events_path}")
        print("   Enter the game's events before finalizing.")
        return 1

    players_by_id = load_player_catalog(players_path)
    squads = load_squads(squads_path, managers=get_managers())
    events_by_id = load_game_events(events_path, args.game)

    for manager, team in squads.items():
        for error in validate_squad(manager, team, players_by_id):
            logger.warning(error)

    print(f"{get_league_name()}: finalizing game {args.game}...")
    results = finalize_game(
        args.game, squads, players_by_id, events_by_id, verbose=not args.quiet
    )

    errors, warnings = validate_all_results(results)
    for warning in warnings:
        logger.warning(warning)
    if errors:
        for error in errors:
            logger.error(error)
        print("❌ Results failed validation, nothing saved")
        return 1

    print("\n" + "=" * 60)
    print(f"GAME {args.game} RESULTS")
    print("=" * 60)
    ranked = sorted(results.items(), key=lambda x: x[1].total, reverse=True)
    for rank, (manager, result) in enumerate(ranked, 1):
        print(f"  {rank}. {manager}: {result.total} pts (subs: {result.subs_used or '-'})")

    save_game_results(output_path, args.game, results)
    print(f"Results saved to {output_path}")
    return 0


def run_round(args, results_dir: Path) -> int:
    """Total a round from already finalized games."""
    game_ids = args.games or get_round_games(args.round)
    if not game_ids:
        print(f"❌ No games given or configured for round {args.round}")
        return 1

    paths = [results_dir / f"game_{game_id}.json" for game_id in game_ids]
    totals = finalize_round(args.round, paths)

    print(f"\nRound {args.round} (games {game_ids})")
    for manager, points in sorted(totals.items(), key=lambda x: x[1], reverse=True):
        print(f"  {manager}: {points} pts")

    save_round_totals(results_dir / f"round_{args.round}.json", args.round, totals, game_ids)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Liiga Fantasy Autoscorer")
    parser.add_argument(
        "--game", "-g",
        type=int,
        default=None,
        help="Game id to finalize",
    )
    parser.add_argument(
        "--round", "-r",
        type=int,
        default=None,
        help="Round number to total from finalized games",
    )
    parser.add_argument(
        "--games",
        type=int,
        nargs="+",
        default=None,
        help="Game ids of the round (defaults to the round in league_config.json)",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Path to data directory",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for the game result JSON (defaults to data/results/game_{N}.json)",
    )
    parser.add_argument(
        "--update-leaderboard",
        action="store_true",
        help="Rebuild the leaderboard from all finalized games",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Write a log file to this directory",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()

    if args.game is None and args.round is None and not args.update_leaderboard:
        parser.error("nothing to do: pass --game, --round or --update-leaderboard")

    logger = setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.WARNING if args.quiet else logging.INFO,
        run_name=f"game_{args.game}" if args.game is not None else "autoscorer",
    )

    data_dir = Path(args.data_dir)
    results_dir = data_dir / "results"

    if args.game is not None:
        code = run_game(args, data_dir, results_dir, logger)
        if code:
            sys.exit(code)

    if args.round is not None:
        code = run_round(args, results_dir)
        if code:
            sys.exit(code)

    if args.update_leaderboard:
        leaderboard_path = results_dir / "leaderboard.json"
        rows = update_leaderboard(leaderboard_path, find_game_result_paths(results_dir))
        print(f"\nLeaderboard updated: {leaderboard_path}")
        for row in rows:
            print(f"  {row['rank']}. {row['manager']}: {row['total']} pts ({row['games']} games)")


if __name__ == "__main__":
    main()
