"""
Utility script to run a single race in the console.

Usage:
    python scripts/run_race.py                  # full 20s race, final standings
    python scripts/run_race.py --distance 1500  # distance match finish times
    python scripts/run_race.py --time 10        # time match distances
    python scripts/run_race.py --checkpoints    # distance table every second
"""

from __future__ import annotations

import argparse
import os
import sys

# Ensure repo root is on sys.path when script is executed from anywhere
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.append(REPO_ROOT)

from animal_derby.engine import (  # noqa: E402
    DEFAULT_ROSTER,
    TOTAL_RACE_TIME,
    distance_at,
    fixed_distance_winner,
    fixed_time_winner,
    rank_by_distance,
    rank_by_time,
    run_headless,
)
from animal_derby.bot.race_broadcast import render_track_board  # noqa: E402


def print_checkpoints() -> None:
    header = "  t " + "".join(f"{c.id:>9}" for c in DEFAULT_ROSTER)
    print(header)
    print("-" * len(header))
    for second in range(int(TOTAL_RACE_TIME) + 1):
        row = "".join(f"{distance_at(c.id, second):>9}" for c in DEFAULT_ROSTER)
        print(f"{second:>3} {row}")


def print_time_match(race_time: float) -> None:
    print(f"Time match at {race_time}s")
    for idx, standing in enumerate(rank_by_distance(race_time), start=1):
        print(f"{idx}. {standing.competitor.label:<12} {standing.distance:>5}m")
    winner = fixed_time_winner(race_time)
    print(f"\nWinner: {winner.label if winner else '-'}")


def print_distance_match(target: float, multiplier: float, show_board: bool) -> None:
    snapshots = run_headless(target_distance=target, speed_multiplier=multiplier)
    if show_board:
        print(render_track_board(snapshots[-1]))
        print()
    print(f"Distance match to {target}m")
    for idx, standing in enumerate(rank_by_time(target), start=1):
        finish = f"{standing.time:.1f}s" if standing.reached else "not arrived"
        print(f"{idx}. {standing.competitor.label:<12} {finish:>11}")
    winner = fixed_distance_winner(target)
    print(f"\nWinner: {winner.label if winner else 'nobody arrived'}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run an animal race in the console.")
    parser.add_argument("--distance", type=float, help="Finish line distance for a distance match.")
    parser.add_argument("--time", type=float, help="Shared running time for a time match.")
    parser.add_argument("--multiplier", type=float, default=1.0, help="Simulated seconds per real second.")
    parser.add_argument("--checkpoints", action="store_true", help="Print every animal's distance each second.")
    parser.add_argument("--silent", action="store_true", help="Skip the track board.")
    args = parser.parse_args()

    if args.checkpoints:
        print_checkpoints()
    elif args.time is not None:
        print_time_match(args.time)
    elif args.distance is not None:
        print_distance_match(args.distance, args.multiplier, show_board=not args.silent)
    else:
        snapshots = run_headless(speed_multiplier=args.multiplier)
        final = snapshots[-1]
        if not args.silent:
            print(render_track_board(final))
        print("\nFinish Order:")
        for idx, racer in enumerate(final.leaderboard(), start=1):
            print(f"{idx}. {racer.emoji} {racer.name} ({racer.distance}m)")


if __name__ == "__main__":
    main()
