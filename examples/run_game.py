#!/usr/bin/env python3
"""Run a single Cornucopia game and print its full log."""

import sys

from cornucopia.experiment.presets import get_preset
from cornucopia.experiment.runner import GameRunner


def main():
    preset = sys.argv[1] if len(sys.argv) > 1 else "standard"
    config = get_preset(preset)
    config.random_seed = 42

    print(f"=== Cornucopia: {preset} ===")
    print(f"Tributes: {config.tribute_count}")
    print(f"Arena radius: {config.map_size}")
    print(f"Lethality: {config.lethality.value}")
    print(f"Finale day: {config.finale_day}")
    print()

    result = GameRunner().run_game(config)

    for entry in result.final_state.logs:
        print(f"[Day {entry.day:2d} {entry.phase:9s}] {entry.message}")

    print()
    print(f"=== Result after {result.steps} steps (day {result.days}) ===")
    winner = result.final_state.winner
    if winner is not None:
        print(f"Victor: {winner.name} (District {winner.district.value}, {winner.kills} kills)")
    elif result.finished:
        print("No victor. The arena claimed everyone.")
    else:
        print("Game did not finish within the step limit.")

    if result.kill_leaderboard:
        print("\nKill leaderboard:")
        for name, kills in result.kill_leaderboard[:10]:
            print(f"  {name:12s}: {kills}")


if __name__ == "__main__":
    main()
