"""
Game Runner: batch execution, seed sweeps and preset comparisons.

Drives games from initialization to GAME_OVER without a driver in the
loop, acknowledging each step's dead as it goes, and aggregates the
outcomes across seeds.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from cornucopia.core.config import GameConfig
from cornucopia.core.engine import acknowledge_deceased, advance_game_phase, initialize_game
from cornucopia.core.state import GamePhase, GameState
from cornucopia.experiment.presets import get_preset

DEFAULT_MAX_STEPS = 500


@dataclass
class GameResult:
    """Result of a single game run."""
    config: GameConfig
    final_state: GameState
    steps: int
    finished: bool
    winner_id: str | None
    winner_district: str | None
    days: int
    kill_leaderboard: list[tuple[str, int]]  # (tribute name, kills), most first

    def summary(self) -> dict[str, Any]:
        winner = self.final_state.winner
        return {
            "steps": self.steps,
            "finished": self.finished,
            "days": self.days,
            "winner": winner.name if winner else None,
            "winner_district": self.winner_district,
            "kill_leaderboard": [list(entry) for entry in self.kill_leaderboard],
        }


@dataclass
class SeedSweepResult:
    """Aggregate of the same config run under several seeds."""
    config: GameConfig
    results: list[GameResult]
    win_rates_by_district: dict[str, float]
    no_winner_rate: float
    mean_days: float
    mean_steps: float


@dataclass
class ComparisonResult:
    """Result of comparing two or more presets."""
    results: dict[str, SeedSweepResult]
    config_diffs: dict[str, Any] = field(default_factory=dict)


class GameRunner:
    """
    Run games to completion and aggregate their outcomes.
    """

    def __init__(self, max_steps: int = DEFAULT_MAX_STEPS):
        self.max_steps = max_steps

    def run_game(
        self,
        config: GameConfig,
        max_steps: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> GameResult:
        """Play one game until GAME_OVER or ``max_steps`` steps."""
        max_steps = max_steps or self.max_steps
        if rng is None:
            rng = np.random.default_rng(config.random_seed)

        state = initialize_game(config, rng)
        steps = 0
        while state.phase != GamePhase.GAME_OVER and steps < max_steps:
            state = advance_game_phase(state, rng)
            state = acknowledge_deceased(state)
            steps += 1

        winner = state.winner
        ranked = sorted(state.tributes, key=lambda t: t.kills, reverse=True)
        return GameResult(
            config=config,
            final_state=state,
            steps=steps,
            finished=state.phase == GamePhase.GAME_OVER,
            winner_id=winner.id if winner else None,
            winner_district=winner.district.value if winner else None,
            days=state.day,
            kill_leaderboard=[(t.name, t.kills) for t in ranked if t.kills > 0],
        )

    def run_seeds(self, config: GameConfig, seeds: list[int]) -> SeedSweepResult:
        """
        Run the same configuration with multiple random seeds.

        Useful for measuring how often each district wins.
        """
        results: list[GameResult] = []
        for seed in seeds:
            config_dict = config.to_dict()
            config_dict["random_seed"] = seed
            results.append(self.run_game(GameConfig.from_dict(config_dict)))
        return self._aggregate(config, results)

    def compare_presets(self, names: list[str], seeds: list[int]) -> ComparisonResult:
        """Run each named preset under the same seeds and compare."""
        configs = {name: get_preset(name) for name in names}
        results = {name: self.run_seeds(cfg, seeds) for name, cfg in configs.items()}

        diffs: dict[str, Any] = {}
        if len(names) >= 2:
            base = configs[names[0]]
            for name in names[1:]:
                diffs[f"{names[0]}_vs_{name}"] = base.diff(configs[name])

        return ComparisonResult(results=results, config_diffs=diffs)

    def run_parameter_sweep(
        self,
        base_config: GameConfig,
        param_name: str,
        values: list[Any],
        seeds: list[int],
    ) -> dict[str, SeedSweepResult]:
        """
        Sweep a single config parameter across multiple values.

        Args:
            base_config: Base configuration to modify
            param_name: Name of the GameConfig field to sweep
            values: List of values to test
            seeds: Seeds to run for every value

        Returns:
            Dict mapping value label -> SeedSweepResult
        """
        results: dict[str, SeedSweepResult] = {}
        for val in values:
            config_dict = base_config.to_dict()
            config_dict[param_name] = val
            results[f"{param_name}={val}"] = self.run_seeds(GameConfig.from_dict(config_dict), seeds)
        return results

    @staticmethod
    def _aggregate(config: GameConfig, results: list[GameResult]) -> SeedSweepResult:
        n = len(results)
        wins = Counter(r.winner_district for r in results if r.winner_district is not None)
        no_winner = sum(1 for r in results if r.winner_id is None)
        return SeedSweepResult(
            config=config,
            results=results,
            win_rates_by_district={d: c / n for d, c in sorted(wins.items())} if n else {},
            no_winner_rate=no_winner / n if n else 0.0,
            mean_days=float(np.mean([r.days for r in results])) if results else 0.0,
            mean_steps=float(np.mean([r.steps for r in results])) if results else 0.0,
        )
