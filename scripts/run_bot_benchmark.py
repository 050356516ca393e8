#!/usr/bin/env python
"""Benchmark headless bot policies against the simulation engine.

This script:

1. Loads the game configuration from ``data/game_config.yaml``.
2. Runs a seeded Monte Carlo ensemble for each bot policy.
3. Replays the best lane-dodger run with a full telemetry trace.
4. Saves results to ``results/latest_bot_benchmark.json``.
5. Prints a structured summary.

Usage
-----
::

    python scripts/run_bot_benchmark.py [RUNS]
"""

from __future__ import annotations

import json
import logging
import os
import sys

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from neon_racer.analysis.telemetry import summarize_trace, trace_to_frame  # noqa: E402
from neon_racer.config import load_game_config  # noqa: E402
from neon_racer.core.bots import LaneDodger, RandomWiggler, idle_policy  # noqa: E402
from neon_racer.core.monte_carlo import simulate_runs_monte_carlo  # noqa: E402
from neon_racer.core.replay import constant_deltas, replay_run  # noqa: E402

logger = logging.getLogger("run_bot_benchmark")

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_RUNS: int = 200
BASE_SEED: int = 2026
FRAME_TIME: float = 1.0 / 60.0
MAX_TICKS: int = 60 * 300
RESULTS_DIR: str = os.path.join(_project_root, "results")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "latest_bot_benchmark.json")


def main() -> None:
    """Run every policy ensemble and write the JSON report."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    runs = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_RUNS

    print("=" * 60)
    print("BOT POLICY BENCHMARK")
    print("=" * 60)
    print()

    config = load_game_config()

    policies = {
        "idle": lambda seed: idle_policy,
        "random_wiggler": lambda seed: RandomWiggler(seed=seed),
        "lane_dodger": lambda seed: LaneDodger(config),
    }

    report: dict[str, dict] = {}
    for step, (name, factory) in enumerate(policies.items(), start=1):
        print(f"[{step}/{len(policies) + 1}] {name}: {runs} runs")
        results = simulate_runs_monte_carlo(
            factory,
            runs,
            config=config,
            base_seed=BASE_SEED,
            frame_time=FRAME_TIME,
            max_ticks=MAX_TICKS,
        )
        report[name] = results
        print(
            f"      mean score {results['mean_score']:.0f}, "
            f"survival {results['mean_survival_time']:.1f}s, "
            f"reward p={results['reward_probability']:.3f}"
        )
    print()

    # -- Telemetry for the best dodger run ------------------------------------
    print(f"[{len(policies) + 1}/{len(policies) + 1}] Telemetry of best lane_dodger run")
    scores = report["lane_dodger"]["scores"]
    best_seed = BASE_SEED + scores.index(max(scores))
    replay = replay_run(
        constant_deltas(FRAME_TIME, MAX_TICKS),
        config=config,
        seed=best_seed,
        policy=LaneDodger(config),
    )
    summary = summarize_trace(trace_to_frame(replay.trace), config.max_speed)
    print(f"      seed {best_seed}: {summary}")
    print()

    os.makedirs(RESULTS_DIR, exist_ok=True)
    with open(OUTPUT_PATH, "w", encoding="utf-8") as fh:
        json.dump(
            {
                "runs": runs,
                "base_seed": BASE_SEED,
                "policies": report,
                "best_dodger_run": {"seed": best_seed, **summary},
            },
            fh,
            indent=2,
        )
    logger.info("Results saved to %s", OUTPUT_PATH)


if __name__ == "__main__":
    main()
