"""Monte Carlo run analytics for the Neon Racer simulation engine.

Runs many seeded bot-driven replays and aggregates the outcomes into
score and survival statistics.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np

from neon_racer.core.bots import Policy
from neon_racer.core.game_config import DEFAULT_CONFIG, GameConfig
from neon_racer.core.replay import constant_deltas, replay_run

PolicyFactory = Callable[[int], Policy]


def simulate_runs_monte_carlo(
    policy_factory: PolicyFactory,
    runs: int,
    config: GameConfig = DEFAULT_CONFIG,
    base_seed: int = 42,
    frame_time: float = 1.0 / 60.0,
    max_ticks: int = 20_000,
    histogram_bins: int = 10,
) -> dict[str, Any]:
    """Run an ensemble of headless runs and summarise them.

    Replication *i* uses ``seed = base_seed + i`` for the engine and
    passes the same seed to *policy_factory*, so results are reproducible
    and no global random state is touched.

    Collected statistics:
      - **Mean / median / max score** across runs.
      - **Mean survival time** in simulated seconds.
      - **Crash rate** -- fraction of runs that ended in a collision
        before *max_ticks*.
      - **Reward probability** -- fraction of runs whose score reached
        ``config.reward_score_threshold``.
      - **Score histogram** -- bin edges and counts.

    Args:
        policy_factory: Builds a fresh policy for a given seed.
        runs: Number of replications (>= 1).
        config: Tuning constants.
        base_seed: Starting seed value.
        frame_time: Simulated frame duration in seconds.
        max_ticks: Tick cap per run (>= 1).
        histogram_bins: Number of histogram bins (>= 1).

    Returns:
        Dictionary with keys:
            scores              -- ``list[int]`` per run
            survival_times      -- ``list[float]`` per run
            mean_score          -- ``float``
            median_score        -- ``float``
            max_score           -- ``int``
            mean_survival_time  -- ``float``
            crash_rate          -- ``float``
            reward_probability  -- ``float``
            score_histogram     -- ``{"edges": list[float], "counts": list[int]}``

    Raises:
        ValueError: If runs, max_ticks or histogram_bins < 1.
    """
    if runs < 1:
        raise ValueError("runs must be >= 1.")
    if max_ticks < 1:
        raise ValueError("max_ticks must be >= 1.")
    if histogram_bins < 1:
        raise ValueError("histogram_bins must be >= 1.")

    deltas = constant_deltas(frame_time, max_ticks)

    scores: list[int] = []
    survival_times: list[float] = []
    crashes = 0

    for i in range(runs):
        seed: int = base_seed + i
        result = replay_run(
            deltas,
            config=config,
            seed=seed,
            policy=policy_factory(seed),
            record_trace=False,
        )
        scores.append(result.final.score)
        survival_times.append(result.final.time)
        if result.collided:
            crashes += 1

    score_arr = np.asarray(scores, dtype=float)
    counts, edges = np.histogram(score_arr, bins=histogram_bins)
    inv: float = 1.0 / runs

    return {
        "scores": scores,
        "survival_times": survival_times,
        "mean_score": float(score_arr.mean()),
        "median_score": float(np.median(score_arr)),
        "max_score": int(score_arr.max()),
        "mean_survival_time": float(np.mean(survival_times)),
        "crash_rate": crashes * inv,
        "reward_probability": float(
            np.count_nonzero(score_arr >= config.reward_score_threshold) * inv
        ),
        "score_histogram": {
            "edges": [float(e) for e in edges],
            "counts": [int(c) for c in counts],
        },
    }
