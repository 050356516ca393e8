"""Deterministic replay of a run from a recorded delta-time sequence.

Given the same configuration, seed, policy and sequence of deltas, a
replay always yields the same obstacles, collisions and score.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from neon_racer.core.bots import Policy, idle_policy
from neon_racer.core.engine import EngineState, SimulationEngine, TickStatus
from neon_racer.core.game_config import DEFAULT_CONFIG, GameConfig
from neon_racer.core.run_state import RunSnapshot


@dataclass
class ReplayResult:
    """Outcome of a replayed run.

    Attributes:
        final: Run values after the last processed tick (frozen at the
            collision tick if the run crashed).
        ticks: Number of ticks processed.
        collided: Whether the run ended in a collision.
        trace: One row per processed tick with keys ``tick``, ``time``,
            ``distance``, ``speed``, ``score``, ``player_x`` and
            ``obstacles``.
    """

    final: RunSnapshot
    ticks: int
    collided: bool
    trace: list[dict[str, Any]] = field(default_factory=list)


def replay_run(
    deltas: Iterable[float],
    config: GameConfig = DEFAULT_CONFIG,
    seed: int | None = 0,
    policy: Policy = idle_policy,
    width: float = 800.0,
    height: float = 600.0,
    record_trace: bool = True,
) -> ReplayResult:
    """Drive a fresh engine through *deltas* seconds per tick.

    Before each tick the *policy* sees the current frame and its intents
    are written to the engine.  Replay stops at the first collision.

    Args:
        deltas: Per-tick delta times in seconds.
        config: Tuning constants.
        seed: Gameplay seed.  The cosmetic generator is seeded from the
            same value so traces are byte-for-byte repeatable.
        policy: Input policy.
        width: Canvas width.
        height: Canvas height.
        record_trace: Collect per-tick rows.

    Returns:
        A :class:`ReplayResult`.
    """
    engine = SimulationEngine(
        config=config,
        width=width,
        height=height,
        seed=seed,
        cosmetic_rng=np.random.default_rng(seed),
    )
    engine.start()

    trace: list[dict[str, Any]] = []
    ticks = 0
    collided = False

    for delta in deltas:
        if engine.state is not EngineState.RUNNING:
            break
        left, right = policy(engine.frame())
        engine.set_left_intent(left)
        engine.set_right_intent(right)

        status = engine.step(delta)
        ticks += 1

        if record_trace:
            snap = engine.run_snapshot()
            trace.append(
                {
                    "tick": ticks,
                    "time": snap.time,
                    "distance": snap.distance,
                    "speed": snap.speed,
                    "score": snap.score,
                    "player_x": engine.player.x,
                    "obstacles": len(engine.obstacles),
                }
            )

        if status is TickStatus.COLLIDED:
            collided = True
            break

    return ReplayResult(
        final=engine.run_snapshot(),
        ticks=ticks,
        collided=collided,
        trace=trace,
    )


def constant_deltas(delta: float, count: int) -> list[float]:
    """Return *count* copies of *delta*.

    Raises:
        ValueError: If count < 0.
    """
    if count < 0:
        raise ValueError("count must be >= 0.")
    return [delta] * count
