"""Run-level accumulators for the Neon Racer simulation engine."""

from __future__ import annotations

from dataclasses import dataclass

from neon_racer.core.game_config import GameConfig
from neon_racer.core.physics import distance_step, score_for, speed_at


@dataclass(frozen=True)
class RunSnapshot:
    """Read-only view of a run's HUD values.

    Attributes:
        score: ``floor(distance * score_multiplier)``.
        distance: Accumulated distance.
        time: Elapsed run time in seconds.
        speed: Current game speed.
    """

    score: int = 0
    distance: float = 0.0
    time: float = 0.0
    speed: float = 0.0


class RunState:
    """Mutable accumulators for one run.

    Speed is derived from elapsed time, so it never decreases within a
    run and saturates at ``max_speed``.  Score is derived from distance,
    which only grows.
    """

    __slots__ = ("config", "time", "distance", "speed", "score")

    def __init__(self, config: GameConfig) -> None:
        self.config: GameConfig = config
        self.time: float = 0.0
        self.distance: float = 0.0
        self.speed: float = config.base_speed
        self.score: int = 0

    def reset(self) -> None:
        self.time = 0.0
        self.distance = 0.0
        self.speed = self.config.base_speed
        self.score = 0

    def advance(self, delta_time: float) -> None:
        """Integrate one tick.

        Order: time, then speed from the new time, then distance at the
        new speed, then score from the new distance.

        Raises:
            ValueError: If *delta_time* is negative.
        """
        if delta_time < 0.0:
            raise ValueError("delta_time must be >= 0.")
        self.time += delta_time
        self.speed = speed_at(self.time, self.config)
        self.distance += distance_step(self.speed, delta_time, self.config)
        self.score = score_for(self.distance, self.config)

    def snapshot(self) -> RunSnapshot:
        return RunSnapshot(
            score=self.score,
            distance=self.distance,
            time=self.time,
            speed=self.speed,
        )
