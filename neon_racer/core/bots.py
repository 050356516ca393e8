"""Input policies for headless play.

A policy maps the current :class:`FrameSnapshot` to a ``(left, right)``
intent pair.  Policies only see what a renderer sees, so they exercise
the engine through the same read accessors as a human front end.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.random import Generator

from neon_racer.core.engine import FrameSnapshot
from neon_racer.core.game_config import GameConfig

Policy = Callable[[FrameSnapshot], tuple[bool, bool]]


def idle_policy(frame: FrameSnapshot) -> tuple[bool, bool]:
    """Never steer."""
    return False, False


class LaneDodger:
    """Steers toward the lane whose nearest approaching obstacle is farthest.

    Args:
        config: Tuning constants used for lane geometry.
        lookahead: Pixels above the car that count as "approaching".
        deadband: Horizontal tolerance around a lane centre.
    """

    def __init__(
        self,
        config: GameConfig,
        lookahead: float = 420.0,
        deadband: float = 6.0,
    ) -> None:
        if lookahead <= 0.0:
            raise ValueError("lookahead must be > 0.")
        if deadband < 0.0:
            raise ValueError("deadband must be >= 0.")
        self.config: GameConfig = config
        self.lookahead: float = lookahead
        self.deadband: float = deadband

    def lane_centre(self, frame: FrameSnapshot, lane: int) -> float:
        return frame.road_x + (lane + 0.5) * self.config.lane_width

    def threat_gap(self, frame: FrameSnapshot, lane: int) -> float:
        """Vertical gap to the closest obstacle in *lane* still ahead of the car.

        Returns ``inf`` when the lane is clear within the lookahead.
        """
        player = frame.player
        gap = float("inf")
        for obs in frame.obstacles:
            if obs.lane != lane or obs.y > player.y + player.height:
                continue
            distance = player.y - (obs.y + obs.height)
            if distance <= self.lookahead:
                gap = min(gap, distance)
        return gap

    def __call__(self, frame: FrameSnapshot) -> tuple[bool, bool]:
        player = frame.player
        centre_x = player.x + player.width / 2.0
        current = int((centre_x - frame.road_x) // self.config.lane_width)
        current = max(0, min(self.config.lane_count - 1, current))

        # Prefer staying put, then nearer lanes, on ties.
        lanes = sorted(range(self.config.lane_count), key=lambda ln: abs(ln - current))
        target = max(lanes, key=lambda ln: self.threat_gap(frame, ln))
        if self.threat_gap(frame, current) == self.threat_gap(frame, target):
            target = current

        offset = self.lane_centre(frame, target) - centre_x
        if offset < -self.deadband:
            return True, False
        if offset > self.deadband:
            return False, True
        return False, False


class RandomWiggler:
    """Holds a random intent pair for a few ticks before drawing again.

    Args:
        seed: Seed for the policy's own generator.
        hold_ticks: Ticks each decision is kept (>= 1).
    """

    _CHOICES: tuple[tuple[bool, bool], ...] = (
        (False, False),
        (True, False),
        (False, True),
    )

    def __init__(self, seed: int | None = None, hold_ticks: int = 10) -> None:
        if hold_ticks < 1:
            raise ValueError("hold_ticks must be >= 1.")
        self.rng: Generator = np.random.default_rng(seed)
        self.hold_ticks: int = hold_ticks
        self._current: tuple[bool, bool] = (False, False)
        self._remaining: int = 0

    def __call__(self, frame: FrameSnapshot) -> tuple[bool, bool]:
        if self._remaining <= 0:
            self._current = self._CHOICES[int(self.rng.integers(0, len(self._CHOICES)))]
            self._remaining = self.hold_ticks
        self._remaining -= 1
        return self._current
