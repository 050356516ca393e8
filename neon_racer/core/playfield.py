"""Playfield geometry for the Neon Racer simulation engine.

The playfield is the visible canvas with a fixed-width road centred on
it.  Canvas dimensions may change mid-run (window resize); the road is
re-centred and the player bounds follow on the next tick.
"""

from __future__ import annotations

import math

from neon_racer.core.game_config import GameConfig


class Playfield:
    """Canvas and road geometry derived from a :class:`GameConfig`.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        config: Tuning constants providing road and lane sizes.
    """

    __slots__ = ("width", "height", "config")

    def __init__(self, width: float, height: float, config: GameConfig) -> None:
        _check_dimensions(width, height)
        self.width: float = float(width)
        self.height: float = float(height)
        self.config: GameConfig = config

    def resize(self, width: float, height: float) -> None:
        """Change the canvas dimensions.

        Raises:
            ValueError: If either dimension is not finite and positive.
        """
        _check_dimensions(width, height)
        self.width = float(width)
        self.height = float(height)

    @property
    def road_x(self) -> float:
        """Left edge of the road; negative when the canvas is narrower."""
        return (self.width - self.config.road_width) / 2.0

    @property
    def player_min_x(self) -> float:
        return self.road_x + self.config.road_margin

    @property
    def player_max_x(self) -> float:
        return (
            self.road_x
            + self.config.road_width
            - self.config.car_width
            - self.config.road_margin
        )

    @property
    def player_start_x(self) -> float:
        """Horizontal centre position for a freshly placed player."""
        return self.width / 2.0 - self.config.car_width / 2.0

    @property
    def player_y(self) -> float:
        return self.height - self.config.car_height - self.config.player_bottom_offset

    @property
    def despawn_y(self) -> float:
        """Obstacles at or below this y coordinate leave the active set."""
        return self.height + self.config.despawn_margin

    def clamp_player_x(self, x: float) -> float:
        """Clamp a player x coordinate to the road bounds."""
        return max(self.player_min_x, min(self.player_max_x, x))

    def lane_x(self, lane: int) -> float:
        """Left edge of an obstacle centred in *lane*.

        Raises:
            ValueError: If *lane* is outside ``[0, lane_count)``.
        """
        if not 0 <= lane < self.config.lane_count:
            raise ValueError(
                f"lane must be in [0, {self.config.lane_count}), got {lane}."
            )
        lane_width = self.config.lane_width
        return (
            self.road_x
            + lane * lane_width
            + (lane_width - self.config.obstacle_width) / 2.0
        )

    def lane_of(self, x: float, width: float) -> int:
        """Return the lane containing the horizontal centre of a rectangle."""
        centre = x + width / 2.0 - self.road_x
        lane = int(centre // self.config.lane_width)
        return max(0, min(self.config.lane_count - 1, lane))

    def __repr__(self) -> str:
        return f"Playfield(width={self.width!r}, height={self.height!r})"


def _check_dimensions(width: float, height: float) -> None:
    if not (math.isfinite(width) and math.isfinite(height)):
        raise ValueError("Playfield width and height must be finite.")
    if width <= 0.0 or height <= 0.0:
        raise ValueError("Playfield width and height must be > 0.")
