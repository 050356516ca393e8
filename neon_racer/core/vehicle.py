"""Player vehicle and obstacle models for the Neon Racer simulation engine."""

from __future__ import annotations

from dataclasses import dataclass


class PlayerVehicle:
    """Mutable position of the player's car.

    Attributes:
        x: Left edge in canvas pixels.
        y: Top edge in canvas pixels.
        width: Fixed vehicle width.
        height: Fixed vehicle height.
    """

    __slots__ = ("x", "y", "width", "height")

    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0.0 or height <= 0.0:
            raise ValueError("vehicle width and height must be > 0.")
        self.x: float = x
        self.y: float = y
        self.width: float = width
        self.height: float = height

    def place(self, x: float, y: float) -> None:
        """Move the vehicle to an absolute position."""
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"PlayerVehicle(x={self.x!r}, y={self.y!r})"


@dataclass(frozen=True)
class Obstacle:
    """Immutable obstacle car at one instant.

    Advancing an obstacle produces a new instance, so snapshots handed to
    renderers never change underneath them.

    Attributes:
        x: Left edge, fixed at spawn.
        y: Top edge; grows as the obstacle scrolls down.
        width: Obstacle width.
        height: Obstacle height.
        lane: Lane index in ``[0, lane_count)``.
        color_hue: Decorative hue in degrees; no gameplay effect.
    """

    x: float
    y: float
    width: float
    height: float
    lane: int
    color_hue: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0.0 or self.height <= 0.0:
            raise ValueError("obstacle width and height must be > 0.")
        if self.lane < 0:
            raise ValueError("lane must be >= 0.")

    def advanced(self, dy: float) -> Obstacle:
        """Return a copy moved *dy* pixels down the screen."""
        return Obstacle(
            x=self.x,
            y=self.y + dy,
            width=self.width,
            height=self.height,
            lane=self.lane,
            color_hue=self.color_hue,
        )
