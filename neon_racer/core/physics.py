"""Deterministic per-tick formulas for the Neon Racer simulation engine.

Every function here is pure: identical inputs always give identical
outputs, which is what makes a recorded delta-time sequence replayable.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any

from neon_racer.core.game_config import GameConfig


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas pixels."""

    x: float
    y: float
    width: float
    height: float


def clamp_delta_time(
    previous_ms: float | None,
    current_ms: Any,
    max_delta_time: float,
) -> float:
    """Convert two frame timestamps into a bounded delta in seconds.

    A missing, non-numeric or non-finite timestamp, or one that is not
    later than *previous_ms*, yields ``0.0``.  The result never exceeds
    *max_delta_time*, which caps integration after frame stalls.

    Args:
        previous_ms: Timestamp of the last processed frame, or ``None``
            when no baseline exists yet.
        current_ms: Timestamp of the current frame in milliseconds.
        max_delta_time: Upper bound in seconds.

    Returns:
        Delta time in seconds, within ``[0.0, max_delta_time]``.
    """
    if previous_ms is None or not is_valid_timestamp(current_ms):
        return 0.0
    delta = (float(current_ms) - previous_ms) / 1000.0
    if delta <= 0.0:
        return 0.0
    return min(delta, max_delta_time)


def is_valid_timestamp(value: Any) -> bool:
    """Return True if *value* is a finite real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def speed_at(run_time: float, config: GameConfig) -> float:
    """Game speed after *run_time* seconds of a run.

    ``speed = min(max_speed, base_speed + time * speed_increment * speed_scale)``
    """
    ramp = run_time * config.speed_increment * config.speed_scale
    return min(config.max_speed, config.base_speed + ramp)


def distance_step(speed: float, delta_time: float, config: GameConfig) -> float:
    """Distance covered in one tick at *speed*."""
    return speed * delta_time * config.distance_scale


def score_for(distance: float, config: GameConfig) -> int:
    """Score for a travelled *distance*: ``floor(distance * score_multiplier)``."""
    return math.floor(distance * config.score_multiplier)


def scroll_step(speed: float, delta_time: float, config: GameConfig) -> float:
    """Vertical pixels an obstacle moves in one tick."""
    return speed * config.scroll_factor * delta_time


def lateral_step(
    left: bool,
    right: bool,
    delta_time: float,
    config: GameConfig,
) -> float:
    """Signed horizontal displacement for the held intents.

    Opposite intents held together cancel out.
    """
    direction = int(bool(right)) - int(bool(left))
    return direction * config.lateral_speed * delta_time


def hitbox(x: float, y: float, width: float, height: float, config: GameConfig) -> Rect:
    """Collision rectangle inset from a sprite's visual bounds."""
    return Rect(
        x=x + config.hitbox_inset_x,
        y=y + config.hitbox_inset_y,
        width=width - config.hitbox_shrink_width,
        height=height - config.hitbox_shrink_height,
    )


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict axis-aligned overlap test; touching edges do not collide."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )
