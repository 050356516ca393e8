"""Procedural obstacle spawning for the Neon Racer simulation engine.

Each tick runs one Bernoulli trial.  On success a lane is drawn
uniformly; the attempt is dropped (no retry that tick) when an obstacle
in that lane is still near the top of the playfield.  All gameplay
draws come from the supplied ``numpy.random.Generator`` so that seeded
runs are reproducible.  The decorative hue comes from a separate
generator and never influences gameplay.
"""

from __future__ import annotations

from collections.abc import Iterable

from numpy.random import Generator

from neon_racer.core.playfield import Playfield
from neon_racer.core.vehicle import Obstacle


def lane_is_blocked(obstacles: Iterable[Obstacle], lane: int, too_close: float) -> bool:
    """Return True if any obstacle in *lane* sits above the *too_close* line."""
    return any(obs.lane == lane and obs.y < too_close for obs in obstacles)


def spawn_in_lane(
    obstacles: Iterable[Obstacle],
    lane: int,
    playfield: Playfield,
    color_hue: float = 0.0,
) -> Obstacle | None:
    """Create an obstacle just above the visible area in *lane*.

    Returns:
        The new obstacle, or ``None`` if the lane is blocked.
    """
    config = playfield.config
    if lane_is_blocked(obstacles, lane, config.too_close_distance):
        return None
    return Obstacle(
        x=playfield.lane_x(lane),
        y=-config.obstacle_height,
        width=config.obstacle_width,
        height=config.obstacle_height,
        lane=lane,
        color_hue=color_hue,
    )


def try_spawn(
    obstacles: Iterable[Obstacle],
    playfield: Playfield,
    rng: Generator,
    cosmetic_rng: Generator,
) -> Obstacle | None:
    """Run one spawn trial.

    Draw order on *rng* is fixed: one uniform for the trial, then, only
    on success, one integer for the lane.

    Args:
        obstacles: Currently active obstacles.
        playfield: Geometry used to position the new obstacle.
        rng: Gameplay random source.
        cosmetic_rng: Random source for the decorative hue.

    Returns:
        The spawned obstacle, or ``None`` if the trial failed or the
        chosen lane was blocked.
    """
    config = playfield.config
    if rng.random() >= config.spawn_rate:
        return None
    lane = int(rng.integers(0, config.lane_count))
    hue = float(cosmetic_rng.random() * 360.0)
    return spawn_in_lane(obstacles, lane, playfield, color_hue=hue)
