"""Tuning constants for the arcade racing simulation."""

import math
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning parameters shared by every run of an engine.

    Attributes:
        fps: Nominal display frame rate (informational only; the
            simulation integrates real elapsed time).
        road_width: Width of the playable road in pixels.
        lane_count: Number of equal-width lanes on the road (>= 1).
        car_width: Player vehicle width in pixels.
        car_height: Player vehicle height in pixels.
        obstacle_width: Obstacle width in pixels.
        obstacle_height: Obstacle height in pixels.
        speed_increment: Speed gained per second of run time, before
            ``speed_scale`` is applied.
        base_speed: Speed at the start of every run.
        max_speed: Saturation speed (>= base_speed).
        score_multiplier: Score points per unit of distance.
        spawn_rate: Per-tick probability of a spawn attempt (0.0-1.0).
        max_delta_time: Upper bound on a single tick's delta in seconds.
        lateral_speed: Horizontal player speed in pixels per second,
            independent of game speed.
        road_margin: Gap kept between the player and each road edge.
        scroll_factor: Pixels per second per unit of game speed.
        distance_scale: Distance units per unit of speed per second.
        speed_scale: Multiplier on ``speed_increment``.
        too_close_distance: A lane is blocked for spawning while any
            obstacle in it sits above this y coordinate.
        despawn_margin: Obstacles are dropped once they pass this far
            below the bottom of the canvas.
        player_bottom_offset: Gap between the player and the canvas bottom.
        hitbox_inset_x: Left inset of every hitbox.
        hitbox_inset_y: Top inset of every hitbox.
        hitbox_shrink_width: Total width removed from every hitbox.
        hitbox_shrink_height: Total height removed from every hitbox.
        reward_score_threshold: Score at which a player becomes eligible
            for rewards.
    """

    fps: int = 60
    road_width: float = 500.0
    lane_count: int = 3
    car_width: float = 70.0
    car_height: float = 120.0
    obstacle_width: float = 70.0
    obstacle_height: float = 120.0
    speed_increment: float = 0.002
    base_speed: float = 5.0
    max_speed: float = 18.0
    score_multiplier: float = 10.0
    spawn_rate: float = 0.02

    max_delta_time: float = 0.1
    lateral_speed: float = 400.0
    road_margin: float = 10.0
    scroll_factor: float = 60.0
    distance_scale: float = 10.0
    speed_scale: float = 10.0
    too_close_distance: float = 200.0
    despawn_margin: float = 100.0
    player_bottom_offset: float = 50.0

    hitbox_inset_x: float = 8.0
    hitbox_inset_y: float = 10.0
    hitbox_shrink_width: float = 16.0
    hitbox_shrink_height: float = 15.0

    reward_score_threshold: int = 10000

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for f in fields(self):
            if not math.isfinite(getattr(self, f.name)):
                raise ValueError(f"{f.name} must be finite.")
        if self.fps <= 0:
            raise ValueError("fps must be > 0.")
        if self.lane_count < 1:
            raise ValueError("lane_count must be >= 1.")
        for name in (
            "road_width",
            "car_width",
            "car_height",
            "obstacle_width",
            "obstacle_height",
            "max_delta_time",
        ):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be > 0.")
        if self.base_speed <= 0.0:
            raise ValueError("base_speed must be > 0.")
        if self.max_speed < self.base_speed:
            raise ValueError("max_speed must be >= base_speed.")
        if self.speed_increment < 0.0:
            raise ValueError("speed_increment must be >= 0.")
        if not 0.0 <= self.spawn_rate <= 1.0:
            raise ValueError("spawn_rate must be between 0.0 and 1.0.")
        if self.road_margin < 0.0:
            raise ValueError("road_margin must be >= 0.")
        if self.car_width + 2.0 * self.road_margin > self.road_width:
            raise ValueError("car_width plus both road margins must fit the road.")
        if self.obstacle_width > self.lane_width:
            raise ValueError("obstacle_width must fit inside a single lane.")
        if self.hitbox_shrink_width >= min(self.car_width, self.obstacle_width):
            raise ValueError("hitbox_shrink_width must leave a positive hitbox.")
        if self.hitbox_shrink_height >= min(self.car_height, self.obstacle_height):
            raise ValueError("hitbox_shrink_height must leave a positive hitbox.")
        if self.reward_score_threshold < 0:
            raise ValueError("reward_score_threshold must be >= 0.")

    @property
    def lane_width(self) -> float:
        """Width of a single lane in pixels."""
        return self.road_width / self.lane_count


DEFAULT_CONFIG = GameConfig()
