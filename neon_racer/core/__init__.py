"""Core simulation modules for the Neon Racer engine."""

from neon_racer.core.bots import LaneDodger, RandomWiggler, idle_policy
from neon_racer.core.engine import (
    EngineState,
    FrameSnapshot,
    SimulationEngine,
    TickStatus,
)
from neon_racer.core.game_config import DEFAULT_CONFIG, GameConfig
from neon_racer.core.loop import FrameLoop, ManualFrameScheduler
from neon_racer.core.monte_carlo import simulate_runs_monte_carlo
from neon_racer.core.physics import (
    Rect,
    clamp_delta_time,
    hitbox,
    rects_overlap,
    score_for,
    speed_at,
)
from neon_racer.core.playfield import Playfield
from neon_racer.core.replay import ReplayResult, constant_deltas, replay_run
from neon_racer.core.run_state import RunSnapshot, RunState
from neon_racer.core.spawner import lane_is_blocked, spawn_in_lane, try_spawn
from neon_racer.core.vehicle import Obstacle, PlayerVehicle

__all__ = [
    "DEFAULT_CONFIG",
    "EngineState",
    "FrameLoop",
    "FrameSnapshot",
    "GameConfig",
    "LaneDodger",
    "ManualFrameScheduler",
    "Obstacle",
    "PlayerVehicle",
    "Playfield",
    "RandomWiggler",
    "Rect",
    "ReplayResult",
    "RunSnapshot",
    "RunState",
    "SimulationEngine",
    "TickStatus",
    "clamp_delta_time",
    "constant_deltas",
    "hitbox",
    "idle_policy",
    "lane_is_blocked",
    "rects_overlap",
    "replay_run",
    "score_for",
    "simulate_runs_monte_carlo",
    "spawn_in_lane",
    "speed_at",
    "try_spawn",
]
