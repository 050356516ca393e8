"""Frame-driven simulation engine for the Neon Racer arcade game.

The engine owns all gameplay state for one player: the car, the active
obstacles and the run accumulators.  An external scheduler calls
:meth:`SimulationEngine.tick` once per display frame with a millisecond
timestamp; the engine integrates the elapsed time and reports whether
the frame ended the run.

Per tick, while running:
    1. ``delta_time`` is derived from the previous timestamp and capped
       at ``max_delta_time``.
    2. The car moves sideways at a fixed speed per held intent and is
       clamped to the road.
    3. Obstacles scroll down at the current game speed; those past the
       bottom of the canvas are dropped.
    4. One spawn trial runs (see :mod:`neon_racer.core.spawner`).
    5. Time, speed, distance and score are integrated.
    6. Inset hitboxes are tested for overlap; a hit ends the run and
       fires the game-over callback exactly once.

Movement intents are plain booleans sampled at the start of a tick, so
the last value written by an input handler wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.random import Generator

from neon_racer.core.game_config import DEFAULT_CONFIG, GameConfig
from neon_racer.core.physics import (
    Rect,
    clamp_delta_time,
    hitbox,
    is_valid_timestamp,
    lateral_step,
    rects_overlap,
    scroll_step,
)
from neon_racer.core.playfield import Playfield
from neon_racer.core.run_state import RunSnapshot, RunState
from neon_racer.core.spawner import try_spawn
from neon_racer.core.vehicle import Obstacle, PlayerVehicle

logger = logging.getLogger(__name__)

GameOverCallback = Callable[[int, float, float, float], Any]


class EngineState(Enum):
    """Lifecycle of the engine across runs."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class TickStatus(Enum):
    """Outcome of a single tick."""

    CONTINUE = "continue"  # running, no collision
    COLLIDED = "collided"  # this tick ended the run
    SKIPPED = "skipped"  # engine not running; nothing happened


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a renderer needs to draw one frame.

    Attributes:
        state: Engine state when the snapshot was taken.
        run: HUD values.
        player: Player sprite bounds.
        obstacles: Active obstacles, top to bottom in spawn order.
        road_x: Left edge of the road.
        canvas_width: Canvas width.
        canvas_height: Canvas height.
    """

    state: EngineState
    run: RunSnapshot
    player: Rect
    obstacles: tuple[Obstacle, ...]
    road_x: float
    canvas_width: float
    canvas_height: float


class SimulationEngine:
    """Authoritative game state plus the per-tick update algorithm.

    Args:
        config: Tuning constants, fixed for the engine's lifetime.
        width: Initial canvas width.
        height: Initial canvas height.
        seed: Seed for the gameplay random source.  Ignored when *rng*
            is supplied.  ``None`` draws entropy from the OS.
        rng: Explicit gameplay random source (spawn trials and lanes).
        cosmetic_rng: Random source for decorative obstacle hues.
            Defaults to an unseeded generator.
        on_game_over: Called as ``on_game_over(score, distance, time,
            speed)`` once per run at the collision tick.
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        width: float = 800.0,
        height: float = 600.0,
        seed: int | None = None,
        rng: Generator | None = None,
        cosmetic_rng: Generator | None = None,
        on_game_over: GameOverCallback | None = None,
    ) -> None:
        self.config: GameConfig = config
        self.playfield: Playfield = Playfield(width, height, config)
        self.rng: Generator = rng if rng is not None else np.random.default_rng(seed)
        self.cosmetic_rng: Generator = (
            cosmetic_rng if cosmetic_rng is not None else np.random.default_rng()
        )
        self.on_game_over: GameOverCallback | None = on_game_over

        self._state: EngineState = EngineState.IDLE
        self._run: RunState = RunState(config)
        self._player: PlayerVehicle = PlayerVehicle(
            x=self.playfield.player_start_x,
            y=self.playfield.player_y,
            width=config.car_width,
            height=config.car_height,
        )
        self._obstacles: list[Obstacle] = []
        self._left: bool = False
        self._right: bool = False
        self._last_timestamp: float | None = None
        self._game_over_fired: bool = False
        self.run_count: int = 0

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def intents(self) -> tuple[bool, bool]:
        """Current ``(left, right)`` movement intents."""
        return self._left, self._right

    @property
    def obstacles(self) -> tuple[Obstacle, ...]:
        return tuple(self._obstacles)

    @property
    def player(self) -> Rect:
        p = self._player
        return Rect(p.x, p.y, p.width, p.height)

    def run_snapshot(self) -> RunSnapshot:
        return self._run.snapshot()

    def frame(self) -> FrameSnapshot:
        """Render-ready snapshot of the current state."""
        return FrameSnapshot(
            state=self._state,
            run=self._run.snapshot(),
            player=self.player,
            obstacles=tuple(self._obstacles),
            road_x=self.playfield.road_x,
            canvas_width=self.playfield.width,
            canvas_height=self.playfield.height,
        )

    # ------------------------------------------------------------------
    # Control commands
    # ------------------------------------------------------------------

    def start(self, timestamp_ms: float | None = None) -> bool:
        """Begin a run from ``IDLE``.

        Returns:
            True if a run started; False if the engine was not idle.
        """
        if self._state is not EngineState.IDLE:
            return False
        self._begin_run(timestamp_ms)
        return True

    def restart(self, timestamp_ms: float | None = None) -> None:
        """Discard the current run, if any, and begin a new one."""
        self._begin_run(timestamp_ms)

    def pause(self) -> bool:
        if self._state is not EngineState.RUNNING:
            return False
        self._transition(EngineState.PAUSED)
        return True

    def resume(self, timestamp_ms: float | None = None) -> bool:
        """Continue a paused run.

        The paused interval is not integrated: the tick baseline becomes
        *timestamp_ms*, or the next tick's timestamp when omitted.
        """
        if self._state is not EngineState.PAUSED:
            return False
        self._last_timestamp = (
            float(timestamp_ms) if is_valid_timestamp(timestamp_ms) else None
        )
        self._transition(EngineState.RUNNING)
        return True

    def toggle_pause(self, timestamp_ms: float | None = None) -> bool:
        """Pause a running run or resume a paused one.

        Returns:
            True if the state changed.
        """
        if self._state is EngineState.RUNNING:
            return self.pause()
        return self.resume(timestamp_ms)

    def stop(self) -> None:
        """Return to ``IDLE`` without reporting a score.

        Run values stay readable until the next run begins.
        """
        if self._state is not EngineState.IDLE:
            self._transition(EngineState.IDLE)
        self._last_timestamp = None

    # ------------------------------------------------------------------
    # Input and environment
    # ------------------------------------------------------------------

    def set_left_intent(self, held: bool) -> None:
        self._left = bool(held)

    def set_right_intent(self, held: bool) -> None:
        self._right = bool(held)

    def resize(self, width: float, height: float) -> None:
        """Apply new canvas dimensions.

        The road is re-centred and the car keeps its distance from the
        bottom edge.  The car's x is brought back inside the road by the
        next tick's clamp.
        """
        self.playfield.resize(width, height)
        self._player.y = self.playfield.player_y

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, timestamp_ms: Any) -> TickStatus:
        """Advance by the time elapsed since the previous tick.

        Unusable timestamps and the first tick of a run without a
        baseline are zero-length ticks.
        """
        if self._state is not EngineState.RUNNING:
            return TickStatus.SKIPPED

        delta_time = clamp_delta_time(
            self._last_timestamp, timestamp_ms, self.config.max_delta_time
        )
        if is_valid_timestamp(timestamp_ms) and (
            self._last_timestamp is None or timestamp_ms > self._last_timestamp
        ):
            self._last_timestamp = float(timestamp_ms)

        if delta_time <= 0.0:
            return TickStatus.CONTINUE
        return self._advance(delta_time)

    def step(self, delta_time: float) -> TickStatus:
        """Advance by an explicit delta in seconds, bypassing timestamps.

        The delta gets the same treatment as in :meth:`tick`: unusable or
        non-positive values are zero-length and large values are capped.
        """
        if self._state is not EngineState.RUNNING:
            return TickStatus.SKIPPED
        if not is_valid_timestamp(delta_time) or delta_time <= 0.0:
            return TickStatus.CONTINUE
        return self._advance(min(float(delta_time), self.config.max_delta_time))

    def _advance(self, delta_time: float) -> TickStatus:
        config = self.config
        playfield = self.playfield
        left, right = self._left, self._right

        # 1. Lateral movement, then clamp to the road
        player = self._player
        player.x = playfield.clamp_player_x(
            player.x + lateral_step(left, right, delta_time, config)
        )

        # 2. Scroll obstacles at the current speed and drop the passed ones
        dy = scroll_step(self._run.speed, delta_time, config)
        limit = playfield.despawn_y
        self._obstacles = [
            moved for moved in (obs.advanced(dy) for obs in self._obstacles)
            if moved.y < limit
        ]

        # 3. Spawn trial
        spawned = try_spawn(self._obstacles, playfield, self.rng, self.cosmetic_rng)
        if spawned is not None:
            self._obstacles.append(spawned)

        # 4. Run accumulators
        self._run.advance(delta_time)

        # 5. Collision
        if self._collides():
            self._end_run()
            return TickStatus.COLLIDED
        return TickStatus.CONTINUE

    def _collides(self) -> bool:
        p = self._player
        player_box = hitbox(p.x, p.y, p.width, p.height, self.config)
        return any(
            rects_overlap(
                player_box, hitbox(obs.x, obs.y, obs.width, obs.height, self.config)
            )
            for obs in self._obstacles
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _begin_run(self, timestamp_ms: float | None) -> None:
        self._run.reset()
        self._obstacles = []
        self._player.place(self.playfield.player_start_x, self.playfield.player_y)
        self._last_timestamp = (
            float(timestamp_ms) if is_valid_timestamp(timestamp_ms) else None
        )
        self._game_over_fired = False
        self.run_count += 1
        self._transition(EngineState.RUNNING)

    def _end_run(self) -> None:
        self._transition(EngineState.OVER)
        if self._game_over_fired:
            return
        self._game_over_fired = True

        final = self._run.snapshot()
        logger.info(
            "Run %d over: score=%d distance=%.1f time=%.2fs speed=%.3f",
            self.run_count,
            final.score,
            final.distance,
            final.time,
            final.speed,
        )
        if self.on_game_over is None:
            return
        try:
            self.on_game_over(final.score, final.distance, final.time, final.speed)
        except Exception:
            logger.exception("game-over callback failed for run %d", self.run_count)

    def _transition(self, new_state: EngineState) -> None:
        logger.debug("engine %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    def __repr__(self) -> str:
        return (
            f"SimulationEngine(state={self._state.value}, "
            f"score={self._run.score}, obstacles={len(self._obstacles)})"
        )
