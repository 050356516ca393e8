"""Tests for the simulation engine state machine and tick algorithm."""

import logging
import math

import numpy as np
import pytest

from neon_racer.core.engine import EngineState, SimulationEngine, TickStatus
from neon_racer.core.game_config import GameConfig
from neon_racer.core.spawner import spawn_in_lane

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_WIDTH = 800.0
_HEIGHT = 600.0


def _quiet_config(**overrides: float) -> GameConfig:
    """Configuration with spawning disabled so runs never collide."""
    return GameConfig(spawn_rate=0.0, **overrides)


def _sample_engine(config: GameConfig | None = None, **kwargs) -> SimulationEngine:
    return SimulationEngine(
        config=config or _quiet_config(),
        width=_WIDTH,
        height=_HEIGHT,
        seed=7,
        cosmetic_rng=np.random.default_rng(7),
        **kwargs,
    )


def _run_ticks(engine: SimulationEngine, count: int, delta: float = 0.1) -> None:
    for _ in range(count):
        engine.step(delta)


def _reference_accumulation(
    deltas: list[float], config: GameConfig
) -> tuple[float, float, float]:
    """Independent re-implementation of the run accumulators."""
    time = distance = 0.0
    speed = config.base_speed
    for dt in deltas:
        time += dt
        speed = min(
            config.max_speed,
            config.base_speed + time * config.speed_increment * config.speed_scale,
        )
        distance += speed * dt * config.distance_scale
    return time, speed, distance


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


def test_new_engine_is_idle() -> None:
    """Engines start idle and ignore ticks."""
    engine = _sample_engine()
    assert engine.state is EngineState.IDLE
    assert engine.tick(1000.0) is TickStatus.SKIPPED
    assert engine.run_snapshot().time == 0.0


def test_start_places_player_at_centre() -> None:
    """Starting a run resets state and centres the car."""
    engine = _sample_engine()
    assert engine.start()
    assert engine.state is EngineState.RUNNING
    player = engine.player
    assert player.x == pytest.approx(_WIDTH / 2 - 35.0)
    assert player.y == pytest.approx(_HEIGHT - 120.0 - 50.0)
    snap = engine.run_snapshot()
    assert (snap.score, snap.distance, snap.time, snap.speed) == (0, 0.0, 0.0, 5.0)


def test_start_is_idempotent() -> None:
    """Starting an already running engine must not reset the run."""
    engine = _sample_engine()
    engine.start()
    _run_ticks(engine, 5)
    before = engine.run_snapshot()
    assert not engine.start()
    assert engine.run_snapshot() == before


def test_pause_freezes_state() -> None:
    """No tick mutates the run while paused."""
    engine = _sample_engine()
    engine.start(0.0)
    engine.tick(100.0)
    assert engine.pause()
    frozen = engine.run_snapshot()
    assert engine.tick(200.0) is TickStatus.SKIPPED
    assert engine.step(0.1) is TickStatus.SKIPPED
    assert engine.run_snapshot() == frozen
    assert engine.state is EngineState.PAUSED


def test_resume_excludes_paused_interval() -> None:
    """The first tick after resume integrates from the resume timestamp."""
    engine = _sample_engine()
    engine.start(0.0)
    engine.tick(50.0)
    engine.pause()
    assert engine.resume(10_000.0)
    engine.tick(10_020.0)
    assert engine.run_snapshot().time == pytest.approx(0.07)


def test_pause_and_resume_guards() -> None:
    """Pause needs a running engine and resume needs a paused one."""
    engine = _sample_engine()
    assert not engine.pause()
    assert not engine.resume()
    engine.start()
    assert not engine.resume()
    assert engine.toggle_pause()
    assert engine.state is EngineState.PAUSED
    assert engine.toggle_pause()
    assert engine.state is EngineState.RUNNING


def test_stop_returns_to_idle() -> None:
    """Stopping keeps the last values readable and fires no game-over."""
    calls: list[tuple] = []
    engine = _sample_engine(on_game_over=lambda *args: calls.append(args))
    engine.start()
    _run_ticks(engine, 3)
    engine.stop()
    assert engine.state is EngineState.IDLE
    assert engine.run_snapshot().time == pytest.approx(0.3)
    assert calls == []
    engine.start()
    assert engine.run_snapshot().time == 0.0


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------


def test_large_gap_is_capped() -> None:
    """A stalled frame advances at most max_delta_time."""
    engine = _sample_engine()
    engine.start(0.0)
    engine.tick(60_000.0)
    assert engine.run_snapshot().time == pytest.approx(0.1)


@pytest.mark.parametrize("bad", [None, float("nan"), "later", -5.0])
def test_malformed_timestamp_is_zero_length(bad: object) -> None:
    """Unusable timestamps neither fail nor advance the run."""
    engine = _sample_engine()
    engine.start(0.0)
    engine.tick(16.0)
    before = engine.run_snapshot()
    assert engine.tick(bad) is TickStatus.CONTINUE
    assert engine.run_snapshot() == before


def test_backwards_timestamp_keeps_baseline() -> None:
    """A timestamp earlier than the baseline does not rewind it."""
    engine = _sample_engine()
    engine.start(1000.0)
    engine.tick(900.0)
    engine.tick(1050.0)
    assert engine.run_snapshot().time == pytest.approx(0.05)


def test_numpy_timestamps_advance_the_run() -> None:
    """Timestamps from numpy clocks are ordinary real numbers."""
    engine = _sample_engine()
    engine.start(np.int64(0))
    engine.tick(np.int64(50))
    engine.tick(np.float32(80.0))
    assert engine.run_snapshot().time == pytest.approx(0.08)


def test_first_tick_without_baseline_only_sets_it() -> None:
    """start() without a timestamp makes the first tick zero-length."""
    engine = _sample_engine()
    engine.start()
    engine.tick(5000.0)
    assert engine.run_snapshot().time == 0.0
    engine.tick(5016.0)
    assert engine.run_snapshot().time == pytest.approx(0.016)


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------


def test_hundred_ticks_match_reference_accumulation() -> None:
    """100 ticks of 0.1 s match an independent accumulation run."""
    config = _quiet_config()
    engine = _sample_engine(config)
    engine.start()
    deltas = [0.1] * 100
    for dt in deltas:
        assert engine.step(dt) is TickStatus.CONTINUE

    time, speed, distance = _reference_accumulation(deltas, config)
    snap = engine.run_snapshot()
    assert snap.time == pytest.approx(10.0)
    assert snap.speed == pytest.approx(min(config.max_speed, 5.2))
    assert snap.time == time
    assert snap.speed == speed
    assert snap.distance == distance
    assert snap.distance == pytest.approx(510.1)
    assert snap.score == math.floor(distance * config.score_multiplier)


def test_speed_monotonic_and_bounded_with_irregular_frames() -> None:
    """Speed never decreases and never exceeds max_speed."""
    config = _quiet_config(speed_increment=0.5)
    engine = _sample_engine(config)
    engine.start(0.0)
    rng = np.random.default_rng(3)
    now = 0.0
    speeds: list[float] = []
    for _ in range(500):
        now += float(rng.uniform(0.0, 250.0))
        engine.tick(now)
        speeds.append(engine.run_snapshot().speed)
    assert all(b >= a for a, b in zip(speeds, speeds[1:]))
    assert max(speeds) <= config.max_speed
    assert speeds[-1] == config.max_speed


def test_score_replay_is_deterministic() -> None:
    """The same delta sequence yields the same score."""
    rng = np.random.default_rng(11)
    deltas = [float(d) for d in rng.uniform(0.0, 0.12, size=300)]

    scores = []
    for _ in range(2):
        engine = _sample_engine()
        engine.start()
        for dt in deltas:
            engine.step(dt)
        scores.append(engine.run_snapshot())
    assert scores[0] == scores[1]


# ---------------------------------------------------------------------------
# Movement and clamping
# ---------------------------------------------------------------------------


def test_right_clamp_holds() -> None:
    """At the right bound, further right input does not move the car."""
    engine = _sample_engine()
    engine.start()
    engine.set_right_intent(True)
    _run_ticks(engine, 20)
    max_x = engine.playfield.player_max_x
    assert engine.player.x == pytest.approx(max_x)
    _run_ticks(engine, 10)
    assert engine.player.x == pytest.approx(max_x)


def test_clamp_bounds_match_road() -> None:
    """Bounds are road_x + margin and road_x + road - car - margin."""
    engine = _sample_engine()
    road_x = (_WIDTH - 500.0) / 2
    assert engine.playfield.player_min_x == pytest.approx(road_x + 10.0)
    assert engine.playfield.player_max_x == pytest.approx(road_x + 500.0 - 70.0 - 10.0)


def test_long_left_hold_stays_in_bounds() -> None:
    """Holding left forever never leaves the road."""
    engine = _sample_engine()
    engine.start()
    engine.set_left_intent(True)
    for _ in range(200):
        engine.step(0.1)
        assert engine.player.x >= engine.playfield.player_min_x
    assert engine.player.x == pytest.approx(engine.playfield.player_min_x)


def test_both_intents_cancel() -> None:
    """Holding left and right together leaves the car in place."""
    engine = _sample_engine()
    engine.start()
    start_x = engine.player.x
    engine.set_left_intent(True)
    engine.set_right_intent(True)
    _run_ticks(engine, 10)
    assert engine.player.x == start_x
    assert engine.intents == (True, True)


def test_resize_applies_on_next_tick() -> None:
    """A narrower canvas re-clamps the car without resetting the run."""
    engine = _sample_engine()
    engine.start()
    engine.set_right_intent(True)
    _run_ticks(engine, 20)
    engine.set_right_intent(False)
    time_before = engine.run_snapshot().time

    engine.resize(600.0, 500.0)
    assert engine.player.y == pytest.approx(500.0 - 120.0 - 50.0)
    engine.step(0.05)
    assert engine.player.x == pytest.approx(engine.playfield.player_max_x)
    assert engine.run_snapshot().time == pytest.approx(time_before + 0.05)
    assert engine.state is EngineState.RUNNING


# ---------------------------------------------------------------------------
# Obstacles
# ---------------------------------------------------------------------------


def test_obstacle_leaves_after_passing_bottom() -> None:
    """An obstacle past canvas height + 100 leaves the active set."""
    engine = _sample_engine()
    engine.start()
    engine.set_left_intent(True)
    _run_ticks(engine, 10)  # car now in lane 0, clear of lane 1
    engine.set_left_intent(False)

    obstacle = spawn_in_lane([], 1, engine.playfield)
    assert obstacle is not None
    assert obstacle.y == -120.0
    engine._obstacles.append(obstacle)

    seen_ys: list[float] = []
    for _ in range(40):
        assert engine.step(0.1) is TickStatus.CONTINUE
        seen_ys.extend(obs.y for obs in engine.obstacles)

    assert engine.obstacles == ()
    assert seen_ys
    assert max(seen_ys) < _HEIGHT + 100.0


def test_obstacle_x_fixed_while_scrolling() -> None:
    """Obstacles only move vertically."""
    engine = _sample_engine()
    engine.start()
    engine.set_left_intent(True)
    _run_ticks(engine, 10)
    engine._obstacles.append(spawn_in_lane([], 2, engine.playfield))
    x0 = engine.obstacles[0].x
    _run_ticks(engine, 5)
    assert engine.obstacles[0].x == x0
    assert engine.obstacles[0].y > -120.0


def test_spawned_obstacles_stay_in_lanes() -> None:
    """Randomly spawned obstacles are centred in a valid lane."""
    config = GameConfig(spawn_rate=1.0)
    engine = _sample_engine(config)
    engine.start()
    engine.set_left_intent(True)
    for _ in range(8):
        if engine.step(0.1) is TickStatus.COLLIDED:
            break
    assert engine.obstacles
    for obs in engine.obstacles:
        assert 0 <= obs.lane < config.lane_count
        assert obs.x == pytest.approx(engine.playfield.lane_x(obs.lane))


# ---------------------------------------------------------------------------
# Collision and game over
# ---------------------------------------------------------------------------


def _crash_engine(calls: list) -> SimulationEngine:
    engine = _sample_engine(on_game_over=lambda *args: calls.append(args))
    engine.start()
    engine._obstacles.append(spawn_in_lane([], 1, engine.playfield))
    return engine


def test_collision_ends_run_once() -> None:
    """A collision moves to OVER and reports the frozen values once."""
    calls: list[tuple] = []
    engine = _crash_engine(calls)

    statuses = [engine.step(0.1) for _ in range(40)]
    assert TickStatus.COLLIDED in statuses
    first = statuses.index(TickStatus.COLLIDED)
    assert all(s is TickStatus.CONTINUE for s in statuses[:first])
    assert all(s is TickStatus.SKIPPED for s in statuses[first + 1 :])

    assert engine.state is EngineState.OVER
    assert len(calls) == 1
    snap = engine.run_snapshot()
    assert calls[0] == (snap.score, snap.distance, snap.time, snap.speed)


def test_over_state_ignores_ticks_until_restart() -> None:
    """Nothing mutates the run after game over; restart starts fresh."""
    calls: list[tuple] = []
    engine = _crash_engine(calls)
    while engine.step(0.1) is not TickStatus.COLLIDED:
        pass
    frozen = engine.run_snapshot()
    engine.tick(99_999.0)
    engine.set_left_intent(True)
    engine.step(0.1)
    assert engine.run_snapshot() == frozen
    assert not engine.start()

    engine.restart()
    assert engine.state is EngineState.RUNNING
    assert engine.obstacles == ()
    assert engine.run_snapshot().time == 0.0
    assert engine.run_count == 2
    assert len(calls) == 1


def test_each_run_reports_once() -> None:
    """Two crashed runs produce exactly two reports."""
    calls: list[tuple] = []
    engine = _crash_engine(calls)
    while engine.step(0.1) is not TickStatus.COLLIDED:
        pass
    engine.restart()
    engine._obstacles.append(spawn_in_lane([], 1, engine.playfield))
    while engine.step(0.1) is not TickStatus.COLLIDED:
        pass
    assert len(calls) == 2


def test_failing_callback_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """A raising game-over callback is logged and the run still ends."""

    def boom(*_args: object) -> None:
        raise RuntimeError("network down")

    engine = _sample_engine(on_game_over=boom)
    engine.start()
    engine._obstacles.append(spawn_in_lane([], 1, engine.playfield))
    with caplog.at_level(logging.ERROR, logger="neon_racer.core.engine"):
        while engine.step(0.1) is not TickStatus.COLLIDED:
            pass
    assert engine.state is EngineState.OVER
    assert "game-over callback failed" in caplog.text
    engine.restart()
    assert engine.state is EngineState.RUNNING


def test_frame_snapshot_is_detached() -> None:
    """Frames handed out earlier do not change as the engine advances."""
    engine = _sample_engine()
    engine.start()
    engine.set_left_intent(True)
    _run_ticks(engine, 10)
    engine._obstacles.append(spawn_in_lane([], 2, engine.playfield))
    frame = engine.frame()
    _run_ticks(engine, 5)
    assert frame.obstacles[0].y == -120.0
    assert frame.run.time == pytest.approx(1.0)
    assert frame.state is EngineState.RUNNING


@pytest.mark.parametrize(
    ("width", "height"),
    [(math.nan, 600.0), (800.0, math.inf), (0.0, 600.0)],
)
def test_unusable_canvas_dimensions_rejected(width: float, height: float) -> None:
    """Non-finite or non-positive canvas sizes are refused on build and resize."""
    with pytest.raises(ValueError, match="Playfield width and height"):
        SimulationEngine(width=width, height=height)

    engine = _sample_engine()
    engine.start()
    with pytest.raises(ValueError, match="Playfield width and height"):
        engine.resize(width, height)
    assert engine.playfield.width == 800.0
