"""Tests for the deterministic per-tick formulas."""

import math

import numpy as np
import pytest

from neon_racer.core.game_config import GameConfig
from neon_racer.core.physics import (
    Rect,
    clamp_delta_time,
    distance_step,
    hitbox,
    lateral_step,
    rects_overlap,
    score_for,
    scroll_step,
    speed_at,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _sample_config() -> GameConfig:
    return GameConfig()


# ---------------------------------------------------------------------------
# Delta time
# ---------------------------------------------------------------------------


def test_delta_time_converts_milliseconds() -> None:
    """A 16 ms gap must become 0.016 s."""
    assert clamp_delta_time(1000.0, 1016.0, 0.1) == pytest.approx(0.016)


def test_delta_time_is_capped() -> None:
    """A long stall must be capped at the configured maximum."""
    assert clamp_delta_time(0.0, 5000.0, 0.1) == 0.1


@pytest.mark.parametrize(
    "current",
    [None, float("nan"), float("inf"), "soon", True, 900.0, 1000.0],
)
def test_delta_time_zero_for_unusable_timestamps(current: object) -> None:
    """Missing, malformed or non-increasing timestamps give a zero delta."""
    assert clamp_delta_time(1000.0, current, 0.1) == 0.0


def test_delta_time_accepts_numpy_scalars() -> None:
    """numpy integer and float timestamps are valid."""
    assert clamp_delta_time(1000.0, np.int64(1050), 0.1) == pytest.approx(0.05)
    assert clamp_delta_time(1000.0, np.float32(1020.0), 0.1) == pytest.approx(0.02)
    assert clamp_delta_time(1000.0, np.bool_(True), 0.1) == 0.0


def test_delta_time_zero_without_baseline() -> None:
    """The first frame of a run has no previous timestamp."""
    assert clamp_delta_time(None, 1234.0, 0.1) == 0.0


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------


def test_speed_ramp_and_saturation() -> None:
    """Speed starts at base, grows linearly, and saturates at max."""
    config = _sample_config()
    assert speed_at(0.0, config) == config.base_speed
    assert speed_at(10.0, config) == pytest.approx(5.2)
    assert speed_at(10_000.0, config) == config.max_speed


def test_speed_is_monotonic_in_time() -> None:
    """Later times never produce lower speeds."""
    config = _sample_config()
    speeds = [speed_at(t * 7.3, config) for t in range(200)]
    assert all(b >= a for a, b in zip(speeds, speeds[1:]))


def test_distance_and_score_formulas() -> None:
    """Distance scales with speed and time; score floors distance * multiplier."""
    config = _sample_config()
    assert distance_step(5.0, 0.1, config) == pytest.approx(5.0)
    assert score_for(12.34, config) == 123
    assert score_for(0.0, config) == 0


def test_scroll_step_uses_scroll_factor() -> None:
    """Obstacles move speed * 60 pixels per second."""
    config = _sample_config()
    assert scroll_step(5.0, 0.1, config) == pytest.approx(30.0)


# ---------------------------------------------------------------------------
# Lateral movement
# ---------------------------------------------------------------------------


def test_lateral_step_directions() -> None:
    """Left is negative, right is positive, at 400 px/s."""
    config = _sample_config()
    assert lateral_step(True, False, 0.1, config) == pytest.approx(-40.0)
    assert lateral_step(False, True, 0.1, config) == pytest.approx(40.0)
    assert lateral_step(False, False, 0.1, config) == 0.0


def test_opposite_intents_cancel() -> None:
    """Holding both directions produces no movement."""
    assert lateral_step(True, True, 0.1, _sample_config()) == 0.0


# ---------------------------------------------------------------------------
# Hitboxes
# ---------------------------------------------------------------------------


def test_hitbox_inset() -> None:
    """Hitboxes are inset 8/10 px and shrunk by 16/15 px."""
    box = hitbox(100.0, 200.0, 70.0, 120.0, _sample_config())
    assert box == Rect(108.0, 210.0, 54.0, 105.0)


def test_overlap_detected() -> None:
    """Intersecting rectangles collide."""
    assert rects_overlap(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))


def test_touching_edges_do_not_overlap() -> None:
    """Rectangles sharing only an edge do not collide."""
    assert not rects_overlap(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
    assert not rects_overlap(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))


def test_sprites_touching_visually_miss_with_insets() -> None:
    """Sprites overlapping by less than the inset margins do not collide."""
    config = _sample_config()
    a = hitbox(0.0, 0.0, 70.0, 120.0, config)
    b = hitbox(60.0, 0.0, 70.0, 120.0, config)
    assert not rects_overlap(a, b)
    assert math.isclose(a.x + a.width, 62.0)
