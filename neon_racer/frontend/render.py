"""Render-side helpers: colour cycling, road scroll and HUD text.

Nothing in this module feeds back into the simulation.  The cosmetic
clock advances from the run time carried by each snapshot, so paused or
finished runs hold their colours still.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from neon_racer.core.engine import EngineState, FrameSnapshot
from neon_racer.core.game_config import GameConfig
from neon_racer.core.physics import Rect

RGB = tuple[int, int, int]

HUE_DEGREES_PER_SECOND: float = 30.0
LANE_DASH_PERIOD: float = 70.0  # pixels between repeated lane-line dashes


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """Convert HSL (hue in degrees, s/l in [0, 1]) to 8-bit RGB."""
    h = hue % 360.0
    c = (1.0 - abs(2.0 * lightness - 1.0)) * saturation
    x = c * (1.0 - abs((h / 60.0) % 2.0 - 1.0))
    m = lightness - c / 2.0

    if h < 60.0:
        r, g, b = c, x, 0.0
    elif h < 120.0:
        r, g, b = x, c, 0.0
    elif h < 180.0:
        r, g, b = 0.0, c, x
    elif h < 240.0:
        r, g, b = 0.0, x, c
    elif h < 300.0:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return (
        int(round((r + m) * 255)),
        int(round((g + m) * 255)),
        int(round((b + m) * 255)),
    )


@dataclass(frozen=True)
class Sprite:
    """A coloured rectangle to draw."""

    rect: Rect
    color: RGB


@dataclass(frozen=True)
class RenderFrame:
    """Immutable draw list for one frame.

    Attributes:
        road: Road surface rectangle.
        road_color: Road surface colour.
        lane_lines: x coordinates of the lane dividers.
        dash_offset: Vertical phase of the dashed lane lines.
        player: Player sprite.
        obstacles: Obstacle sprites.
        hud: HUD text lines.
        overlay: ``"paused"``, ``"game over"`` or ``None``.
    """

    road: Rect
    road_color: RGB
    lane_lines: tuple[float, ...]
    dash_offset: float
    player: Sprite
    obstacles: tuple[Sprite, ...]
    hud: tuple[str, ...]
    overlay: str | None


class Cosmetics:
    """Colour-cycle and road-scroll clock driven by snapshot run time."""

    __slots__ = ("color_cycle", "road_offset", "_last_time")

    def __init__(self) -> None:
        self.color_cycle: float = 0.0
        self.road_offset: float = 0.0
        self._last_time: float = 0.0

    def advance(self, frame: FrameSnapshot, scroll_factor: float) -> None:
        delta = frame.run.time - self._last_time
        if delta < 0.0:
            # New run: restart the clock.
            self.color_cycle = 0.0
            self.road_offset = 0.0
            delta = frame.run.time
        self._last_time = frame.run.time

        self.color_cycle = (self.color_cycle + delta * HUE_DEGREES_PER_SECOND) % 360.0
        self.road_offset += frame.run.speed * scroll_factor * delta
        if self.road_offset > LANE_DASH_PERIOD:
            self.road_offset = math.fmod(self.road_offset, LANE_DASH_PERIOD)


def format_time(seconds: float) -> str:
    """Format seconds as ``m:ss``."""
    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02d}"


def hud_lines(frame: FrameSnapshot, best_score: int | None = None) -> tuple[str, ...]:
    """Text lines for a heads-up display."""
    run = frame.run
    lines = [
        f"Score    {run.score:,}",
        f"Speed    {run.speed:.1f}",
        f"Time     {format_time(run.time)}",
        f"Distance {run.distance:.0f}m",
    ]
    if best_score is not None:
        lines.append(f"Best     {best_score:,}")
    return tuple(lines)


def build_render_frame(
    frame: FrameSnapshot,
    config: GameConfig,
    cosmetics: Cosmetics,
    best_score: int | None = None,
) -> RenderFrame:
    """Advance the cosmetic clock and produce the draw list for *frame*."""
    cosmetics.advance(frame, config.scroll_factor)
    cycle = cosmetics.color_cycle

    lane_width = config.lane_width
    lane_lines = tuple(
        frame.road_x + i * lane_width for i in range(1, config.lane_count)
    )
    obstacles = tuple(
        Sprite(
            rect=Rect(obs.x, obs.y, obs.width, obs.height),
            color=hsl_to_rgb(obs.color_hue + cycle, 1.0, 0.6),
        )
        for obs in frame.obstacles
    )

    overlay: str | None = None
    if frame.state is EngineState.PAUSED:
        overlay = "paused"
    elif frame.state is EngineState.OVER:
        overlay = "game over"

    return RenderFrame(
        road=Rect(frame.road_x, 0.0, config.road_width, frame.canvas_height),
        road_color=hsl_to_rgb(cycle + 240.0, 0.7, 0.25),
        lane_lines=lane_lines,
        dash_offset=cosmetics.road_offset,
        player=Sprite(rect=frame.player, color=hsl_to_rgb(cycle + 180.0, 1.0, 0.6)),
        obstacles=obstacles,
        hud=hud_lines(frame, best_score),
        overlay=overlay,
    )
