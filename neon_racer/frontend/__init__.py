"""Input adapter and render helpers that sit outside the simulation core."""

from neon_racer.frontend.intents import InputAdapter
from neon_racer.frontend.render import (
    Cosmetics,
    RenderFrame,
    build_render_frame,
    format_time,
    hsl_to_rgb,
    hud_lines,
)

__all__ = [
    "Cosmetics",
    "InputAdapter",
    "RenderFrame",
    "build_render_frame",
    "format_time",
    "hsl_to_rgb",
    "hud_lines",
]
