"""Input adapter: keyboard, touch-drag and on-screen buttons to two intents.

Each device keeps its own state and the engine receives the OR of all
sources for each direction whenever any of them changes.  On-screen
button taps hold an intent for a short pulse measured in frame time;
expiry is evaluated by :meth:`InputAdapter.update`, which the frame loop
calls before every tick.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from neon_racer.core.engine import EngineState, SimulationEngine

LEFT_KEYS: frozenset[str] = frozenset({"ArrowLeft", "a", "A"})
RIGHT_KEYS: frozenset[str] = frozenset({"ArrowRight", "d", "D"})
PAUSE_KEYS: frozenset[str] = frozenset({"Escape", " "})

TOUCH_DEADZONE: float = 30.0  # pixels of drag before a direction registers
BUTTON_PULSE_MS: float = 150.0


class InputAdapter:
    """Translates device events into the engine's movement intents.

    Args:
        engine: Engine receiving the intents.
        on_pause_toggle: Called when a pause key is pressed during an
            active run.  Defaults to ``engine.toggle_pause``; pass a
            frame loop's ``toggle_pause`` so pending frames are cancelled.
    """

    def __init__(
        self,
        engine: SimulationEngine,
        on_pause_toggle: Callable[[], Any] | None = None,
    ) -> None:
        self.engine: SimulationEngine = engine
        self.on_pause_toggle: Callable[[], Any] = (
            on_pause_toggle if on_pause_toggle is not None else engine.toggle_pause
        )
        self._key_left: bool = False
        self._key_right: bool = False
        self._touch_left: bool = False
        self._touch_right: bool = False
        self._touch_origin: float | None = None
        self._pulse_left_until: float | None = None
        self._pulse_right_until: float | None = None

    @property
    def accepting(self) -> bool:
        """Movement input is only taken while a run is in progress."""
        return self.engine.state is EngineState.RUNNING

    # -- Keyboard ---------------------------------------------------------------

    def key_down(self, key: str) -> bool:
        """Handle a key press.

        Returns:
            True if the key was consumed.
        """
        if key in PAUSE_KEYS:
            if self.engine.state in (EngineState.RUNNING, EngineState.PAUSED):
                self.on_pause_toggle()
                return True
            return False
        if not self.accepting:
            return False
        if key in LEFT_KEYS:
            self._key_left = True
        elif key in RIGHT_KEYS:
            self._key_right = True
        else:
            return False
        self._sync()
        return True

    def key_up(self, key: str) -> None:
        """Releases are always honoured so intents never stick."""
        if key in LEFT_KEYS:
            self._key_left = False
        elif key in RIGHT_KEYS:
            self._key_right = False
        else:
            return
        self._sync()

    # -- Touch drag -------------------------------------------------------------

    def touch_start(self, x: float) -> None:
        if not self.accepting:
            return
        self._touch_origin = x

    def touch_move(self, x: float) -> None:
        if self._touch_origin is None or not self.accepting:
            return
        offset = x - self._touch_origin
        self._touch_left = offset < -TOUCH_DEADZONE
        self._touch_right = offset > TOUCH_DEADZONE
        self._sync()

    def touch_end(self) -> None:
        self._touch_origin = None
        self._touch_left = False
        self._touch_right = False
        self._sync()

    # -- On-screen buttons ------------------------------------------------------

    def press_left_button(self, now_ms: float) -> None:
        if self.accepting:
            self._pulse_left_until = now_ms + BUTTON_PULSE_MS
            self._sync()

    def press_right_button(self, now_ms: float) -> None:
        if self.accepting:
            self._pulse_right_until = now_ms + BUTTON_PULSE_MS
            self._sync()

    # -- Sampling ---------------------------------------------------------------

    def update(self, now_ms: float) -> None:
        """Expire button pulses that ended at or before *now_ms*."""
        if self._pulse_left_until is not None and now_ms >= self._pulse_left_until:
            self._pulse_left_until = None
        if self._pulse_right_until is not None and now_ms >= self._pulse_right_until:
            self._pulse_right_until = None
        self._sync()

    def release_all(self) -> None:
        """Clear every source, e.g. when the window loses focus."""
        self._key_left = self._key_right = False
        self._touch_left = self._touch_right = False
        self._touch_origin = None
        self._pulse_left_until = self._pulse_right_until = None
        self._sync()

    def _sync(self) -> None:
        left = self._key_left or self._touch_left or self._pulse_left_until is not None
        right = (
            self._key_right or self._touch_right or self._pulse_right_until is not None
        )
        self.engine.set_left_intent(left)
        self.engine.set_right_intent(right)
