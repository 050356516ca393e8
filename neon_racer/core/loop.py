"""Cooperative frame loop driving a :class:`SimulationEngine`.

The loop never owns a timer.  It asks an injected scheduler for "the
next frame", the scheduler later calls back with a monotonically
increasing timestamp, and one tick runs to completion before the next
frame is requested.  At most one frame request is ever pending, which
makes :meth:`FrameLoop.start` idempotent and lets :meth:`FrameLoop.pause`
cancel cleanly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from neon_racer.core.engine import (
    EngineState,
    FrameSnapshot,
    SimulationEngine,
    TickStatus,
)

FrameCallback = Callable[[float], None]
RenderSink = Callable[[FrameSnapshot], Any]


class FrameScheduler(Protocol):
    """Minimal "render the next frame" primitive."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule *callback* for the next frame and return a handle."""
        ...

    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request; unknown handles are ignored."""
        ...


class IntentSource(Protocol):
    """Anything that refreshes engine intents just before a tick."""

    def update(self, now_ms: float) -> None: ...


class ManualFrameScheduler:
    """Deterministic scheduler whose clock is advanced by the caller.

    Used for headless play and tests.  Each :meth:`advance` fires the
    pending callbacks with the new clock value; callbacks requested while
    firing wait for the next advance.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms: float = start_ms
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle: int = 1

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms* and fire due callbacks.

        Returns:
            Number of callbacks fired.

        Raises:
            ValueError: If *ms* is negative.
        """
        if ms < 0.0:
            raise ValueError("ms must be >= 0.")
        self.now_ms += ms
        due = self._pending
        self._pending = {}
        for callback in due.values():
            callback(self.now_ms)
        return len(due)

    def run_frames(self, count: int, frame_ms: float = 1000.0 / 60.0) -> int:
        """Advance *count* frames of *frame_ms* each; stop early when idle.

        Returns:
            Number of frames that fired a callback.
        """
        fired = 0
        for _ in range(count):
            if not self._pending:
                break
            self.advance(frame_ms)
            fired += 1
        return fired


class FrameLoop:
    """Binds an engine to a scheduler, a render sink and an intent source.

    Args:
        engine: Engine to drive.
        scheduler: Frame request primitive.
        render: Called with a :class:`FrameSnapshot` after every tick that
            did not end the run, so the last pre-collision frame stays on
            screen after a crash.
        intents: Optional source refreshed with the frame timestamp before
            each tick (e.g. button pulses that expire).
    """

    def __init__(
        self,
        engine: SimulationEngine,
        scheduler: FrameScheduler,
        render: RenderSink | None = None,
        intents: IntentSource | None = None,
    ) -> None:
        self.engine: SimulationEngine = engine
        self.scheduler: FrameScheduler = scheduler
        self.render: RenderSink | None = render
        self.intents: IntentSource | None = intents
        self._handle: int | None = None

    @property
    def is_scheduled(self) -> bool:
        return self._handle is not None

    def start(self) -> bool:
        """Ensure a frame is pending while the engine runs.

        Returns:
            True if a new frame was requested; False if one was already
            pending or the engine is not running.
        """
        if self._handle is not None or self.engine.state is not EngineState.RUNNING:
            return False
        self._handle = self.scheduler.request_frame(self._on_frame)
        return True

    def stop(self) -> None:
        """Cancel the pending frame, if any."""
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    # -- Engine commands routed through the loop ------------------------------

    def start_run(self, timestamp_ms: float | None = None) -> None:
        """Start a run (or restart a finished one) and schedule frames."""
        if self.engine.state is EngineState.IDLE:
            self.engine.start(timestamp_ms)
        else:
            self.engine.restart(timestamp_ms)
        self.start()

    def pause(self) -> None:
        self.engine.pause()
        self.stop()

    def resume(self, timestamp_ms: float | None = None) -> None:
        if self.engine.resume(timestamp_ms):
            self.start()

    def toggle_pause(self, timestamp_ms: float | None = None) -> None:
        if self.engine.state is EngineState.RUNNING:
            self.pause()
        else:
            self.resume(timestamp_ms)

    def halt(self) -> None:
        """Stop the engine and the loop."""
        self.engine.stop()
        self.stop()

    # -- Frame callback -------------------------------------------------------

    def _on_frame(self, timestamp_ms: float) -> None:
        self._handle = None
        if self.engine.state is not EngineState.RUNNING:
            return

        if self.intents is not None:
            self.intents.update(timestamp_ms)

        status = self.engine.tick(timestamp_ms)
        if status is TickStatus.COLLIDED:
            return

        if self.render is not None:
            self.render(self.engine.frame())
        self.start()
