"""Manually advanced frame clock.

Frames only fire when the owner advances time, which makes animation fully
deterministic. Used by the test suite and by headless hosts that drive the
slider from their own render loop.

Example:
    clock = ManualFrameClock()
    machine = SliderMachine(items, clock)
    machine.next()
    frames = clock.run_until_idle()
"""

from __future__ import annotations

from itertools import count

from carousel_slider.ports.clock import FrameCallback

DEFAULT_FRAME_MS = 1000 / 60


class ManualFrameClock:
    """In-memory implementation of the FrameClock protocol.

    Callbacks requested while a frame is being delivered are queued for the
    following frame, never the current one.

    Attributes:
        now: Timestamp of the most recent frame in milliseconds.
        frame_interval: Default step used by ``advance`` and ``run_until_idle``.
    """

    def __init__(self, start: float = 0.0, frame_interval: float = DEFAULT_FRAME_MS) -> None:
        self.now = start
        self.frame_interval = frame_interval
        self._handles = count(1)
        self._pending: dict[int, FrameCallback] = {}
        self._delivering: dict[int, FrameCallback] = {}
        self._frames_delivered = 0

    @property
    def pending(self) -> int:
        """Number of frame requests waiting to fire."""
        return len(self._pending)

    @property
    def frames_delivered(self) -> int:
        return self._frames_delivered

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)
        self._delivering.pop(handle, None)

    def advance(self, ms: float | None = None) -> int:
        """Move time forward and deliver one frame.

        Args:
            ms: Time step; defaults to ``frame_interval``.

        Returns:
            Number of callbacks that fired.
        """
        self.now += self.frame_interval if ms is None else ms
        self._delivering = self._pending
        self._pending = {}
        fired = 0
        # A callback may cancel a later one in the same batch
        while self._delivering:
            handle = next(iter(self._delivering))
            callback = self._delivering.pop(handle)
            callback(self.now)
            fired += 1
        self._frames_delivered += 1
        return fired

    def run_until_idle(self, max_frames: int = 10_000, ms: float | None = None) -> int:
        """Deliver frames until nothing is pending.

        Args:
            max_frames: Upper bound on frames, guarding against loops that
                never settle.
            ms: Time step per frame; defaults to ``frame_interval``.

        Returns:
            Number of frames delivered.

        Raises:
            RuntimeError: If requests are still pending after ``max_frames``.
        """
        frames = 0
        while self._pending:
            if frames >= max_frames:
                raise RuntimeError(f"frame loop still running after {max_frames} frames")
            self.advance(ms)
            frames += 1
        return frames
