"""Frame clock backed by an asyncio event loop.

Frames are scheduled with ``loop.call_later`` at a fixed interval and stamped
with ``loop.time()`` in milliseconds, which is monotonic. Suitable for hosts
that already run an event loop, such as a websocket server pushing slider
snapshots to a browser.
"""

from __future__ import annotations

import asyncio
from itertools import count

from carousel_slider.core.logging import get_logger
from carousel_slider.ports.clock import FrameCallback

logger = get_logger(__name__)

DEFAULT_FRAME_INTERVAL_S = 1 / 60


class AsyncioFrameClock:
    """FrameClock implementation on top of an asyncio event loop.

    Example:
        async def main():
            clock = AsyncioFrameClock()
            machine = SliderMachine(items, clock)
            machine.next()
            await clock.wait_idle()
            clock.close()
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        frame_interval: float = DEFAULT_FRAME_INTERVAL_S,
    ) -> None:
        """Initialize the clock.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop at
                the time of the first request.
            frame_interval: Seconds between frames.
        """
        if frame_interval <= 0:
            raise ValueError("frame_interval must be positive")
        self._loop = loop
        self.frame_interval = frame_interval
        self._handles = count(1)
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._delivering = False
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> int:
        return len(self._timers)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> int:
        loop = self._get_loop()
        handle = next(self._handles)
        self._timers[handle] = loop.call_later(
            self.frame_interval, self._fire, handle, callback
        )
        self._idle.clear()
        return handle

    def cancel_frame(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.cancel()
        # While a frame is being delivered, _fire decides idleness once the
        # callback has had its chance to request the next frame
        if not self._timers and not self._delivering:
            self._idle.set()

    def _fire(self, handle: int, callback: FrameCallback) -> None:
        if self._timers.pop(handle, None) is None:
            return
        self._delivering = True
        try:
            callback(self._get_loop().time() * 1000)
        except Exception:
            logger.exception("frame_callback_failed", handle=handle)
        finally:
            self._delivering = False
            if not self._timers:
                self._idle.set()

    async def wait_idle(self, timeout: float | None = None) -> None:
        """Wait until no frame requests are pending.

        Raises:
            TimeoutError: If the clock is still busy after ``timeout`` seconds.
        """
        await asyncio.wait_for(self._idle.wait(), timeout)

    def close(self) -> None:
        """Cancel every pending frame."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._idle.set()
