"""Frame clock protocol.

The slider never sleeps or polls. It asks a clock for the next display frame
and gets called back once with a monotonically increasing timestamp in
milliseconds. Implementations can wrap a GUI toolkit's vsync signal, an
asyncio event loop, or a manually advanced clock for tests.
"""

from collections.abc import Callable
from typing import Protocol

FrameCallback = Callable[[float], None]


class FrameClock(Protocol):
    """Protocol for per-frame callback delivery."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback`` for the next frame.

        Args:
            callback: Called once with the frame timestamp in milliseconds.
                Never invoked from inside ``request_frame`` itself; the
                caller must have the returned handle before the frame fires.

        Returns:
            A handle that can be passed to ``cancel_frame``. Handles are
            never reused by the same clock.
        """
        ...

    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending frame request.

        Cancelling a handle that already fired or was already cancelled is a
        no-op.
        """
        ...
