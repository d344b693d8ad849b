"""Frame clock factory.

Supported backends:
- "manual": Deterministic clock advanced by the caller
- "asyncio": Clock scheduling frames on an asyncio event loop

Example:
    clock = create_clock("manual")
    clock = create_clock("asyncio", frame_interval=1 / 120)
"""

from __future__ import annotations

import asyncio
from typing import Union

from carousel_slider.adapters.asyncio_clock import AsyncioFrameClock
from carousel_slider.adapters.manual_clock import ManualFrameClock

ClockType = Union[ManualFrameClock, AsyncioFrameClock]


def create_clock(
    backend: str,
    frame_interval: float | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> ClockType:
    """Create a frame clock for the given backend.

    Args:
        backend: "manual" or "asyncio".
        frame_interval: Frame spacing. Milliseconds for "manual", seconds for
            "asyncio". Uses the backend default when omitted.
        loop: Event loop for the "asyncio" backend.

    Returns:
        A clock implementing the FrameClock protocol.

    Raises:
        ValueError: If the backend is not supported.
    """
    if backend == "manual":
        if loop is not None:
            raise ValueError("'loop' is only supported by the asyncio backend")
        if frame_interval is None:
            return ManualFrameClock()
        return ManualFrameClock(frame_interval=frame_interval)

    if backend == "asyncio":
        if frame_interval is None:
            return AsyncioFrameClock(loop=loop)
        return AsyncioFrameClock(loop=loop, frame_interval=frame_interval)

    raise ValueError(
        f"Unsupported clock backend: '{backend}'. Supported backends: 'manual', 'asyncio'"
    )
