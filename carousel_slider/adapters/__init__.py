"""Adapters for external systems.

This module contains implementations of the FrameClock protocol.
"""

from carousel_slider.adapters.asyncio_clock import AsyncioFrameClock
from carousel_slider.adapters.factory import create_clock
from carousel_slider.adapters.manual_clock import ManualFrameClock

__all__ = [
    "AsyncioFrameClock",
    "ManualFrameClock",
    "create_clock",
]
