"""Mock implementations for testing."""

from tests.mocks.clocks import RecordingFrameClock
from tests.mocks.items import make_items

__all__ = ["RecordingFrameClock", "make_items"]
