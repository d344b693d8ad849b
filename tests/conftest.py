"""Shared pytest fixtures for carousel-slider tests."""

from collections.abc import Generator
from typing import Any

import pytest

from carousel_slider.adapters.manual_clock import ManualFrameClock
from carousel_slider.core.slider_machine import SliderMachine
from tests.mocks.clocks import RecordingFrameClock
from tests.mocks.items import make_items


@pytest.fixture
def five_items() -> list[dict[str, Any]]:
    """Provide five distinct items.

    Returns:
        list: Items with ids p0..p4.
    """
    return make_items(5)


@pytest.fixture
def clock() -> ManualFrameClock:
    """Provide a manually advanced frame clock at t=0."""
    return ManualFrameClock()


@pytest.fixture
def recording_clock() -> RecordingFrameClock:
    """Provide a clock that only fires when the test says so."""
    return RecordingFrameClock()


@pytest.fixture
def machine(
    five_items: list[dict[str, Any]], clock: ManualFrameClock
) -> Generator[SliderMachine[dict[str, Any]], None, None]:
    """Provide a slider over five items showing all of them.

    The machine is closed after the test so no frame request outlives it.
    """
    slider: SliderMachine[dict[str, Any]] = SliderMachine(five_items, clock)
    yield slider
    slider.close()
