"""Validation and serialization at the host boundary."""

from carousel_slider.api.schemas import (
    GestureEventPayload,
    SliderItemSnapshot,
    SliderSnapshot,
    StyleSnapshot,
    parse_gesture_event,
)

__all__ = [
    "GestureEventPayload",
    "SliderItemSnapshot",
    "SliderSnapshot",
    "StyleSnapshot",
    "parse_gesture_event",
]
