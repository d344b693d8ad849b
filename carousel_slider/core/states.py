"""Slider interaction states and input events.

``SliderState`` is a tagged union: exactly one variant is current at a time,
and the animating variants carry the handle of the frame request that drives
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True)
class Idle:
    type: Literal["idle"] = "idle"


@dataclass(frozen=True)
class Pressed:
    """Pointer is down; waiting for enough movement to classify a drag."""

    frozen_progress: float
    type: Literal["pressed"] = "pressed"


@dataclass(frozen=True)
class Dragging:
    """Pointer is moving the slider.

    Attributes:
        progress: Sub-slot offset from the committed index, inside (-1, 1).
        step_offset: Whole slots already committed during this drag.
        base_offset: Progress when the drag started.
    """

    progress: float
    step_offset: int
    base_offset: float
    type: Literal["dragging"] = "dragging"


@dataclass(frozen=True)
class Inertia:
    """Coasting after release under exponential velocity decay."""

    velocity: float
    progress: float
    loop_handle: int
    last_timestamp: float | None = None
    type: Literal["inertia"] = "inertia"


@dataclass(frozen=True)
class Snapping:
    """Spring-driven convergence toward the integer slot ``target``."""

    velocity: float
    progress: float
    target: int
    loop_handle: int
    last_timestamp: float | None = None
    type: Literal["snapping"] = "snapping"


SliderState = Union[Idle, Pressed, Dragging, Inertia, Snapping]


@dataclass(frozen=True)
class PointerDown:
    type: Literal["pointer_down"] = "pointer_down"


@dataclass(frozen=True)
class DragMove:
    """Pointer movement since the press.

    Attributes:
        movement_x: Total movement along the slide axis in pixels.
        pixels_per_step: Pixels of movement equal to one slot.
        dir_y: Fraction of the movement that is off-axis, in [0, 1].
    """

    movement_x: float
    pixels_per_step: float
    dir_y: float = 0.0
    type: Literal["drag_move"] = "drag_move"


@dataclass(frozen=True)
class PointerUp:
    """Pointer released with a velocity in slots per millisecond."""

    release_velocity: float = 0.0
    type: Literal["pointer_up"] = "pointer_up"


@dataclass(frozen=True)
class ButtonPress:
    direction: Literal[1, -1]
    type: Literal["button_press"] = "button_press"


SliderEvent = Union[PointerDown, DragMove, PointerUp, ButtonPress]


def state_progress(state: SliderState) -> float:
    """Progress currently displayed for ``state``."""
    if isinstance(state, Pressed):
        return state.frozen_progress
    if isinstance(state, (Dragging, Inertia, Snapping)):
        return state.progress
    return 0.0


def state_loop_handle(state: SliderState) -> int | None:
    if isinstance(state, (Inertia, Snapping)):
        return state.loop_handle
    return None
