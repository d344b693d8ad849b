"""Pydantic schemas for gesture input and slider snapshots.

Hosts that receive gestures as JSON (for example from a browser over a
websocket) validate them here before they reach the state machine, and
serialize the machine's output with ``SliderSnapshot``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from carousel_slider.core.config import PhysicsConstants
from carousel_slider.core.errors import InvalidGestureError
from carousel_slider.core.item_window import SliderItem
from carousel_slider.core.physics import slots_velocity_from_pixel_velocity
from carousel_slider.core.slider_machine import SliderMachine
from carousel_slider.core.states import (
    ButtonPress,
    DragMove,
    PointerDown,
    PointerUp,
    SliderEvent,
    SliderState,
)
from carousel_slider.core.styles import NumericStyle, clamp


class PointerDownPayload(BaseModel):
    """Pointer pressed on the slider."""

    type: Literal["pointer_down"]

    def to_event(self, physics: PhysicsConstants) -> SliderEvent:
        return PointerDown()


class DragMovePayload(BaseModel):
    """Pointer moved while pressed."""

    type: Literal["drag_move"]
    movement_x: float = Field(..., description="Total movement along the slide axis in px")
    pixels_per_step: float = Field(..., gt=0, description="Pixels of movement per slot")
    dir_y: float = Field(0.0, ge=0, le=1, description="Off-axis fraction of the movement")

    model_config = ConfigDict(
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "type": "drag_move",
                "movement_x": -180.0,
                "pixels_per_step": 240.0,
                "dir_y": 0.1,
            }
        }
    )

    def to_event(self, physics: PhysicsConstants) -> SliderEvent:
        return DragMove(
            movement_x=self.movement_x,
            pixels_per_step=self.pixels_per_step,
            dir_y=self.dir_y,
        )


class PointerUpPayload(BaseModel):
    """Pointer released.

    Carries either the raw pointer velocity (``velocity_x``, px/ms), which is
    converted to slots, or an already converted ``release_velocity``. Both
    end up clamped to the maximum inertia velocity.
    """

    type: Literal["pointer_up"]
    velocity_x: float | None = Field(None, description="Pointer velocity in px/ms")
    release_velocity: float | None = Field(None, description="Velocity in slots/ms")

    model_config = ConfigDict(allow_inf_nan=False)

    @model_validator(mode="after")
    def check_single_velocity(self) -> PointerUpPayload:
        if self.velocity_x is not None and self.release_velocity is not None:
            raise ValueError("Provide either velocity_x or release_velocity, not both")
        return self

    def to_event(self, physics: PhysicsConstants) -> SliderEvent:
        if self.velocity_x is not None:
            velocity = slots_velocity_from_pixel_velocity(self.velocity_x, physics)
        else:
            velocity = clamp(
                self.release_velocity or 0.0,
                -physics.max_inertia_velocity,
                physics.max_inertia_velocity,
            )
        return PointerUp(release_velocity=velocity)


class ButtonPressPayload(BaseModel):
    """Previous/next button pressed."""

    type: Literal["button_press"]
    direction: Literal[1, -1]

    def to_event(self, physics: PhysicsConstants) -> SliderEvent:
        return ButtonPress(direction=self.direction)


GestureEventPayload = Annotated[
    Union[PointerDownPayload, DragMovePayload, PointerUpPayload, ButtonPressPayload],
    Field(discriminator="type"),
]

_gesture_adapter: TypeAdapter[Any] = TypeAdapter(GestureEventPayload)


def parse_gesture_event(
    data: dict[str, Any] | str | bytes, physics: PhysicsConstants | None = None
) -> SliderEvent:
    """Validate a gesture payload and convert it to a slider event.

    Args:
        data: A dict, or a JSON document.
        physics: Constants used to convert pointer velocity; defaults apply
            when omitted.

    Raises:
        InvalidGestureError: If the payload is malformed.
    """
    try:
        if isinstance(data, (str, bytes)):
            payload = _gesture_adapter.validate_json(data)
        else:
            payload = _gesture_adapter.validate_python(data)
    except ValidationError as ex:
        raise InvalidGestureError.from_exception(ex) from ex
    return payload.to_event(physics or PhysicsConstants())


class StyleSnapshot(BaseModel):
    """Visual parameters of one rendered slot."""

    opacity: float
    rotate_y: float
    translate_x: float
    translate_z: float
    scale: float
    blur: float
    container_translate_x: float
    z_index: int

    @classmethod
    def from_style(cls, style: NumericStyle) -> StyleSnapshot:
        return cls(
            opacity=style.opacity,
            rotate_y=style.rotate_y,
            translate_x=style.translate_x,
            translate_z=style.translate_z,
            scale=style.scale,
            blur=style.blur,
            container_translate_x=style.container_translate_x,
            z_index=round(style.z_index),
        )


class SliderItemSnapshot(BaseModel):
    """One rendered item."""

    key: str
    original_index: int
    sentinel: bool
    item: Any = None
    style: StyleSnapshot

    @classmethod
    def from_item(cls, item: SliderItem[Any]) -> SliderItemSnapshot:
        return cls(
            key=item.key,
            original_index=item.original_index,
            sentinel=item.is_sentinel,
            item=item.item,
            style=StyleSnapshot.from_style(item.style),
        )


class SliderSnapshot(BaseModel):
    """Serializable view of a slider machine."""

    state: str = Field(..., description="idle, pressed, dragging, inertia or snapping")
    progress: float
    active_index: int
    window_size: int
    items: list[SliderItemSnapshot] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "state": "idle",
                "progress": 0.0,
                "active_index": 0,
                "window_size": 3,
                "items": [],
            }
        }
    )

    @classmethod
    def from_machine(cls, machine: SliderMachine[Any]) -> SliderSnapshot:
        state: SliderState = machine.state
        return cls(
            state=state.type,
            progress=machine.progress,
            active_index=machine.active_index,
            window_size=machine.window_size,
            items=[SliderItemSnapshot.from_item(item) for item in machine.items],
        )
