"""Core slider logic.

Platform-agnostic windowing, styling, physics and the interaction state
machine. Nothing in here touches a display or an input device.
"""

from carousel_slider.core.config import (
    PhysicsConstants,
    SliderSettings,
    effective_window_size,
)
from carousel_slider.core.errors import (
    ConfigurationError,
    InvalidGestureError,
    SliderError,
)
from carousel_slider.core.item_window import (
    SliderItem,
    default_item_key,
    get_visible_items,
    normalize_index,
    wrap_for_slider,
)
from carousel_slider.core.logging import configure_logging, get_logger
from carousel_slider.core.physics import (
    inertia_step,
    slots_velocity_from_pixel_velocity,
    spring_step,
    truncate_toward_zero,
)
from carousel_slider.core.slider_machine import SliderMachine
from carousel_slider.core.states import (
    ButtonPress,
    Dragging,
    DragMove,
    Idle,
    Inertia,
    PointerDown,
    PointerUp,
    Pressed,
    SliderEvent,
    SliderState,
    Snapping,
)
from carousel_slider.core.styles import (
    NumericStyle,
    apply_progress_styles,
    interpolated_style,
    visible_slot_style,
)

__all__ = [
    # Config
    "PhysicsConstants",
    "SliderSettings",
    "effective_window_size",
    # Errors
    "ConfigurationError",
    "InvalidGestureError",
    "SliderError",
    # Item window
    "SliderItem",
    "default_item_key",
    "get_visible_items",
    "normalize_index",
    "wrap_for_slider",
    # Logging
    "configure_logging",
    "get_logger",
    # Physics
    "inertia_step",
    "slots_velocity_from_pixel_velocity",
    "spring_step",
    "truncate_toward_zero",
    # State machine
    "SliderMachine",
    "ButtonPress",
    "Dragging",
    "DragMove",
    "Idle",
    "Inertia",
    "PointerDown",
    "PointerUp",
    "Pressed",
    "SliderEvent",
    "SliderState",
    "Snapping",
    # Styles
    "NumericStyle",
    "apply_progress_styles",
    "interpolated_style",
    "visible_slot_style",
]
