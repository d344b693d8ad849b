"""Progress to visual-parameter interpolation.

Every rendered slot gets a position: how many slots right of the frontmost
visible slot it currently sits. Integer positions inside the window map to
fixed slot styles; fractional positions blend the two bracketing slots; the
regions just outside the window blend toward fully transparent sentinel
styles. Everything here is pure.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from carousel_slider.core.item_window import SliderItem

T = TypeVar("T")

MAX_ROTATE_DEG = 75
ROTATE_PER_SLOT_DEG = 3
MAX_DEPTH_PX = 500
DEPTH_PER_SLOT_PX = 40
MAX_BLUR_PX = 60


@dataclass(frozen=True)
class NumericStyle:
    """Numeric visual parameters for one rendered slot.

    Units follow the presentation layer: opacity in percent, rotation in
    degrees, translate_x and container_translate_x in percent, translate_z and
    blur in pixels.
    """

    opacity: float = 0.0
    rotate_y: float = 0.0
    translate_x: float = 0.0
    translate_z: float = 0.0
    scale: float = 1.0
    blur: float = 0.0
    container_translate_x: float = 0.0
    z_index: float = 0.0


@dataclass(frozen=True)
class BaseParams:
    """Shape parameters derived from the window size."""

    length: int
    last: int
    max_rotate: float
    max_depth: float
    min_scale: float
    max_blur: float


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def lerp(start: float, end: float, amount: float) -> float:
    return start + (end - start) * amount


def get_base_params(window_size: int) -> BaseParams:
    return BaseParams(
        length=window_size,
        last=window_size - 1 or 1,
        max_rotate=min(window_size * ROTATE_PER_SLOT_DEG, MAX_ROTATE_DEG),
        max_depth=min(window_size * DEPTH_PER_SLOT_PX, MAX_DEPTH_PX),
        min_scale=clamp(1 - window_size * 0.05, 0.4, 0.9),
        max_blur=MAX_BLUR_PX,
    )


def visible_slot_style(index: int, window_size: int) -> NumericStyle:
    """Style of the visible slot at integer ``index`` (0 is frontmost)."""
    params = get_base_params(window_size)
    ratio = index / params.last

    return NumericStyle(
        opacity=100,
        rotate_y=-(params.max_rotate * ratio + 2),
        translate_x=-60 if index == 0 else -50,
        translate_z=-params.max_depth * ratio,
        scale=1 - (1 - params.min_scale) * ratio,
        blur=params.max_blur * ratio,
        container_translate_x=(50 / (params.length or 1)) * index,
        z_index=params.length - index + 2,
    )


def entry_invisible_style(window_size: int) -> NumericStyle:
    """Style of the sentinel about to slide in at the front."""
    return NumericStyle(
        opacity=0,
        rotate_y=0,
        translate_x=-50,
        translate_z=0,
        scale=1,
        blur=10,
        container_translate_x=-50,
        z_index=window_size * 2 + 100,
    )


def exit_invisible_style(window_size: int) -> NumericStyle:
    """Style of the sentinel receding behind the last visible slot."""
    params = get_base_params(window_size)
    return NumericStyle(
        opacity=0,
        rotate_y=-32,
        translate_x=-50,
        translate_z=-params.max_depth,
        scale=0.05,
        blur=100,
        container_translate_x=50,
        z_index=0,
    )


def interpolate_style(start: NumericStyle, end: NumericStyle, amount: float) -> NumericStyle:
    """Component-wise linear blend of two styles."""
    return NumericStyle(
        **{
            f.name: lerp(getattr(start, f.name), getattr(end, f.name), amount)
            for f in fields(NumericStyle)
        }
    )


def interpolated_style(position: float, window_size: int) -> NumericStyle:
    """Style for a slot at a continuous ``position`` within a window.

    Args:
        position: Slots right of the frontmost visible slot. -1 and
            ``window_size`` are the entry and exit sentinel positions.
        window_size: Number of visible slots.
    """
    length = window_size
    if not length:
        return entry_invisible_style(window_size)

    if position <= -1:
        return entry_invisible_style(window_size)
    if position >= length:
        return exit_invisible_style(window_size)

    if position < 0:
        return interpolate_style(
            entry_invisible_style(window_size),
            visible_slot_style(0, window_size),
            position + 1,
        )

    if position > length - 1:
        return interpolate_style(
            visible_slot_style(length - 1, window_size),
            exit_invisible_style(window_size),
            position - (length - 1),
        )

    start_index = math.floor(position)
    end_index = min(start_index + 1, length - 1)
    return interpolate_style(
        visible_slot_style(start_index, window_size),
        visible_slot_style(end_index, window_size),
        position - start_index,
    )


def apply_progress_styles(
    items: Sequence[SliderItem[T]], progress: float, window_size: int
) -> list[SliderItem[T]]:
    """Restyle a rendered item list for the given progress.

    Rendered index ``i`` sits at position ``i - progress - 1``, so the leading
    sentinel starts at -1 and the trailing one at ``window_size``. Items are
    copied; the input list is left untouched.
    """
    return [
        replace(item, style=interpolated_style(index - progress - 1, window_size))
        for index, item in enumerate(items)
    ]
