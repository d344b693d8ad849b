"""Slider configuration.

Physics tuning and window settings are plain frozen dataclasses with sensible
defaults. Hosts that want to tune them without code changes can use the
``from_env`` constructors, which read ``SLIDER_*`` environment variables.

Example:
    physics = PhysicsConstants.from_env()  # SLIDER_SNAP_SPRING_STIFFNESS=650 ...
    settings = SliderSettings.from_env()   # SLIDER_WINDOW_SIZE=5
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from os import getenv

from carousel_slider.core.errors import ConfigurationError

ENV_PREFIX = "SLIDER_"


def _read_float(name: str, default: float) -> float:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as ex:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}",
            setting=name,
            original_error=ex,
        ) from ex
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {raw!r}", setting=name)
    return value


@dataclass(frozen=True)
class PhysicsConstants:
    """Tuning for the inertia and snap loops.

    Inertia velocities are in slots per millisecond; the spring integrates in
    seconds.

    Attributes:
        velocity_influence: Scale applied to pointer velocity (px/ms) on release.
        max_inertia_velocity: Cap on inertia velocity magnitude.
        inertia_damping: Velocity multiplier per reference frame.
        min_inertia_velocity: Below this magnitude inertia hands off to snapping.
        button_impulse_velocity: Velocity added by one button press.
        snap_spring_stiffness: Spring constant pulling toward the target slot.
        snap_spring_damping: Velocity damping coefficient of the spring.
        snap_stop_epsilon: Displacement below which the spring may settle.
        snap_stop_velocity: Velocity below which the spring may settle.
        reference_frame_ms: Frame interval the damping ratio is expressed in.
    """

    velocity_influence: float = 1.35
    max_inertia_velocity: float = 0.035
    inertia_damping: float = 0.94
    min_inertia_velocity: float = 0.002
    button_impulse_velocity: float = 0.005
    snap_spring_stiffness: float = 500.0
    snap_spring_damping: float = 20.0
    snap_stop_epsilon: float = 0.002
    snap_stop_velocity: float = 0.01
    reference_frame_ms: float = 16.67

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(
                    f"{f.name} must be a positive number, got {value!r}",
                    setting=f.name,
                )
        if self.inertia_damping > 1:
            raise ConfigurationError(
                f"inertia_damping must be in (0, 1], got {self.inertia_damping!r}",
                setting="inertia_damping",
            )

    @classmethod
    def from_env(cls) -> PhysicsConstants:
        """Build constants from SLIDER_<FIELD> environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable is not a valid value.
        """
        defaults = cls()
        values = {
            f.name: _read_float(f"{ENV_PREFIX}{f.name.upper()}", getattr(defaults, f.name))
            for f in fields(cls)
        }
        return cls(**values)


@dataclass(frozen=True)
class SliderSettings:
    """Window and gesture settings.

    Attributes:
        window_size: Requested number of visible items; None shows the whole list.
        off_axis_threshold: Off-axis fraction at or above which a drag is
            treated as a vertical scroll and ignored.
    """

    window_size: int | None = None
    off_axis_threshold: float = 0.35

    def __post_init__(self) -> None:
        if self.window_size is not None and self.window_size < 1:
            raise ConfigurationError(
                f"window_size must be at least 1, got {self.window_size!r}",
                setting="window_size",
            )
        if not 0 < self.off_axis_threshold <= 1:
            raise ConfigurationError(
                f"off_axis_threshold must be in (0, 1], got {self.off_axis_threshold!r}",
                setting="off_axis_threshold",
            )

    @classmethod
    def from_env(cls) -> SliderSettings:
        """Build settings from SLIDER_WINDOW_SIZE and SLIDER_OFF_AXIS_THRESHOLD.

        Raises:
            ConfigurationError: If a variable is not a valid value.
        """
        window_size: int | None = None
        raw_size = getenv(f"{ENV_PREFIX}WINDOW_SIZE")
        if raw_size is not None and raw_size.strip() != "":
            try:
                window_size = int(raw_size)
            except ValueError as ex:
                raise ConfigurationError(
                    f"{ENV_PREFIX}WINDOW_SIZE must be an integer, got {raw_size!r}",
                    setting=f"{ENV_PREFIX}WINDOW_SIZE",
                    original_error=ex,
                ) from ex
        threshold = _read_float(f"{ENV_PREFIX}OFF_AXIS_THRESHOLD", cls.off_axis_threshold)
        return cls(window_size=window_size, off_axis_threshold=threshold)


def effective_window_size(item_count: int, requested: int | None) -> int:
    """Resolve the number of visible items for a list of ``item_count``.

    No request, or a request at least as large as the list, shows the whole
    list. Smaller requests are raised to 2 so there is always a neighbour to
    slide toward.
    """
    if not requested or requested >= item_count:
        return item_count
    return max(requested, 2)
