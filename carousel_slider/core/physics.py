"""Integrators for the inertia and snap loops.

Both loops are driven by frame timestamps in milliseconds. Inertia decays
velocity exponentially per reference frame, so the distance travelled does not
depend on the display refresh rate. The snap loop is a damped spring solved
with semi-implicit Euler in seconds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from carousel_slider.core.config import PhysicsConstants
from carousel_slider.core.styles import clamp


@dataclass(frozen=True)
class InertiaStep:
    velocity: float
    progress: float


@dataclass(frozen=True)
class SpringStep:
    """Result of one spring integration step.

    Attributes:
        velocity: Velocity after the step.
        progress: Position after the step.
        settled: Whether the position before the step was within epsilon of
            the target and the new velocity is below the stop velocity.
    """

    velocity: float
    progress: float
    settled: bool


def truncate_toward_zero(value: float) -> int:
    return math.trunc(value)


def slots_velocity_from_pixel_velocity(
    pixel_velocity: float, physics: PhysicsConstants
) -> float:
    """Convert a pointer velocity in px/ms to a clamped slot velocity.

    Content moves against the pointer, so the sign is inverted.
    """
    scaled = -pixel_velocity * physics.velocity_influence
    return clamp(scaled, -physics.max_inertia_velocity, physics.max_inertia_velocity)


def inertia_step(
    velocity: float, progress: float, dt_ms: float, physics: PhysicsConstants
) -> InertiaStep:
    damping = physics.inertia_damping ** (dt_ms / physics.reference_frame_ms)
    new_velocity = velocity * damping
    return InertiaStep(velocity=new_velocity, progress=progress + new_velocity * dt_ms)


def inertia_exhausted(velocity: float, physics: PhysicsConstants) -> bool:
    return abs(velocity) <= physics.min_inertia_velocity


def spring_step(
    velocity: float,
    progress: float,
    target: float,
    dt_seconds: float,
    physics: PhysicsConstants,
) -> SpringStep:
    displacement = progress - target
    acceleration = (
        -physics.snap_spring_stiffness * displacement
        - physics.snap_spring_damping * velocity
    )
    new_velocity = velocity + acceleration * dt_seconds
    settled = (
        abs(displacement) < physics.snap_stop_epsilon
        and abs(new_velocity) < physics.snap_stop_velocity
    )
    return SpringStep(
        velocity=new_velocity,
        progress=progress + new_velocity * dt_seconds,
        settled=settled,
    )


def split_crossings(progress: float) -> tuple[int, float]:
    """Pull whole slots out of ``progress``.

    Returns:
        (steps, remainder) where ``remainder`` lies strictly inside (-1, 1)
        and ``steps + remainder == progress``.
    """
    steps = math.trunc(progress)
    return steps, progress - steps
