"""Tests for the inertia and spring integrators."""

import pytest

from carousel_slider.core.config import PhysicsConstants
from carousel_slider.core.physics import (
    inertia_exhausted,
    inertia_step,
    slots_velocity_from_pixel_velocity,
    split_crossings,
    spring_step,
    truncate_toward_zero,
)

PHYSICS = PhysicsConstants()


class TestTruncateTowardZero:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1.3, 1), (-1.3, -1), (0.3, 0), (-0.3, 0), (2.0, 2), (-2.0, -2)],
    )
    def test_truncates(self, value, expected):
        assert truncate_toward_zero(value) == expected


class TestSlotsVelocity:
    def test_scales_and_inverts(self):
        assert slots_velocity_from_pixel_velocity(-0.01, PHYSICS) == pytest.approx(0.0135)

    def test_clamps_to_max(self):
        assert slots_velocity_from_pixel_velocity(-5, PHYSICS) == PHYSICS.max_inertia_velocity
        assert slots_velocity_from_pixel_velocity(5, PHYSICS) == -PHYSICS.max_inertia_velocity


class TestInertiaStep:
    def test_zero_dt_changes_nothing(self):
        step = inertia_step(0.01, 0.25, 0, PHYSICS)
        assert step.velocity == 0.01
        assert step.progress == 0.25

    def test_one_reference_frame_applies_damping_once(self):
        step = inertia_step(0.01, 0.0, PHYSICS.reference_frame_ms, PHYSICS)
        assert step.velocity == pytest.approx(0.0094)
        assert step.progress == pytest.approx(0.0094 * PHYSICS.reference_frame_ms)

    def test_decay_is_frame_rate_independent(self):
        half = PHYSICS.reference_frame_ms / 2
        first = inertia_step(0.02, 0.0, half, PHYSICS)
        second = inertia_step(first.velocity, first.progress, half, PHYSICS)
        whole = inertia_step(0.02, 0.0, PHYSICS.reference_frame_ms, PHYSICS)
        assert second.velocity == pytest.approx(whole.velocity)

    def test_negative_velocity_moves_backwards(self):
        step = inertia_step(-0.01, 0.0, 10, PHYSICS)
        assert step.progress < 0

    def test_exhaustion_threshold_is_inclusive(self):
        assert inertia_exhausted(PHYSICS.min_inertia_velocity, PHYSICS)
        assert inertia_exhausted(-PHYSICS.min_inertia_velocity, PHYSICS)
        assert not inertia_exhausted(PHYSICS.min_inertia_velocity * 1.01, PHYSICS)


class TestSpringStep:
    def test_at_rest_on_target_is_settled(self):
        step = spring_step(0.0, 1.0, 1, 1 / 60, PHYSICS)
        assert step.settled
        assert step.progress == 1.0
        assert step.velocity == 0.0

    def test_pulls_toward_target(self):
        step = spring_step(0.0, 1.0, 0, 0.01, PHYSICS)
        assert step.velocity == pytest.approx(-5.0)
        assert step.progress == pytest.approx(0.95)
        assert not step.settled

    def test_zero_dt_on_first_frame(self):
        step = spring_step(0.0, 0.4, 0, 0.0, PHYSICS)
        assert step.progress == 0.4
        assert not step.settled

    def test_converges(self):
        velocity, progress = 0.0, 0.7
        for _ in range(600):
            step = spring_step(velocity, progress, 1, 1 / 60, PHYSICS)
            velocity, progress = step.velocity, step.progress
            if step.settled:
                break
        assert step.settled
        assert progress == pytest.approx(1.0, abs=PHYSICS.snap_stop_epsilon * 2)

    def test_needs_both_epsilons(self):
        # On target but still moving fast
        step = spring_step(5.0, 0.0, 0, 0.0, PHYSICS)
        assert not step.settled


class TestSplitCrossings:
    @pytest.mark.parametrize(
        ("progress", "steps", "remainder"),
        [(0.3, 0, 0.3), (2.5, 2, 0.5), (-1.0, -1, 0.0), (1.0, 1, 0.0), (-2.25, -2, -0.25)],
    )
    def test_split(self, progress, steps, remainder):
        result_steps, result_remainder = split_crossings(progress)
        assert result_steps == steps
        assert result_remainder == pytest.approx(remainder)

    def test_huge_progress_splits_at_once(self):
        steps, remainder = split_crossings(-1e12 - 0.5)
        assert steps == -1_000_000_000_000
        assert -1 < remainder <= 0
