"""Tests for progress to style interpolation."""

from dataclasses import asdict

import pytest

from carousel_slider.core.item_window import wrap_for_slider
from carousel_slider.core.styles import (
    NumericStyle,
    apply_progress_styles,
    clamp,
    entry_invisible_style,
    exit_invisible_style,
    get_base_params,
    interpolate_style,
    interpolated_style,
    lerp,
    visible_slot_style,
)
from tests.mocks.items import make_items


def assert_style_close(actual: NumericStyle, expected: NumericStyle, tol: float = 1e-6) -> None:
    assert asdict(actual) == pytest.approx(asdict(expected), abs=tol)


class TestHelpers:
    def test_clamp(self):
        assert clamp(5, 0, 1) == 1
        assert clamp(-5, 0, 1) == 0
        assert clamp(0.5, 0, 1) == 0.5

    def test_lerp(self):
        assert lerp(10, 20, 0) == 10
        assert lerp(10, 20, 1) == 20
        assert lerp(10, 20, 0.25) == 12.5


class TestBaseParams:
    def test_small_window(self):
        params = get_base_params(5)
        assert params.last == 4
        assert params.max_rotate == 15
        assert params.max_depth == 200
        assert params.min_scale == pytest.approx(0.75)
        assert params.max_blur == 60

    def test_caps_for_large_window(self):
        params = get_base_params(40)
        assert params.max_rotate == 75
        assert params.max_depth == 500
        assert params.min_scale == pytest.approx(0.4)

    def test_single_slot_uses_last_of_one(self):
        assert get_base_params(1).last == 1
        assert get_base_params(1).min_scale == pytest.approx(0.9)


class TestVisibleSlotStyle:
    def test_front_slot(self):
        style = visible_slot_style(0, 5)
        assert style.opacity == 100
        assert style.rotate_y == -2
        assert style.translate_x == -60
        assert style.translate_z == 0
        assert style.scale == 1
        assert style.blur == 0
        assert style.container_translate_x == 0
        assert style.z_index == 7

    def test_back_slot(self):
        style = visible_slot_style(4, 5)
        assert style.rotate_y == pytest.approx(-17)
        assert style.translate_x == -50
        assert style.translate_z == pytest.approx(-200)
        assert style.scale == pytest.approx(0.75)
        assert style.blur == pytest.approx(60)
        assert style.container_translate_x == pytest.approx(40)
        assert style.z_index == 3

    def test_depth_increases_monotonically(self):
        styles = [visible_slot_style(i, 6) for i in range(6)]
        for front, back in zip(styles, styles[1:]):
            assert back.translate_z < front.translate_z
            assert back.blur > front.blur
            assert back.scale < front.scale
            assert back.z_index < front.z_index


class TestInterpolatedStyle:
    def test_zero_window_is_entry_style(self):
        assert interpolated_style(0.3, 0) == entry_invisible_style(0)

    def test_far_left_is_entry_style(self):
        assert interpolated_style(-1, 5) == entry_invisible_style(5)
        assert interpolated_style(-7.5, 5) == entry_invisible_style(5)

    def test_far_right_is_exit_style(self):
        assert interpolated_style(5, 5) == exit_invisible_style(5)
        assert interpolated_style(12, 5) == exit_invisible_style(5)

    def test_entry_region_blends_toward_front_slot(self):
        style = interpolated_style(-0.5, 5)
        expected = interpolate_style(entry_invisible_style(5), visible_slot_style(0, 5), 0.5)
        assert style == expected
        assert style.opacity == pytest.approx(50)

    def test_exit_region_blends_from_last_slot(self):
        style = interpolated_style(4.25, 5)
        expected = interpolate_style(visible_slot_style(4, 5), exit_invisible_style(5), 0.25)
        assert_style_close(style, expected)

    def test_between_slots(self):
        style = interpolated_style(1.5, 5)
        expected = interpolate_style(visible_slot_style(1, 5), visible_slot_style(2, 5), 0.5)
        assert_style_close(style, expected)

    @pytest.mark.parametrize("slot", [0, 1, 2, 3, 4])
    def test_integer_positions_are_exact_slot_styles(self, slot):
        assert interpolated_style(float(slot), 5) == visible_slot_style(slot, 5)

    @pytest.mark.parametrize("slot", [0, 1, 2, 3, 4])
    def test_continuous_at_slot_boundaries(self, slot):
        expected = visible_slot_style(slot, 5)
        assert_style_close(interpolated_style(slot - 1e-9, 5), expected)
        assert_style_close(interpolated_style(slot + 1e-9, 5), expected)

    def test_continuous_at_sentinel_boundaries(self):
        assert_style_close(interpolated_style(-1 + 1e-9, 5), entry_invisible_style(5))
        assert_style_close(interpolated_style(5 - 1e-9, 5), exit_invisible_style(5))

    def test_is_deterministic(self):
        assert interpolated_style(2.37, 6) == interpolated_style(2.37, 6)


class TestApplyProgressStyles:
    def test_resting_window(self):
        rendered = wrap_for_slider(make_items(5), 0, 3)
        styled = apply_progress_styles(rendered, 0, 3)

        assert styled[0].style == entry_invisible_style(3)
        assert styled[1].style == visible_slot_style(0, 3)
        assert styled[2].style == visible_slot_style(1, 3)
        assert styled[3].style == visible_slot_style(2, 3)
        assert styled[4].style == exit_invisible_style(3)

    def test_progress_shifts_every_slot(self):
        rendered = wrap_for_slider(make_items(5), 0, 3)
        styled = apply_progress_styles(rendered, 0.5, 3)

        for index, item in enumerate(styled):
            assert item.style == interpolated_style(index - 0.5 - 1, 3)

    def test_full_slot_of_progress_moves_sentinel_into_view(self):
        rendered = wrap_for_slider(make_items(5), 0, 3)
        styled = apply_progress_styles(rendered, -1, 3)
        assert styled[0].style == visible_slot_style(0, 3)

    def test_input_is_not_mutated(self):
        rendered = wrap_for_slider(make_items(5), 0, 3)
        apply_progress_styles(rendered, 0.3, 3)
        assert all(item.style == NumericStyle() for item in rendered)

    def test_identities_preserved(self):
        rendered = wrap_for_slider(make_items(5), 0, 3)
        styled = apply_progress_styles(rendered, 0.3, 3)
        assert [item.key for item in styled] == [item.key for item in rendered]

    def test_idempotent(self):
        rendered = wrap_for_slider(make_items(5), 2, 4)
        assert apply_progress_styles(rendered, 0.42, 4) == apply_progress_styles(rendered, 0.42, 4)
