# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Tests for the per-pixel luminance and saturated red classifiers."""

import numpy as np
import pytest

from flashguard.errors import FrameShapeError
from flashguard.flash import (
    DEFAULT_RED_DARK_THRESHOLD,
    PURE_RED_SCALE,
    is_luminance_flash,
    is_saturated_red_flash,
    pure_red,
    red_ratio,
    saturated_red,
)


def linear_frame(rgb, shape=(4, 4)):
    """Constant linear frame with the given (R, G, B) value."""
    frame = np.zeros(shape + (3,), dtype=np.float32)
    frame[:, :] = rgb
    return frame


class TestLuminanceFlash:
    """Test is_luminance_flash."""

    def test_large_swing_flags(self):
        ls = np.full((3, 3), 0.3)
        prev_ls = np.zeros((3, 3))

        flags = is_luminance_flash(ls, prev_ls)

        assert flags.dtype == np.uint8
        assert np.all(flags == 1)

    def test_small_swing_ignored(self):
        ls = np.full((3, 3), 0.05)
        prev_ls = np.zeros((3, 3))

        assert np.all(is_luminance_flash(ls, prev_ls) == 0)

    def test_threshold_inclusive(self):
        """Test a swing of exactly 0.1 counts as a flash."""
        ls = np.full((2, 2), 0.1)
        prev_ls = np.zeros((2, 2))

        assert np.all(is_luminance_flash(ls, prev_ls) == 1)

    def test_bright_transitions_excluded(self):
        """Test the darker value must be below the dark ceiling."""
        ls = np.full((2, 2), 0.95)
        prev_ls = np.full((2, 2), 0.85)

        assert np.all(is_luminance_flash(ls, prev_ls) == 0)

    def test_dark_ceiling_exclusive(self):
        """Test a darker value of exactly 0.8 is excluded."""
        ls = np.full((2, 2), 1.0)
        prev_ls = np.full((2, 2), 0.8)

        assert np.all(is_luminance_flash(ls, prev_ls) == 0)

    def test_per_pixel(self):
        """Test pixels are classified independently."""
        ls = np.array([[0.5, 0.0], [0.95, 0.3]])
        prev_ls = np.array([[0.0, 0.0], [0.85, 0.0]])

        flags = is_luminance_flash(ls, prev_ls)

        assert flags.tolist() == [[1, 0], [0, 1]]

    def test_symmetric(self):
        """Test swapping current and previous gives the same flags."""
        rng = np.random.default_rng(7)
        ls = rng.random((20, 20))
        prev_ls = rng.random((20, 20))

        assert np.array_equal(
            is_luminance_flash(ls, prev_ls),
            is_luminance_flash(prev_ls, ls),
        )

    def test_custom_thresholds(self):
        ls = np.full((2, 2), 0.3)
        prev_ls = np.zeros((2, 2))

        assert np.all(is_luminance_flash(ls, prev_ls, delta_threshold=0.5) == 0)
        assert np.all(is_luminance_flash(ls, prev_ls, dark_ceiling=0.0) == 0)

    def test_shape_mismatch(self):
        with pytest.raises(FrameShapeError):
            is_luminance_flash(np.zeros((2, 2)), np.zeros((3, 3)))


class TestRedFeatures:
    """Test red_ratio, pure_red and saturated_red."""

    def test_red_ratio_pure_red(self):
        ratio = red_ratio(linear_frame((1.0, 0.0, 0.0)))
        assert np.allclose(ratio, 1.0)

    def test_red_ratio_gray(self):
        ratio = red_ratio(linear_frame((0.5, 0.5, 0.5)))
        assert np.allclose(ratio, 1 / 3)

    def test_red_ratio_black_is_finite(self):
        """Test pure black does not divide by zero."""
        ratio = red_ratio(linear_frame((0.0, 0.0, 0.0)))

        assert np.all(np.isfinite(ratio))
        assert np.all(ratio == 0.0)

    def test_pure_red_scale(self):
        values = pure_red(linear_frame((1.0, 0.1, 0.1)))
        assert np.allclose(values, 320 * 0.8)

    def test_pure_red_clamped_at_zero(self):
        values = pure_red(linear_frame((0.2, 0.5, 0.1)))
        assert np.all(values == 0.0)

    def test_saturated_red_requires_ratio(self):
        # R - G - B > 0 but red ratio 0.5 is below 0.8
        frame = linear_frame((0.5, 0.2, 0.2))

        assert np.all(pure_red(frame) > 0)
        assert np.all(saturated_red(frame) == 0.0)
        assert np.all(saturated_red(frame, saturation_threshold=0.5) > 0)


class TestSaturatedRedFlash:
    """Test is_saturated_red_flash."""

    def test_red_to_black_flags(self):
        red = linear_frame((1.0, 0.0, 0.0))
        black = linear_frame((0.0, 0.0, 0.0))

        flags = is_saturated_red_flash(red, black)

        assert flags.dtype == np.uint8
        assert np.all(flags == 1)

    def test_symmetric(self):
        red = linear_frame((1.0, 0.0, 0.0))
        black = linear_frame((0.0, 0.0, 0.0))

        assert np.array_equal(
            is_saturated_red_flash(red, black),
            is_saturated_red_flash(black, red),
        )

    def test_unsaturated_red_ignored(self):
        """Test desaturated reds do not flash even with a large swing."""
        pink = linear_frame((1.0, 0.3, 0.3))
        black = linear_frame((0.0, 0.0, 0.0))

        assert np.all(is_saturated_red_flash(pink, black) == 0)

    def test_white_to_black_ignored(self):
        white = linear_frame((1.0, 1.0, 1.0))
        black = linear_frame((0.0, 0.0, 0.0))

        assert np.all(is_saturated_red_flash(white, black) == 0)

    def test_small_red_swing_ignored(self):
        # 320 * 0.05 = 16 < 20
        dim_red = linear_frame((0.05, 0.0, 0.0))
        black = linear_frame((0.0, 0.0, 0.0))

        assert np.all(is_saturated_red_flash(dim_red, black) == 0)

    def test_configurable_saturation_threshold(self):
        red = linear_frame((0.6, 0.1, 0.1))  # ratio 0.75
        black = linear_frame((0.0, 0.0, 0.0))

        assert np.all(is_saturated_red_flash(red, black) == 0)
        assert np.all(is_saturated_red_flash(red, black, saturation_threshold=0.7) == 1)

    def test_dark_threshold(self):
        """Test the darker red value must stay below the dark threshold."""
        strong = linear_frame((1.0, 0.0, 0.0))  # 320
        weaker = linear_frame((0.5, 0.0, 0.0))  # 160

        assert np.all(is_saturated_red_flash(strong, weaker) == 1)
        assert np.all(is_saturated_red_flash(strong, weaker, dark_threshold=150.0) == 0)

    def test_default_dark_threshold_never_excludes(self):
        """Test the default dark bound lies above every saturated red value."""
        brightest = saturated_red(linear_frame((1.0, 0.0, 0.0)))

        assert brightest.max() == pytest.approx(PURE_RED_SCALE)
        assert PURE_RED_SCALE < DEFAULT_RED_DARK_THRESHOLD

    def test_per_pixel(self):
        current = linear_frame((0.0, 0.0, 0.0), shape=(1, 2))
        current[0, 0] = (1.0, 0.0, 0.0)
        previous = linear_frame((0.0, 0.0, 0.0), shape=(1, 2))

        assert is_saturated_red_flash(current, previous).tolist() == [[1, 0]]

    def test_shape_mismatch(self):
        with pytest.raises(FrameShapeError):
            is_saturated_red_flash(
                linear_frame((1.0, 0.0, 0.0), shape=(2, 2)),
                linear_frame((0.0, 0.0, 0.0), shape=(3, 3)),
            )
