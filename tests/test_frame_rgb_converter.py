# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Tests for the colorimetric transform."""

import numpy as np
import pytest

from flashguard.frame_rgb_converter import (
    DEFAULT_SRGB_VALUES,
    FrameRgbConverter,
    relative_luminance,
    srgb_to_linear,
    to_linear,
)


class TestFrameRgbConverter:
    """Test FrameRgbConverter class."""

    @pytest.fixture
    def converter(self):
        """Create a converter with the default lookup table."""
        return FrameRgbConverter()

    def test_convert_black_frame(self, converter):
        """Test converting an all-black frame."""
        rgb = np.zeros((10, 10, 3), dtype=np.uint8)
        linear = converter.convert(rgb)

        assert linear.shape == (10, 10, 3)
        assert linear.dtype == np.float32
        assert np.all(linear == 0.0)

    def test_convert_white_frame(self, converter):
        """Test converting an all-white frame."""
        rgb = np.full((10, 10, 3), 255, dtype=np.uint8)
        linear = converter.convert(rgb)

        assert np.allclose(linear, 1.0)

    def test_convert_output_range(self, converter):
        """Test that output values are in [0, 1] range."""
        rgb = np.random.default_rng(0).integers(0, 256, (50, 50, 3), dtype=np.uint8)
        linear = converter.convert(rgb)

        assert linear.shape == rgb.shape
        assert np.all(linear >= 0.0)
        assert np.all(linear <= 1.0 + 1e-6)

    def test_convert_monotonic(self, converter):
        """Test that higher input values never produce lower output values."""
        gradient = np.arange(256, dtype=np.uint8).reshape(1, 256, 1)
        gradient = np.tile(gradient, (1, 1, 3))
        linear = converter.convert(gradient)

        for channel in range(3):
            assert np.all(np.diff(linear[0, :, channel]) >= 0)

    def test_channels_independent(self, converter):
        """Test each channel is converted on its own."""
        rgb = np.array([[[255, 0, 128]]], dtype=np.uint8)
        linear = converter.convert(rgb)

        assert np.isclose(linear[0, 0, 0], 1.0)
        assert linear[0, 0, 1] == 0.0
        assert np.isclose(linear[0, 0, 2], DEFAULT_SRGB_VALUES[128])

    def test_linear_segment(self, converter):
        """Test values at or below the breakpoint use the linear segment."""
        rgb = np.array([[[10, 5, 1]]], dtype=np.uint8)
        linear = converter.convert(rgb)

        expected = np.array([10, 5, 1]) / 255.0 / 12.92
        assert np.allclose(linear[0, 0], expected, rtol=1e-5)

    def test_gamma_segment(self, converter):
        """Test values above the breakpoint use the power curve."""
        rgb = np.array([[[128, 128, 128]]], dtype=np.uint8)
        linear = converter.convert(rgb)

        expected = ((128 / 255.0 + 0.055) / 1.055) ** 2.4
        assert np.isclose(linear[0, 0, 0], expected, rtol=1e-5)

    def test_float_frame_matches_lut(self, converter):
        """Test float input follows the same curve as the lookup table."""
        rgb = np.arange(256, dtype=np.uint8).reshape(16, 16, 1).repeat(3, axis=2)
        from_lut = converter.convert(rgb)
        from_formula = converter.convert(rgb.astype(np.float64))

        assert np.allclose(from_lut, from_formula, atol=1e-6)

    def test_float_frame_clipped(self, converter):
        """Test float input outside [0, 255] is clipped."""
        rgb = np.array([[[-20.0, 300.0, 255.0]]])
        linear = converter.convert(rgb)

        assert linear[0, 0, 0] == 0.0
        assert np.isclose(linear[0, 0, 1], 1.0)

    def test_bad_lut_size(self):
        """Test lookup tables must have 256 entries."""
        with pytest.raises(ValueError):
            FrameRgbConverter(np.zeros(128, dtype=np.float32))


class TestDefaultSrgbValues:
    """Test DEFAULT_SRGB_VALUES table."""

    def test_length(self):
        assert len(DEFAULT_SRGB_VALUES) == 256

    def test_endpoints(self):
        assert DEFAULT_SRGB_VALUES[0] == 0
        assert np.isclose(DEFAULT_SRGB_VALUES[255], 1.0)

    def test_monotonic(self):
        assert np.all(np.diff(DEFAULT_SRGB_VALUES) >= 0)

    def test_mid_gray(self):
        """Mid-gray is about 0.2 in linear light."""
        assert 0.2 < DEFAULT_SRGB_VALUES[128] < 0.23

    def test_matches_formula(self):
        assert np.allclose(
            DEFAULT_SRGB_VALUES,
            srgb_to_linear(np.arange(256) / 255.0),
        )


class TestRelativeLuminance:
    """Test relative luminance weights."""

    @pytest.mark.parametrize("channel,weight", [
        (0, 0.2126),
        (1, 0.7152),
        (2, 0.0722),
    ])
    def test_primary_weights(self, channel, weight):
        """Test each primary contributes its BT.709 weight."""
        linear = np.zeros((4, 4, 3), dtype=np.float32)
        linear[:, :, channel] = 1.0

        ls = relative_luminance(linear)

        assert ls.shape == (4, 4)
        assert np.allclose(ls, weight, atol=1e-6)

    def test_white_is_one(self):
        linear = np.ones((4, 4, 3), dtype=np.float32)
        assert np.allclose(relative_luminance(linear), 1.0, atol=1e-6)

    def test_to_linear_then_luminance(self):
        """Test the full transform on an 8-bit frame."""
        rgb = np.full((2, 2, 3), 255, dtype=np.uint8)
        rgb[0, 0] = (0, 0, 0)

        ls = relative_luminance(to_linear(rgb))

        assert ls[0, 0] == 0.0
        assert np.isclose(ls[1, 1], 1.0, atol=1e-6)
