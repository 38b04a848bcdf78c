# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Colorimetric transform from 8-bit sRGB frames to linear light and luminance."""

import cv2
import numpy as np

# Inverse sRGB transfer function
GAMMA_BREAKPOINT = 0.03928
LINEAR_SLOPE = 12.92
GAMMA_OFFSET = 0.055
GAMMA_EXPONENT = 2.4

# Relative luminance coefficients, RGB order. Shape (1, 3) for cv2.transform
LUMINANCE_WEIGHTS = np.array([[0.2126, 0.7152, 0.0722]], dtype=np.float32)


def srgb_to_linear(normalized: np.ndarray) -> np.ndarray:
    """Apply the inverse sRGB gamma curve to values already scaled to [0, 1]."""
    normalized = np.asarray(normalized, dtype=np.float32)
    return np.where(
        normalized <= GAMMA_BREAKPOINT,
        normalized / LINEAR_SLOPE,
        np.power((normalized + GAMMA_OFFSET) / (1 + GAMMA_OFFSET), GAMMA_EXPONENT),
    ).astype(np.float32)


def build_srgb_lut() -> np.ndarray:
    """256-entry lookup table mapping 8-bit sRGB codes to linear light."""
    return srgb_to_linear(np.arange(256, dtype=np.float32) / 255.0)


DEFAULT_SRGB_VALUES = build_srgb_lut()


class FrameRgbConverter:
    """Converts RGB frames to linear light using a lookup table."""

    def __init__(self, srgb_values: np.ndarray = DEFAULT_SRGB_VALUES):
        """
        Initialize the converter with sRGB lookup table.

        Args:
            srgb_values: Array of 256 linear values, one per 8-bit code
        """
        if np.asarray(srgb_values).size != 256:
            raise ValueError("sRGB lookup table must have 256 entries")
        # cv2.LUT needs a 1x256 table
        self.srgb_lut = np.asarray(srgb_values, dtype=np.float32).reshape(1, 256)

    def convert(self, frame: np.ndarray) -> np.ndarray:
        """
        Convert an RGB frame with channels in [0, 255] to linear light.

        uint8 frames go through cv2.LUT; any other dtype is clipped to
        [0, 255] and run through the gamma formula directly.

        Args:
            frame: Input frame (H, W, 3)

        Returns:
            Linear frame (H, W, 3) float32 in [0, 1]
        """
        if frame.dtype == np.uint8:
            return cv2.LUT(frame, self.srgb_lut)
        normalized = np.clip(frame.astype(np.float32), 0.0, 255.0) / 255.0
        return srgb_to_linear(normalized)


def to_linear(frame: np.ndarray) -> np.ndarray:
    """Convert an RGB frame in [0, 255] to linear light in [0, 1]."""
    return _default_converter.convert(frame)


def relative_luminance(linear_frame: np.ndarray) -> np.ndarray:
    """
    Relative luminance per pixel: L = 0.2126*R + 0.7152*G + 0.0722*B.

    Args:
        linear_frame: Linear RGB frame (H, W, 3) float32

    Returns:
        Luminance grid (H, W) float32
    """
    # cv2.transform applies the 1x3 matrix to every pixel
    luminance = cv2.transform(np.ascontiguousarray(linear_frame, dtype=np.float32), LUMINANCE_WEIGHTS)
    # (H, W) or (H, W, 1) depending on OpenCV version
    if luminance.ndim == 3:
        luminance = luminance[:, :, 0]
    return luminance


_default_converter = FrameRgbConverter()
