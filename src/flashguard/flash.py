# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Per-pixel flash classifiers for luminance and saturated red transitions."""

import numpy as np

from flashguard.errors import FrameShapeError

RED_RATIO_EPSILON = 1e-10
PURE_RED_SCALE = 320.0

DEFAULT_LUMINANCE_DELTA = 0.1
DEFAULT_LUMINANCE_DARK_CEILING = 0.8
DEFAULT_RED_SATURATION = 0.8
DEFAULT_RED_FLASH_THRESHOLD = 20.0
DEFAULT_RED_DARK_THRESHOLD = 321.0


def _check_same_shape(current: np.ndarray, previous: np.ndarray) -> None:
    if current.shape != previous.shape:
        raise FrameShapeError(
            f"Cannot compare grids of shape {current.shape} and {previous.shape}",
            expected=previous.shape,
            actual=current.shape,
        )


def transition_flags(
    current: np.ndarray,
    previous: np.ndarray,
    flash_threshold: float,
    dark_threshold: float,
) -> np.ndarray:
    """
    Flag pixels whose value swings by at least ``flash_threshold``
    without the darker side reaching ``dark_threshold``.

    Order independent: only the brighter and darker of each pair matter.

    Returns:
        Flag grid (H, W) uint8, 1 where a flash event occurred
    """
    _check_same_shape(current, previous)
    brighter = np.maximum(current, previous)
    darker = np.minimum(current, previous)
    flags = ((brighter - darker) >= flash_threshold) & (darker < dark_threshold)
    return flags.astype(np.uint8)


def is_luminance_flash(
    ls: np.ndarray,
    prev_ls: np.ndarray,
    delta_threshold: float = DEFAULT_LUMINANCE_DELTA,
    dark_ceiling: float = DEFAULT_LUMINANCE_DARK_CEILING,
) -> np.ndarray:
    """
    General luminance flash classifier.

    A pixel flashes when its relative luminance changes by at least
    ``delta_threshold`` (inclusive) and the darker of the two values is
    below ``dark_ceiling``.

    Args:
        ls: Current luminance grid (H, W)
        prev_ls: Previous luminance grid (H, W)

    Returns:
        Flag grid (H, W) uint8
    """
    return transition_flags(ls, prev_ls, delta_threshold, dark_ceiling)


def red_ratio(linear_frame: np.ndarray) -> np.ndarray:
    """Fraction of channel energy carried by red: R / (R + G + B + eps)."""
    r = linear_frame[:, :, 0]
    g = linear_frame[:, :, 1]
    b = linear_frame[:, :, 2]
    return (r / (r + g + b + RED_RATIO_EPSILON)).astype(np.float32)


def pure_red(linear_frame: np.ndarray) -> np.ndarray:
    """Red purity score: 320 * (R - G - B) where positive, 0 elsewhere."""
    r = linear_frame[:, :, 0]
    g = linear_frame[:, :, 1]
    b = linear_frame[:, :, 2]
    excess = r - g - b
    return np.where(excess > 0, PURE_RED_SCALE * excess, 0.0).astype(np.float32)


def saturated_red(
    linear_frame: np.ndarray,
    saturation_threshold: float = DEFAULT_RED_SATURATION,
) -> np.ndarray:
    """
    Saturated red value per pixel.

    ``pure_red`` where the red ratio reaches ``saturation_threshold``,
    0 elsewhere. Values lie in [0, 320].
    """
    return np.where(
        red_ratio(linear_frame) >= saturation_threshold,
        pure_red(linear_frame),
        0.0,
    ).astype(np.float32)


def is_saturated_red_flash(
    color: np.ndarray,
    prev_color: np.ndarray,
    saturation_threshold: float = DEFAULT_RED_SATURATION,
    flash_threshold: float = DEFAULT_RED_FLASH_THRESHOLD,
    dark_threshold: float = DEFAULT_RED_DARK_THRESHOLD,
) -> np.ndarray:
    """
    Saturated red flash classifier.

    Both frames are reduced to their saturated red value, then compared
    the same way as luminance: the swing must reach ``flash_threshold``
    and the darker value must stay below ``dark_threshold``.

    Args:
        color: Current linear frame (H, W, 3), RGB order
        prev_color: Previous linear frame (H, W, 3), RGB order

    Returns:
        Flag grid (H, W) uint8
    """
    _check_same_shape(color, prev_color)
    return transition_flags(
        saturated_red(color, saturation_threshold),
        saturated_red(prev_color, saturation_threshold),
        flash_threshold,
        dark_threshold,
    )
