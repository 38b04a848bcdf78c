# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Frequency/area decision rule turning per-pixel flash counts into a verdict."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

DEFAULT_FREQUENCY_THRESHOLD = 3.0  # flashes per second
DEFAULT_AREA_FRACTION = 0.25

# A full dim-bright-dim cycle registers as two flag events
TRANSITIONS_PER_FLASH = 2.0


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of one evaluation of the accumulators."""
    flashing: bool = False
    luminance_pixels: int = 0
    red_pixels: int = 0


def area_threshold(frame_size: Tuple[int, int], area_fraction: float = DEFAULT_AREA_FRACTION) -> int:
    """
    Number of qualifying pixels needed for a flashing verdict.

    Args:
        frame_size: (height, width) of the working frames
        area_fraction: Fraction of the frame that must flash

    Never less than one pixel.
    """
    height, width = frame_size
    return max(1, int(height * width * area_fraction))


def flash_frequency(counts: np.ndarray, elapsed_seconds: float) -> np.ndarray:
    """Per-pixel flash frequency in Hz from transition counts over ``elapsed_seconds``."""
    if elapsed_seconds <= 0:
        raise ValueError(f"elapsed_seconds must be positive, got {elapsed_seconds}")
    return (counts / TRANSITIONS_PER_FLASH) / elapsed_seconds


def count_flashing_pixels(
    counts: np.ndarray,
    elapsed_seconds: float,
    frequency_threshold: float = DEFAULT_FREQUENCY_THRESHOLD,
) -> int:
    """Number of pixels flashing at ``frequency_threshold`` Hz or faster."""
    frequency = flash_frequency(counts, elapsed_seconds)
    return int(np.count_nonzero(frequency >= frequency_threshold))


def decide(
    accumulator: np.ndarray,
    elapsed_seconds: float,
    frame_area: int,
    frequency_threshold: float = DEFAULT_FREQUENCY_THRESHOLD,
) -> bool:
    """
    True when at least ``frame_area`` pixels of ``accumulator`` flash
    at or above ``frequency_threshold``.

    ``frame_area`` is the qualifying pixel count, see :func:`area_threshold`.
    """
    return count_flashing_pixels(accumulator, elapsed_seconds, frequency_threshold) >= frame_area


def evaluate(
    luminance_accumulator: np.ndarray,
    red_accumulator: np.ndarray,
    elapsed_seconds: float,
    frame_area: int,
    frequency_threshold: float = DEFAULT_FREQUENCY_THRESHOLD,
) -> DecisionResult:
    """Apply the decision rule to both accumulators; either one can raise the verdict."""
    luminance_pixels = count_flashing_pixels(
        luminance_accumulator, elapsed_seconds, frequency_threshold
    )
    red_pixels = count_flashing_pixels(red_accumulator, elapsed_seconds, frequency_threshold)
    return DecisionResult(
        flashing=luminance_pixels >= frame_area or red_pixels >= frame_area,
        luminance_pixels=luminance_pixels,
        red_pixels=red_pixels,
    )
