# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Sliding one-second window of per-pixel flash events."""

import logging
import math
from typing import Optional, Tuple

import numpy as np

from flashguard.configuration import FlashParams, WindowParams
from flashguard.errors import FrameShapeError
from flashguard.flash import is_luminance_flash, is_saturated_red_flash
from flashguard.frame_rgb_converter import relative_luminance
from flashguard.ring_buffer import RingBuffer

logger = logging.getLogger(__name__)


class TemporalWindow:
    """
    Rolling buffer of frames and flash flag grids with running counts.

    Every pushed frame after the first is compared with its predecessor;
    the resulting luminance and red flag grids are appended to their FIFOs
    and added into the matching accumulator. Evicting the oldest entry
    subtracts its flag grids again, so each accumulator always equals the
    sum of the flag grids currently in the window.

    The flag FIFOs hold one entry fewer than the frame FIFO.
    """

    def __init__(
        self,
        frame_size: Tuple[int, int],
        window_params: WindowParams,
        luminance_params: FlashParams,
        red_params: FlashParams,
    ):
        """
        Initialize the window.

        Args:
            frame_size: (height, width) of the working frames
            window_params: Window duration and buffering parameters
            luminance_params: Luminance classifier thresholds
            red_params: Saturated red classifier thresholds
        """
        self.frame_size = tuple(frame_size)
        self.params = window_params
        self.luminance_params = luminance_params
        self.red_params = red_params

        height, width = self.frame_size
        capacity = int(math.ceil(window_params.expected_fps * window_params.window_seconds))
        capacity += window_params.buffer_min_frames

        self._timestamps = RingBuffer(capacity, (), np.float64)
        self._frames = RingBuffer(capacity, (height, width, 3), np.float32)
        self._luminance_flags = RingBuffer(capacity, (height, width), np.uint8)
        self._red_flags = RingBuffer(capacity, (height, width), np.uint8)

        self.luminance_accumulator = np.zeros((height, width), dtype=np.int32)
        self.red_accumulator = np.zeros((height, width), dtype=np.int32)

        # Luminance of the newest frame, reused as "previous" on the next push
        self._last_ls: Optional[np.ndarray] = None

    def __len__(self) -> int:
        """Number of frames in the window."""
        return len(self._frames)

    @property
    def elapsed(self) -> float:
        """Seconds between the oldest and newest buffered timestamp."""
        if len(self._timestamps) < 2:
            return 0.0
        return float(self._timestamps[-1] - self._timestamps[0])

    @property
    def is_ready(self) -> bool:
        """True when a verdict may be emitted for the current contents."""
        return (
            len(self._frames) >= self.params.buffer_min_frames
            and self.elapsed >= self.params.window_seconds
        )

    @property
    def newest_timestamp(self) -> Optional[float]:
        if len(self._timestamps) == 0:
            return None
        return float(self._timestamps[-1])

    def push(self, linear_frame: np.ndarray, timestamp: float) -> bool:
        """
        Add a linear frame captured at ``timestamp``.

        Args:
            linear_frame: Linear RGB frame (H, W, 3) float32 in [0, 1]
            timestamp: Capture time in seconds, non-decreasing

        Returns:
            True if a verdict is ready for the current window

        Raises:
            FrameShapeError: Frame does not match the window dimensions
            ValueError: Timestamp is earlier than the newest buffered one
        """
        expected = self.frame_size + (3,)
        if linear_frame.shape != expected:
            raise FrameShapeError(
                f"Expected frame of shape {expected}, got {linear_frame.shape}",
                expected=expected,
                actual=linear_frame.shape,
            )
        newest = self.newest_timestamp
        if newest is not None and timestamp < newest:
            raise ValueError(f"Timestamp {timestamp} is earlier than {newest}")

        ls = relative_luminance(linear_frame)

        if self._last_ls is not None:
            luminance = is_luminance_flash(
                ls,
                self._last_ls,
                self.luminance_params.flash_threshold,
                self.luminance_params.dark_threshold,
            )
            red = is_saturated_red_flash(
                linear_frame,
                self._frames[-1],
                self.red_params.saturation_threshold,
                self.red_params.flash_threshold,
                self.red_params.dark_threshold,
            )
            self._luminance_flags.append(luminance)
            self._red_flags.append(red)
            np.add(self.luminance_accumulator, luminance, out=self.luminance_accumulator)
            np.add(self.red_accumulator, red, out=self.red_accumulator)

        self._timestamps.append(timestamp)
        self._frames.append(linear_frame)
        self._last_ls = ls

        return self.is_ready

    def evict_oldest(self) -> None:
        """Drop the oldest frame and its flag grids, updating the accumulators."""
        if len(self._frames) == 0:
            raise IndexError("evict from an empty window")

        if len(self._luminance_flags) > 0:
            np.subtract(
                self.luminance_accumulator,
                self._luminance_flags.popleft(),
                out=self.luminance_accumulator,
            )
            np.subtract(
                self.red_accumulator,
                self._red_flags.popleft(),
                out=self.red_accumulator,
            )

        self._timestamps.popleft()
        self._frames.popleft()

        if len(self._frames) == 0:
            self._last_ls = None

    def luminance_flags(self) -> np.ndarray:
        """Luminance flag grids in the window, oldest first, shape (n, H, W)."""
        return self._luminance_flags.to_array()

    def red_flags(self) -> np.ndarray:
        """Red flag grids in the window, oldest first, shape (n, H, W)."""
        return self._red_flags.to_array()

    def timestamps(self) -> np.ndarray:
        """Buffered frame timestamps, oldest first."""
        return self._timestamps.to_array()

    def reset(self) -> None:
        """Empty the window and zero the accumulators."""
        self._timestamps.clear()
        self._frames.clear()
        self._luminance_flags.clear()
        self._red_flags.clear()
        self.luminance_accumulator.fill(0)
        self.red_accumulator.fill(0)
        self._last_ls = None
        logger.debug("Temporal window reset")
