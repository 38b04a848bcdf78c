# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Flash detection session: transform, classify, aggregate, decide."""

import logging
from typing import Optional, Tuple

import numpy as np

from flashguard.configuration import Configuration
from flashguard import decision
from flashguard.errors import FrameShapeError
from flashguard.frame_data import Verdict
from flashguard.frame_rgb_converter import FrameRgbConverter
from flashguard.temporal_window import TemporalWindow

logger = logging.getLogger(__name__)


class FlashDetection:
    """
    Orchestrates flash detection for a single stream session.

    Owns the temporal window and its accumulators. Frames must already
    be downscaled and in RGB order; the first frame fixes the working
    dimensions unless ``frame_size`` is given.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        frame_size: Optional[Tuple[int, int]] = None,
    ):
        """
        Initialize flash detection.

        Args:
            config: Configuration parameters (uses defaults if None)
            frame_size: (height, width) of the working frames, or None to
                take it from the first frame
        """
        self.config = config or Configuration()
        self.config.validate()
        self.converter = FrameRgbConverter()

        self.frame_size: Optional[Tuple[int, int]] = None
        self.area_threshold: int = 0
        self.window: Optional[TemporalWindow] = None

        self.frames_processed: int = 0
        self._frame_index: int = -1
        self.verdicts_emitted: int = 0
        self.flashing_verdicts: int = 0

        if frame_size is not None:
            self._init_window(tuple(frame_size))

    def _init_window(self, frame_size: Tuple[int, int]) -> None:
        self.frame_size = frame_size
        self.area_threshold = decision.area_threshold(frame_size, self.config.area_fraction)
        self.window = TemporalWindow(
            frame_size=frame_size,
            window_params=self.config.get_window_params(),
            luminance_params=self.config.get_luminance_params(),
            red_params=self.config.get_red_saturation_params(),
        )
        logger.info(
            "Flash detection on %dx%d frames, area threshold %d pixels",
            frame_size[1], frame_size[0], self.area_threshold,
        )

    def _check_frame(self, frame: np.ndarray) -> None:
        if frame is None or frame.size == 0:
            raise FrameShapeError("Empty frame", expected=self.frame_size, actual=None)
        if frame.ndim != 3 or frame.shape[2] != 3:
            raise FrameShapeError(
                f"Expected (height, width, 3) frame, got {frame.shape}",
                actual=frame.shape,
            )
        if self.frame_size is not None and frame.shape[:2] != self.frame_size:
            raise FrameShapeError(
                f"Frame size {frame.shape[:2]} does not match {self.frame_size}",
                expected=self.frame_size,
                actual=frame.shape[:2],
            )

    def process_frame(
        self,
        frame: np.ndarray,
        timestamp: float,
        frame_index: Optional[int] = None,
    ) -> Optional[Verdict]:
        """
        Analyse one frame.

        Args:
            frame: RGB frame (H, W, 3) with channels in [0, 255]
            timestamp: Capture time in seconds
            frame_index: Position of the frame in its stream, reported in
                the verdict (defaults to the count of processed frames)

        Returns:
            Verdict once the window is full, None while it is filling

        Raises:
            FrameShapeError: Frame is empty or has the wrong dimensions
        """
        if frame is not None:
            frame = np.asarray(frame)
        self._check_frame(frame)
        if self.window is None:
            self._init_window(frame.shape[:2])

        linear = self.converter.convert(np.ascontiguousarray(frame))
        ready = self.window.push(linear, timestamp)
        self._frame_index = self.frames_processed if frame_index is None else frame_index
        self.frames_processed += 1

        if not ready:
            return None

        verdict = self.evaluate()
        self._record(verdict)
        self.window.evict_oldest()
        return verdict

    def evaluate(self) -> Verdict:
        """Apply the decision rule to the current window without changing it."""
        if self.window is None or self.window.elapsed <= 0:
            raise RuntimeError("No elapsed time in the window to evaluate")

        result = decision.evaluate(
            self.window.luminance_accumulator,
            self.window.red_accumulator,
            self.window.elapsed,
            self.area_threshold,
            self.config.flash_frequency_threshold,
        )
        height, width = self.frame_size
        return Verdict(
            frame=self._frame_index,
            timestamp=self.window.newest_timestamp,
            flashing=result.flashing,
            luminance_pixels=result.luminance_pixels,
            red_pixels=result.red_pixels,
            area_threshold=self.area_threshold,
            frame_area=height * width,
            elapsed=self.window.elapsed,
            window_frames=len(self.window),
        )

    def _record(self, verdict: Verdict) -> None:
        self.verdicts_emitted += 1
        if verdict.flashing:
            self.flashing_verdicts += 1
            logger.debug(
                "Flashing at frame %d: %d luminance / %d red pixels (threshold %d)",
                verdict.frame, verdict.luminance_pixels, verdict.red_pixels,
                verdict.area_threshold,
            )

    def reset(self) -> None:
        """Forget buffered frames, keeping the working dimensions."""
        if self.window is not None:
            self.window.reset()
