# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Downscaling and colour-order normalisation of captured frames."""

from typing import Tuple

import cv2
import numpy as np

from flashguard.errors import FrameShapeError

_CONVERSIONS = {
    "BGR": cv2.COLOR_BGR2RGB,
    "BGRA": cv2.COLOR_BGRA2RGB,
    "RGBA": cv2.COLOR_RGBA2RGB,
}


class FramePreprocessor:
    """Resizes captured frames and converts them to RGB."""

    def __init__(self, downscale_factor: float = 0.25, input_order: str = "BGR"):
        """
        Args:
            downscale_factor: Scale applied to both dimensions, in (0, 1]
            input_order: Channel order of captured frames (BGR, BGRA, RGBA or RGB)
        """
        if not 0 < downscale_factor <= 1:
            raise ValueError("downscale_factor must be in (0, 1]")
        input_order = input_order.upper()
        if input_order != "RGB" and input_order not in _CONVERSIONS:
            raise ValueError(f"Unsupported channel order: {input_order}")
        self.downscale_factor = downscale_factor
        self.input_order = input_order

    def working_size(self, frame_size: Tuple[int, int]) -> Tuple[int, int]:
        """(height, width) after downscaling a frame of ``frame_size``."""
        height, width = frame_size
        return (
            max(1, int(round(height * self.downscale_factor))),
            max(1, int(round(width * self.downscale_factor))),
        )

    def process(self, frame: np.ndarray) -> np.ndarray:
        """
        Downscale ``frame`` and return it in RGB order.

        Args:
            frame: Captured frame (H, W, C) uint8

        Returns:
            RGB frame at the working size
        """
        if frame is None or frame.size == 0:
            raise FrameShapeError("Empty frame")

        if self.downscale_factor != 1:
            height, width = self.working_size(frame.shape[:2])
            # cv2.resize takes (width, height)
            frame = cv2.resize(frame, (width, height), interpolation=cv2.INTER_AREA)

        if self.input_order != "RGB":
            frame = cv2.cvtColor(frame, _CONVERSIONS[self.input_order])

        return frame
