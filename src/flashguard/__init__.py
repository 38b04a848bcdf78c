# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""
FlashGuard: live photosensitive flash detection.

Analyses video frames pixel by pixel for:
- General luminance flashes
- Saturated red flashes

and reports when flashing at 3 Hz or more covers a quarter of the frame.
"""

from flashguard.configuration import Configuration
from flashguard.errors import ConfigurationError, FlashGuardError, FrameShapeError
from flashguard.flash_detection import FlashDetection
from flashguard.frame_data import Verdict
from flashguard.result import AnalysisResult, StreamResult
from flashguard.stream_analyser import StreamAnalyser
from flashguard.temporal_window import TemporalWindow

__version__ = "1.0.0"
__all__ = [
    "AnalysisResult",
    "Configuration",
    "ConfigurationError",
    "FlashDetection",
    "FlashGuardError",
    "FrameShapeError",
    "StreamAnalyser",
    "StreamResult",
    "TemporalWindow",
    "Verdict",
]
