# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Result types for stream analysis."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class AnalysisResult(IntEnum):
    """Overall stream outcome."""
    Pass = 0
    FlashingDetected = 1


@dataclass
class StreamResult:
    """Summary of an analysed stream."""
    total_frames: int = 0
    dropped_frames: int = 0
    verdicts: int = 0
    flashing_verdicts: int = 0
    luminance_flashing_verdicts: int = 0
    red_flashing_verdicts: int = 0
    first_flash_timestamp: Optional[float] = None
    analysis_time: int = 0  # milliseconds
    interrupted: bool = False

    @property
    def overall_result(self) -> AnalysisResult:
        if self.flashing_verdicts > 0:
            return AnalysisResult.FlashingDetected
        return AnalysisResult.Pass

    def to_dict(self) -> dict:
        return {
            "TotalFrames": self.total_frames,
            "DroppedFrames": self.dropped_frames,
            "Verdicts": self.verdicts,
            "FlashingVerdicts": self.flashing_verdicts,
            "LuminanceFlashingVerdicts": self.luminance_flashing_verdicts,
            "RedFlashingVerdicts": self.red_flashing_verdicts,
            "FirstFlashTimeStamp": self.first_flash_timestamp,
            "AnalysisTime": self.analysis_time,
            "Interrupted": self.interrupted,
            "OverallResult": self.overall_result.name,
        }
