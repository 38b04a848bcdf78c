# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Verdict records emitted by flash detection."""

from dataclasses import dataclass


def seconds_to_timespan(seconds: float) -> str:
    """Convert seconds to HH:MM:SS.ffffff format."""
    secs = seconds % 60
    minutes = int((seconds // 60) % 60)
    hours = int((seconds // 3600) % 24)
    return f"{hours:02d}:{minutes:02d}:{secs:09.6f}"


def proportion_to_percentage(proportion: float) -> str:
    """Convert proportion (0-1) to percentage string."""
    return f"{proportion * 100:.2f}%"


@dataclass
class Verdict:
    """Stream-level verdict for one full window."""
    frame: int = 0
    timestamp: float = 0.0
    flashing: bool = False

    # Pixels at or above the frequency threshold
    luminance_pixels: int = 0
    red_pixels: int = 0

    area_threshold: int = 0
    frame_area: int = 0
    elapsed: float = 0.0
    window_frames: int = 0

    @property
    def luminance_flashing(self) -> bool:
        return self.luminance_pixels >= self.area_threshold

    @property
    def red_flashing(self) -> bool:
        return self.red_pixels >= self.area_threshold

    @property
    def luminance_coverage(self) -> float:
        """Fraction of the frame flashing in luminance."""
        return self.luminance_pixels / self.frame_area if self.frame_area else 0.0

    @property
    def red_coverage(self) -> float:
        """Fraction of the frame flashing in saturated red."""
        return self.red_pixels / self.frame_area if self.frame_area else 0.0

    def to_csv(self) -> str:
        """Convert to CSV row string."""
        return ",".join([
            str(self.frame),
            seconds_to_timespan(self.timestamp),
            str(int(self.flashing)),
            str(self.luminance_pixels),
            proportion_to_percentage(self.luminance_coverage),
            str(self.red_pixels),
            proportion_to_percentage(self.red_coverage),
            str(self.area_threshold),
            f"{self.elapsed:.6f}",
            str(self.window_frames),
        ])

    @staticmethod
    def csv_columns() -> str:
        """Get CSV header row."""
        columns = [
            "Frame",
            "TimeStamp",
            "Flashing",
            "LuminancePixels",
            "LuminanceArea",
            "RedPixels",
            "RedArea",
            "AreaThreshold",
            "ElapsedSeconds",
            "WindowFrames",
        ]
        return ",".join(columns)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "Frame": self.frame,
            "TimeStamp": self.timestamp,
            "TimeStampString": seconds_to_timespan(self.timestamp),
            "Flashing": self.flashing,
            "LuminancePixels": self.luminance_pixels,
            "LuminanceArea": proportion_to_percentage(self.luminance_coverage),
            "RedPixels": self.red_pixels,
            "RedArea": proportion_to_percentage(self.red_coverage),
            "AreaThreshold": self.area_threshold,
            "ElapsedSeconds": self.elapsed,
            "WindowFrames": self.window_frames,
        }
