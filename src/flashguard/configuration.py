# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Configuration for flash detection."""

import json
import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path

from flashguard.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "appsettings.json"


@dataclass
class FlashParams:
    """Parameters for one per-pixel flash classifier."""
    flash_threshold: float
    dark_threshold: float
    saturation_threshold: float = 0.0


@dataclass
class WindowParams:
    """Parameters for the temporal window and the decision rule."""
    buffer_min_frames: int = 16
    window_seconds: float = 1.0
    expected_fps: int = 30
    frequency_threshold: float = 3.0
    area_fraction: float = 0.25


@dataclass
class Configuration:
    """Configuration for stream flash analysis."""

    # Temporal window
    buffer_min_frames: int = 16
    window_seconds: float = 1.0
    expected_fps: int = 30

    # Luminance flash parameters
    luminance_delta_threshold: float = 0.1
    luminance_dark_ceiling: float = 0.8

    # Red saturation parameters
    red_saturation_threshold: float = 0.8
    red_flash_threshold: float = 20.0
    red_dark_threshold: float = 321.0  # pure_red peaks at 320: no dark exclusion

    # Decision rule
    flash_frequency_threshold: float = 3.0
    area_fraction: float = 0.25

    # Preprocessing
    downscale_factor: float = 0.25

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_json(cls, path: str) -> "Configuration":
        """Load configuration from an appsettings.json file in ``path``."""
        config_path = Path(path) / CONFIG_FILENAME

        if not config_path.exists():
            logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, path)
            return cls()

        with open(config_path, "r") as f:
            # Strip single-line // comments
            lines = []
            for line in f.read().split("\n"):
                comment_idx = line.find("//")
                if comment_idx >= 0:
                    line = line[:comment_idx]
                lines.append(line)

        try:
            data = json.loads("\n".join(lines))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a JSON object")

        values = {}

        window = data.get("Window", {})
        values["buffer_min_frames"] = window.get("BufferMinFrames", cls.buffer_min_frames)
        values["window_seconds"] = window.get("WindowSeconds", cls.window_seconds)
        values["expected_fps"] = window.get("ExpectedFps", cls.expected_fps)

        luminance = data.get("Luminance", {})
        values["luminance_delta_threshold"] = luminance.get(
            "RelativeLuminanceFlashThreshold", cls.luminance_delta_threshold
        )
        values["luminance_dark_ceiling"] = luminance.get(
            "RelativeDarkLuminanceThreshold", cls.luminance_dark_ceiling
        )

        red = data.get("RedSaturation", {})
        values["red_saturation_threshold"] = red.get(
            "SaturationThreshold", cls.red_saturation_threshold
        )
        values["red_flash_threshold"] = red.get("FlashThreshold", cls.red_flash_threshold)
        values["red_dark_threshold"] = red.get("RedDarkThreshold", cls.red_dark_threshold)

        detection = data.get("FlashDetection", {})
        values["flash_frequency_threshold"] = detection.get(
            "FrequencyThreshold", cls.flash_frequency_threshold
        )
        values["area_fraction"] = detection.get("AreaProportion", cls.area_fraction)

        preprocessing = data.get("Preprocessing", {})
        values["downscale_factor"] = preprocessing.get(
            "DownscaleFactor", cls.downscale_factor
        )

        logger.info("Loaded configuration from %s", config_path)
        return cls(**values)

    def validate(self) -> None:
        """Raise ConfigurationError if any option is outside its domain."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(
                    f"{f.name} must be a number, got {value!r}", option=f.name
                )
            if not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite", option=f.name)

        if int(self.buffer_min_frames) != self.buffer_min_frames or self.buffer_min_frames < 2:
            raise ConfigurationError(
                "buffer_min_frames must be an integer >= 2", option="buffer_min_frames"
            )
        if int(self.expected_fps) != self.expected_fps or self.expected_fps < 1:
            raise ConfigurationError(
                "expected_fps must be an integer >= 1", option="expected_fps"
            )

        positive = (
            "window_seconds",
            "luminance_delta_threshold",
            "luminance_dark_ceiling",
            "red_flash_threshold",
            "red_dark_threshold",
            "flash_frequency_threshold",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive", option=name)

        unit_interval = ("red_saturation_threshold", "area_fraction", "downscale_factor")
        for name in unit_interval:
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ConfigurationError(f"{name} must be in (0, 1]", option=name)

    def get_luminance_params(self) -> FlashParams:
        """Get luminance flash parameters."""
        return FlashParams(
            flash_threshold=self.luminance_delta_threshold,
            dark_threshold=self.luminance_dark_ceiling,
        )

    def get_red_saturation_params(self) -> FlashParams:
        """Get red saturation flash parameters."""
        return FlashParams(
            flash_threshold=self.red_flash_threshold,
            dark_threshold=self.red_dark_threshold,
            saturation_threshold=self.red_saturation_threshold,
        )

    def get_window_params(self) -> WindowParams:
        """Get temporal window and decision parameters."""
        return WindowParams(
            buffer_min_frames=int(self.buffer_min_frames),
            window_seconds=float(self.window_seconds),
            expected_fps=int(self.expected_fps),
            frequency_threshold=self.flash_frequency_threshold,
            area_fraction=self.area_fraction,
        )
