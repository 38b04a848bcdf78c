# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Shared fixtures."""

import logging

import cv2
import numpy as np
import pytest


def write_video(path, levels, size=(32, 32), fps=8.0):
    """Write gray frames at the given levels to an MJPG .avi file."""
    height, width = size
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (width, height))
    if not writer.isOpened():
        pytest.skip("MJPG video writer unavailable")
    for level in levels:
        writer.write(np.full((height, width, 3), level, dtype=np.uint8))
    writer.release()
    return path


@pytest.fixture
def flashing_video(tmp_path):
    """Four seconds of full-frame black/white flashing at 8 fps."""
    return write_video(tmp_path / "flashing.avi", [0, 255] * 16)


@pytest.fixture
def static_video(tmp_path):
    """Four seconds of a constant gray frame at 8 fps."""
    return write_video(tmp_path / "static.avi", [128] * 32)


@pytest.fixture(autouse=True)
def reset_flashguard_logger():
    """Detach handlers installed by configure_logging between tests."""
    logger = logging.getLogger("flashguard")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
