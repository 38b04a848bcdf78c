# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Exceptions raised by the flash detection core."""


class FlashGuardError(Exception):
    """Base class for flashguard errors."""


class FrameShapeError(FlashGuardError):
    """Frame is empty or does not match the established dimensions."""

    def __init__(self, message: str, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ConfigurationError(FlashGuardError):
    """Configuration value outside its valid domain."""

    def __init__(self, message: str, option: str = ""):
        super().__init__(message)
        self.option = option
