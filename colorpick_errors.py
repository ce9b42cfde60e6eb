"""Errors raised by the color picker, each tied to a process exit code."""


class ColorPickError(Exception):
    exit_code = 1


class CleanupError(ColorPickError):
    """The temporary capture file could not be removed."""
    exit_code = 1


class UnsupportedLayoutError(ColorPickError):
    """The decoded image is neither RGB nor RGBA."""
    exit_code = 2


class CursorError(ColorPickError):
    """The pointer position could not be read."""
    exit_code = 3


class CaptureError(ColorPickError):
    """The screen could not be captured or the capture could not be written."""
    exit_code = 4


class DecodeError(ColorPickError):
    """The capture file could not be decoded, or the pixel is out of bounds."""
    exit_code = 5


class ConfigError(ColorPickError):
    exit_code = 6
