import importlib
from dataclasses import dataclass

from colorpick_errors import ConfigError, CursorError

# Backends are imported on first use: pyautogui and pynput both need a
# display at import time on Linux.


@dataclass(frozen=True)
class CursorPosition:
    x: int
    y: int

    def __iter__(self):
        return iter((self.x, self.y))


def _import_backend(name):
    try:
        return importlib.import_module(name)
    except Exception as exc:
        # Missing package, or no display to connect to.
        raise CursorError(f"Cursor backend '{name}' is unavailable: {exc}") from exc


def _pyautogui_position():
    pyautogui = _import_backend("pyautogui")
    try:
        x, y = pyautogui.position()
    except Exception as exc:
        raise CursorError(f"Could not read cursor position: {exc}") from exc
    return x, y


def _pynput_position():
    pynput_mouse = _import_backend("pynput.mouse")
    try:
        x, y = pynput_mouse.Controller().position
    except Exception as exc:
        raise CursorError(f"Could not read cursor position: {exc}") from exc
    return x, y


_BACKENDS = {
    "pyautogui": _pyautogui_position,
    "pynput": _pynput_position,
}


def cursor_position(backend="pyautogui"):
    """Current pointer position in screen coordinates."""
    try:
        read = _BACKENDS[backend]
    except KeyError:
        raise ConfigError(f"Unknown cursor backend '{backend}'.") from None
    x, y = read()
    return CursorPosition(int(x), int(y))
