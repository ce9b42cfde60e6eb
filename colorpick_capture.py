from dataclasses import dataclass
from pathlib import Path

import mss
from PIL import Image

from colorpick_errors import CaptureError, DecodeError

CAPTURE_NAME = "tempscreenshot.png"


@dataclass(frozen=True)
class ScreenRegion:
    """Where a capture sits on the desktop, in mss screen coordinates."""
    left: int
    top: int
    width: int
    height: int


def default_capture_path(cwd=None):
    base = Path.cwd() if cwd is None else Path(cwd)
    return base / CAPTURE_NAME


def grab_screen(monitor=1):
    """Grab one monitor (0 = all monitors combined).

    Returns the RGB PIL image and the ScreenRegion it covers.
    """
    try:
        with mss.mss() as sct:
            if monitor >= len(sct.monitors):
                raise CaptureError(
                    f"Monitor {monitor} not found ({len(sct.monitors) - 1} available)"
                )
            mon = sct.monitors[monitor]
            shot = sct.grab(mon)
            region = ScreenRegion(mon["left"], mon["top"], mon["width"], mon["height"])
            # mss hands back BGRA; .rgb is the packed RGB byte string
            return Image.frombytes("RGB", (shot.width, shot.height), shot.rgb), region
    except CaptureError:
        raise
    except Exception as exc:
        raise CaptureError(f"Screen capture failed: {exc}") from exc


def capture_screen(path, monitor=1):
    """Capture the full screen and write it as a PNG at path.

    Any existing file at path is overwritten. Returns the ScreenRegion of
    the grabbed monitor.
    """
    path = Path(path)
    img, region = grab_screen(monitor)
    try:
        img.save(path, format="PNG")
    except (OSError, ValueError) as exc:
        raise CaptureError(f"Could not write capture to {path}: {exc}") from exc
    return region


def capture_size(path):
    """(width, height) from the image header; pixels are not decoded."""
    try:
        with Image.open(path) as img:
            return img.size
    except OSError as exc:
        raise DecodeError(f"Could not read capture {path}: {exc}") from exc
