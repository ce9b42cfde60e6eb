import os
import sys
import threading
from pathlib import Path

import colorpick_capture as capture_mod
import colorpick_cursor as cursor_mod
import colorpick_decode as decode_mod
from colorpick_errors import CleanupError

# Sample -> capture -> decode -> report -> remove -> wait, one iteration at a
# time. Only one capture file exists at any moment.


def capture_point(pos, region, image_size=None):
    """Map a desktop cursor position into pixel coordinates of a capture.

    The region origin is subtracted first. With image_size, the result is
    scaled by image size / region size, which covers Retina / HiDPI captures
    taken in physical pixels of a monitor measured in points.
    """
    x = pos.x - region.left
    y = pos.y - region.top
    if not image_size or not region.width or not region.height:
        return int(x), int(y)
    img_w, img_h = image_size
    if (img_w, img_h) == (region.width, region.height):
        return int(x), int(y)
    return int(x * img_w / region.width), int(y * img_h / region.height)


def remove_capture(path):
    try:
        os.remove(path)
    except OSError as exc:
        raise CleanupError(f"Could not remove capture file {path}: {exc}") from exc


def format_report(pos, pixel, color):
    line = f"Cursor: ({pos.x}, {pos.y}) RGB=({color.r}, {color.g}, {color.b}) {color.hex}"
    if pixel != (pos.x, pos.y):
        line += f" pixel=({pixel[0]}, {pixel[1]})"
    return line


def sample_once(
    settings,
    sample=cursor_mod.cursor_position,
    capture=capture_mod.capture_screen,
    decode=decode_mod.decode_pixel,
):
    """Run one iteration and return (position, pixel, color).

    The capture file is always gone when this returns. If capture or decode
    fails, the original error wins over a failure to remove the file.
    """
    path = Path(settings.capture_path)
    pos = sample(settings.backend)
    try:
        region = capture(path, settings.monitor)
        image_size = capture_mod.capture_size(path) if settings.scale_cursor else None
        pixel = capture_point(pos, region, image_size)
        color = decode(path, *pixel)
    except BaseException:
        if path.exists():
            try:
                remove_capture(path)
            except CleanupError as cleanup_exc:
                print(f"Error: {cleanup_exc}", file=sys.stderr)
        raise
    remove_capture(path)
    return pos, pixel, color


def run_loop(
    settings,
    stop_event=None,
    max_iterations=None,
    sample=cursor_mod.cursor_position,
    capture=capture_mod.capture_screen,
    decode=decode_mod.decode_pixel,
    out=None,
):
    """Sample every settings.interval seconds until stopped.

    Stops when stop_event is set or after max_iterations. Returns the number
    of completed iterations. Errors propagate to the caller.
    """
    if stop_event is None:
        stop_event = threading.Event()
    if out is None:
        out = sys.stdout

    count = 0
    while not stop_event.is_set():
        pos, pixel, color = sample_once(settings, sample=sample, capture=capture, decode=decode)
        out.write(format_report(pos, pixel, color) + "\n")
        out.flush()
        count += 1
        if max_iterations is not None and count >= max_iterations:
            break
        stop_event.wait(settings.interval)
    return count
