from dataclasses import dataclass

import numpy as np
from PIL import Image, UnidentifiedImageError

from colorpick_errors import DecodeError, UnsupportedLayoutError

# Pillow modes whose channels start with red, green, blue.
RGB_MODES = ("RGB", "RGBA", "RGBX", "RGBa")


@dataclass(frozen=True)
class SampledColor:
    r: int
    g: int
    b: int

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    @property
    def hex(self):
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def _layout(img):
    if img.ndim == 2:
        return "1 channel"
    if img.ndim == 3:
        return f"{img.shape[2]} channels"
    return f"{img.ndim}-d array"


def pixel_from_array(img, x, y):
    """Read (x, y) from an (h, w, 3) RGB or (h, w, 4) RGBA array.

    Alpha is dropped. Other layouts raise UnsupportedLayoutError and
    coordinates outside the image raise DecodeError.
    """
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise UnsupportedLayoutError(
            f"Unsupported pixel layout ({_layout(img)}); expected RGB or RGBA"
        )
    height, width = img.shape[:2]
    # Negative indices would silently wrap in numpy.
    if not (0 <= x < width and 0 <= y < height):
        raise DecodeError(
            f"Pixel ({x}, {y}) is outside the {width}x{height} image"
        )
    r, g, b = img[y, x, :3]
    return SampledColor(int(r), int(g), int(b))


def load_image(path):
    """Open and fully decode path into a numpy array."""
    try:
        with Image.open(path) as im:
            im.load()
            if im.mode not in RGB_MODES:
                raise UnsupportedLayoutError(
                    f"Unsupported pixel layout (mode {im.mode}, "
                    f"{len(im.getbands())} channel(s)); expected RGB or RGBA"
                )
            return np.asarray(im)
    except UnsupportedLayoutError:
        raise
    except FileNotFoundError as exc:
        raise DecodeError(f"Capture file not found: {path}") from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise DecodeError(f"Could not decode {path}: {exc}") from exc


def decode_pixel(path, x, y):
    img = load_image(path)
    return pixel_from_array(img, x, y)
