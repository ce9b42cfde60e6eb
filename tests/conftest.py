"""Shared fixtures: synthetic screenshots and fake screen/pointer backends."""

import pytest
from PIL import Image

import colorpick_capture
from colorpick_capture import ScreenRegion
from colorpick_config import Settings
from colorpick_cursor import CursorPosition


def _make_screen(width=320, height=200, background=(10, 20, 30), dots=None, mode="RGB"):
    fill = background if mode != "RGBA" or len(background) == 4 else background + (255,)
    img = Image.new(mode, (width, height), fill)
    for (x, y), color in (dots or {}).items():
        img.putpixel((x, y), color)
    return img


class FakeScreen:
    """Stands in for colorpick_capture.capture_screen."""

    def __init__(self, image, region=None):
        self.image = image
        self.region = region or ScreenRegion(0, 0, image.width, image.height)
        self.calls = []

    def __call__(self, path, monitor=1):
        self.calls.append((path, monitor))
        self.image.save(path, format="PNG")
        return self.region


class FakeCursor:
    """Stands in for colorpick_cursor.cursor_position, replaying positions."""

    def __init__(self, *positions):
        self.positions = list(positions)
        self.calls = 0

    def __call__(self, backend="pyautogui"):
        pos = self.positions[min(self.calls, len(self.positions) - 1)]
        self.calls += 1
        return CursorPosition(*pos)


class FakeShot:
    def __init__(self, img):
        self.width = img.width
        self.height = img.height
        self.rgb = img.convert("RGB").tobytes()


class FakeMSS:
    """Stands in for an mss.mss() instance over a synthetic desktop.

    monitors[0] is the bounding box of the others, as in mss. ``scale``
    makes grabs come back at scale x the monitor size (Retina).
    """

    def __init__(self, desktop, origin=(0, 0), screens=None, scale=1, fail=None):
        self.desktop = desktop
        self.origin = origin
        left, top = origin
        if screens is None:
            screens = [(left, top, desktop.width, desktop.height)]
        whole = {"left": left, "top": top, "width": desktop.width, "height": desktop.height}
        self.monitors = [whole] + [
            {"left": l, "top": t, "width": w, "height": h} for l, t, w, h in screens
        ]
        self.scale = scale
        self.fail = fail
        self.grabbed = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def grab(self, monitor):
        if self.fail:
            raise self.fail
        self.grabbed.append(monitor)
        x0 = monitor["left"] - self.origin[0]
        y0 = monitor["top"] - self.origin[1]
        img = self.desktop.crop((x0, y0, x0 + monitor["width"], y0 + monitor["height"]))
        if self.scale != 1:
            img = img.resize(
                (img.width * self.scale, img.height * self.scale), Image.NEAREST
            )
        return FakeShot(img)


@pytest.fixture
def make_screen():
    """Factory for a solid image with single pixels painted at given points."""
    return _make_screen


@pytest.fixture
def fake_screen():
    return FakeScreen


@pytest.fixture
def fake_cursor():
    return FakeCursor


@pytest.fixture
def install_mss(monkeypatch):
    """Route mss.mss() to a FakeMSS built from the given arguments."""

    def install(desktop=None, **kwargs):
        if desktop is None:
            desktop = Image.new("RGB", (40, 30), (1, 2, 3))
        fake = FakeMSS(desktop, **kwargs)
        monkeypatch.setattr(colorpick_capture.mss, "mss", lambda: fake)
        return fake

    return install


@pytest.fixture
def settings(tmp_path):
    return Settings(
        interval=0.001,
        capture_path=str(tmp_path / "tempscreenshot.png"),
        scale_cursor=False,
    )
