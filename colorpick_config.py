import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

from colorpick_capture import default_capture_path
from colorpick_errors import ConfigError

CONFIG_PATH = Path(__file__).with_name("colorpick.json")
BACKENDS = ("pyautogui", "pynput")


@dataclass(frozen=True)
class Settings:
    interval: float = 1.0
    capture_path: str = ""
    backend: str = "pyautogui"
    monitor: int = 1
    scale_cursor: bool = True


def default_settings(cwd=None):
    return Settings(capture_path=str(default_capture_path(cwd)))


def validate(settings):
    # bool is an int subclass, reject it where a number is expected
    if isinstance(settings.interval, bool) or not isinstance(settings.interval, (int, float)):
        raise ConfigError(f"interval must be a number, got {settings.interval!r}")
    if settings.interval <= 0:
        raise ConfigError(f"interval must be > 0, got {settings.interval}")
    if not isinstance(settings.capture_path, str) or not settings.capture_path:
        raise ConfigError("capture_path must be a non-empty string")
    if settings.backend not in BACKENDS:
        raise ConfigError(
            f"Unknown backend '{settings.backend}'. Use: {', '.join(BACKENDS)}."
        )
    if isinstance(settings.monitor, bool) or not isinstance(settings.monitor, int):
        raise ConfigError(f"monitor must be an integer, got {settings.monitor!r}")
    if settings.monitor < 0:
        raise ConfigError(f"monitor must be >= 0, got {settings.monitor}")
    if not isinstance(settings.scale_cursor, bool):
        raise ConfigError(f"scale_cursor must be true or false, got {settings.scale_cursor!r}")
    return settings


def load_config(path=None, cwd=None):
    """Resolve defaults, then the JSON config file on top.

    Without an explicit path, ``colorpick.json`` beside this module is used
    when it exists. An explicit path must exist.
    """
    settings = default_settings(cwd)
    explicit = path is not None
    path = CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return settings

    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must hold a JSON object")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")
    if isinstance(data.get("capture_path"), str) and data["capture_path"]:
        # relative paths resolve against the working directory
        base = Path.cwd() if cwd is None else Path(cwd)
        data["capture_path"] = str(base / data["capture_path"])
    return validate(replace(settings, **data))


def apply_overrides(settings, **overrides):
    """Apply command-line values; ``None`` means the flag was not given."""
    given = {k: v for k, v in overrides.items() if v is not None}
    return validate(replace(settings, **given))
