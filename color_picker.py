#!/usr/bin/env python3
import argparse
import signal
import sys
import threading

import colorpick_config as config
from colorpick_config import BACKENDS
from colorpick_errors import ColorPickError, ConfigError
from colorpick_loop import run_loop


def build_parser():
    parser = argparse.ArgumentParser(
        description="Print the screen color under the mouse cursor every interval."
    )
    parser.add_argument("--interval", type=float, help="Seconds between samples (default 1.0).")
    parser.add_argument("--path", dest="capture_path", type=str, help="Temporary capture file.")
    parser.add_argument("--iterations", type=int, help="Stop after N samples.")
    parser.add_argument("--backend", choices=BACKENDS, help="Cursor position backend.")
    parser.add_argument("--monitor", type=int, help="mss monitor index (0 = all, 1 = primary).")
    parser.add_argument(
        "--no-scale",
        dest="scale_cursor",
        action="store_const",
        const=False,
        help="Use cursor coordinates as capture pixels without HiDPI scaling.",
    )
    parser.add_argument("--config", type=str, help="JSON settings file.")
    return parser


def _interrupt(signum, frame):
    # Unwinds like Ctrl+C so the in-flight capture file is removed.
    raise KeyboardInterrupt


def install_term_handler():
    """Treat SIGTERM like SIGINT. Returns the previous handler, or None."""
    if not hasattr(signal, "SIGTERM"):
        return None
    if threading.current_thread() is not threading.main_thread():
        return None
    return signal.signal(signal.SIGTERM, _interrupt)


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.iterations is not None and args.iterations < 1:
        print("Error: --iterations must be at least 1.", file=sys.stderr)
        return ConfigError.exit_code

    previous = install_term_handler()
    try:
        settings = config.load_config(args.config)
        settings = config.apply_overrides(
            settings,
            interval=args.interval,
            capture_path=args.capture_path,
            backend=args.backend,
            monitor=args.monitor,
            scale_cursor=args.scale_cursor,
        )
        print("Color picker - press Ctrl+C to exit", file=sys.stderr)
        print(f"Capture file: {settings.capture_path}", file=sys.stderr)
        run_loop(settings, max_iterations=args.iterations)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 0
    except ColorPickError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)
    return 0


if __name__ == "__main__":
    sys.exit(main())
