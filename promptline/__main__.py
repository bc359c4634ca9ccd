"""Promptline CLI entry point.

Allows running via `python -m promptline` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .version import get_version_string

USAGE = "usage: promptline [--version] [--keytest] [--textual] [--mode static|truncated|scroll [--save]] [--log FILE]"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev: KeyEvent | None = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                           ('shift', ev.is_shift)) if on]
            parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts) + '\r')
    finally:
        term.cleanup()


def parse_args(args: list[str]) -> Optional[dict]:
    """Parse command-line flags; returns None on a usage error."""
    options = {"keytest": False, "textual": False, "version": False, "save": False,
               "mode": None, "log": None}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--version", "-V"):
            options["version"] = True
        elif arg in ("--keytest", "--keyboard-test"):
            options["keytest"] = True
        elif arg == "--textual":
            options["textual"] = True
        elif arg == "--save":
            options["save"] = True
        elif arg in ("--mode", "--log"):
            if i + 1 >= len(args):
                return None
            options[arg[2:]] = args[i + 1]
            i += 1
        else:
            return None
        i += 1
    return options


def main() -> None:
    options = parse_args(sys.argv[1:])
    if options is None:
        print(USAGE, file=sys.stderr)
        sys.exit(2)
    if options["version"]:
        print(get_version_string())
        return
    if options["log"]:
        # The terminal belongs to the UI, so logs only ever go to a file
        logging.basicConfig(
            filename=options["log"],
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    if options["keytest"]:
        run_keyboard_test()
        return

    # Lazy imports to avoid loading UI deps for --version
    from .line import RenderMode
    from .settings import SettingsStore, validate_setting

    store = SettingsStore()
    settings = store.load()
    mode = options["mode"] or settings["line_mode"]
    if not validate_setting("line_mode", mode):
        print(f"promptline: unknown mode {mode!r}", file=sys.stderr)
        sys.exit(2)
    if options["save"]:
        # Make this run's mode the default for later runs
        settings["line_mode"] = mode
        if not store.save(settings):
            print(f"promptline: could not save settings to {store.path}", file=sys.stderr)

    if options["textual"]:
        from .textual_app import PromptlineApp
        PromptlineApp(RenderMode(mode), settings["prompt"], settings["history_limit"]).run()
        return

    from .editor import Editor
    Editor(settings=settings, line_mode=mode).run()


if __name__ == "__main__":  # pragma: no cover
    main()
