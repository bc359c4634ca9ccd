#!/usr/bin/env python3
"""Promptline - a single-line prompt editor.

Usage:
    python main.py [--mode static|truncated|scroll [--save]] [--textual]

Controls:
    Left/Right: Move one character
    Ctrl/Alt-Left/Right: Move one word
    Up/Down: Jump to end/start of line
    Ctrl-V: Paste
    Enter: Submit line
    Ctrl-Q: Quit
"""

from promptline.__main__ import main


if __name__ == "__main__":
    main()
