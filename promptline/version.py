from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def _package_version() -> str:
    try:
        return importlib.metadata.version("promptline")
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def _git_commit(path: Path) -> Optional[str]:
    """Short commit hash when running from a git checkout."""
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(path),
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    version = _package_version()
    commit = _git_commit(Path(__file__).resolve().parent)
    return f"promptline {version} ({commit})" if commit else f"promptline {version}"
