from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def get_version() -> str:
    try:
        return importlib.metadata.version("zin")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    """Package version, plus the short commit when running from a git checkout."""
    version = get_version()
    commit = _run_git(["rev-parse", "--short=7", "HEAD"], Path(__file__).resolve().parent)
    if commit:
        return f"zin {version} ({commit})"
    return f"zin {version}"
