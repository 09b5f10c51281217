from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

FALLBACK_VERSION = "0.1.0"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def get_version() -> str:
    """Installed package version, or the source tree's version."""
    try:
        return importlib.metadata.version("skim")
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd or os.getcwd(),
                                      stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, OSError):
        return None


def get_build_info() -> BuildInfo:
    """Commit information when running from a git checkout."""
    here = Path(__file__).resolve().parent
    root = _run_git(["rev-parse", "--show-toplevel"], cwd=str(here))
    if not root:
        return BuildInfo(commit=None, date=None, dirty=False)

    commit = _run_git(["rev-parse", "HEAD"], cwd=root)
    date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=root)
    status = _run_git(["status", "--porcelain"], cwd=root)
    return BuildInfo(commit=commit, date=date, dirty=bool(status))


def get_version_string() -> str:
    info = get_build_info()
    version = f"skim {get_version()}"
    if not info.commit:
        return version
    dirty_suffix = "-dirty" if info.dirty else ""
    # Use short (7-character) git hashes
    return f"{version} ({info.commit[:7]}{dirty_suffix} {info.date or 'unknown'})"
