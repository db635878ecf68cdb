"""
ledger.version — semantic version string and VCS describe helper.

Kept tiny and dependency-free so it can be imported very early (CLI startup,
packaging).

Usage:
    from ledger.version import __version__, git_describe, version_metadata
"""

from __future__ import annotations

import os
import subprocess
from datetime import datetime, timezone
from functools import lru_cache
from typing import Dict

# Bump this when making a tagged release. Use semver (major.minor.patch).
__version__ = "0.1.0"


@lru_cache(maxsize=1)
def git_describe() -> str:
    """
    Return a best-effort 'git describe' style string.

    Resolution order:
      1) Environment override LEDGER_GIT_DESCRIBE (useful in containers).
      2) `git describe --tags --dirty --always` (if .git and git available).
      3) Fallback to __version__ + "+local".
    """
    override = os.getenv("LEDGER_GIT_DESCRIBE")
    if override:
        return override.strip()

    try:
        out = subprocess.check_output(
            ["git", "describe", "--tags", "--dirty", "--always"],
            stderr=subprocess.DEVNULL,
        )
        desc = out.decode("utf-8", "replace").strip()
        if desc:
            return desc
    except (OSError, subprocess.CalledProcessError):
        pass

    return f"{__version__}+local"


def _is_dirty(desc: str) -> bool:
    return desc.endswith("-dirty") or "-dirty-" in desc


@lru_cache(maxsize=1)
def version_metadata() -> Dict[str, str]:
    """
    Structured version info for logs / diagnostics.

    Keys: version, describe, dirty ('true'/'false'), build_time (UTC ISO8601).
    """
    desc = git_describe()
    return {
        "version": __version__,
        "describe": desc,
        "dirty": "true" if _is_dirty(desc) else "false",
        "build_time": datetime.now(timezone.utc).isoformat(),
    }


__all__ = ["__version__", "git_describe", "version_metadata"]
