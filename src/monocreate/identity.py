"""Lookup of the operator's identity for the generated author fields."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

LOGGER = logging.getLogger(__name__)

__all__ = ["git_user_name"]


def git_user_name(cwd: str | Path | None = None) -> str | None:
    """Return ``git config user.name`` or ``None`` when it is not configured."""

    try:
        result = subprocess.run(
            ["git", "config", "--get", "user.name"],
            cwd=cwd,
            capture_output=True,
            check=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        LOGGER.debug("git user.name is not available")
        return None

    name = result.stdout.strip()
    return name or None
