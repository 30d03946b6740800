"""Subprocess helpers for launching the compiler and other external tools.

On Windows the child is started with CREATE_NO_WINDOW so no console window
flashes up. Unlike a captured subprocess.run, stdout and stderr are left
connected to ours so compiler diagnostics reach the user directly.
"""

import logging
import subprocess
import sys
from typing import Any

logger = logging.getLogger(__name__)


def get_subprocess_creation_flags() -> int:
    """Get platform-specific subprocess creation flags.

    Returns:
        - Windows: subprocess.CREATE_NO_WINDOW
        - Other platforms: 0
    """
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def _apply_platform_flags(kwargs: dict[str, Any]) -> dict[str, Any]:
    default_flags = get_subprocess_creation_flags()
    if "creationflags" in kwargs:
        kwargs["creationflags"] = kwargs["creationflags"] | default_flags
    elif default_flags:
        kwargs["creationflags"] = default_flags
    return kwargs


def safe_popen(cmd: list[str], **kwargs: Any) -> subprocess.Popen:
    """Start cmd with platform flags applied.

    Args:
        cmd: Program and arguments
        **kwargs: Passed to subprocess.Popen; an explicit creationflags is OR'd
            with the platform default

    Returns:
        Popen handle

    Raises:
        OSError: If the program cannot be started
    """
    logger.debug(f"Spawning: {cmd}")
    return subprocess.Popen(cmd, **_apply_platform_flags(kwargs))


def safe_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """Run cmd to completion with platform flags applied.

    stdin is redirected to DEVNULL unless given, so helper tools such as git
    cannot read from the user's terminal.
    """
    kwargs.setdefault("stdin", subprocess.DEVNULL)
    logger.debug(f"Running: {cmd}")
    return subprocess.run(cmd, **_apply_platform_flags(kwargs))
