"""
L4 Execution: core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install
operations. Logging, timing and error conversion are centralised here:
every failure comes back as the caller's ``InstallError`` subclass.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from pathlib import Path

from idt.core.services.tool_install.domain.errors import InstallError

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str | Path],
    *,
    error_cls: type[InstallError] = InstallError,
    cwd: Path | str | None = None,
    env_overrides: dict[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command, raising ``error_cls`` unless it exits 0.

    Args:
        cmd: Command list for ``subprocess.run()``. Paths are stringified.
        error_cls: Error class raised on failure (PackageManagerError, ...).
        cwd: Working directory for the command.
        env_overrides: Extra env vars layered over ``os.environ``.
        timeout: Seconds before giving up. ``None`` waits forever.

    Returns:
        The completed process (stdout/stderr captured as text).

    Raises:
        error_cls: Command missing, timed out, or exited non-zero.
    """
    argv = [str(c) for c in cmd]

    env = None
    if env_overrides:
        env = os.environ.copy()
        env.update(env_overrides)

    logger.debug("exec: %s", shlex.join(argv))
    start = time.monotonic()
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        raise error_cls(f"command not found: {argv[0]}", cmd=argv) from e
    except subprocess.TimeoutExpired as e:
        raise error_cls(f"command timed out ({timeout}s)", cmd=argv) from e
    except OSError as e:
        raise error_cls(f"cannot execute: {e}", cmd=argv) from e

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("exit %d after %dms: %s", result.returncode, elapsed_ms, argv[0])

    if result.returncode != 0:
        raise error_cls(
            "command failed",
            cmd=argv,
            returncode=result.returncode,
            stderr=result.stderr or result.stdout or "",
        )
    return result
