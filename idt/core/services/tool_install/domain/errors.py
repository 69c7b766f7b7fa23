"""
L1 Domain: install error taxonomy.

Every failure inside an installer is one of these. Each error is
attributed to a single tool by the installer that raised it and
carries enough context (command, exit code, stderr tail) to be
printed on its own line.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Any

# stderr is trimmed to its tail before it is attached to an error
STDERR_TAIL = 2000


class InstallError(Exception):
    """Base class for all tool installation failures."""

    def __init__(
        self,
        message: str,
        *,
        cmd: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        **details: Any,
    ):
        super().__init__(message)
        self.message = message
        self.cmd = [str(c) for c in cmd] if cmd else None
        self.returncode = returncode
        self.stderr = stderr[-STDERR_TAIL:] if stderr else ""
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.cmd:
            parts.append(f"cmd={shlex.join(self.cmd)}")
        if self.returncode is not None:
            parts.append(f"exit={self.returncode}")
        for key, value in self.details.items():
            parts.append(f"{key}={value}")
        if self.stderr:
            parts.append(f"stderr={self.stderr.strip()}")
        return " | ".join(parts)


class ProbeError(InstallError):
    """Host OS/arch could not be determined."""


class ResolveError(InstallError):
    """Latest release tag could not be resolved."""


class DownloadError(InstallError):
    """Fetching, decompressing or extracting an artifact failed."""


class ChecksumError(InstallError):
    """Checksum manifest or digest problem."""


class ChecksumEntryMissingError(ChecksumError):
    """The checksum manifest has no entry for the requested file."""


class ChecksumMismatchError(ChecksumError):
    """Downloaded file digest differs from the published one."""

    def __init__(self, path: Path, expected: str, actual: str):
        super().__init__(
            "checksum mismatch",
            file=Path(path).name,
            expected=expected,
            actual=actual,
        )
        self.path = Path(path)
        self.expected = expected
        self.actual = actual


class PackageManagerError(InstallError):
    """npm, pip, composer or cargo exited non-zero."""


class FinalizeError(InstallError):
    """Symlinking or permission change failed."""


class HealthCheckError(InstallError):
    """Installed binary did not run successfully."""


class CatalogError(Exception):
    """Raised when a tool catalog entry is invalid."""
