"""
Installer base: the contract between the orchestrator and each tool.

The orchestrator only talks to installers through this protocol. An
installer composes one download strategy, an optional checksum check
and the finalizer in ``install()``; ``run()`` wraps install + health
check, times both, and returns an ``InstallOutcome``.

``run()`` NEVER raises: every failure is captured in the outcome.

To add an install strategy:
    1. Subclass Installer
    2. Implement install() returning an Artifact
    3. Map its Strategy in installers/registry.py
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from idt.core.models.outcome import InstallOutcome
from idt.core.models.system import SystemProfile
from idt.core.models.tool import ToolSpec
from idt.core.observability.logging_config import tool_context
from idt.core.services.tool_install.data.constants import (
    HEALTH_CHECK_TIMEOUT,
    HTTP_TIMEOUT,
)
from idt.core.services.tool_install.domain.errors import (
    CatalogError,
    HealthCheckError,
    InstallError,
)
from idt.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


class InstallContext(BaseModel):
    """Everything an installer needs besides its own spec.

    Built once per CLI run and shared read-only by every installer.
    """

    profile: SystemProfile
    dev_tools_dir: Path
    bin_dir: Path
    http_timeout: float = HTTP_TIMEOUT
    command_timeout: float | None = None
    health_check_timeout: float = HEALTH_CHECK_TIMEOUT


class InstallerState(StrEnum):
    """Lifecycle of one installer run."""

    NOT_STARTED = "not_started"
    INSTALLING = "installing"
    INSTALLED = "installed"
    HEALTH_CHECKING = "health_checking"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass
class Artifact:
    """What ``install()`` produced."""

    path: Path                   # binary the health check invokes
    checksum_verified: bool = False


def _ms_since(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class Installer(ABC):
    """Abstract base class for all installers."""

    def __init__(self, spec: ToolSpec, context: InstallContext):
        self.spec = spec
        self.context = context
        self.state = InstallerState.NOT_STARTED
        self.artifact: Artifact | None = None

    @property
    def bin_name(self) -> str:
        """Tool name in the bin directory and in the report."""
        return self.spec.bin_name

    @property
    def tool_dir(self) -> Path:
        """This tool's private directory under the dev-tools root."""
        return self.context.dev_tools_dir / self.bin_name

    @property
    def link_path(self) -> Path:
        return self.context.bin_dir / self.bin_name

    @abstractmethod
    def install(self) -> Artifact:
        """Download/build the tool and expose it in the bin directory.

        Raises:
            InstallError: Any failure, already attributed to this tool.
        """

    def health_check(self) -> str | None:
        """Invoke the installed binary with the configured args.

        Returns:
            Captured stdout (stderr when stdout is empty), or None when
            the check is disabled for this tool.

        Raises:
            HealthCheckError: Binary missing or exited non-zero.
        """
        args = self.spec.health_check_args
        if args is None:
            return None
        if self.artifact is None:
            raise HealthCheckError("nothing installed to check")

        result = run_command(
            [self.artifact.path, *args],
            error_cls=HealthCheckError,
            timeout=self.context.health_check_timeout,
        )
        return (result.stdout or result.stderr).strip()

    def run(self) -> InstallOutcome:
        """Install then health-check, normalizing any failure.

        The health check is only attempted after a successful install.
        Log records emitted meanwhile are tagged with this tool's name.
        """
        with tool_context(self.bin_name):
            return self._run()

    def _run(self) -> InstallOutcome:
        self.state = InstallerState.INSTALLING
        start = time.monotonic()
        try:
            self.artifact = self.install()
        except Exception as e:
            return self._fail(e, install_duration_ms=_ms_since(start))
        install_ms = _ms_since(start)
        self.state = InstallerState.INSTALLED
        logger.debug("%s installed at %s", self.bin_name, self.artifact.path)

        base = {
            "install_duration_ms": install_ms,
            "checksum_verified": self.artifact.checksum_verified,
            "path": str(self.artifact.path),
        }

        if not self.spec.health_check_enabled:
            self.state = InstallerState.VERIFIED
            return InstallOutcome.success(self.bin_name, **base)

        self.state = InstallerState.HEALTH_CHECKING
        start = time.monotonic()
        try:
            output = self.health_check() or ""
        except Exception as e:
            return self._fail(e, health_check_duration_ms=_ms_since(start), **base)

        self.state = InstallerState.VERIFIED
        return InstallOutcome.success(
            self.bin_name,
            output=output,
            health_check_duration_ms=_ms_since(start),
            health_checked=True,
            **base,
        )

    def _fail(self, exc: Exception, **fields) -> InstallOutcome:
        self.state = InstallerState.FAILED
        if isinstance(exc, (InstallError, CatalogError)):
            logger.debug("%s failed: %s", self.bin_name, exc)
        else:
            # Not one of ours: keep the traceback
            logger.exception("%s raised unexpectedly", self.bin_name)
        return InstallOutcome.failure(
            self.bin_name,
            error=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            **fields,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} bin_name={self.bin_name!r}>"
