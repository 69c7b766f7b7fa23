"""
Mock installer: test double for the installer contract.

Used by tests and by ``idt install --mock`` to exercise the
orchestrator and report without touching the network or package
managers. Succeeds by default; can be told to fail either phase.
"""

from __future__ import annotations

import time
from pathlib import Path

from idt.core.models.tool import DEFAULT_HEALTH_CHECK_ARGS, Strategy, ToolSpec
from idt.core.services.tool_install.domain.errors import InstallError
from idt.installers.base import Artifact, InstallContext, Installer


class MockInstaller(Installer):
    """Installer that only pretends.

    Args:
        bin_name: Tool name.
        install_error: Raised from ``install()`` when set.
        health_error: Raised from ``health_check()`` when set.
        output: Health-check output on success.
        health_check_args: None disables the health check.
        checksum_verified: Reported on the artifact.
        delay: Seconds ``install()`` sleeps (for concurrency tests).
    """

    def __init__(
        self,
        bin_name: str = "mock-tool",
        *,
        install_error: InstallError | None = None,
        health_error: InstallError | None = None,
        output: str = "",
        health_check_args: list[str] | None = DEFAULT_HEALTH_CHECK_ARGS,
        checksum_verified: bool = False,
        delay: float = 0.0,
        spec: ToolSpec | None = None,
        context: InstallContext | None = None,
    ):
        if spec is None:
            spec = ToolSpec(
                bin_name=bin_name,
                strategy=Strategy.NPM,
                health_check_args=health_check_args,
            )
        super().__init__(spec, context)  # type: ignore[arg-type]
        self._install_error = install_error
        self._health_error = health_error
        self._output = output or f"[mock] {spec.bin_name} 0.0.0"
        self._checksum_verified = checksum_verified
        self._delay = delay
        self._call_log: list[str] = []

    @classmethod
    def from_spec(cls, spec: ToolSpec, context: InstallContext | None = None) -> MockInstaller:
        return cls(spec=spec, context=context)

    @property
    def call_log(self) -> list[str]:
        """Phases invoked so far: "install", "health_check"."""
        return self._call_log

    def install(self) -> Artifact:
        self._call_log.append("install")
        if self._delay:
            time.sleep(self._delay)
        if self._install_error is not None:
            raise self._install_error
        return Artifact(
            Path(self.bin_name),
            checksum_verified=self._checksum_verified,
        )

    def health_check(self) -> str | None:
        if self.spec.health_check_args is None:
            return None
        self._call_log.append("health_check")
        if self._health_error is not None:
            raise self._health_error
        return self._output

    def reset(self) -> None:
        """Clear the call log and any configured failures."""
        self._call_log.clear()
        self._install_error = None
        self._health_error = None
