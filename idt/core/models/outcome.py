"""
InstallOutcome model: the result of one installer run.

Installers never raise out of ``run()``; every failure ends up here
with its error text and error class name. The orchestrator aggregates
one outcome per tool into an ``InstallReport``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InstallOutcome(BaseModel):
    """Result of installing and health-checking one tool."""

    bin_name: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    install_duration_ms: int = 0
    health_check_duration_ms: int | None = None  # None = check never ran

    output: str = ""                 # health-check stdout
    error: str | None = None
    error_type: str | None = None    # exception class name, e.g. ChecksumMismatchError

    checksum_verified: bool = False
    health_checked: bool = False
    path: str | None = None          # finalized binary

    @property
    def ok(self) -> bool:
        """Whether the tool ended up installed (and checked, if enabled)."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def kind(self) -> Literal["verified", "unverified", "unchecked", "failed"]:
        """Report category.

        verified:   health check passed and the download was checksummed
        unverified: health check passed, no checksum involved
        unchecked:  installed, health check disabled for this tool
        failed:     install or health check failed
        """
        if self.failed:
            return "failed"
        if not self.health_checked:
            return "unchecked"
        if self.checksum_verified:
            return "verified"
        return "unverified"

    @classmethod
    def success(
        cls,
        bin_name: str,
        output: str = "",
        **kwargs: Any,
    ) -> InstallOutcome:
        """Create a success outcome."""
        return cls(bin_name=bin_name, status="ok", output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        bin_name: str,
        error: str,
        **kwargs: Any,
    ) -> InstallOutcome:
        """Create a failure outcome."""
        return cls(bin_name=bin_name, status="failed", error=error, **kwargs)
