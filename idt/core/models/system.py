"""
System profile model: the host OS and CPU architecture.

Resolved once at startup by the system probe and passed explicitly to
every installer. Release artifacts are selected from it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Os(StrEnum):
    """Supported host operating systems."""

    MACOS = "macos"
    LINUX = "linux"


class Arch(StrEnum):
    """Supported CPU architectures."""

    ARM = "arm"
    X86 = "x86"


class SystemProfile(BaseModel):
    """Resolved OS + architecture pair. Immutable."""

    model_config = ConfigDict(frozen=True)

    os: Os
    arch: Arch

    @property
    def key(self) -> str:
        """Compact identifier, e.g. ``macos-arm`` or ``linux-x86``."""
        return f"{self.os.value}-{self.arch.value}"

    def __str__(self) -> str:
        return self.key
