"""
Domain models: Pydantic types for the installer.

All models are re-exported here for convenient access:

    from idt.core.models import SystemProfile, ToolSpec, InstallOutcome
"""

from idt.core.models.outcome import InstallOutcome
from idt.core.models.system import Arch, Os, SystemProfile
from idt.core.models.tool import (
    DEFAULT_HEALTH_CHECK_ARGS,
    ChecksumSource,
    ChecksumTemplate,
    Decompression,
    DownloadDescriptor,
    PlacementKind,
    Strategy,
    ToolSpec,
)

__all__ = [
    # outcome.py
    "InstallOutcome",
    # system.py
    "Arch",
    "Os",
    "SystemProfile",
    # tool.py
    "DEFAULT_HEALTH_CHECK_ARGS",
    "ChecksumSource",
    "ChecksumTemplate",
    "Decompression",
    "DownloadDescriptor",
    "PlacementKind",
    "Strategy",
    "ToolSpec",
]
