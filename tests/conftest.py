"""
Shared test fixtures and configuration.

Downloads in tests use ``file://`` URLs: urllib serves them through the
same code path as HTTP, so no network is needed.
"""

from pathlib import Path

import pytest

from idt.core.models.system import Arch, Os, SystemProfile
from idt.installers.base import InstallContext


@pytest.fixture
def mac_arm() -> SystemProfile:
    return SystemProfile(os=Os.MACOS, arch=Arch.ARM)


@pytest.fixture
def linux_x86() -> SystemProfile:
    return SystemProfile(os=Os.LINUX, arch=Arch.X86)


@pytest.fixture
def served_dir(tmp_path: Path) -> Path:
    """Directory standing in for a release server."""
    d = tmp_path / "served"
    d.mkdir()
    return d


@pytest.fixture
def install_context(tmp_path: Path, linux_x86: SystemProfile) -> InstallContext:
    """Context with empty dev-tools and bin directories."""
    dev_tools = tmp_path / "dev-tools"
    bin_dir = tmp_path / "bin"
    dev_tools.mkdir()
    bin_dir.mkdir()
    return InstallContext(
        profile=linux_x86,
        dev_tools_dir=dev_tools,
        bin_dir=bin_dir,
        http_timeout=5,
        health_check_timeout=10,
    )
