"""
Installers: one implementation of the install/health-check contract
per install strategy.
"""

from idt.installers.base import (  # noqa: F401
    Artifact,
    InstallContext,
    Installer,
    InstallerState,
)
from idt.installers.mock import MockInstaller  # noqa: F401
from idt.installers.packages import (  # noqa: F401
    CargoInstaller,
    ComposerInstaller,
    MakeInstaller,
    NpmInstaller,
    PipInstaller,
)
from idt.installers.registry import (  # noqa: F401
    InstallerRegistry,
    build_installer,
    build_registry,
)
from idt.installers.release import ReleaseInstaller  # noqa: F401
