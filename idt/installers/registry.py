"""
Installer registry: catalog entries → installer instances.

The registry is the single point of installer management. It maps
each strategy to its installer class, enforces unique ``bin_name``s,
and selects the subset of tools a CLI run asked for.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from idt.core.models.tool import Strategy, ToolSpec
from idt.core.services.tool_install.domain.errors import CatalogError
from idt.installers.base import InstallContext, Installer
from idt.installers.mock import MockInstaller
from idt.installers.packages import (
    CargoInstaller,
    ComposerInstaller,
    MakeInstaller,
    NpmInstaller,
    PipInstaller,
)
from idt.installers.release import ReleaseInstaller

logger = logging.getLogger(__name__)

INSTALLER_CLASSES: dict[Strategy, type[Installer]] = {
    Strategy.HTTP: ReleaseInstaller,
    Strategy.NPM: NpmInstaller,
    Strategy.PIP: PipInstaller,
    Strategy.COMPOSER: ComposerInstaller,
    Strategy.CARGO: CargoInstaller,
    Strategy.MAKE: MakeInstaller,
}


def build_installer(spec: ToolSpec, context: InstallContext) -> Installer:
    """Instantiate the installer class for ``spec.strategy``."""
    cls = INSTALLER_CLASSES.get(spec.strategy)
    if cls is None:
        raise CatalogError(f"{spec.bin_name}: no installer for strategy '{spec.strategy}'")
    return cls(spec, context)


class InstallerRegistry:
    """Ordered collection of installers keyed by ``bin_name``."""

    def __init__(self, installers: Iterable[Installer] = ()):
        self._installers: dict[str, Installer] = {}
        for installer in installers:
            self.register(installer)

    def register(self, installer: Installer) -> None:
        """Add an installer.

        Raises:
            CatalogError: ``bin_name`` already registered.
        """
        name = installer.bin_name
        if name in self._installers:
            raise CatalogError(f"Duplicate bin_name '{name}'")
        self._installers[name] = installer
        logger.debug("Registered installer: %r", installer)

    def get(self, name: str) -> Installer | None:
        """Look up an installer by bin_name."""
        return self._installers.get(name)

    def list_installers(self) -> list[str]:
        """All registered bin_names, in catalog order."""
        return list(self._installers)

    def select(self, names: Iterable[str] = ()) -> tuple[list[Installer], list[str]]:
        """Pick installers by name, keeping catalog order.

        Args:
            names: Requested bin_names. Empty means everything.

        Returns:
            (selected installers, requested names that are unknown)
        """
        wanted = list(dict.fromkeys(names))
        if not wanted:
            return list(self._installers.values()), []
        unknown = [n for n in wanted if n not in self._installers]
        selected = [i for name, i in self._installers.items() if name in wanted]
        return selected, unknown

    def __iter__(self) -> Iterator[Installer]:
        return iter(self._installers.values())

    def __len__(self) -> int:
        return len(self._installers)


def build_registry(
    specs: Iterable[ToolSpec],
    context: InstallContext,
    *,
    mock: bool = False,
) -> InstallerRegistry:
    """One installer per spec. ``mock`` swaps every installer for a MockInstaller."""
    registry = InstallerRegistry()
    for spec in specs:
        if mock:
            registry.register(MockInstaller.from_spec(spec, context))
        else:
            registry.register(build_installer(spec, context))
    return registry
