"""
Package installers: npm, pip, composer, cargo and git + make.

Each installs into ``<dev_tools_dir>/<bin_name>`` and links the
resulting binary (or, with ``link_all``, every binary of the manager's
bin directory) into the bin directory. No checksum step: integrity is
the package manager's job.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path

from idt.core.services.tool_install.domain.errors import FinalizeError
from idt.core.services.tool_install.execution.finalize import link_files_in_dir, symlink
from idt.core.services.tool_install.execution.package_managers import (
    composer_install,
    npm_install,
    pip_install,
)
from idt.core.services.tool_install.execution.toolchain import (
    cargo_install,
    make_install,
)
from idt.installers.base import Artifact, Installer


class PackageInstaller(Installer):
    """Shared finalize step for strategies that return a bin directory."""

    @abstractmethod
    def install_packages(self) -> Path:
        """Run the package manager. Returns its bin directory."""

    def install(self) -> Artifact:
        source_dir = self.install_packages()

        if self.spec.link_all:
            link_files_in_dir(source_dir, self.context.bin_dir)
            return Artifact(source_dir)

        source = source_dir / (self.spec.bin_source or self.bin_name)
        if not source.exists():
            raise FinalizeError("binary missing after install", path=source)
        symlink(source, self.link_path)
        return Artifact(self.link_path)


class NpmInstaller(PackageInstaller):
    def install_packages(self) -> Path:
        return npm_install(
            self.context.dev_tools_dir,
            self.bin_name,
            self.spec.packages,
            timeout=self.context.command_timeout,
        )


class PipInstaller(PackageInstaller):
    def install_packages(self) -> Path:
        return pip_install(
            self.context.dev_tools_dir,
            self.bin_name,
            self.spec.packages,
            timeout=self.context.command_timeout,
        )


class ComposerInstaller(PackageInstaller):
    def install_packages(self) -> Path:
        return composer_install(
            self.context.dev_tools_dir,
            self.bin_name,
            self.spec.packages,
            timeout=self.context.command_timeout,
        )


class CargoInstaller(PackageInstaller):
    """``cargo install --root <dev_tools_dir>/<bin_name>``, then link."""

    def install_packages(self) -> Path:
        return cargo_install(
            self.spec.crate,
            self.tool_dir,
            self.spec.cargo_args,
            timeout=self.context.command_timeout,
        )


class MakeInstaller(PackageInstaller):
    """Clone or update ``git_url`` and ``make install`` into ``<tool_dir>/release``."""

    def install_packages(self) -> Path:
        return make_install(
            self.spec.git_url,
            self.tool_dir,
            self.spec.git_ref,
            self.spec.make_args,
            timeout=self.context.command_timeout,
        )
