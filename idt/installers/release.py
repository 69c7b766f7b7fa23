"""
Release installer: tools published as HTTP release artifacts.

Resolves the version (when the URL needs one), renders the recipe's
templates for the host platform, downloads with an optional checksum,
then marks the result executable and links it into the bin directory.
A fresh descriptor is built on every attempt.
"""

from __future__ import annotations

import logging

from idt.core.models.tool import ChecksumSource, DownloadDescriptor, PlacementKind
from idt.core.services.tool_install.domain.platform_tokens import (
    platform_tokens,
    render_template,
    strip_v,
)
from idt.core.services.tool_install.execution.download import download
from idt.core.services.tool_install.execution.finalize import make_executable, symlink
from idt.core.services.tool_install.execution.release import get_latest_release
from idt.installers.base import Artifact, Installer

logger = logging.getLogger(__name__)


class ReleaseInstaller(Installer):
    """Download + place a release artifact (raw, gzip, tar or zip)."""

    def resolve_version(self) -> str:
        """The tag to substitute for ``{version}``, or "" if unused."""
        if self.spec.version == "latest":
            return get_latest_release(self.spec.repo, timeout=self.context.http_timeout)
        return self.spec.version

    def template_values(self) -> dict[str, str]:
        spec = self.spec
        values = platform_tokens(
            self.context.profile,
            spec.convention,
            os_map=spec.os_map,
            arch_map=spec.arch_map,
            target_map=spec.target_map,
        )
        version = self.resolve_version()
        values["version"] = version
        values["version_bare"] = strip_v(version)
        return values

    def build_descriptor(self, values: dict[str, str]) -> DownloadDescriptor:
        spec = self.spec
        url = render_template(spec.url, **values)
        member = render_template(spec.member, **values) if spec.member else ""

        if spec.placement == "tool_dir":
            destination, placement = self.tool_dir, PlacementKind.DIRECTORY
        elif spec.decompression.is_archive:
            destination, placement = self.context.bin_dir, PlacementKind.DIRECTORY
        else:
            destination, placement = self.link_path, PlacementKind.FILE

        return DownloadDescriptor(
            url=url,
            destination=destination,
            placement=placement,
            decompression=spec.decompression,
            member=member,
        )

    def build_checksum(self, values: dict[str, str]) -> ChecksumSource | None:
        checksum = self.spec.checksum
        if not self.spec.checksum_required or checksum is None:
            return None
        return ChecksumSource(
            manifest_url=render_template(checksum.manifest_url, **values),
            expected_filename=render_template(checksum.filename, **values),
        )

    def install(self) -> Artifact:
        values = self.template_values()
        descriptor = self.build_descriptor(values)
        checksum = self.build_checksum(values)

        logger.info("fetching %s", descriptor.url)
        path = download(descriptor, checksum, timeout=self.context.http_timeout)
        if self.spec.placement == "tool_dir":
            # only the linked entry point gets exec bits
            if not self.spec.link_enabled:
                return Artifact(path, checksum_verified=checksum is not None)
            path = path / self.spec.link
        make_executable(path)

        if path != self.link_path:
            symlink(path, self.link_path)
        return Artifact(self.link_path, checksum_verified=checksum is not None)
