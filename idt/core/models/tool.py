"""
Tool models: static catalog entries and per-attempt download inputs.

``ToolSpec`` is the validated form of one catalog entry. The
``DownloadDescriptor`` and ``ChecksumSource`` are built fresh on every
install attempt from a spec and the host ``SystemProfile``.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Strategy(StrEnum):
    """How a tool gets onto disk."""

    HTTP = "http"
    NPM = "npm"
    PIP = "pip"
    COMPOSER = "composer"
    CARGO = "cargo"
    MAKE = "make"


class Decompression(StrEnum):
    """What to do with a downloaded file before placing it."""

    NONE = "none"
    GZIP = "gzip"
    TAR_GZ = "tar.gz"
    TAR_XZ = "tar.xz"
    ZIP = "zip"

    @property
    def is_archive(self) -> bool:
        """True for multi-entry formats that extract into a directory."""
        return self in (Decompression.TAR_GZ, Decompression.TAR_XZ, Decompression.ZIP)


class PlacementKind(StrEnum):
    DIRECTORY = "dir"
    FILE = "file"


DEFAULT_HEALTH_CHECK_ARGS = ["--version"]


class ChecksumTemplate(BaseModel):
    """Catalog-side checksum declaration (URL and filename templates)."""

    manifest_url: str
    filename: str


class ToolSpec(BaseModel):
    """One validated catalog entry.

    Strategy-specific fields are optional at the type level; the catalog
    schema checks that each strategy has what it needs.
    """

    model_config = ConfigDict(frozen=True)

    bin_name: str
    strategy: Strategy
    description: str = ""
    health_check_args: list[str] | None = Field(
        default_factory=lambda: list(DEFAULT_HEALTH_CHECK_ARGS),
    )
    checksum_required: bool = False
    checksum: ChecksumTemplate | None = None

    # ── HTTP release artifacts ──
    url: str = ""
    repo: str = ""                  # owner/name, used for {version} lookup
    version: str = ""               # fixed tag, or "latest" to resolve
    convention: str = ""            # vendor naming convention name
    os_map: dict[str, str] = Field(default_factory=dict)
    arch_map: dict[str, str] = Field(default_factory=dict)
    target_map: dict[str, str] = Field(default_factory=dict)
    decompression: Decompression = Decompression.NONE
    placement: str = "bin"          # "bin" (straight into bin_dir) or "tool_dir"
    member: str = ""                # single archive entry to extract
    link: str = ""                  # path inside tool_dir to expose as bin_name
    link_enabled: bool = True

    # ── Package managers ──
    packages: list[str] = Field(default_factory=list)
    bin_source: str = ""            # binary name inside the manager's bin dir
    link_all: bool = False          # expose every binary of the bin dir

    # ── Native toolchain ──
    crate: str = ""
    cargo_args: list[str] = Field(default_factory=list)
    git_url: str = ""                # source repository for make builds
    git_ref: str = "master"
    make_args: list[str] = Field(default_factory=list)

    @property
    def health_check_enabled(self) -> bool:
        return self.health_check_args is not None


class DownloadDescriptor(BaseModel):
    """Where to fetch one artifact from and how to lay it down."""

    url: str
    destination: Path
    placement: PlacementKind
    decompression: Decompression = Decompression.NONE
    member: str = ""

    @model_validator(mode="after")
    def _check_placement(self) -> DownloadDescriptor:
        if self.decompression.is_archive and self.placement is not PlacementKind.DIRECTORY:
            raise ValueError(
                f"{self.decompression.value} archives extract into a directory placement"
            )
        if not self.decompression.is_archive and self.placement is not PlacementKind.FILE:
            raise ValueError(
                f"decompression '{self.decompression.value}' writes an exact file placement"
            )
        if self.member and not self.decompression.is_archive:
            raise ValueError("member extraction needs an archive")
        return self


class ChecksumSource(BaseModel):
    """Vendor checksum manifest and the entry to look up in it."""

    manifest_url: str
    expected_filename: str
