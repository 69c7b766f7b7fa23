"""
Tests for the generic HTTP download strategy (served over file:// URLs).
"""

import gzip
from pathlib import Path

import pytest

from idt.core.models.tool import (
    ChecksumSource,
    Decompression,
    DownloadDescriptor,
    PlacementKind,
)
from idt.core.services.tool_install.domain.errors import (
    ChecksumMismatchError,
    DownloadError,
)
from idt.core.services.tool_install.execution.download import download
from tests.helpers import FAKE_BINARY, sha256_hex, write_gz, write_tar, write_zip


def _file_descriptor(url: str, dest: Path, dec=Decompression.NONE) -> DownloadDescriptor:
    return DownloadDescriptor(
        url=url, destination=dest, placement=PlacementKind.FILE, decompression=dec,
    )


def _dir_descriptor(url: str, dest: Path, dec, member: str = "") -> DownloadDescriptor:
    return DownloadDescriptor(
        url=url,
        destination=dest,
        placement=PlacementKind.DIRECTORY,
        decompression=dec,
        member=member,
    )


# ── Descriptor validation ────────────────────────────────────────────


class TestDescriptor:
    def test_archive_needs_directory(self, tmp_path: Path):
        with pytest.raises(ValueError):
            _file_descriptor("file:///x.tar.gz", tmp_path / "x", Decompression.TAR_GZ)

    def test_gzip_needs_file(self, tmp_path: Path):
        with pytest.raises(ValueError):
            _dir_descriptor("file:///x.gz", tmp_path, Decompression.GZIP)

    def test_member_needs_archive(self, tmp_path: Path):
        with pytest.raises(ValueError):
            DownloadDescriptor(
                url="file:///x", destination=tmp_path / "x",
                placement=PlacementKind.FILE, member="x",
            )


# ── Placements ───────────────────────────────────────────────────────


class TestRawAndGzip:
    def test_write_raw(self, served_dir: Path, tmp_path: Path):
        src = served_dir / "tool-linux-amd64"
        src.write_bytes(FAKE_BINARY)
        dest = tmp_path / "bin" / "tool"

        result = download(_file_descriptor(src.as_uri(), dest))
        assert result == dest
        assert dest.read_bytes() == FAKE_BINARY

    def test_raw_replaces_existing(self, served_dir: Path, tmp_path: Path):
        src = served_dir / "tool"
        src.write_bytes(b"new")
        dest = tmp_path / "tool"
        dest.write_bytes(b"old")

        download(_file_descriptor(src.as_uri(), dest))
        assert dest.read_bytes() == b"new"
        assert [p.name for p in tmp_path.iterdir() if p.name.startswith(".")] == []

    def test_gunzip(self, served_dir: Path, tmp_path: Path):
        src = write_gz(served_dir / "rust-analyzer.gz", FAKE_BINARY)
        dest = tmp_path / "rust-analyzer"

        result = download(_file_descriptor(src.as_uri(), dest, Decompression.GZIP))
        assert result.read_bytes() == FAKE_BINARY

    def test_corrupt_gzip(self, served_dir: Path, tmp_path: Path):
        src = served_dir / "broken.gz"
        src.write_bytes(b"definitely not gzip")
        dest = tmp_path / "broken"

        with pytest.raises(DownloadError, match="cannot unpack gzip"):
            download(_file_descriptor(src.as_uri(), dest, Decompression.GZIP))
        assert not dest.exists()

    def test_http_failure(self, served_dir: Path, tmp_path: Path):
        with pytest.raises(DownloadError):
            download(_file_descriptor((served_dir / "nope").as_uri(), tmp_path / "x"))


class TestArchives:
    def test_tar_gz_member(self, served_dir: Path, tmp_path: Path):
        src = write_tar(
            served_dir / "shellcheck.tar.gz",
            {"shellcheck-v0.10.0/shellcheck": FAKE_BINARY, "shellcheck-v0.10.0/README": b"hi"},
        )
        dest = tmp_path / "bin"

        result = download(_dir_descriptor(
            src.as_uri(), dest, Decompression.TAR_GZ, "shellcheck-v0.10.0/shellcheck",
        ))
        assert result == dest / "shellcheck"
        assert result.read_bytes() == FAKE_BINARY
        assert sorted(p.name for p in dest.iterdir()) == ["shellcheck"]

    def test_tar_xz_member(self, served_dir: Path, tmp_path: Path):
        src = write_tar(served_dir / "t.tar.xz", {"tool": FAKE_BINARY}, mode="w:xz")
        result = download(_dir_descriptor(src.as_uri(), tmp_path, Decompression.TAR_XZ, "tool"))
        assert result.read_bytes() == FAKE_BINARY

    def test_tar_gz_whole_archive(self, served_dir: Path, tmp_path: Path):
        src = write_tar(
            served_dir / "lua.tar.gz",
            {"bin/lua-language-server": FAKE_BINARY, "main.lua": b"-- lua"},
        )
        dest = tmp_path / "lua-language-server"

        result = download(_dir_descriptor(src.as_uri(), dest, Decompression.TAR_GZ))
        assert result == dest
        assert (dest / "bin" / "lua-language-server").read_bytes() == FAKE_BINARY
        assert (dest / "main.lua").exists()

    def test_whole_archive_replaces_previous(self, served_dir: Path, tmp_path: Path):
        dest = tmp_path / "tool"
        (dest / "bin").mkdir(parents=True)
        (dest / "bin" / "stale").write_bytes(b"old")

        src = write_tar(served_dir / "t.tar.gz", {"bin/fresh": b"new"})
        download(_dir_descriptor(src.as_uri(), dest, Decompression.TAR_GZ))
        assert sorted(p.name for p in (dest / "bin").iterdir()) == ["fresh"]

    def test_zip_whole_archive(self, served_dir: Path, tmp_path: Path):
        src = write_zip(
            served_dir / "elixir-ls.zip",
            {"language_server.sh": FAKE_BINARY, "lib/x.ez": b"ez"},
        )
        dest = tmp_path / "elixir-ls"
        download(_dir_descriptor(src.as_uri(), dest, Decompression.ZIP))
        assert (dest / "language_server.sh").read_bytes() == FAKE_BINARY
        assert (dest / "lib" / "x.ez").exists()

    def test_zip_member(self, served_dir: Path, tmp_path: Path):
        src = write_zip(served_dir / "deno.zip", {"deno": FAKE_BINARY})
        result = download(_dir_descriptor(src.as_uri(), tmp_path, Decompression.ZIP, "deno"))
        assert result == tmp_path / "deno"

    def test_member_packed_with_dot_prefix(self, served_dir: Path, tmp_path: Path):
        src = write_tar(served_dir / "t.tar.gz", {"./tool": FAKE_BINARY})
        dest = tmp_path / "bin"
        result = download(_dir_descriptor(src.as_uri(), dest, Decompression.TAR_GZ, "tool"))
        assert result == dest / "tool"
        assert result.read_bytes() == FAKE_BINARY

    def test_zip_member_with_dot_prefix(self, served_dir: Path, tmp_path: Path):
        src = write_zip(served_dir / "t.zip", {"./tool": FAKE_BINARY})
        result = download(_dir_descriptor(src.as_uri(), tmp_path, Decompression.ZIP, "tool"))
        assert result.read_bytes() == FAKE_BINARY

    def test_missing_member(self, served_dir: Path, tmp_path: Path):
        src = write_tar(served_dir / "t.tar.gz", {"other": b"x"})
        dest = tmp_path / "bin"
        with pytest.raises(DownloadError, match="archive entry not found"):
            download(_dir_descriptor(src.as_uri(), dest, Decompression.TAR_GZ, "tool"))
        assert not dest.exists()

    def test_corrupt_archive(self, served_dir: Path, tmp_path: Path):
        src = served_dir / "t.zip"
        src.write_bytes(b"PK but not really")
        with pytest.raises(DownloadError):
            download(_dir_descriptor(src.as_uri(), tmp_path / "x", Decompression.ZIP))


# ── Checksum before placement ────────────────────────────────────────


class TestChecksummedDownload:
    def _serve(self, served_dir: Path, correct: bool) -> tuple[Path, ChecksumSource]:
        archive = write_tar(served_dir / "tool.tar.gz", {"tool": FAKE_BINARY})
        digest = sha256_hex(archive.read_bytes()) if correct else "0" * 64
        manifest = served_dir / "SHA256SUMS"
        manifest.write_text(f"{digest}  tool.tar.gz\n")
        return archive, ChecksumSource(
            manifest_url=manifest.as_uri(), expected_filename="tool.tar.gz",
        )

    def test_correct_checksum(self, served_dir: Path, tmp_path: Path):
        archive, source = self._serve(served_dir, correct=True)
        dest = tmp_path / "bin"
        result = download(
            _dir_descriptor(archive.as_uri(), dest, Decompression.TAR_GZ, "tool"), source,
        )
        assert result.read_bytes() == FAKE_BINARY

    def test_mismatch_leaves_destination_untouched(self, served_dir: Path, tmp_path: Path):
        archive, source = self._serve(served_dir, correct=False)
        dest = tmp_path / "bin"
        dest.mkdir()
        (dest / "tool").write_bytes(b"previous install")

        with pytest.raises(ChecksumMismatchError):
            download(
                _dir_descriptor(archive.as_uri(), dest, Decompression.TAR_GZ, "tool"), source,
            )
        assert (dest / "tool").read_bytes() == b"previous install"
        assert sorted(p.name for p in dest.iterdir()) == ["tool"]

    def test_mismatch_on_raw_file(self, served_dir: Path, tmp_path: Path):
        src = served_dir / "tool"
        src.write_bytes(FAKE_BINARY)
        (served_dir / "tool.sha256").write_text("f" * 64)
        dest = tmp_path / "tool"

        with pytest.raises(ChecksumMismatchError):
            download(
                _file_descriptor(src.as_uri(), dest),
                ChecksumSource(
                    manifest_url=(served_dir / "tool.sha256").as_uri(),
                    expected_filename="tool",
                ),
            )
        assert not dest.exists()

    def test_gzip_checksum_is_on_compressed_file(self, served_dir: Path, tmp_path: Path):
        src = write_gz(served_dir / "ra.gz", FAKE_BINARY)
        (served_dir / "ra.gz.sha256").write_text(sha256_hex(src.read_bytes()))
        result = download(
            _file_descriptor(src.as_uri(), tmp_path / "ra", Decompression.GZIP),
            ChecksumSource(
                manifest_url=(served_dir / "ra.gz.sha256").as_uri(),
                expected_filename="ra.gz",
            ),
        )
        assert result.read_bytes() == FAKE_BINARY
        assert gzip.decompress(src.read_bytes()) == FAKE_BINARY
