"""
L4 Execution: generic HTTP artifact download.

GET → scratch file → checksum (optional) → exactly one placement:

    none      write the file as-is to an exact path
    gzip      single-stream decompress to an exact path
    tar.gz    extract (all, or one member) into a directory
    tar.xz    same, xz-compressed
    zip       same, zip container

All work happens in a private temp dir; the destination is only touched
once the artifact is verified and fully unpacked.
"""

from __future__ import annotations

import gzip
import logging
import os
import shutil
import tarfile
import tempfile
import urllib.parse
import zipfile
from pathlib import Path

from idt.core.models.tool import ChecksumSource, Decompression, DownloadDescriptor
from idt.core.services.tool_install.data.constants import CHUNK_SIZE, HTTP_TIMEOUT
from idt.core.services.tool_install.domain.errors import DownloadError
from idt.core.services.tool_install.execution.checksum import (
    download_and_find_checksum,
    verify,
)
from idt.core.services.tool_install.execution.http_fetch import fetch_to_file

logger = logging.getLogger(__name__)

_TAR_MODES = {
    Decompression.TAR_GZ: "r:gz",
    Decompression.TAR_XZ: "r:xz",
}


def _asset_name(url: str) -> str:
    name = Path(urllib.parse.urlparse(url).path).name
    return name or "download"


def _replace_path(target: Path) -> None:
    """Remove whatever sits at ``target`` (file, symlink or directory)."""
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)


def _install_file(src: Path, dest: Path) -> Path:
    """Copy ``src`` over ``dest`` via a sibling temp file + rename."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", dir=dest.parent)
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        shutil.copyfile(src, tmp)
        shutil.copymode(src, tmp)
        if dest.is_dir() and not dest.is_symlink():
            shutil.rmtree(dest)
        os.replace(tmp, dest)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    return dest


def _gunzip(src: Path, dest: Path) -> None:
    with gzip.open(src, "rb") as fin, open(dest, "wb") as fout:
        shutil.copyfileobj(fin, fout, CHUNK_SIZE)


def _find_member(lookup, member: str):
    """Look up an archive entry by name, also accepting a leading ``./``."""
    for name in (member, f"./{member}"):
        try:
            return lookup(name)
        except KeyError:
            continue
    raise DownloadError("archive entry not found", member=member)


def _extract_archive(
    archive: Path,
    decompression: Decompression,
    staging: Path,
    member: str = "",
) -> Path:
    """Unpack into ``staging``. Returns the member path or ``staging``."""
    staging.mkdir(parents=True, exist_ok=True)

    if decompression is Decompression.ZIP:
        with zipfile.ZipFile(archive) as zf:
            if member:
                info = _find_member(zf.getinfo, member)
                return Path(zf.extract(info, staging))
            zf.extractall(staging)
            return staging

    with tarfile.open(archive, _TAR_MODES[decompression]) as tf:
        if member:
            info = _find_member(tf.getmember, member)
            tf.extract(info, staging, filter="data")
            return staging / info.name
        tf.extractall(staging, filter="data")
        return staging


def _merge_into(staging: Path, dest_dir: Path) -> None:
    """Move every top-level entry of ``staging`` into ``dest_dir``, replacing."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    for entry in sorted(staging.iterdir()):
        target = dest_dir / entry.name
        _replace_path(target)
        shutil.move(str(entry), str(target))


def download(
    descriptor: DownloadDescriptor,
    checksum: ChecksumSource | None = None,
    *,
    timeout: float = HTTP_TIMEOUT,
) -> Path:
    """Fetch, verify and place one artifact.

    Args:
        descriptor: URL, destination and placement.
        checksum: When given, the scratch file is verified before any
            decompression or placement.
        timeout: Per-request HTTP timeout.

    Returns:
        The canonical path: the written file, the extracted member, or
        the extraction directory.

    Raises:
        DownloadError: Fetch, decompression or extraction failed.
        ChecksumError: Manifest has no entry, or the digest differs.
    """
    dest = descriptor.destination
    dec = descriptor.decompression

    with tempfile.TemporaryDirectory(prefix="idt-") as tmp:
        tmp_dir = Path(tmp)
        scratch = tmp_dir / _asset_name(descriptor.url)
        fetch_to_file(descriptor.url, scratch, timeout=timeout)

        if checksum is not None:
            expected = download_and_find_checksum(
                checksum.manifest_url, checksum.expected_filename, timeout=timeout,
            )
            verify(scratch, expected)

        try:
            if dec is Decompression.NONE:
                return _install_file(scratch, dest)

            if dec is Decompression.GZIP:
                unpacked = tmp_dir / f"{dest.name}.unpacked"
                _gunzip(scratch, unpacked)
                return _install_file(unpacked, dest)

            extracted = _extract_archive(
                scratch, dec, tmp_dir / "staging", descriptor.member,
            )
            if descriptor.member:
                if not extracted.is_file():
                    raise DownloadError(
                        "archive entry is not a file", member=descriptor.member,
                    )
                return _install_file(extracted, dest / extracted.name)
            _merge_into(extracted, dest)
            return dest
        except (tarfile.TarError, zipfile.BadZipFile, gzip.BadGzipFile, EOFError) as e:
            raise DownloadError(
                f"cannot unpack {dec.value}: {e}", url=descriptor.url,
            ) from e
        except OSError as e:
            raise DownloadError(f"cannot place artifact: {e}", dest=dest) from e
