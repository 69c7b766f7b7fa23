"""
L4 Execution: checksum manifests and SHA-256 verification.

Manifests are the vendor's own ``sha256sum``-style files::

    9f86d081884c7d65...  tool-linux-amd64.tar.gz
    60303ae22b998861... *tool-darwin-arm64.tar.gz

Some vendors publish one ``.sha256`` file per artifact holding only the
bare digest; that form is accepted too.
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

from idt.core.services.tool_install.data.constants import CHUNK_SIZE, HTTP_TIMEOUT
from idt.core.services.tool_install.domain.errors import (
    ChecksumEntryMissingError,
    ChecksumMismatchError,
)
from idt.core.services.tool_install.execution.http_fetch import fetch_text

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def compute_sha256(path: Path) -> str:
    """Hex SHA-256 of a file, read in fixed-size chunks."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def parse_checksum(manifest: str, filename: str) -> str | None:
    """Find the digest for ``filename`` in manifest text.

    Accepts ``<hex> <name>``, ``<hex>  <name>`` and ``<hex> *<name>``
    lines, or a manifest that is a single bare digest. Lines naming the
    file with a leading ``./`` or directory also match on basename.

    Returns:
        Lowercase hex digest, or None when there is no entry.
    """
    stripped = manifest.strip()
    if _HEX_RE.match(stripped):
        return stripped.lower()

    for line in manifest.splitlines():
        parts = line.strip().split(maxsplit=1)
        if len(parts) != 2 or not _HEX_RE.match(parts[0]):
            continue
        name = parts[1].strip().lstrip("*")
        if name == filename or name.rsplit("/", 1)[-1] == filename:
            return parts[0].lower()
    return None


def download_and_find_checksum(
    manifest_url: str,
    filename: str,
    *,
    timeout: float = HTTP_TIMEOUT,
) -> str:
    """Fetch a checksum manifest and return the digest for ``filename``.

    Raises:
        DownloadError: The manifest could not be fetched.
        ChecksumEntryMissingError: No entry for ``filename``.
    """
    manifest = fetch_text(manifest_url, timeout=timeout)
    digest = parse_checksum(manifest, filename)
    if digest is None:
        raise ChecksumEntryMissingError(
            "checksum entry not found", file=filename, manifest=manifest_url,
        )
    return digest


def verify(path: Path, expected: str) -> None:
    """Compare a file's SHA-256 against ``expected``.

    Raises:
        ChecksumMismatchError: Carrying both digests.
    """
    actual = compute_sha256(path)
    expected = expected.strip().lower()
    if actual != expected:
        raise ChecksumMismatchError(path, expected=expected, actual=actual)
    logger.debug("Checksum ok for %s", path.name)
