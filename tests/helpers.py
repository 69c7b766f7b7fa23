"""
Archive builders and fake binaries shared by the download tests.
"""

import gzip
import hashlib
import io
import tarfile
import zipfile
from pathlib import Path

# Executable stand-in for a real tool binary.
FAKE_BINARY = b'#!/bin/sh\necho "fake-tool 1.2.3"\n'


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def write_tar(path: Path, members: dict[str, bytes], mode: str = "w:gz") -> Path:
    """Build a tar archive holding ``members`` (name → content)."""
    with tarfile.open(path, mode) as tf:
        for name, content in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(content))
    return path


def write_zip(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


def write_gz(path: Path, content: bytes) -> Path:
    with gzip.open(path, "wb") as f:
        f.write(content)
    return path
