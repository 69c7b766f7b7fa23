"""
L4 Execution: filesystem finalizer.

Exposes installed binaries in the bin directory. Everything here is
idempotent: re-running an install replaces links instead of failing.
"""

from __future__ import annotations

import logging
import os
import stat
import uuid
from pathlib import Path

from idt.core.services.tool_install.domain.errors import FinalizeError

logger = logging.getLogger(__name__)

_EXEC_BITS = 0o755


def symlink(target: Path, destination: Path) -> Path:
    """Create or atomically replace ``destination`` → ``target``.

    The new link is created under a unique temp name next to the
    destination and renamed over it, so readers never see a missing
    link.

    Raises:
        FinalizeError: Destination is a real directory, or the OS
            refused the link/rename.
    """
    if destination.is_dir() and not destination.is_symlink():
        raise FinalizeError("destination is a directory", dest=destination)

    tmp = destination.with_name(f".{destination.name}.{uuid.uuid4().hex[:8]}.tmp")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(target, tmp)
        os.replace(tmp, destination)
    except OSError as e:
        if tmp.is_symlink():
            tmp.unlink()
        raise FinalizeError(
            f"cannot link: {e}", target=target, dest=destination,
        ) from e

    logger.debug("Linked %s -> %s", destination, target)
    return destination


def make_executable(path: Path) -> list[Path]:
    """Add ``0o755`` to a file, or to every regular file in a directory.

    Directories are not walked recursively.

    Returns:
        The files whose mode was updated.

    Raises:
        FinalizeError: Path missing or chmod refused.
    """
    if path.is_dir():
        files = [p for p in sorted(path.iterdir()) if p.is_file()]
    elif path.is_file():
        files = [path]
    else:
        raise FinalizeError("cannot chmod missing path", path=path)

    for f in files:
        try:
            mode = f.stat().st_mode
            f.chmod(stat.S_IMODE(mode) | _EXEC_BITS)
        except OSError as e:
            raise FinalizeError(f"cannot chmod: {e}", path=f) from e
    return files


def link_files_in_dir(source_dir: Path, dest_dir: Path) -> list[Path]:
    """Symlink every file of ``source_dir`` into ``dest_dir`` under its own name.

    Used by packages that ship several binaries in one bin directory.

    Raises:
        FinalizeError: ``source_dir`` missing or any link failed.
    """
    if not source_dir.is_dir():
        raise FinalizeError("source is not a directory", path=source_dir)
    linked = []
    for entry in sorted(source_dir.iterdir()):
        if entry.is_file():
            linked.append(symlink(entry, dest_dir / entry.name))
    return linked


def rm_dead_symlinks(directory: Path) -> list[Path]:
    """Delete symlinks in ``directory`` whose target no longer exists.

    Returns:
        The removed links. A missing directory yields an empty list.
    """
    if not directory.is_dir():
        return []
    removed = []
    for entry in sorted(directory.iterdir()):
        if entry.is_symlink() and not entry.exists():
            entry.unlink()
            removed.append(entry)
            logger.info("Removed dead symlink %s", entry)
    return removed
