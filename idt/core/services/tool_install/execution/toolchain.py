"""
L4 Execution: native toolchain installs (cargo, git + make).

For tools that publish no usable binary release. Both builds write
into an explicit root and return its ``bin`` subdirectory; the root is
chosen by the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

from idt.core.services.tool_install.domain.errors import PackageManagerError
from idt.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PackageManagerError(f"cannot create {path}: {e}") from e


def cargo_install(
    crate: str,
    root: Path,
    extra_args: list[str] | None = None,
    *,
    timeout: float | None = None,
) -> Path:
    """``cargo install <crate> --force --root <root> [extra_args]``.

    ``--force`` makes re-runs replace the previous build.

    Returns:
        ``<root>/bin``
    """
    if not crate:
        raise PackageManagerError("no crate to install")
    _ensure_dir(root)

    run_command(
        ["cargo", "install", crate, "--force", "--root", root, *(extra_args or [])],
        error_cls=PackageManagerError,
        timeout=timeout,
    )
    logger.info("cargo installed %s into %s", crate, root)
    return root / "bin"


def make_install(
    git_url: str,
    tool_dir: Path,
    ref: str = "master",
    make_args: list[str] | None = None,
    *,
    timeout: float | None = None,
) -> Path:
    """Build a CMake-driven ``make`` project from git.

    Layout under ``tool_dir``::

        source/    git checkout (cloned once, then pulled)
        release/   CMAKE_INSTALL_PREFIX

    Steps: clone (first run only), ``checkout <ref>``, ``pull origin
    <ref>``, ``make distclean``, ``make CMAKE_BUILD_TYPE=Release ...``,
    ``make install``.

    Returns:
        ``<tool_dir>/release/bin``
    """
    if not git_url:
        raise PackageManagerError("no git_url to build from")
    source = tool_dir / "source"
    release = tool_dir / "release"
    _ensure_dir(tool_dir)

    def run(cmd: list, cwd: Path | None = source) -> None:
        run_command(cmd, error_cls=PackageManagerError, cwd=cwd, timeout=timeout)

    if not (source / ".git").is_dir():
        run(["git", "clone", git_url, source], cwd=tool_dir)
    run(["git", "checkout", ref])
    run(["git", "pull", "origin", ref])
    run(["make", "distclean"])
    run([
        "make",
        "CMAKE_BUILD_TYPE=Release",
        f"CMAKE_EXTRA_FLAGS=-DCMAKE_INSTALL_PREFIX={release}",
        *(make_args or []),
    ])
    run(["make", "install"])

    logger.info("built %s@%s into %s", git_url, ref, release)
    return release / "bin"
