"""
L4 Execution: package-manager install strategies.

Each tool gets its own directory under the dev-tools root; packages are
never installed globally. Every strategy returns the manager's bin
directory for the finalizer to link from.

    npm       <root>/<tool>/node_modules/.bin
    pip       <root>/<tool>/.venv/bin
    composer  <root>/<tool>/vendor/bin
"""

from __future__ import annotations

import logging
from pathlib import Path

from idt.core.services.tool_install.domain.errors import PackageManagerError
from idt.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def _tool_dir(dev_tools_dir: Path, tool: str) -> Path:
    path = dev_tools_dir / tool
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PackageManagerError(f"cannot create {path}: {e}") from e
    return path


def _require_packages(tool: str, packages: list[str]) -> None:
    if not packages:
        raise PackageManagerError("no packages to install", tool=tool)


def npm_install(
    dev_tools_dir: Path,
    tool: str,
    packages: list[str],
    *,
    timeout: float | None = None,
) -> Path:
    """``npm install --prefix <root>/<tool> <packages>``.

    Returns:
        ``<root>/<tool>/node_modules/.bin``
    """
    _require_packages(tool, packages)
    prefix = _tool_dir(dev_tools_dir, tool)
    run_command(
        ["npm", "install", "--silent", "--prefix", prefix, *packages],
        error_cls=PackageManagerError,
        timeout=timeout,
    )
    logger.info("npm installed %s into %s", ", ".join(packages), prefix)
    return prefix / "node_modules" / ".bin"


def pip_install(
    dev_tools_dir: Path,
    tool: str,
    packages: list[str],
    *,
    python: str = "python3",
    timeout: float | None = None,
) -> Path:
    """Create ``<root>/<tool>/.venv`` and pip-install into it.

    The venv's own interpreter runs pip, so nothing depends on an
    activated shell.

    Returns:
        ``<root>/<tool>/.venv/bin``
    """
    _require_packages(tool, packages)
    venv_dir = _tool_dir(dev_tools_dir, tool) / ".venv"
    run_command(
        [python, "-m", "venv", venv_dir],
        error_cls=PackageManagerError,
        timeout=timeout,
    )
    bin_dir = venv_dir / "bin"
    run_command(
        [bin_dir / "python", "-m", "pip", "install", "--upgrade", "pip", *packages],
        error_cls=PackageManagerError,
        timeout=timeout,
    )
    logger.info("pip installed %s into %s", ", ".join(packages), venv_dir)
    return bin_dir


def composer_install(
    dev_tools_dir: Path,
    tool: str,
    packages: list[str],
    *,
    timeout: float | None = None,
) -> Path:
    """``composer require --dev --working-dir <root>/<tool> <packages>``.

    Returns:
        ``<root>/<tool>/vendor/bin``
    """
    _require_packages(tool, packages)
    work_dir = _tool_dir(dev_tools_dir, tool)
    run_command(
        ["composer", "require", "--dev", "--no-interaction",
         "--working-dir", work_dir, *packages],
        error_cls=PackageManagerError,
        timeout=timeout,
    )
    logger.info("composer installed %s into %s", ", ".join(packages), work_dir)
    return work_dir / "vendor" / "bin"
