"""
L4 Execution: latest-release resolution and GitHub CLI auth.

The ``gh`` CLI is the primary path (it reuses the user's login and
avoids API rate limits). Without ``gh`` on PATH the public REST API is
queried directly, authenticated with ``GITHUB_TOKEN`` when present.
"""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
import subprocess

from idt.core.services.tool_install.data.constants import GITHUB_API_URL, HTTP_TIMEOUT
from idt.core.services.tool_install.domain.errors import DownloadError, ResolveError
from idt.core.services.tool_install.execution.http_fetch import fetch_text
from idt.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

_REPO_RE = re.compile(r"^[\w.-]+/[\w.-]+$")
_TAG_RE = re.compile(r"^\S+$")


def _check_tag(repo: str, raw: str, cmd: list[str] | None = None) -> str:
    tag = raw.strip()
    if not tag or not _TAG_RE.match(tag) or tag == "null":
        raise ResolveError(
            "unexpected release tag", cmd=cmd, repo=repo, answer=repr(raw[:200]),
        )
    return tag


def _latest_via_gh(repo: str, timeout: float | None) -> str:
    cmd = ["gh", "api", f"repos/{repo}/releases/latest", "--jq=.tag_name"]
    result = run_command(cmd, error_cls=ResolveError, timeout=timeout)
    return _check_tag(repo, result.stdout, cmd)


def _latest_via_http(repo: str, timeout: float) -> str:
    url = f"{GITHUB_API_URL}/repos/{repo}/releases/latest"
    headers = {"Accept": "application/vnd.github+json"}
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        body = fetch_text(url, headers=headers, timeout=timeout)
    except DownloadError as e:
        raise ResolveError(e.message, repo=repo, **e.details) from e

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ResolveError("release API returned invalid JSON", repo=repo) from e

    if not isinstance(data, dict) or not isinstance(data.get("tag_name"), str):
        raise ResolveError("release API response has no tag_name", repo=repo)
    return _check_tag(repo, data["tag_name"])


def get_latest_release(repo: str, *, timeout: float = HTTP_TIMEOUT) -> str:
    """Resolve the latest release tag of ``owner/name``.

    Returns:
        The tag exactly as published (``v1.2.3``, ``2024-01-15``, ...).

    Raises:
        ResolveError: Bad slug, non-zero ``gh`` exit, HTTP failure, or a
            response without a usable tag.
    """
    if not _REPO_RE.match(repo):
        raise ResolveError("invalid repository slug", repo=repo)

    if shutil.which("gh"):
        tag = _latest_via_gh(repo, timeout)
    else:
        logger.debug("gh not on PATH, using REST API for %s", repo)
        tag = _latest_via_http(repo, timeout)

    logger.info("Latest release of %s: %s", repo, tag)
    return tag


def is_github_authenticated() -> bool:
    """``gh auth status`` exit code, as a bool. False when gh is missing."""
    try:
        r = subprocess.run(
            ["gh", "auth", "status"], capture_output=True, text=True, timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return r.returncode == 0


def log_into_github() -> bool:
    """Make sure ``gh`` is logged in, prompting interactively if not.

    Returns:
        True when already authenticated or the login succeeded; False
        when ``gh`` is not installed.

    Raises:
        ResolveError: ``gh auth login`` failed.
    """
    if not shutil.which("gh"):
        logger.info("gh not installed, skipping GitHub login")
        return False
    if is_github_authenticated():
        return True

    # Interactive: inherits the terminal.
    r = subprocess.run(["gh", "auth", "login"])
    if r.returncode != 0:
        raise ResolveError(
            "gh auth login failed", cmd=["gh", "auth", "login"], returncode=r.returncode,
        )
    return True
