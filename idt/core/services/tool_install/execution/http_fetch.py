"""
L4 Execution: HTTP GET primitives.

Thin wrappers over ``urllib.request`` that stream in fixed-size chunks
and turn every transport failure into a ``DownloadError``.
"""

from __future__ import annotations

import logging
import time
import urllib.error
import urllib.request
from pathlib import Path

from idt.core.services.tool_install.data.constants import (
    CHUNK_SIZE,
    HTTP_TIMEOUT,
    USER_AGENT,
)
from idt.core.services.tool_install.domain.download_helpers import fmt_size
from idt.core.services.tool_install.domain.errors import DownloadError

logger = logging.getLogger(__name__)


def _request(url: str, headers: dict[str, str] | None) -> urllib.request.Request:
    return urllib.request.Request(
        url, headers={"User-Agent": USER_AGENT, **(headers or {})},
    )


def fetch_to_file(
    url: str,
    dest: Path,
    *,
    headers: dict[str, str] | None = None,
    timeout: float = HTTP_TIMEOUT,
) -> int:
    """Stream ``url`` into ``dest``.

    Returns:
        Number of bytes written.

    Raises:
        DownloadError: HTTP error status, network failure, or local I/O error.
    """
    start = time.monotonic()
    written = 0
    try:
        with urllib.request.urlopen(_request(url, headers), timeout=timeout) as resp:
            with open(dest, "wb") as f:
                while True:
                    chunk = resp.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    written += len(chunk)
    except urllib.error.HTTPError as e:
        raise DownloadError(f"HTTP {e.code}", url=url) from e
    except urllib.error.URLError as e:
        raise DownloadError(f"fetch failed: {e.reason}", url=url) from e
    except OSError as e:
        raise DownloadError(f"fetch failed: {e}", url=url) from e

    elapsed = time.monotonic() - start
    logger.debug("Downloaded %s (%s) in %.1fs", url, fmt_size(written), elapsed)
    return written


def fetch_text(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeout: float = HTTP_TIMEOUT,
) -> str:
    """GET ``url`` and decode the body as UTF-8.

    Raises:
        DownloadError: As for ``fetch_to_file``.
    """
    try:
        with urllib.request.urlopen(_request(url, headers), timeout=timeout) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise DownloadError(f"HTTP {e.code}", url=url) from e
    except urllib.error.URLError as e:
        raise DownloadError(f"fetch failed: {e.reason}", url=url) from e
    except OSError as e:
        raise DownloadError(f"fetch failed: {e}", url=url) from e
    return body.decode("utf-8", errors="replace")
