"""
L3 Detection: host OS + CPU architecture.

Runs ``uname -mo`` exactly once per call and maps its two tokens onto a
``SystemProfile``. Callers resolve the profile once at startup and pass
it down; nothing here is cached.
"""

from __future__ import annotations

import logging
import subprocess

from idt.core.models.system import Arch, Os, SystemProfile
from idt.core.services.tool_install.data.constants import (
    UNAME_ARCH_TOKENS,
    UNAME_OS_TOKENS,
)
from idt.core.services.tool_install.domain.errors import ProbeError

logger = logging.getLogger(__name__)

UNAME_CMD = ["uname", "-mo"]


def parse_uname(output: str) -> SystemProfile:
    """Parse ``uname -mo`` output, e.g. ``"arm64 Darwin"``.

    ``uname`` prints the machine before the OS regardless of flag order.

    Raises:
        ProbeError: Not exactly two tokens, or a token outside the
            recognized set.
    """
    tokens = output.split()
    if len(tokens) != 2:
        raise ProbeError(
            "unexpected uname output", cmd=UNAME_CMD, output=repr(output.strip()),
        )

    machine, os_name = (t.lower() for t in tokens)
    os_value = UNAME_OS_TOKENS.get(os_name)
    if os_value is None:
        raise ProbeError("unknown OS", cmd=UNAME_CMD, os=tokens[1])

    arch_value = UNAME_ARCH_TOKENS.get(machine)
    if arch_value is None:
        raise ProbeError("unknown arch", cmd=UNAME_CMD, arch=tokens[0])

    return SystemProfile(os=Os(os_value), arch=Arch(arch_value))


def get() -> SystemProfile:
    """Detect the host profile with one ``uname -mo`` spawn (no retry).

    Raises:
        ProbeError: uname missing, failing, or printing unknown tokens.
    """
    try:
        r = subprocess.run(UNAME_CMD, capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ProbeError(f"cannot run uname: {e}", cmd=UNAME_CMD) from e

    if r.returncode != 0:
        raise ProbeError(
            "uname failed", cmd=UNAME_CMD, returncode=r.returncode, stderr=r.stderr,
        )

    profile = parse_uname(r.stdout)
    logger.debug("Detected system profile: %s", profile.key)
    return profile
