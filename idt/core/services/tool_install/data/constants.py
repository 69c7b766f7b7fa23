"""
L0 Data: module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

USER_AGENT = "idt/1.0"

# Streaming chunk for downloads and hashing.
CHUNK_SIZE = 8192

GITHUB_API_URL = "https://api.github.com"

# Host token normalization for `uname -mo` output (lowercased).
#
# `uname -o` says "Darwin" on macOS and "GNU/Linux" on glibc Linux;
# musl/busybox builds print plain "Linux". `uname -m` says "arm64" on
# Apple silicon but "aarch64" on Linux ARM.
UNAME_OS_TOKENS: dict[str, str] = {
    "darwin": "macos",
    "gnu/linux": "linux",
    "linux": "linux",
}
UNAME_ARCH_TOKENS: dict[str, str] = {
    "x86_64": "x86",
    "amd64": "x86",
    "arm64": "arm",
    "aarch64": "arm",
}

# Release asset naming conventions.
#
# Upstream projects disagree on how to spell the same platform:
#
#   rust:   aarch64-apple-darwin, x86_64-unknown-linux-gnu
#   go:     darwin_arm64, linux_amd64
#   uname:  Darwin-arm64, Linux-x86_64
#   node:   darwin-arm64, linux-x64
#
# Recipes pick one by name and may override single tokens with their
# own `os_map` / `arch_map`, or spell out whole `{target}` strings with
# a `target_map` keyed by SystemProfile.key.
NAMING_CONVENTIONS: dict[str, dict[str, dict[str, str]]] = {
    "rust": {
        "os": {"macos": "apple-darwin", "linux": "unknown-linux-gnu"},
        "arch": {"arm": "aarch64", "x86": "x86_64"},
    },
    "go": {
        "os": {"macos": "darwin", "linux": "linux"},
        "arch": {"arm": "arm64", "x86": "amd64"},
    },
    "uname": {
        "os": {"macos": "Darwin", "linux": "Linux"},
        "arch": {"arm": "arm64", "x86": "x86_64"},
    },
    "node": {
        "os": {"macos": "darwin", "linux": "linux"},
        "arch": {"arm": "arm64", "x86": "x64"},
    },
}

DEFAULT_CONVENTION = "go"

# Timeouts (seconds).
HTTP_TIMEOUT = 60
HEALTH_CHECK_TIMEOUT = 30
