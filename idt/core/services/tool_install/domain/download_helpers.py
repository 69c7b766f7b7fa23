"""
L1 Domain: formatting helpers (pure).

Byte sizes for download logs and phase durations for the report.
No I/O, no subprocess.
"""

from __future__ import annotations


def fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def fmt_duration(ms: int | None) -> str:
    """Format a phase duration: ``850ms``, ``12.3s``, ``2m 05s``."""
    if ms is None:
        return "-"
    if ms < 1000:
        return f"{ms}ms"
    secs = ms / 1000
    if secs < 60:
        return f"{secs:.1f}s"
    whole = int(secs)
    return f"{whole // 60}m {whole % 60:02d}s"
