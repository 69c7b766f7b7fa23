"""
L5 Orchestration: report line formatting.

Pure functions. One line per outcome plus a color name that click
understands. Categories (see ``InstallOutcome.kind``):

    verified    green   checksummed download, health check passed
    unverified  cyan    health check passed, no checksum
    unchecked   yellow  installed, health check disabled
    failed      red     error shown inline
"""

from __future__ import annotations

from idt.core.models.outcome import InstallOutcome
from idt.core.services.tool_install.domain.download_helpers import fmt_duration
from idt.core.services.tool_install.orchestration.orchestrator import InstallReport

OUTCOME_COLORS: dict[str, str] = {
    "verified": "green",
    "unverified": "cyan",
    "unchecked": "yellow",
    "failed": "red",
}

_FIRST_LINE_MAX = 200


def _first_line(text: str) -> str:
    line = text.strip().splitlines()[0] if text.strip() else ""
    return line[:_FIRST_LINE_MAX]


def _timings(outcome: InstallOutcome) -> str:
    parts = [f"install={fmt_duration(outcome.install_duration_ms)}"]
    if outcome.health_check_duration_ms is not None:
        parts.append(f"check={fmt_duration(outcome.health_check_duration_ms)}")
    return " ".join(parts)


def format_outcome(outcome: InstallOutcome) -> tuple[str, str]:
    """Render one outcome.

    Returns:
        (line, color)
    """
    kind = outcome.kind
    name = outcome.bin_name
    timings = _timings(outcome)

    if kind == "failed":
        ran_check = outcome.health_check_duration_ms is not None
        phase = "check failed" if ran_check else "install failed"
        error = outcome.error or "unknown error"
        label = f"{outcome.error_type}: " if outcome.error_type else ""
        line = f"✗ {name} {phase} ({timings}): {label}{error}"
    elif kind == "unchecked":
        line = f"✓ {name} installed, not checked ({timings})"
    else:
        tag = "verified" if kind == "verified" else "checked"
        line = f"✓ {name} {tag} ({timings}): {_first_line(outcome.output)}"

    return line, OUTCOME_COLORS[kind]


def format_summary(report: InstallReport) -> tuple[str, str]:
    """Closing line: totals, or the failed tool names."""
    if report.all_ok:
        return (
            f"{report.succeeded}/{report.total} tools installed "
            f"in {fmt_duration(report.duration_ms)}",
            "green",
        )
    return (
        f"{report.failed} bins failed to install, namely: {report.failed_bin_names}",
        "red",
    )
