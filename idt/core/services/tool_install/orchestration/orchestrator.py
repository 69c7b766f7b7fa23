"""
L5 Orchestration: run every installer with failure isolation.

One worker thread per installer (bounded by ``max_workers``). Installers
share no mutable state, so there is nothing to lock; the only join point
is collecting outcomes. A tool that fails, or even one whose ``run()``
breaks its never-raise contract, never stops or skips another.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from idt.core.models.outcome import InstallOutcome
from idt.core.services.tool_install.execution.finalize import rm_dead_symlinks

if TYPE_CHECKING:
    from idt.installers.base import Installer

logger = logging.getLogger(__name__)


@dataclass
class InstallReport:
    """Outcomes of one orchestrated run, in catalog order."""

    outcomes: list[InstallOutcome] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    @property
    def failed_bin_names(self) -> list[str]:
        return [o.bin_name for o in self.outcomes if o.failed]

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "duration_ms": self.duration_ms,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }


def _run_one(installer: Installer) -> InstallOutcome:
    try:
        return installer.run()
    except Exception as e:
        # run() must not raise; contain it to this tool anyway
        logger.exception("Installer %s broke the run() contract", installer.bin_name)
        return InstallOutcome.failure(
            installer.bin_name, error=f"Unexpected error: {e}", error_type=type(e).__name__,
        )


def run_installers(
    installers: Sequence[Installer],
    *,
    max_workers: int | None = None,
    on_outcome: Callable[[InstallOutcome], None] | None = None,
) -> InstallReport:
    """Run all installers concurrently and collect one outcome each.

    Args:
        installers: What to run.
        max_workers: Pool size. None = one thread per installer.
            ``1`` runs them sequentially.
        on_outcome: Called (from this thread) as each outcome arrives,
            in completion order.

    Returns:
        InstallReport with outcomes in the order of ``installers``.
    """
    start = time.monotonic()
    if not installers:
        return InstallReport()

    workers = max_workers or len(installers)
    by_name: dict[str, InstallOutcome] = {}

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="idt",
    ) as pool:
        futures = {pool.submit(_run_one, i): i for i in installers}
        for future in concurrent.futures.as_completed(futures):
            outcome = future.result()
            by_name[outcome.bin_name] = outcome
            icon = "✓" if outcome.ok else "✗"
            logger.info("%s %s (%s)", icon, outcome.bin_name, outcome.status)
            if on_outcome:
                on_outcome(outcome)

    report = InstallReport(
        outcomes=[by_name[i.bin_name] for i in installers],
        duration_ms=int((time.monotonic() - start) * 1000),
    )
    logger.info(
        "Installed %d/%d tools (%d failed) in %dms",
        report.succeeded, report.total, report.failed, report.duration_ms,
    )
    return report


def finalize_bin_dir(bin_dir: Path) -> list[Path]:
    """Post-run cleanup: drop symlinks left dangling by removed tools."""
    return rm_dead_symlinks(bin_dir)


def exit_code(report: InstallReport, fail_on_error: bool = True) -> int:
    """Process exit status for a report under the configured policy."""
    if fail_on_error and not report.all_ok:
        return 1
    return 0
