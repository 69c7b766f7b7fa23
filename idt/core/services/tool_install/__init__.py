"""
Tool installation service: package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
orchestration)::

    from idt.core.services.tool_install import load_catalog, run_installers
"""

# ── L0: Data ──
from idt.core.services.tool_install.data.catalog import TOOL_CATALOG  # noqa: F401
from idt.core.services.tool_install.data.catalog_schema import (  # noqa: F401
    load_catalog,
    validate_all_recipes,
)

# ── L1: Domain ──
from idt.core.services.tool_install.domain.errors import (  # noqa: F401
    CatalogError,
    ChecksumEntryMissingError,
    ChecksumError,
    ChecksumMismatchError,
    DownloadError,
    FinalizeError,
    HealthCheckError,
    InstallError,
    PackageManagerError,
    ProbeError,
    ResolveError,
)
from idt.core.services.tool_install.domain.platform_tokens import (  # noqa: F401
    platform_tokens,
    render_template,
)

# ── L3: Detection ──
from idt.core.services.tool_install.detection.system_probe import (  # noqa: F401
    get as get_system_profile,
    parse_uname,
)

# ── L5: Orchestration ──
from idt.core.services.tool_install.orchestration.orchestrator import (  # noqa: F401
    InstallReport,
    exit_code,
    finalize_bin_dir,
    run_installers,
)
from idt.core.services.tool_install.orchestration.report import (  # noqa: F401
    format_outcome,
    format_summary,
)
