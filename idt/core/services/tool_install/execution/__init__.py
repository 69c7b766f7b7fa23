"""
L4 Execution: side-effecting strategies (HTTP, subprocess, filesystem).

Every function here raises a ``domain.errors.InstallError`` subclass on
failure; installers turn those into outcomes.
"""

from idt.core.services.tool_install.execution.checksum import (  # noqa: F401
    compute_sha256,
    download_and_find_checksum,
    parse_checksum,
    verify,
)
from idt.core.services.tool_install.execution.download import download  # noqa: F401
from idt.core.services.tool_install.execution.finalize import (  # noqa: F401
    link_files_in_dir,
    make_executable,
    rm_dead_symlinks,
    symlink,
)
from idt.core.services.tool_install.execution.package_managers import (  # noqa: F401
    composer_install,
    npm_install,
    pip_install,
)
from idt.core.services.tool_install.execution.release import (  # noqa: F401
    get_latest_release,
    log_into_github,
)
from idt.core.services.tool_install.execution.subprocess_runner import (  # noqa: F401
    run_command,
)
from idt.core.services.tool_install.execution.toolchain import cargo_install  # noqa: F401
