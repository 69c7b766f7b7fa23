"""
L1 Domain: per-vendor platform tokens and URL template rendering.

Pure functions. Given a ``SystemProfile`` and a recipe's naming
convention, produce the ``{os}``, ``{arch}`` and ``{target}`` strings
its release assets use, then fill URL templates with them.
"""

from __future__ import annotations

import string
from typing import Any

from idt.core.models.system import SystemProfile
from idt.core.services.tool_install.data.constants import (
    DEFAULT_CONVENTION,
    NAMING_CONVENTIONS,
)
from idt.core.services.tool_install.domain.errors import CatalogError

_FORMATTER = string.Formatter()


def platform_tokens(
    profile: SystemProfile,
    convention: str = "",
    *,
    os_map: dict[str, str] | None = None,
    arch_map: dict[str, str] | None = None,
    target_map: dict[str, str] | None = None,
) -> dict[str, str]:
    """Resolve the platform tokens for one vendor.

    Args:
        profile: Host OS/arch.
        convention: Name from ``NAMING_CONVENTIONS`` (default: go).
        os_map: Per-recipe overrides keyed by ``Os`` value.
        arch_map: Per-recipe overrides keyed by ``Arch`` value.
        target_map: Full ``{target}`` strings keyed by ``profile.key``.

    Returns:
        ``{"os": ..., "arch": ..., "target": ...}``. ``target`` defaults
        to ``"{arch}-{os}"``.

    Raises:
        CatalogError: Unknown convention or no token for this host.
    """
    name = convention or DEFAULT_CONVENTION
    conv = NAMING_CONVENTIONS.get(name)
    if conv is None:
        raise CatalogError(f"Unknown naming convention '{name}'")

    os_tokens = {**conv["os"], **(os_map or {})}
    arch_tokens = {**conv["arch"], **(arch_map or {})}

    try:
        os_token = os_tokens[profile.os.value]
        arch_token = arch_tokens[profile.arch.value]
    except KeyError as e:
        raise CatalogError(
            f"Convention '{name}' has no token for {profile.key}: {e}"
        ) from e

    target = (target_map or {}).get(profile.key, f"{arch_token}-{os_token}")
    return {"os": os_token, "arch": arch_token, "target": target}


def template_fields(template: str) -> set[str]:
    """Names of the ``{placeholders}`` used in a template."""
    return {
        field for _, field, _, _ in _FORMATTER.parse(template) if field
    }


def render_template(template: str, **values: Any) -> str:
    """Fill a URL/filename template.

    Raises:
        CatalogError: The template references an unknown placeholder.
    """
    try:
        return template.format(**values)
    except (KeyError, IndexError) as e:
        raise CatalogError(f"Unknown placeholder {e} in template '{template}'") from e


def strip_v(tag: str) -> str:
    """``v1.2.3`` → ``1.2.3``. Leaves other tags alone."""
    return tag[1:] if tag[:1] in ("v", "V") and tag[1:2].isdigit() else tag
