"""
L0 Data: catalog schema definition and validator.

Defines the canonical recipe shape. Every entry of TOOL_CATALOG must
conform to it; ``load_catalog`` validates the whole catalog before any
installer is built and turns each entry into a ``ToolSpec``.

Strategies:
  - http:      release artifact from a URL template
  - npm/pip/composer: packages into a tool-scoped directory
  - cargo:     native toolchain build
  - make:      git checkout built with make into <tool_dir>/release
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from idt.core.models.tool import Decompression, Strategy, ToolSpec
from idt.core.services.tool_install.data.constants import NAMING_CONVENTIONS
from idt.core.services.tool_install.domain.errors import CatalogError
from idt.core.services.tool_install.domain.platform_tokens import template_fields

logger = logging.getLogger(__name__)

# ── Canonical recipe fields ─────────────────────────────────────

_COMMON_FIELDS = {
    "description",          # str: one-liner for `idt list`
    "strategy",             # str: REQUIRED, one of Strategy
    "health_check_args",    # list[str] | None: None disables the check
}

_STRATEGY_FIELDS: dict[str, set[str]] = {
    "http": {
        "url",              # str: REQUIRED, template
        "repo",             # str: owner/name, needed for version "latest"
        "version",          # str: fixed tag or "latest"
        "convention",       # str: key of NAMING_CONVENTIONS
        "os_map",           # dict[str→str]: token overrides by Os value
        "arch_map",         # dict[str→str]: token overrides by Arch value
        "target_map",       # dict[str→str]: {target} by SystemProfile.key
        "decompression",    # str: none | gzip | tar.gz | tar.xz | zip
        "placement",        # str: "bin" | "tool_dir"
        "member",           # str: template, single archive entry
        "link",             # str: path inside tool_dir exposed as bin_name
        "link_enabled",     # bool: False = leave it in tool_dir
        "checksum_required",  # bool: verify against `checksum`
        "checksum",         # dict: {manifest_url, filename} templates
    },
    "npm": {"packages", "bin_source", "link_all"},
    "pip": {"packages", "bin_source", "link_all"},
    "composer": {"packages", "bin_source", "link_all"},
    "cargo": {"crate", "cargo_args"},
    "make": {"git_url", "git_ref", "make_args"},
}

VALID_PLACEMENTS = {"bin", "tool_dir"}

# Placeholders a template may reference
TEMPLATE_FIELDS = {"version", "version_bare", "os", "arch", "target"}
_VERSION_FIELDS = {"version", "version_bare"}


def _check_template(label: str, template: str, recipe: dict) -> list[str]:
    errors = []
    try:
        used = template_fields(template)
    except ValueError as exc:
        return [f"{label}: malformed template: {exc}"]
    unknown = used - TEMPLATE_FIELDS
    if unknown:
        errors.append(f"{label}: unknown placeholders {sorted(unknown)}")
    if used & _VERSION_FIELDS and not recipe.get("version"):
        errors.append(f"{label}: uses a version placeholder but no 'version' is set")
    return errors


def _validate_http(recipe: dict) -> list[str]:
    errors: list[str] = []

    url = recipe.get("url")
    if not isinstance(url, str) or not url:
        errors.append("http recipe needs a 'url'")
    else:
        errors.extend(_check_template("url", url, recipe))

    if recipe.get("version") == "latest" and not recipe.get("repo"):
        errors.append("version 'latest' needs a 'repo' to resolve from")

    conv = recipe.get("convention")
    if conv and conv not in NAMING_CONVENTIONS:
        errors.append(f"unknown convention '{conv}'")

    dec = recipe.get("decompression", "none")
    try:
        decompression = Decompression(dec)
    except ValueError:
        errors.append(f"unknown decompression '{dec}'")
        decompression = Decompression.NONE

    placement = recipe.get("placement", "bin")
    if placement not in VALID_PLACEMENTS:
        errors.append(f"unknown placement '{placement}'")

    member = recipe.get("member", "")
    if member:
        errors.extend(_check_template("member", member, recipe))
        if not decompression.is_archive:
            errors.append("'member' needs an archive decompression")
        if placement == "tool_dir":
            errors.append("'member' does not apply to tool_dir placement")
    if decompression.is_archive and placement == "bin" and not member:
        errors.append("archives placed into bin need a 'member'")
    if not decompression.is_archive and placement != "bin":
        errors.append(f"'{decompression.value}' downloads are placed into bin")
    if recipe.get("link") and placement != "tool_dir":
        errors.append("'link' only applies to tool_dir placement")
    if placement == "tool_dir" and recipe.get("link_enabled", True) and not recipe.get("link"):
        errors.append("tool_dir placement needs a 'link' or link_enabled: False")

    checksum = recipe.get("checksum")
    if recipe.get("checksum_required") and not checksum:
        errors.append("checksum_required without a 'checksum' source")
    if checksum is not None:
        if not isinstance(checksum, dict) or set(checksum) != {"manifest_url", "filename"}:
            errors.append("checksum must be {manifest_url, filename}")
        else:
            for key in ("manifest_url", "filename"):
                errors.extend(_check_template(f"checksum.{key}", checksum[key], recipe))
    return errors


def validate_recipe(bin_name: str, recipe: dict) -> list[str]:
    """Validate one catalog entry.

    Returns:
        List of error strings (empty if valid).
    """
    if not isinstance(recipe, dict):
        return [f"{bin_name}: recipe must be a dict"]

    strategy = recipe.get("strategy")
    if strategy not in _STRATEGY_FIELDS:
        return [f"{bin_name}: unknown strategy '{strategy}'"]

    errors: list[str] = []
    allowed = _COMMON_FIELDS | _STRATEGY_FIELDS[strategy]
    unknown = set(recipe) - allowed
    if unknown:
        errors.append(f"unknown fields for {strategy}: {sorted(unknown)}")

    args = recipe.get("health_check_args", [])
    if args is not None and (
        not isinstance(args, list) or not all(isinstance(a, str) for a in args)
    ):
        errors.append("health_check_args must be a list of strings or None")

    if strategy == Strategy.HTTP:
        errors.extend(_validate_http(recipe))
    elif strategy == Strategy.CARGO:
        if not recipe.get("crate"):
            errors.append("cargo recipe needs a 'crate'")
    elif strategy == Strategy.MAKE:
        if not recipe.get("git_url"):
            errors.append("make recipe needs a 'git_url'")
    else:
        packages = recipe.get("packages")
        if not packages or not isinstance(packages, list):
            errors.append(f"{strategy} recipe needs a non-empty 'packages' list")

    return [f"{bin_name}: {e}" for e in errors]


def validate_all_recipes(recipes: dict[str, dict]) -> dict[str, list[str]]:
    """Validate all recipes in the catalog.

    Returns:
        Dict mapping bin_name → list of errors. Only tools with errors are included.
    """
    all_errors: dict[str, list[str]] = {}
    for bin_name, recipe in recipes.items():
        errs = validate_recipe(bin_name, recipe)
        if errs:
            all_errors[bin_name] = errs
    return all_errors


def load_catalog(recipes: dict[str, dict[str, Any]] | None = None) -> list[ToolSpec]:
    """Validate the catalog and build one ``ToolSpec`` per entry.

    Args:
        recipes: Catalog dict. Defaults to the built-in TOOL_CATALOG.

    Raises:
        CatalogError: Any entry is invalid.
    """
    if recipes is None:
        from idt.core.services.tool_install.data.catalog import TOOL_CATALOG
        recipes = TOOL_CATALOG

    all_errors = validate_all_recipes(recipes)
    if all_errors:
        lines = [e for errs in all_errors.values() for e in errs]
        raise CatalogError("Invalid tool catalog:\n  " + "\n  ".join(lines))

    specs = []
    for bin_name, recipe in recipes.items():
        try:
            specs.append(ToolSpec.model_validate({"bin_name": bin_name, **recipe}))
        except ValidationError as e:
            raise CatalogError(f"{bin_name}: {e}") from e

    logger.debug("Loaded %d catalog entries", len(specs))
    return specs
