"""
idt: CLI entrypoint.

Usage:
    idt --help
    idt install ~/.dev-tools ~/.local/bin
    idt install ~/.dev-tools ~/.local/bin shellcheck taplo
    idt list
    idt probe
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from idt import __version__
from idt.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="idt")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to idt.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """idt: install developer tools (language servers, linters, formatters)."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


def _fatal(message: str, code: int = 2) -> None:
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(code)


@cli.command()
@click.argument("dev_tools_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("bin_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("tools", nargs=-1)
@click.option(
    "--workers", "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Parallel installs (default: one per tool, 1 = sequential).",
)
@click.option(
    "--fail-on-error/--no-fail-on-error",
    default=None,
    help="Exit 1 when any tool fails (default: on).",
)
@click.option("--skip-gh-login", is_flag=True, help="Don't check or prompt for gh auth.")
@click.option("--mock", is_flag=True, help="Simulate installs without side effects.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    dev_tools_dir: Path,
    bin_dir: Path,
    tools: tuple[str, ...],
    workers: int | None,
    fail_on_error: bool | None,
    skip_gh_login: bool,
    mock: bool,
    as_json: bool,
) -> None:
    """Install TOOLS (default: the whole catalog).

    DEV_TOOLS_DIR holds downloads and package-manager workspaces;
    BIN_DIR receives one symlink per tool.
    """
    from idt.core.config.loader import ConfigError, load_settings
    from idt.core.services.tool_install import (
        CatalogError,
        ProbeError,
        ResolveError,
        exit_code,
        finalize_bin_dir,
        format_outcome,
        format_summary,
        get_system_profile,
        load_catalog,
        run_installers,
    )
    from idt.installers import InstallContext, build_registry

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        _fatal(str(e))
        return

    for directory in (dev_tools_dir, bin_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            _fatal(f"Cannot create {directory}: {e}")

    try:
        profile = get_system_profile()
        specs = load_catalog()
    except (ProbeError, CatalogError) as e:
        _fatal(str(e))
        return

    if not tools and settings.skip:
        specs = [s for s in specs if s.bin_name not in settings.skip]

    context = InstallContext(
        profile=profile,
        dev_tools_dir=dev_tools_dir.resolve(),
        bin_dir=bin_dir.resolve(),
        http_timeout=settings.http_timeout,
        command_timeout=settings.command_timeout,
        health_check_timeout=settings.health_check_timeout,
    )
    registry = build_registry(specs, context, mock=mock)
    selected, unknown = registry.select(tools)

    for name in unknown:
        click.secho(f"⚠️  Unknown tool '{name}', skipping", fg="yellow", err=True)
    if not selected:
        _fatal("Nothing to install")
        return

    # ── GitHub auth (release lookups go through gh) ─────────────
    needs_gh = any(i.spec.version == "latest" for i in selected)
    if needs_gh and settings.github_login and not (skip_gh_login or mock):
        from idt.core.services.tool_install.execution.release import log_into_github

        try:
            log_into_github()
        except ResolveError as e:
            click.secho(f"⚠️  {e}", fg="yellow", err=True)

    quiet = ctx.obj.get("quiet", False)
    if not (as_json or quiet):
        click.secho(
            f"📦 Installing {len(selected)} tools for {profile.key}", fg="cyan", bold=True,
        )

    def _report(outcome) -> None:
        if as_json:
            return
        line, color = format_outcome(outcome)
        click.secho(line, fg=color)

    report = run_installers(
        selected,
        max_workers=workers or settings.max_workers,
        on_outcome=_report,
    )

    if not mock:
        for link in finalize_bin_dir(context.bin_dir):
            if not (as_json or quiet):
                click.echo(f"🧹 Removed dead symlink {link.name}")

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        summary, color = format_summary(report)
        click.secho(summary, fg=color, bold=True)

    policy = settings.fail_on_error if fail_on_error is None else fail_on_error
    sys.exit(exit_code(report, policy))


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def list_tools(as_json: bool) -> None:
    """List every tool in the catalog."""
    from idt.core.services.tool_install import CatalogError, load_catalog

    try:
        specs = load_catalog()
    except CatalogError as e:
        _fatal(str(e))
        return

    if as_json:
        click.echo(json.dumps(
            [s.model_dump(mode="json", exclude_defaults=True) for s in specs], indent=2,
        ))
        return

    width = max(len(s.bin_name) for s in specs)
    for spec in specs:
        check = " ".join(spec.health_check_args) if spec.health_check_enabled else "-"
        click.echo(
            f"  {spec.bin_name:<{width}}  {spec.strategy.value:<8}  "
            f"check: {check:<10}  {spec.description}"
        )
    click.echo()
    click.secho(f"   {len(specs)} tools", fg="white", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def probe(as_json: bool) -> None:
    """Show the detected OS and architecture."""
    from idt.core.services.tool_install import ProbeError, get_system_profile

    try:
        profile = get_system_profile()
    except ProbeError as e:
        _fatal(str(e))
        return

    if as_json:
        click.echo(json.dumps(profile.model_dump(mode="json")))
        return
    click.echo(f"os: {profile.os.value}")
    click.echo(f"arch: {profile.arch.value}")


if __name__ == "__main__":
    cli()
