"""envleak CLI - Typer-based command line interface."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console

from envleak import __version__
from envleak.config import ScanSettings, get_scan_settings, get_tools, load_config
from envleak.log import setup_logging
from envleak.matcher import AutomatonBuildError
from envleak.reporting.render import render_report_table, render_tools_table, rows_to_dicts
from envleak.reporting.report import ReportRow, run_privacy_scan
from envleak.tools import run_tools

app = typer.Typer(
    name="envleak",
    help="envleak - Privacy and secret leak checks for source trees",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

RootArg = Annotated[Path, typer.Argument(help="Project root to scan")]
ExtrasOpt = Annotated[
    bool,
    typer.Option("--extras", "-e", help="Also scan for secrets, key files and PII terms"),
]
ConfigOpt = Annotated[Path | None, typer.Option("--config", "-c", help="Custom config file")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Log scan progress")]
DebugOpt = Annotated[bool, typer.Option("--debug", help="Log skipped sources and files")]


def _load_settings(config_file: Path | None) -> tuple[dict[str, Any], ScanSettings]:
    """Load config and scan settings, exiting on invalid configuration."""
    if config_file is not None and not config_file.is_file():
        console.print(f"[red]Error:[/] Config file '{config_file}' not found")
        raise typer.Exit(1)

    try:
        config = load_config(config_file)
        return config, get_scan_settings(config)
    except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError) as e:
        console.print(f"[red]Error loading config:[/] {e}")
        raise typer.Exit(1)


def _check_root(root: Path) -> None:
    if not root.is_dir():
        console.print(f"[red]Error:[/] '{root}' is not a directory")
        raise typer.Exit(1)


def _scan(root: Path, extras: bool, settings: ScanSettings) -> list[ReportRow]:
    try:
        return run_privacy_scan(root, run_extras=extras, settings=settings)
    except AutomatonBuildError as e:
        console.print(f"\n[red]Scan failed:[/] {e}")
        raise typer.Exit(1)


@app.command()
def scan(
    root: RootArg = Path("."),
    extras: ExtrasOpt = False,
    json_output: Annotated[bool, typer.Option("--json", help="Print rows as JSON")] = False,
    config_file: ConfigOpt = None,
    verbose: VerboseOpt = False,
    debug: DebugOpt = False,
) -> None:
    """Scan a project for local usernames, hostnames and IPs."""
    setup_logging(verbose=verbose, debug=debug)
    _check_root(root)
    _config, settings = _load_settings(config_file)

    rows = _scan(root, extras, settings)

    if json_output:
        typer.echo(json.dumps(rows_to_dicts(rows), indent=2, ensure_ascii=False))
    else:
        console.print(render_report_table(rows, title="Privacy/Security Scan"))


@app.command()
def checks(
    root: RootArg = Path("."),
    extras: ExtrasOpt = False,
    config_file: ConfigOpt = None,
    verbose: VerboseOpt = False,
    debug: DebugOpt = False,
) -> None:
    """Run the configured format/lint/type/test tools, then the privacy scan."""
    setup_logging(verbose=verbose, debug=debug)
    _check_root(root)
    config, settings = _load_settings(config_file)

    tool_report = asyncio.run(run_tools(get_tools(config), cwd=root))
    rows = _scan(root, extras, settings)

    console.print()
    console.print(render_tools_table(tool_report))
    console.print()
    console.print(render_report_table(rows, title="Privacy/Security Scan"))

    if not tool_report.all_ok:
        console.print("[red]Some checks failed.[/]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"envleak v{__version__}")


if __name__ == "__main__":
    app()
