"""CLI commands: scan, doctor."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.table import Table

from repomedic.audit import report
from repomedic.audit.types import ScanResult
from repomedic.cli import (
    EXIT_ERROR,
    cli,
    console,
    err_console,
    exit_code_for,
    get_engine,
    setup_logging,
)
from repomedic.exceptions import RepomedicError

logger = logging.getLogger("repomedic.cli")

_GRADE_STYLES = {"A": "bold green", "B": "green", "C": "yellow", "D": "bold yellow", "F": "bold red"}
_SEVERITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "cyan"}


def _run_scan(path: str) -> ScanResult:
    """Scan or exit 1 with a message naming the path."""
    try:
        engine = get_engine()
        return engine.scan(path)
    except RepomedicError as exc:
        logger.debug("Scan of %s failed", path, exc_info=True)
        err_console.print(f"[bold red]Error:[/] {exc}")
        sys.exit(EXIT_ERROR)


def _print_console(result: ScanResult, verbose: bool) -> None:
    style = _GRADE_STYLES.get(result.grade, "bold")
    console.print(
        f"\n  [bold]RepoMedic[/] — {result.root}\n"
        f"  Score: [{style}]{result.score}/100 ({result.grade})[/]\n"
    )

    checks = Table(title="Repository files")
    checks.add_column("Check", style="bold", width=24)
    checks.add_column("Status", width=10)
    for key, present in result.checks.items():
        if present:
            status = "[green]✓[/]"
        elif key in result.missing_required:
            status = "[red]✗ missing[/]"
        else:
            status = "[yellow]– optional[/]"
        checks.add_row(key, status)
    console.print(checks)

    if result.ecosystems:
        eco = Table(title="Ecosystems")
        eco.add_column("Name", style="bold", width=24)
        eco.add_column("Kind", width=14)
        eco.add_column("Confidence", width=10)
        eco.add_column("Markers", width=40)
        for m in result.ecosystems:
            eco.add_row(m.display_name, m.kind, m.confidence.label, ", ".join(m.markers[:3]))
        console.print(eco)

    if result.ci:
        console.print("  CI: " + ", ".join(f"[cyan]{c.display_name}[/] ({c.path})" for c in result.ci))
    if result.workspace_type:
        console.print(f"  Workspace: [cyan]{result.workspace_type}[/]")

    if result.findings:
        table = Table(title="Potential secrets")
        table.add_column("Rule", style="bold", width=26)
        table.add_column("Severity", width=8)
        table.add_column("Location", width=36)
        table.add_column("Excerpt", width=40)
        for f in result.findings:
            sev = f.severity.value
            table.add_row(
                f.rule_id,
                f"[{_SEVERITY_STYLES.get(sev, 'bold')}]{sev}[/]",
                f"{f.path}:{f.line}",
                f.excerpt,
            )
        console.print(table)

    for path in result.large_files:
        console.print(f"  [yellow]⚠[/] Large file: {path}")
    for w in result.warnings:
        console.print(f"  [yellow]⚠[/] {w.kind}: {w.path} — {w.message}")
    for err in result.system_errors:
        console.print(f"  [bold red]✗[/] I/O error: {err}")

    if verbose:
        s = result.stats
        console.print(
            f"\n  [dim]{s.files_seen} files, {s.dirs_traversed} dirs, "
            f"{s.files_scanned_for_secrets} scanned for secrets, "
            f"{s.suppressed_findings} suppressed, {s.duration_ms}ms[/]"
        )


@cli.command()
@click.argument("path", default=".", type=click.Path())
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["console", "json", "sarif"]),
    default="console",
    help="Output format",
)
@click.option("--quiet", "-q", is_flag=True, help="Exit code only, no output")
@click.option("--verbose", "-v", is_flag=True, help="Show scan stats and debug logging")
@click.option("--fail-on-warning", is_flag=True, help="Exit 2 on warnings, not just issues")
def scan(path, output_format, quiet, verbose, fail_on_warning) -> None:
    """Scan a repository and report its health."""
    setup_logging(verbose)
    result = _run_scan(path)

    if not quiet:
        if output_format == "json":
            click.echo(report.to_json(result))
        elif output_format == "sarif":
            click.echo(json.dumps(report.to_sarif(result), indent=2))
        else:
            _print_console(result, verbose)

    sys.exit(exit_code_for(result, fail_on_warning))


@cli.command()
@click.argument("path", default=".", type=click.Path())
def doctor(path) -> None:
    """One-line health summary."""
    setup_logging(False)
    result = _run_scan(path)
    style = _GRADE_STYLES.get(result.grade, "bold")
    parts = [f"[{style}]{result.grade} {result.score}/100[/]"]
    if result.missing_required:
        parts.append(f"missing: {', '.join(result.missing_required)}")
    if result.findings:
        parts.append(f"[red]{len(result.findings)} secret(s)[/]")
    if not result.has_issues:
        parts.append("[green]healthy[/]")
    console.print(" | ".join(parts))
    sys.exit(exit_code_for(result))
