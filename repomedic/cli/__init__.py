"""
RepoMedic CLI — Package init.

Re-exports the main CLI group and shared utilities.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from repomedic import __version__
from repomedic.audit import AuditEngine, ScanResult
from repomedic.config import AuditSettings

console = Console()
err_console = Console(stderr=True)

EXIT_CLEAN = 0
EXIT_ERROR = 1
EXIT_ISSUES = 2


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s — %(message)s",
        datefmt="%H:%M:%S",
    )


def get_engine() -> AuditEngine:
    """Create an engine with settings read from the environment."""
    return AuditEngine(settings=AuditSettings.from_env())


def exit_code_for(result: ScanResult, fail_on_warning: bool = False) -> int:
    """Map a scan result onto the process exit-code contract.

    ``fail_on_warning`` only changes this mapping, never the score.
    """
    if result.has_system_error:
        return EXIT_ERROR
    if result.has_issues:
        return EXIT_ISSUES
    if fail_on_warning and result.has_warnings:
        return EXIT_ISSUES
    return EXIT_CLEAN


# ─── Main Group ──────────────────────────────────────────────────

@click.group()
@click.version_option(__version__, prog_name="repomedic")
def cli() -> None:
    """RepoMedic — Repository health scanner."""
    pass


# ─── Register all sub-modules ───────────────────────────────────
from repomedic.cli import scan_cmds  # noqa: E402, F401


if __name__ == "__main__":
    cli()
