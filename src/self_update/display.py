"""Rich-based terminal output for the update command.

All functions share the module-level ``_console`` (stdout) so the
tests can swap it for a capturing console; errors go to
``_err_console`` (stderr).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from src.self_update.models import BuildInfo, StalenessReport, short_commit
from src.shared.constants import DEFAULT_TOOLCHAIN

# ---------------------------------------------------------------------------
# Module-level Console singletons
# ---------------------------------------------------------------------------

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)


# ---------------------------------------------------------------------------
# Display functions
# ---------------------------------------------------------------------------


def print_repo_found(tool_name: str, repo_root: Path) -> None:
    _console.print(
        f"[bold]\U0001f50d[/bold] Found {escape(tool_name)} repository at "
        f"[dim]{escape(str(repo_root))}[/dim]\n"
    )


def print_up_to_date(report: StalenessReport, force: bool) -> None:
    """Print the "already up to date" line and, unless forced, the hint."""
    _console.print(
        f"[green]✓[/green] Binary is already up to date "
        f"({escape(short_commit(report.binary_commit))})"
    )
    if not force:
        _console.print("\nUse --force to rebuild anyway")
    else:
        _console.print()


def print_stale(report: StalenessReport) -> None:
    built = escape(short_commit(report.binary_commit))
    head = escape(short_commit(report.repo_commit))
    if report.commits_behind > 0:
        msg = (
            f"Binary is {report.commits_behind} commits behind "
            f"(built from {built}, repo at {head})"
        )
    else:
        msg = f"Binary is stale (built from {built}, repo at {head})"
    _console.print(f"[yellow]⚠[/yellow] {msg}\n")


def print_build_config(repo_root: Path, install_path: Path, toolchain: str) -> None:
    _console.print("Build configuration:")
    _console.print(f"  Source:  {escape(str(repo_root))}")
    _console.print(f"  Target:  {escape(str(install_path))}")
    _console.print(f"  Toolchain: {escape(toolchain)}")


def print_dry_run_plan(
    repo_root: Path,
    install_path: Path,
    *,
    codesign: bool,
    toolchain: str = DEFAULT_TOOLCHAIN,
) -> None:
    """Print the steps a real run would execute."""
    _console.print("\n[dim]ℹ[/dim] Dry run mode - no changes will be made")
    _console.print("\nWould execute:")
    _console.print(f"  1. Run {escape(toolchain)} generate in {escape(str(repo_root))}")
    _console.print("  2. Build binary with version info")
    _console.print(f"  3. Install to {escape(str(install_path))}")
    if codesign:
        _console.print("  4. Codesign binary for macOS")


def print_aborted() -> None:
    _console.print("Aborted.")


def print_building(tool_name: str) -> None:
    _console.print()
    _console.print(f"Building {escape(tool_name)}...")


def print_step(message: str) -> None:
    _console.print(f"  • {escape(message)}")


def print_success(tool_name: str, install_path: Path, info: BuildInfo) -> None:
    _console.print(f"\n[green]✓[/green] {escape(tool_name)} updated successfully!")
    _console.print(f"\nInstalled: {escape(str(install_path))}")
    _console.print(f"Version:   {escape(info.version)}")
    _console.print(f"Commit:    {escape(info.short_commit)}")


def print_error_panel(error: Any) -> None:
    """Print an error and its remediation hint in a red panel on stderr.

    Parameters
    ----------
    error:
        An ``UpdateError`` (its ``hint`` is shown below the cause),
        any other exception, or a plain string.
    """
    content = Text(str(error), style="bold white")
    hint = getattr(error, "hint", "")
    if hint:
        content.append(f"\n\n{hint}", style="yellow")
    _err_console.print(
        Panel(
            content,
            title="[bold red]Error[/bold red]",
            border_style="red",
            expand=False,
        )
    )


def ask(question: str) -> str:
    """Read one line of input through the console."""
    return _console.input(escape(question))
