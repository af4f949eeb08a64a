"""Typer command line interface for the gt self-update tool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer

from src.self_update import __version__, display
from src.self_update.config import UpdaterConfig, load_updater_config
from src.self_update.exceptions import ConfigError, UpdateError
from src.self_update.install_location import current_tool_binary
from src.self_update.pipeline import Updater
from src.self_update.repo import GitRepoLocator, GitStalenessChecker
from src.self_update.runner import SubprocessRunner
from src.shared.config import UpdaterSettings
from src.shared.constants import APP_NAME, DEFAULT_CONFIG_PATH
from src.shared.logging import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=APP_NAME,
    help="Rebuild and reinstall gt from source.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Maintenance commands for the gt binary."""


def _binary_to_check(
    override: Optional[Path | str], resolve_binary: Callable[[], Optional[str]]
) -> Optional[str]:
    """Return the binary whose embedded commit decides staleness.

    An install override names the binary being replaced; a missing target
    has no commit, so staleness is unknown and the rebuild proceeds.
    """
    if override:
        target = Path(override).expanduser()
        return str(target) if target.exists() else None
    return resolve_binary()


def build_updater(
    config: UpdaterConfig,
    settings: UpdaterSettings,
    *,
    install_path: Optional[Path] = None,
) -> Updater:
    """Wire the default collaborators into an :class:`Updater`.

    Precedence for overrides: command line, then environment, then the
    config file.
    """
    runner = SubprocessRunner()
    resolve_binary = current_tool_binary(config.tool.name)
    locator = GitRepoLocator(
        config.tool.name,
        root_override=settings.root or config.repo.root or None,
        search_paths=config.repo.search_paths,
    )
    override = install_path or settings.install_path or config.install.path or None
    checker = GitStalenessChecker(
        _binary_to_check(override, resolve_binary), runner, vcs=config.tool.vcs
    )
    return Updater(
        config,
        locator=locator,
        checker=checker,
        runner=runner,
        install_path=override,
        current_executable=resolve_binary,
    )


@app.command()
def update(
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmation prompts and rebuild even if current."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be done without doing it."
    ),
    install_path: Optional[Path] = typer.Option(
        None, "--install-path", help="Install here instead of the detected location."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to the YAML config file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Rebuild and reinstall the gt binary from source.

    The binary is rebuilt from your local repository and installed to the
    same location as your current binary (or ~/.local/bin/gt by default),
    with version information embedded so staleness checks keep working.
    """
    settings = UpdaterSettings()
    try:
        config = load_updater_config(
            config_path or settings.config_path or Path(DEFAULT_CONFIG_PATH).expanduser()
        )
    except ConfigError as exc:
        display.print_error_panel(exc)
        raise typer.Exit(code=1) from exc
    setup_logging(
        APP_NAME,
        "DEBUG" if verbose else settings.log_level,
        json_format=config.log_format == "json",
    )

    updater = build_updater(config, settings, install_path=install_path)
    try:
        result = updater.run(force=force, dry_run=dry_run)
    except UpdateError as exc:
        logger.debug("Update failed at stage %s", exc.stage, exc_info=True)
        display.print_error_panel(exc)
        raise typer.Exit(code=1) from exc
    logger.debug("Update finished: %s", result.outcome.value)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
