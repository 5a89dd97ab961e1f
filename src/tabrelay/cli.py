"""CLI interface for Tabrelay.

Runs the URL relay server, or performs a single navigation directly.
"""

import logging
import sys
from pathlib import Path

import click

from tabrelay.config import Config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with an error message."""
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@click.group()
def cli() -> None:
    """Tabrelay - point your browser's active tab at a URL over HTTP."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover tabrelay.toml)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides PORT and config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every automation command)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the URL relay server."""
    from tabrelay.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(host=host, port=port)

    click.echo(f"Server running on http://{config.server.host}:{config.server.port}")
    click.echo(
        'Send a POST request to /open with JSON payload {"url": "https://example.com"}',
    )
    click.echo(f"Browser: {config.browser.name}")

    run_server(config)


@cli.command(name="open")
@click.argument("url")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover tabrelay.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every automation command)",
)
def open_url(url: str, config_path: Path | None, verbose: bool) -> None:
    """Point the browser at URL without starting the server."""
    from tabrelay.core.navigator import current_os, select_navigator
    from tabrelay.core.process import SubprocessRunner

    _configure_logging(verbose)
    if not url:
        click.echo(click.style("Error: URL cannot be empty", fg="red"), err=True)
        sys.exit(1)

    config = _load_config(config_path)
    navigator = select_navigator(current_os(), SubprocessRunner(), config.browser)
    result = navigator.navigate(url)

    if not result.success:
        click.echo(
            click.style(f"Failed to change URL: {result.message}", fg="red"),
            err=True,
        )
        sys.exit(1)

    click.echo(
        click.style(
            f"Successfully changed {config.browser.name} tab to {url}",
            fg="green",
        ),
    )


if __name__ == "__main__":
    cli()
