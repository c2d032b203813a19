"""CLI interface for govanity.

Command-line tool for serving and inspecting vanity Go import paths.
"""

import json
import logging
import sys
from pathlib import Path

import click

from govanity.config import Config
from govanity.core.renderer import MetadataView, render_metadata
from govanity.core.resolver import resolve
from govanity.errors import ConfigurationError, RenderError

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover govanity.toml)",
)


@click.group()
def cli() -> None:
    """govanity - vanity import paths for Go packages."""


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@config_option
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
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every resolved request)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the vanity import server."""
    from govanity.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(config_path).with_overrides(host=host, port=port)
    if not config.packages:
        click.echo(click.style("Warning: no packages configured", fg="yellow"), err=True)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    for package in config.packages:
        click.echo(f"  {package.path} -> {package.vcs} {package.url}")

    run_server(config, verbose=verbose)


@cli.command()
@config_option
def check(config_path: Path | None) -> None:
    """Validate the configuration and list packages."""
    config = _load_config(config_path)

    if config.config_path is not None:
        click.echo(f"Configuration: {config.config_path}")
    click.echo(f"Packages: {len(config.packages)}")
    for package in config.packages:
        click.echo(f"  {package.path} -> {package.vcs} {package.url}")
        for submodule in package.submodules:
            url = submodule.url or f"{package.url} (inherited)"
            click.echo(f"    {package.absolute_path(submodule)} -> {url}")

    click.echo(click.style("Configuration OK", fg="green"))


@cli.command(name="resolve")
@click.argument("request_path")
@config_option
@click.option(
    "--host",
    default="localhost",
    show_default=True,
    help="Host header to render the metadata page with",
)
@click.option(
    "--go-get/--no-go-get",
    default=True,
    help="Render the go-get metadata page (default) or show the redirect",
)
def resolve_command(
    request_path: str,
    config_path: Path | None,
    host: str,
    go_get: bool,
) -> None:
    """Show how REQUEST_PATH would be answered."""
    config = _load_config(config_path)

    package = config.find_package(request_path)
    if package is None:
        click.echo(
            click.style(f"Error: no package serves {request_path}", fg="red"),
            err=True,
        )
        sys.exit(1)

    resolution = resolve(package, request_path)
    click.echo(f"Import root: {host}{resolution.path}")
    click.echo(f"Repository: {package.vcs} {resolution.url}")

    if not go_get:
        click.echo(f"307 Temporary Redirect -> {resolution.url}")
        return

    assert package.template is not None
    view = MetadataView(
        host=host, path=resolution.path, vcs=package.vcs, url=resolution.url
    )
    try:
        click.echo(render_metadata(package.template, view), nl=False)
    except RenderError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@config_option
def export(config_path: Path | None) -> None:
    """Print the provisioned packages as JSON."""
    config = _load_config(config_path)
    data = {"packages": [package.to_dict() for package in config.packages]}
    click.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    cli()
