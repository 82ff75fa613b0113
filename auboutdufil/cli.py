"""auboutdufil CLI: run the API or scrape a single catalog page.

Usage:
    auboutdufil serve                           # Start the JSON API
    auboutdufil serve --port 14000 -v
    auboutdufil fetch latest                    # Print one page as JSON
    auboutdufil fetch best genre rock mood calm --page 2

Every option can also be set through the environment variable shown in
``--help`` (``AUBOUTDUFIL_PORT``, ``AUBOUTDUFIL_CACHE_TTL``, ...).
"""

from __future__ import annotations

import json
import logging

import click

from auboutdufil.common.config import (
    DEFAULT_BASE_URL,
    DEFAULT_PROJECT_URL,
    ServiceConfig,
)
from auboutdufil.common.exceptions import (
    FetchFailedException,
    FilterNormalizationException,
)
from auboutdufil.normalizer import normalize
from auboutdufil.service import CatalogService


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _config_options(func):
    """Options shared by every command that talks to the catalog."""
    options = [
        click.option(
            "--base-url",
            default=DEFAULT_BASE_URL,
            show_default=True,
            envvar="AUBOUTDUFIL_BASE_URL",
            help="Catalog endpoint the query string is appended to.",
        ),
        click.option(
            "--timeout",
            "fetch_timeout",
            default=15.0,
            show_default=True,
            type=float,
            envvar="AUBOUTDUFIL_TIMEOUT",
            help="Seconds before a catalog fetch is abandoned.",
        ),
        click.option("-v", "--verbose", is_flag=True, help="Verbose logging."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="auboutdufil")
def cli() -> None:
    """auboutdufil: JSON API over the auboutdufil.com music catalog."""


@cli.command()
@click.option(
    "--host",
    default="127.0.0.1",
    show_default=True,
    envvar="AUBOUTDUFIL_HOST",
    help="Host to bind the server to.",
)
@click.option(
    "-p",
    "--port",
    default=14000,
    show_default=True,
    type=int,
    envvar="AUBOUTDUFIL_PORT",
    help="Port to bind the server to.",
)
@click.option(
    "--cache-ttl",
    default=3600.0,
    show_default=True,
    type=float,
    envvar="AUBOUTDUFIL_CACHE_TTL",
    help="Seconds a scraped page stays cached.",
)
@click.option(
    "--project-url",
    default=DEFAULT_PROJECT_URL,
    show_default=True,
    envvar="AUBOUTDUFIL_PROJECT_URL",
    help="Where GET / redirects to.",
)
@_config_options
def serve(
    host: str,
    port: int,
    cache_ttl: float,
    project_url: str,
    base_url: str,
    fetch_timeout: float,
    verbose: bool,
) -> None:
    """Start the JSON API."""
    import uvicorn

    from auboutdufil.web.app import create_app

    _configure_logging(verbose)
    try:
        config = ServiceConfig(
            base_url=base_url,
            fetch_timeout=fetch_timeout,
            cache_ttl=cache_ttl,
            project_url=project_url,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    app = create_app(CatalogService.from_config(config), config)

    click.echo(f"Starting HTTP server at http://{host}:{port}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info" if verbose else "warning",
    )


@cli.command()
@click.argument("route")
@click.argument("filters", nargs=-1)
@click.option("--page", default=None, help="Catalog page number (1-based).")
@_config_options
def fetch(
    route: str,
    filters: tuple[str, ...],
    page: str | None,
    base_url: str,
    fetch_timeout: float,
    verbose: bool,
) -> None:
    """Scrape one catalog page and print its tracks as JSON.

    ROUTE is one of latest, best, downloads or plays; FILTERS are
    key/value pairs such as ``genre acoustic mood calm``.
    """
    _configure_logging(verbose)
    query = {"page": page} if page is not None else {}
    try:
        filter_set = normalize([route, *filters], query)
    except FilterNormalizationException as e:
        raise click.UsageError(e.message) from e

    try:
        config = ServiceConfig(base_url=base_url, fetch_timeout=fetch_timeout)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    service = CatalogService.from_config(config)
    try:
        tracks = service.tracks(filter_set)
    except FetchFailedException as e:
        raise click.ClickException(str(e)) from e
    finally:
        service.close()

    payload = [track.to_payload().model_dump(mode="json") for track in tracks]
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
