from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import click

from .config import AppSettings, load_settings
from .controller import LookupController
from .endpoints import alerts_shape, city_shape, parse_alerts, parse_reading
from .fetcher import DataFetcher
from .models import FetchResult
from .render.page import PageDisplay
from .render.renderer import Renderer
from .report.csv import write_alerts_csv, write_readings_csv
from .util.http import create_session
from .util.logging import setup_logging

LOGGER = logging.getLogger(__name__)


def _lookup_options(func):
    options = [
        click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the HTML page here"),
        click.option("--png", "png_path", type=click.Path(dir_okay=False, path_type=Path), help="Write a PNG snapshot of the page"),
        click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Export successful lookups as CSV"),
        click.option("--discard-stale", is_flag=True, help="Drop lookups that settle after a newer one"),
        click.option("--user-agent", type=str, help="Custom user agent"),
        click.option("--timeout", type=float, help="HTTP timeout in seconds (default 30); a lookup that exceeds it fails with a network error"),
        click.option("--max-workers", type=int, help="Concurrent lookups"),
        click.option("--logs-dir", type=click.Path(file_okay=False, path_type=str), help="Log directory"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _export(kind: str, results: List[FetchResult], csv_path: Path | None, png_path: Path | None, display: PageDisplay) -> None:
    if csv_path is not None:
        ok = [r for r in results if r.ok]
        if kind == "alerts":
            write_alerts_csv([parse_alerts(r.location, r.payload) for r in ok], csv_path)
        else:
            write_readings_csv([parse_reading(r.payload) for r in ok], csv_path)
        LOGGER.info("Exported %s lookups to %s", len(ok), csv_path)
    if png_path is not None:
        try:
            from .report.image import render_png

            render_png(display.to_html(), png_path)
        except Exception as exc:  # pragma: no cover - rendering optional
            LOGGER.warning("Unable to render PNG snapshot: %s", exc)


def run_lookups(kind: str, codes: List[str], settings: AppSettings) -> tuple[PageDisplay, List[FetchResult]]:
    """Run one lookup cycle per code against a fresh page; several codes run concurrently."""
    if kind == "alerts":
        shape = alerts_shape(settings.alerts_base_url)
    else:
        shape = city_shape(settings.openweather_api_key, settings.city_base_url)
    session = create_session(settings.user_agent, settings.http_timeout)
    display = PageDisplay(kind)
    fetcher = DataFetcher(session, shape, timeout=settings.http_timeout)
    renderer = Renderer(display, shape)

    with LookupController(fetcher, renderer, display, settings.max_workers, settings.discard_stale) as controller:
        if len(codes) == 1:
            display.input_value = codes[0]
            results = [controller.trigger()]
        else:
            futures = [controller.submit(code) for code in codes]
            results = [future.result() for future in futures]
    return display, results


def _run(ctx: click.Context, kind: str, codes: tuple[str, ...], out_path, png_path, csv_path, **kwargs) -> None:
    settings = load_settings(kwargs)
    setup_logging(settings.logs_dir)
    display, results = run_lookups(kind, list(codes), settings)

    if out_path is not None:
        display.write(out_path)
    _export(kind, results, csv_path, png_path, display)

    click.echo(display.to_text())
    if display.state.mode == "error":
        ctx.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main():
    """Look up weather alerts or current conditions and render them as a page."""


@main.command()
@click.argument("codes", nargs=-1, required=True)
@_lookup_options
@click.pass_context
def alerts(ctx: click.Context, codes, out_path, png_path, csv_path, **kwargs):
    """Active NWS watches, warnings and advisories for one or more state codes."""
    _run(ctx, "alerts", codes, out_path, png_path, csv_path, **kwargs)


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--api-key", type=str, help="OpenWeather API key")
@_lookup_options
@click.pass_context
def city(ctx: click.Context, names, out_path, png_path, csv_path, **kwargs):
    """Current conditions for one or more city names."""
    _run(ctx, "city", names, out_path, png_path, csv_path, **kwargs)


if __name__ == "__main__":  # pragma: no cover
    main()
