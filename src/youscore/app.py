"""Typer application and CLI entry point for youscore.

Commands:

* ``limits`` -- rate limits of every key configured in the environment.
* ``get PATH`` -- GET an endpoint with per-route key selection and print
  the JSON body.
* ``classify PATH`` -- show the billing category and key category that a
  request to ``PATH`` would use.

Keys come from ``YOUSCORE_*_KEY`` variables (see :mod:`youscore.config`).
"""

from __future__ import annotations

import logging
import signal
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx
import typer

from youscore import __version__
from youscore.exceptions import ConnectionError_, InvalidUsageError, YouScoreError
from youscore.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="youscore",
    help="Query the YouScore business-data API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"youscore {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide debug output even with --verbose."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback: installs the output manager and logging level."""
    from youscore.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Report library errors on stderr and exit with their code."""
    from youscore.output import get_output

    try:
        yield
    except YouScoreError as exc:
        get_output().error(str(exc))
        raise typer.Exit(exc.exit_code) from exc
    except httpx.HTTPError as exc:
        err = ConnectionError_(f"Request failed: {exc}")
        get_output().error(str(err))
        raise typer.Exit(err.exit_code) from exc


def _parse_query(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise InvalidUsageError(f"Query parameters must look like name=value, got {pair!r}")
        params[name] = value
    return params


@app.command("limits")
def limits_command() -> None:
    """Show the rate limits of every configured API key."""
    from youscore.config import get_base_url, load_api_keys
    from youscore.output import get_output
    from youscore.rate_limits import check_rate_limits

    output = get_output()
    with _handle_errors():
        keys = load_api_keys()
        result = check_rate_limits(keys, base_url=get_base_url())

    rows: list[list[str]] = []
    for name, _ in keys.named():
        limits = getattr(result, name)
        if limits is None:
            continue
        rows.append([
            name,
            str(limits.requests_left),
            str(limits.total_limits),
            limits.actual_date.isoformat() if limits.actual_date else "",
        ])
    output.print_table(["key", "requests_left", "total_limits", "actual_date"], rows, title="Rate limits")


@app.command("get")
def get_command(
    path: str = typer.Argument(..., help="Endpoint path, e.g. /v1/usr/00032112."),
    query: Optional[list[str]] = typer.Option(
        None, "--query", "-Q", help="Query parameter as name=value (repeatable)."
    ),
) -> None:
    """GET an endpoint and print the response body."""
    from youscore.client import Client
    from youscore.config import get_base_url, load_api_keys, load_request_config
    from youscore.output import get_output

    output = get_output()

    def _report_usage(context: Any, api_type: Any, usage_path: str) -> None:
        output.debug(f"Usage: {api_type.value} {usage_path}")

    with _handle_errors():
        params = _parse_query(query or [])
        keys = load_api_keys()
        with Client(
            get_base_url(),
            api_keys=keys,
            usage_tracker=_report_usage,
            config=load_request_config(),
        ) as client:
            response = client.get(path, params=params or None)

    output.debug(f"HTTP {response.status_code}")
    try:
        data = response.json()
    except ValueError:
        data = response.text
    output.format_response(data)
    if response.is_error:
        output.error(f"HTTP {response.status_code}")
        raise typer.Exit(EXIT_GENERIC_FAILURE)


@app.command("classify")
def classify_command(
    path: str = typer.Argument(..., help="Endpoint path, e.g. /v1/sanctions."),
) -> None:
    """Show the billing category and API key category for a path."""
    from youscore.auth import key_name_for_path
    from youscore.output import get_output
    from youscore.usage import api_type_for_path

    get_output().format_response({
        "path": path,
        "api_type": api_type_for_path(path).value,
        "key": key_name_for_path(path),
    })


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """Console-script entry point."""
    _setup_signal_handlers()
    app()
