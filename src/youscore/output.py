"""Console rendering for the ``youscore`` command line tool.

API payloads and tables go to stdout; errors and ``--verbose`` traces go
to stderr, so ``youscore --json get ... | jq`` only ever sees the body.
The active manager is installed by the CLI callback with
:func:`set_output` and fetched by commands with :func:`get_output`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Rendering of stdout.  ``AUTO`` means ``RICH`` on a colour TTY, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Renders API payloads and CLI diagnostics.

    Args:
        format: Requested stdout format.
        no_color: Disable colour and Rich markup.  ``NO_COLOR`` and
            ``TERM=dumb`` have the same effect.
        quiet: Hide debug traces even when *verbose* is set.
        verbose: Show debug traces (usage reports, HTTP status) on stderr.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _color_disabled_by_env()
        self._show_debug = verbose and not quiet
        if format == OutputFormat.AUTO:
            rich = sys.stdout.isatty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    def format_response(self, data: Any) -> None:
        """Print a decoded response body (or any JSON-like value)."""
        if self._format == OutputFormat.JSON:
            _emit(_to_json(data))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                _emit(line)
        elif isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a Rich table, a JSON array of records, or TSV."""
        if self._format == OutputFormat.JSON:
            _emit(_to_json([dict(zip(headers, row)) for row in rows]))
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                _emit("\t".join(line))
        else:
            table = Table(title=title, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    def error(self, message: str) -> None:
        self._diagnostic("Error:", "bold red", message)

    def debug(self, message: str) -> None:
        if self._show_debug:
            self._diagnostic("[debug]", "dim", message)

    def _diagnostic(self, label: str, style: str, message: str) -> None:
        if self._no_color:
            print(f"{label} {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"{label} {message}", style=style, markup=False, highlight=False)


def _emit(text: str) -> None:
    print(text, file=sys.stdout, flush=True)


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> Iterator[str]:
    # dict -> "key<TAB>value"; list of dicts -> one TSV row per record.
    if isinstance(data, dict):
        for key, value in data.items():
            yield f"{key}\t{value}"
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                yield "\t".join(str(v) for v in item.values())
            else:
                yield str(item)
    else:
        yield str(data)


def _color_disabled_by_env() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (the test suite calls this between tests)."""
    global _output
    _output = None
