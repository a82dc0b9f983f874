"""Terminal output for the specbind CLI.

Two streams, two purposes:

* **stdout** carries the product of a command: generated module source
  from ``specbind generate``, the binding table from ``specbind inspect``.
  ``specbind generate spec.json > cli.py`` must capture nothing else.
* **stderr** carries everything said *about* the run (progress, success,
  hints, errors, debug traces).

Rich styling is used only when stdout is a terminal and colour has not been
turned off (``--no-color``, ``NO_COLOR``, ``TERM=dumb``). Piped output is
always plain.

:class:`OutputManager` holds the resolved settings. The CLI callback in
:mod:`specbind.app` installs one with :func:`set_output`; library code
reports through the module-level helpers (:func:`info`, :func:`debug`, ...)
so it never has to be handed a manager.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How data written to stdout is rendered.

    ``AUTO`` becomes ``RICH`` on a colour-capable terminal and ``PLAIN``
    everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Route data to stdout and diagnostics to stderr.

    Args:
        format: Rendering for stdout data. ``AUTO`` is resolved here.
        no_color: Never emit colour or Rich markup.
        quiet: Drop informational messages (errors are always shown).
        verbose: Show :meth:`debug` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    # --- stdout ---

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Print *data* as indented JSON."""
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def print_source(self, source: str) -> None:
        """Print a generated module.

        Syntax-highlighted in ``RICH`` mode. In every other mode the text is
        written unchanged so it can be redirected into a ``.py`` file.
        """
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(source, "python", theme="monokai", word_wrap=True))
            return
        sys.stdout.write(source)
        sys.stdout.flush()

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*.

        ``JSON`` gives a list of objects keyed by header, ``PLAIN`` gives
        tab-separated lines with a header line, ``RICH`` gives a styled
        table with *title*.
        """
        if self._format == OutputFormat.JSON:
            self.print_json([dict(zip(headers, row)) for row in rows])
            return
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # --- stderr ---

    def _diagnostic(self, plain: str, styled: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(styled)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, f"[green]{message}[/green]")

    def suggest(self, message: str) -> None:
        """Print a next-step hint, prefixed with an arrow."""
        if not self._quiet:
            self._diagnostic(f"→ {message}", f"[dim]→ {message}[/dim]")

    def error(self, message: str) -> None:
        """Print an error. Shown even in quiet mode."""
        self._diagnostic(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Print a ``[debug]`` line when verbose."""
        if self._verbose:
            self._diagnostic(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# --- process-wide manager ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating an ``AUTO`` one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap stdout/stderr between runs)."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
