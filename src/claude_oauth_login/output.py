"""Console output for the login tool.

The tool writes exactly one thing to **stdout**: the authorize URL printed
by phase 1, so a wrapper script can capture it with ``$(...)``. Everything
else goes to **stderr** through one of five channels:

========== ============== ================ =====================
channel    prefix         hidden when      style
========== ============== ================ =====================
success    (none)         ``--quiet``      green
warning    ``Warning:``   never            yellow
error      ``Error:``     never            bold red
suggest    ``→``          ``--quiet``      dim
debug      ``[debug]``    not ``-v``       dim
========== ============== ================ =====================

Colour is dropped for ``--no-color``, ``NO_COLOR`` and ``TERM=dumb``; lines
are then written with plain ``print`` so tests and log scrapers see the
exact text.

:func:`~claude_oauth_login.app.main_command` installs an
:class:`OutputManager` with :func:`set_output`; library modules call the
module-level functions (:func:`warning`, :func:`error`, :func:`debug`, ...)
so no manager has to be threaded through the stores.
"""

from __future__ import annotations

import os
import sys
from typing import NamedTuple, Optional

from rich.console import Console
from rich.markup import escape


class Channel(NamedTuple):
    """How one kind of diagnostic line is rendered on stderr."""

    prefix: str
    style: str
    quiet_hides: bool = False
    needs_verbose: bool = False


SUCCESS = Channel("", "green", quiet_hides=True)
WARNING = Channel("Warning: ", "yellow")
ERROR = Channel("Error: ", "bold red")
SUGGEST = Channel("→ ", "dim", quiet_hides=True)
DEBUG = Channel("[debug] ", "dim", needs_verbose=True)


class OutputManager:
    """Routes the URL to stdout and diagnostics to stderr.

    Args:
        no_color: Disable colour and Rich markup.
        quiet: Hide success and suggestion lines.
        verbose: Show debug lines.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            soft_wrap=True,
        )

    def print_url(self, url: str) -> None:
        """Write *url* to stdout on its own line, with no styling."""
        print(url, file=sys.stdout, flush=True)

    def emit(self, channel: Channel, message: str) -> None:
        """Write *message* to stderr on *channel*, unless the flags hide it."""
        if channel.quiet_hides and self._quiet:
            return
        if channel.needs_verbose and not self._verbose:
            return
        line = f"{channel.prefix}{message}"
        if self._no_color:
            print(line, file=sys.stderr, flush=True)
        else:
            # Messages carry paths and response bodies; never parse them as markup.
            self._stderr.print(escape(line), style=channel.style)

    def success(self, message: str) -> None:
        self.emit(SUCCESS, message)

    def warning(self, message: str) -> None:
        self.emit(WARNING, message)

    def error(self, message: str) -> None:
        self.emit(ERROR, message)

    def suggest(self, message: str) -> None:
        self.emit(SUGGEST, message)

    def debug(self, message: str) -> None:
        self.emit(DEBUG, message)


def _should_disable_color() -> bool:
    """Return True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


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
    """Forget the installed manager (used between tests)."""
    global _output
    _output = None


def print_url(url: str) -> None:
    get_output().print_url(url)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
