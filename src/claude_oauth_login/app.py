"""Typer application and CLI entry point for claude_oauth_login.

The tool is a single command whose behaviour depends on the number of
positional arguments:

* no argument -- phase 1, print the authorize URL on stdout (exit 0);
* one argument -- phase 2, exchange the pasted code and write the
  credential file (exit 0 on success, 1 on any failure).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`claude_oauth_login.flow`: The two phases.
    :mod:`claude_oauth_login.output`: Output initialised in :func:`main_command`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from claude_oauth_login import __version__
from claude_oauth_login.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="claude-oauth-login",
    help="Log in to Claude with OAuth 2.0 + PKCE and save credentials for CI use.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"claude-oauth-login {__version__}")
        raise typer.Exit()


@app.command()
def main_command(
    code: Optional[str] = typer.Argument(
        None,
        help="Authorization code from the callback page. Omit to print the login URL.",
        show_default=False,
    ),
    state_file: Optional[Path] = typer.Option(
        None,
        "--state-file",
        help="Pending-authorization file (env: CLAUDE_OAUTH_STATE_FILE).",
    ),
    credentials_file: Optional[Path] = typer.Option(
        None,
        "--credentials-file",
        help="Credential output file (env: CLAUDE_OAUTH_CREDENTIALS_FILE).",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Generate an OAuth login URL, or exchange CODE for credentials.

    Run once without arguments and open the printed URL. After approving
    access, run again with the code shown on the callback page.
    """
    from claude_oauth_login.config import resolve_settings
    from claude_oauth_login.exceptions import LoginError
    from claude_oauth_login.flow import complete_login, start_login
    from claude_oauth_login.output import OutputManager, error, set_output, success, suggest

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))

    try:
        settings = resolve_settings(state_file, credentials_file)
        if code is None:
            start_login(settings)
            suggest("Open the URL, approve access, then run: claude-oauth-login <code>")
            return

        complete_login(code, settings)
    except LoginError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Credentials saved to {settings.credentials_file}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from claude_oauth_login.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``claude-oauth-login`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from claude_oauth_login.output import error

        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
