"""Shared test fixtures for claude_oauth_login.

Provides reusable fixtures for isolating the working directory and
environment, managing output state, building pending-authorization
records, and running the CLI. These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from claude_oauth_login.config import LoginSettings
from claude_oauth_login.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stderr at creation time.
    When Typer's CliRunner redirects that stream during a test and the test
    finishes, the cached reference becomes stale ("I/O operation on closed
    file"). Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside tmp_path with a clean environment.

    Points XDG_DATA_HOME into tmp_path, clears all CLAUDE_OAUTH_*
    variables and NO_COLOR, and changes the working directory so the
    default state and credential files land in tmp_path.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "CLAUDE_OAUTH_STATE_FILE",
        "CLAUDE_OAUTH_CREDENTIALS_FILE",
        "CLAUDE_OAUTH_TIMEOUT",
        "NO_COLOR",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(tmp_path: Path) -> LoginSettings:
    """Settings whose state and credential files live in tmp_path."""
    return LoginSettings(
        state_file=tmp_path / "claude_oauth_state.json",
        credentials_file=tmp_path / "credentials.json",
    )


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a colourless output manager so stderr text is predictable."""
    output = OutputManager(no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Record helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def pending_record() -> Callable[..., dict[str, Any]]:
    """Factory for pending-authorization dicts as stored on disk."""

    def _make(
        state: str = "a" * 64,
        code_verifier: str = "test-verifier",
        age: int = 0,
    ) -> dict[str, Any]:
        timestamp = int(time.time()) - age
        return {
            "state": state,
            "code_verifier": code_verifier,
            "timestamp": timestamp,
            "expires_at": timestamp + 600,
        }

    return _make


@pytest.fixture
def write_state_file() -> Callable[[Path, dict[str, Any]], None]:
    """Write a pending-authorization dict as pretty-printed JSON."""

    def _write(path: Path, record: dict[str, Any]) -> None:
        path.write_text(json.dumps(record, indent=2), encoding="utf-8")

    return _write


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def token_endpoint() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build a MockTransport that answers every request with a fixed response.

    Returns a factory ``(status_code=200, payload=None, text=None)`` giving the
    transport and the list of requests it received.
    """

    def _make(
        status_code: int = 200,
        payload: Any = None,
        text: str | None = None,
    ) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=payload)

        return httpx.MockTransport(handler), seen

    return _make


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
