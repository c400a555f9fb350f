"""Settings resolution with XDG data paths and precedence handling.

This module handles all configuration for claude_oauth_login:

* **Provider constants** -- client id, authorize/token endpoints, redirect
  URI and requested scopes of the Claude OAuth application.
* **Settings** -- a :class:`LoginSettings` model combining the constants
  with the two file locations and the HTTP timeout.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables, and defaults into the effective settings.
* **Data directory** -- :func:`get_data_dir` returns the XDG-compliant
  directory used for crash logs.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from claude_oauth_login.exceptions import ConfigError

_APP_NAME = "claude-oauth-login"

OAUTH_AUTHORIZE_URL = "https://claude.ai/oauth/authorize"
OAUTH_TOKEN_URL = "https://console.anthropic.com/v1/oauth/token"
OAUTH_CLIENT_ID = "9d1c250a-e61b-44d9-88ed-5944d1962f5e"
OAUTH_REDIRECT_URI = "https://console.anthropic.com/oauth/code/callback"
OAUTH_SCOPES: tuple[str, ...] = ("org:create_api_key", "user:profile", "user:inference")

DEFAULT_STATE_FILE = "claude_oauth_state.json"
DEFAULT_CREDENTIALS_FILE = "credentials.json"
DEFAULT_TIMEOUT = 30.0

ENV_STATE_FILE = "CLAUDE_OAUTH_STATE_FILE"
ENV_CREDENTIALS_FILE = "CLAUDE_OAUTH_CREDENTIALS_FILE"
ENV_TIMEOUT = "CLAUDE_OAUTH_TIMEOUT"


class LoginSettings(BaseModel):
    """Effective settings for one invocation.

    Relative file paths are resolved against the working directory at use
    time, so a CI job finds the files where it ran the previous phase.
    """

    client_id: str = OAUTH_CLIENT_ID
    authorize_url: str = OAUTH_AUTHORIZE_URL
    token_url: str = OAUTH_TOKEN_URL
    redirect_uri: str = OAUTH_REDIRECT_URI
    scopes: list[str] = Field(default_factory=lambda: list(OAUTH_SCOPES))
    state_file: Path = Path(DEFAULT_STATE_FILE)
    credentials_file: Path = Path(DEFAULT_CREDENTIALS_FILE)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/claude-oauth-login/`` (default
    ``~/.local/share/claude-oauth-login/``).
    On macOS/Windows: ``~/.claude-oauth-login/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Precedence resolution ---


def _env_timeout() -> Optional[float]:
    raw = os.environ.get(ENV_TIMEOUT)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_TIMEOUT} must be a number, got '{raw}'") from exc
    if value <= 0:
        raise ConfigError(f"{ENV_TIMEOUT} must be positive, got '{raw}'")
    return value


def resolve_settings(
    cli_state_file: Optional[Path] = None,
    cli_credentials_file: Optional[Path] = None,
) -> LoginSettings:
    """Resolve settings with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``--state-file``, ``--credentials-file``)
        2. Environment variables (``CLAUDE_OAUTH_STATE_FILE``,
           ``CLAUDE_OAUTH_CREDENTIALS_FILE``, ``CLAUDE_OAUTH_TIMEOUT``)
        3. Defaults

    Raises:
        ConfigError: If an environment variable holds an invalid value.
    """
    settings = LoginSettings()

    env_state = os.environ.get(ENV_STATE_FILE)
    if env_state:
        settings.state_file = Path(env_state)
    env_credentials = os.environ.get(ENV_CREDENTIALS_FILE)
    if env_credentials:
        settings.credentials_file = Path(env_credentials)
    timeout = _env_timeout()
    if timeout is not None:
        settings.timeout = timeout

    if cli_state_file is not None:
        settings.state_file = cli_state_file
    if cli_credentials_file is not None:
        settings.credentials_file = cli_credentials_file

    return settings
