"""Authorization request builder (phase 1).

Generates the random values of one login attempt, records them in the
:class:`~claude_oauth_login.state_store.StateStore`, and prints the
provider's authorize URL:

1. ``state`` -- 32 random bytes as lowercase hex (CSRF token).
2. ``code_verifier`` -- 32 random bytes as unpadded base64url.
3. ``code_challenge`` -- ``base64url(SHA-256(code_verifier))``, the PKCE
   ``S256`` method (:rfc:`7636` section 4.2).

Saving the state is best effort: when the state file cannot be written a
warning is printed and the URL is still returned, although the later
exchange will fail for lack of a verifier.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from typing import Optional
from urllib.parse import urlencode

from claude_oauth_login.config import LoginSettings, resolve_settings
from claude_oauth_login.output import print_url
from claude_oauth_login.state_store import StateStore
from claude_oauth_login.storage import FileStorage


def _base64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def generate_state() -> str:
    """Return a fresh 64-character lowercase hex state token."""
    return secrets.token_hex(32)


def compute_code_challenge(code_verifier: str) -> str:
    """Derive the S256 code challenge for *code_verifier*."""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return _base64url(digest)


def generate_pkce_pair() -> tuple[str, str]:
    """Generate a PKCE code_verifier and code_challenge (S256).

    Returns:
        A tuple of ``(code_verifier, code_challenge)``.
    """
    code_verifier = _base64url(secrets.token_bytes(32))
    return code_verifier, compute_code_challenge(code_verifier)


def build_authorize_url(
    settings: LoginSettings, state: str, code_challenge: str
) -> str:
    """Build the provider authorize URL for one login attempt."""
    params: dict[str, str] = {
        "code": "true",
        "client_id": settings.client_id,
        "response_type": "code",
        "redirect_uri": settings.redirect_uri,
        "scope": " ".join(settings.scopes),
        "code_challenge": code_challenge,
        "code_challenge_method": "S256",
        "state": state,
    }
    return f"{settings.authorize_url}?{urlencode(params)}"


def generate_login_url(
    settings: Optional[LoginSettings] = None,
    store: Optional[StateStore] = None,
) -> str:
    """Start a login: persist fresh PKCE state and print the authorize URL.

    Every call produces new random values and overwrites any pending
    authorization.

    Args:
        settings: Provider and file settings. Resolved from the environment
            when omitted.
        store: State store to write to. Defaults to a file store at
            ``settings.state_file``.

    Returns:
        The authorize URL, which is also written to stdout.
    """
    if settings is None:
        settings = resolve_settings()
    if store is None:
        store = StateStore(FileStorage(settings.state_file))

    state = generate_state()
    code_verifier, code_challenge = generate_pkce_pair()

    store.save(state, code_verifier)

    url = build_authorize_url(settings, state, code_challenge)
    print_url(url)
    return url
