"""Authorization-code-for-token exchange (phase 2).

:class:`TokenExchanger` turns the code the user pasted from the provider's
callback page into a :class:`~claude_oauth_login.models.Credential`:

1. Strip redirect noise from the pasted value (see :func:`sanitize_code`).
2. Load the pending authorization; without it no request is made.
3. POST a JSON ``authorization_code`` grant carrying the stored
   ``code_verifier`` and ``state`` to the token endpoint.
4. Map the token payload to a credential with an absolute expiry.

Every failure (missing state, non-2xx status, transport error, malformed
payload) is printed on stderr and reported as ``None``. There are no
retries: a rejected code cannot succeed on a second attempt, and the user
restarts from phase 1 instead.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from claude_oauth_login.config import LoginSettings
from claude_oauth_login.models import DEFAULT_SCOPES, Credential, TokenResponse
from claude_oauth_login.output import debug, error, warning
from claude_oauth_login.state_store import StateStore

# The token endpoint is operated for the claude.ai web app and expects
# browser-like requests.
BROWSER_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
    ),
    "Origin": "https://claude.ai",
    "Referer": "https://claude.ai/",
}


def sanitize_code(raw_code: str) -> str:
    """Return the bare authorization code from a pasted value.

    The callback page shows ``<code>#<state>`` and browsers may append
    query noise, so everything from the first ``#`` or ``&`` is dropped.

    Example::

        >>> sanitize_code("actual-code#fragment&other=param")
        'actual-code'
    """
    return raw_code.strip().split("#")[0].split("&")[0]


def _pasted_state(raw_code: str) -> Optional[str]:
    """Return the state echoed after ``#`` in a pasted value, if any."""
    if "#" not in raw_code:
        return None
    fragment = raw_code.strip().split("#", 1)[1].split("&")[0]
    return fragment or None


def credential_from_token_response(
    token: TokenResponse, now: Optional[int] = None
) -> Credential:
    """Map a token payload to a credential.

    ``expires_at`` is ``(now + expires_in) * 1000`` in milliseconds. A
    missing or empty ``scope`` falls back to :data:`DEFAULT_SCOPES`.
    """
    issued = int(time.time()) if now is None else now
    if token.scope:
        scopes = token.scope.split(" ")
    else:
        scopes = list(DEFAULT_SCOPES)
    return Credential(
        access_token=token.access_token,
        refresh_token=token.refresh_token,
        expires_at=(issued + token.expires_in) * 1000,
        scopes=scopes,
        is_max=True,
    )


class TokenExchanger:
    """Exchange an authorization code for a credential.

    Args:
        store: State store holding the pending authorization.
        settings: Provider endpoints, client id and request timeout.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        exchanger = TokenExchanger(StateStore(FileStorage(path)), settings)
        credential = exchanger.exchange_code(pasted_code)
    """

    def __init__(
        self,
        store: StateStore,
        settings: Optional[LoginSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._store = store
        self._settings = settings or LoginSettings()
        self._transport = transport

    def exchange_code(self, raw_code: str) -> Optional[Credential]:
        """Exchange *raw_code* for a credential.

        Args:
            raw_code: The code as pasted, possibly with ``#state`` or query
                noise appended.

        Returns:
            The mapped :class:`Credential`, or ``None`` on any failure.
        """
        code = sanitize_code(raw_code)

        pending = self._store.load()
        if pending is None:
            error("No pending authorization found; cannot exchange the code.")
            return None

        echoed = _pasted_state(raw_code)
        if echoed is not None and echoed != pending.state:
            warning(
                "State in the pasted code does not match the pending "
                "authorization; using the stored state."
            )

        body: dict[str, Any] = {
            "grant_type": "authorization_code",
            "client_id": self._settings.client_id,
            "code": code,
            "redirect_uri": self._settings.redirect_uri,
            "code_verifier": pending.code_verifier,
            "state": pending.state,
        }

        debug(f"POST {self._settings.token_url}")
        try:
            with httpx.Client(
                timeout=self._settings.timeout, transport=self._transport
            ) as client:
                response = client.post(
                    self._settings.token_url,
                    json=body,
                    headers=BROWSER_HEADERS,
                )
        except httpx.HTTPError as exc:
            error(f"Token exchange failed: {exc}")
            return None

        if not response.is_success:
            error(
                f"Token exchange failed with status {response.status_code}: "
                f"{response.text}"
            )
            return None

        try:
            token = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            error(f"Token exchange returned an unexpected payload: {exc}")
            return None

        return credential_from_token_response(token)
