"""Pydantic models for the records claude_oauth_login reads and writes.

**Pending authorization** -- the single record kept between phase 1 and
phase 2. Serialised with snake_case keys::

    {"state": "...", "code_verifier": "...", "timestamp": 1700000000,
     "expires_at": 1700000600}

**Credential** -- the result of a successful exchange. Serialised with
camelCase keys inside a ``claudeAiOauth`` envelope, the layout Claude
tooling reads from its credentials file::

    {"claudeAiOauth": {"accessToken": "...", "refreshToken": "...",
                       "expiresAt": 1700003600000, "scopes": [...],
                       "isMax": true}}

**Token response** -- the provider's token endpoint payload.

All models use Pydantic v2. Callers serialise the credential models with
``model_dump(by_alias=True)`` so the on-disk keys stay camelCase.
"""

from __future__ import annotations

import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

STATE_TTL_SECONDS = 600
"""Lifetime of a pending authorization, in seconds."""

DEFAULT_SCOPES: tuple[str, ...] = ("user:inference", "user:profile")
"""Scopes recorded when the token response carries no ``scope`` field."""


# --- Pending authorization ---


class PendingAuthorization(BaseModel):
    """The pending-authorization record persisted between the two phases.

    Attributes:
        state: Opaque CSRF token sent with the authorize request.
        code_verifier: PKCE verifier; only leaves the machine at exchange time.
        timestamp: Issuance time in whole seconds since the epoch.
        expires_at: ``timestamp + 600``.
    """

    state: str
    code_verifier: str
    timestamp: int
    expires_at: int

    @classmethod
    def issue(
        cls,
        state: str,
        code_verifier: str,
        now: Optional[int] = None,
    ) -> PendingAuthorization:
        """Create a record issued at *now* with the fixed ten-minute TTL."""
        issued = int(time.time()) if now is None else now
        return cls(
            state=state,
            code_verifier=code_verifier,
            timestamp=issued,
            expires_at=issued + STATE_TTL_SECONDS,
        )

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Return ``True`` once the current time is past ``expires_at``."""
        current = time.time() if now is None else now
        return current > self.expires_at


# --- Credential ---


class Credential(BaseModel):
    """Bearer credential obtained from a successful code exchange.

    Attributes:
        access_token: Bearer token for API calls.
        refresh_token: Token for obtaining new access tokens.
        expires_at: Absolute expiry in milliseconds since the epoch.
        scopes: Granted scopes in provider order.
        is_max: Account tier flag; always ``True``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: str
    expires_at: int
    scopes: list[str] = Field(default_factory=lambda: list(DEFAULT_SCOPES))
    is_max: bool = True


class CredentialEnvelope(BaseModel):
    """Top-level object of the credentials file."""

    model_config = ConfigDict(populate_by_name=True)

    claude_ai_oauth: Credential = Field(alias="claudeAiOauth")


# --- Token endpoint ---


class TokenResponse(BaseModel):
    """Successful response body of the token endpoint.

    Unknown fields (``token_type``, account details) are kept in
    ``model_extra`` and otherwise ignored.
    """

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str
    expires_in: int
    scope: Optional[str] = None
