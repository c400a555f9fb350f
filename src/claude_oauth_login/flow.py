"""Phase orchestration for the two-step login.

:func:`start_login` is phase 1 and never fails because of storage.
:func:`complete_login` is phase 2: it runs state verification, code
exchange, credential persistence and state cleanup in that order and
raises a :class:`~claude_oauth_login.exceptions.LoginError` subclass naming
the first step that failed. Cleanup problems are only warned about, since
the credential is already on disk by then.
"""

from __future__ import annotations

from typing import Optional

import httpx

from claude_oauth_login.authorize import generate_login_url
from claude_oauth_login.config import LoginSettings
from claude_oauth_login.credentials import CredentialStore
from claude_oauth_login.exceptions import (
    CredentialSaveError,
    StateError,
    TokenExchangeError,
)
from claude_oauth_login.exchange import TokenExchanger
from claude_oauth_login.models import Credential
from claude_oauth_login.state_store import StateStore
from claude_oauth_login.storage import FileStorage


def start_login(
    settings: LoginSettings, store: Optional[StateStore] = None
) -> str:
    """Run phase 1 and return the authorize URL."""
    if store is None:
        store = StateStore(FileStorage(settings.state_file))
    return generate_login_url(settings, store)


def complete_login(
    code: str,
    settings: LoginSettings,
    state_store: Optional[StateStore] = None,
    credential_store: Optional[CredentialStore] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Credential:
    """Run phase 2 for the pasted authorization *code*.

    Returns:
        The credential that was written.

    Raises:
        StateError: No pending authorization, or it has expired.
        TokenExchangeError: The token endpoint rejected the code or could
            not be reached.
        CredentialSaveError: The credential file could not be written.
    """
    if state_store is None:
        state_store = StateStore(FileStorage(settings.state_file))
    if credential_store is None:
        credential_store = CredentialStore(FileStorage(settings.credentials_file))

    if not state_store.verify():
        raise StateError("State verification failed.")

    exchanger = TokenExchanger(state_store, settings, transport=transport)
    credential = exchanger.exchange_code(code)
    if credential is None:
        raise TokenExchangeError("Failed to exchange the authorization code for tokens.")

    if not credential_store.save_credentials(credential):
        raise CredentialSaveError("Failed to save credentials.")

    state_store.cleanup()
    return credential
