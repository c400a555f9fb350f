"""Credential file persistence.

Writes the credential produced by a successful exchange as pretty-printed
JSON wrapped in the ``claudeAiOauth`` envelope, fully replacing any
previous content. The file is plaintext; it is meant to be copied into a
CI secret right after login.

Unlike the state file, failing to write credentials fails the whole login.
"""

from __future__ import annotations

import json
from typing import Optional

from pydantic import ValidationError

from claude_oauth_login.models import Credential, CredentialEnvelope
from claude_oauth_login.output import debug, error
from claude_oauth_login.storage import Storage


class CredentialStore:
    """Read/write the credential file through a :class:`Storage` slot.

    Args:
        storage: The slot holding the serialised envelope.

    Example::

        store = CredentialStore(FileStorage("credentials.json"))
        if store.save_credentials(credential):
            assert store.load() == credential
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    @property
    def storage(self) -> Storage:
        """The underlying storage slot."""
        return self._storage

    def save_credentials(self, credential: Credential) -> bool:
        """Persist *credential*, overwriting any previous file.

        Returns:
            ``True`` on success, ``False`` if the write failed.
        """
        envelope = CredentialEnvelope(claude_ai_oauth=credential)
        text = json.dumps(envelope.model_dump(mode="json", by_alias=True), indent=2)
        try:
            self._storage.write(text)
        except OSError as exc:
            error(f"Failed to save credentials: {exc}")
            return False
        debug(f"Saved credentials to {self._storage.location}")
        return True

    def load(self) -> Optional[Credential]:
        """Load the stored credential.

        Returns:
            The credential, or ``None`` if the file does not exist or cannot
            be parsed.
        """
        try:
            text = self._storage.read()
        except (OSError, UnicodeDecodeError) as exc:
            debug(f"Cannot read credentials file {self._storage.location}: {exc}")
            return None
        if text is None:
            return None
        try:
            envelope = CredentialEnvelope.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            debug(f"Ignoring corrupt credentials file {self._storage.location}: {exc}")
            return None
        return envelope.claude_ai_oauth
