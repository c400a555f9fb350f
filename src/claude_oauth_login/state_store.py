"""Single-slot store for the pending authorization.

Phase 1 writes one :class:`~claude_oauth_login.models.PendingAuthorization`
holding the ``state`` token and PKCE ``code_verifier``; phase 2 reads it
back, checks its ten-minute lifetime, and removes it once the credential
has been written. Only one login can be pending at a time: every
:meth:`StateStore.save` overwrites the previous record.

None of the operations raise to the caller. I/O problems surface as
warnings on stderr and as ``None``/``False`` return values, so the caller
decides whether the failure ends the invocation.

See Also:
    :mod:`claude_oauth_login.authorize` -- writes the record.
    :mod:`claude_oauth_login.exchange` -- consumes the record.
"""

from __future__ import annotations

import json
import time
from typing import Optional

from pydantic import ValidationError

from claude_oauth_login.models import PendingAuthorization
from claude_oauth_login.output import debug, error, warning
from claude_oauth_login.storage import Storage


class StateStore:
    """Read/write the pending authorization through a :class:`Storage` slot.

    Args:
        storage: The slot holding the serialised record.

    Example::

        store = StateStore(FileStorage("claude_oauth_state.json"))
        store.save(state, verifier)
        if store.verify():
            pending = store.load()
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    @property
    def storage(self) -> Storage:
        """The underlying storage slot."""
        return self._storage

    def save(
        self, state: str, code_verifier: str
    ) -> Optional[PendingAuthorization]:
        """Persist a fresh record, replacing any previous one.

        A write failure is reported as a warning and otherwise ignored.

        Returns:
            The record that was written, or ``None`` if the write failed.
        """
        pending = PendingAuthorization.issue(state, code_verifier)
        text = json.dumps(pending.model_dump(mode="json"), indent=2)
        try:
            self._storage.write(text)
        except OSError as exc:
            warning(f"Could not save state file: {exc}")
            return None
        debug(f"Saved pending authorization to {self._storage.location}")
        return pending

    def load(self) -> Optional[PendingAuthorization]:
        """Load the pending record.

        Returns:
            The deserialised record, or ``None`` if it does not exist, cannot
            be read, or does not parse.
        """
        try:
            text = self._storage.read()
        except (OSError, UnicodeDecodeError) as exc:
            debug(f"Cannot read state file {self._storage.location}: {exc}")
            return None
        if text is None:
            return None
        try:
            return PendingAuthorization.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            debug(f"Ignoring corrupt state file {self._storage.location}: {exc}")
            return None

    def verify(self) -> bool:
        """Check that a pending record exists and has not expired.

        Prints a diagnostic naming the failed check.

        Returns:
            ``True`` if the record can be used for an exchange.
        """
        pending = self.load()
        if pending is None:
            error("No state file found. Please run the login command first.")
            return False
        if pending.is_expired(time.time()):
            error("State has expired. Please run the login command again.")
            return False
        return True

    def cleanup(self) -> None:
        """Remove the pending record.

        An already-missing record counts as removed; any other failure is
        reported as a warning.
        """
        try:
            self._storage.delete()
        except OSError as exc:
            warning(f"Could not clean up state file: {exc}")
