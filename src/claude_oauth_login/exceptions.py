"""Exception hierarchy for claude_oauth_login.

All exceptions inherit from :class:`LoginError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`claude_oauth_login.exit_codes`. The top-level error handler in
:func:`claude_oauth_login.app.main` catches ``LoginError`` and exits with
the appropriate code, while unexpected exceptions produce a crash log and
exit with :data:`EXIT_GENERIC_FAILURE`.

The component layer (state store, exchanger, credential store) reports
failure through return values; :mod:`claude_oauth_login.flow` raises these
exceptions when it turns a failed step into a failed invocation.

Subclass hierarchy::

    LoginError (exit 1)
    +-- ConfigError         (exit 1)
    +-- StateError          (exit 1)
    +-- TokenExchangeError  (exit 1)
    +-- CredentialSaveError (exit 1)
"""

from claude_oauth_login.exit_codes import EXIT_GENERIC_FAILURE


class LoginError(Exception):
    """Base exception for all claude_oauth_login errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(LoginError):
    """Raised for configuration problems (bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE


class StateError(LoginError):
    """Raised when no pending authorization exists or it has expired."""

    exit_code = EXIT_GENERIC_FAILURE


class TokenExchangeError(LoginError):
    """Raised when the authorization code could not be exchanged for tokens."""

    exit_code = EXIT_GENERIC_FAILURE


class CredentialSaveError(LoginError):
    """Raised when the credential file could not be written."""

    exit_code = EXIT_GENERIC_FAILURE
