"""Numeric process exit codes.

Automation wrapping the two login phases only needs to distinguish success
from failure, so every failure in the login chain maps to
:data:`EXIT_GENERIC_FAILURE`. The diagnostic printed on stderr names the
failed step.

Example::

    $ claude-oauth-login "$CODE"
    $ echo $?
    1   # state expired, exchange rejected, or credentials not written
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""A step of the login chain failed."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
