"""claude_oauth_login -- Two-phase OAuth 2.0 PKCE login for Claude credentials.

This package obtains an access/refresh token pair through the Authorization
Code flow with PKCE (:rfc:`7636`) and writes it to a JSON credential file
that CI pipelines can inject as a secret. A login takes two invocations::

    claude-oauth-login            # phase 1: print the authorize URL
    claude-oauth-login CODE       # phase 2: exchange the pasted code

Between the two phases a single pending-authorization record (state token
and code verifier) is kept on disk with a ten-minute lifetime.

Modules:
    app: Typer application and console-script entry point.
    flow: Phase orchestration mapping failures to exit codes.
    authorize: PKCE generation and authorize-URL construction.
    state_store: Single-slot pending-authorization store.
    exchange: Authorization-code-for-token exchange.
    credentials: Credential file persistence.
    storage: Storage handles (file-backed and in-memory).
    models: Pydantic models for the persisted records.
    config: Settings resolution from CLI flags, environment and defaults.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
