"""Tests for the console-script entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from claude_oauth_login import app as app_module
from claude_oauth_login.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


class TestMain:
    def test_unexpected_error_writes_crash_log(
        self,
        isolated_env: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def boom() -> None:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "app", boom)
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)

        with pytest.raises(SystemExit) as exc_info:
            app_module.main()

        assert exc_info.value.code == EXIT_GENERIC_FAILURE
        assert "Unexpected error" in capsys.readouterr().err
        logs = list((isolated_env / "data" / "claude-oauth-login" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "kaboom" in logs[0].read_text()

    def test_keyboard_interrupt(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def interrupted() -> None:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "app", interrupted)
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)

        with pytest.raises(SystemExit) as exc_info:
            app_module.main()

        assert exc_info.value.code == EXIT_INTERRUPTED
        assert "Cancelled" in capsys.readouterr().err

    def test_system_exit_passes_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def done() -> None:
            raise SystemExit(0)

        monkeypatch.setattr(app_module, "app", done)
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)

        with pytest.raises(SystemExit) as exc_info:
            app_module.main()
        assert exc_info.value.code == 0
