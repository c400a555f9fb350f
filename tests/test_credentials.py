"""Tests for the credential file store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from claude_oauth_login.credentials import CredentialStore
from claude_oauth_login.models import Credential, CredentialEnvelope
from claude_oauth_login.output import OutputManager, set_output
from claude_oauth_login.storage import FileStorage, MemoryStorage


def _credential(**overrides: object) -> Credential:
    data: dict[str, object] = {
        "access_token": "sk-ant-oat01-access",
        "refresh_token": "sk-ant-ort01-refresh",
        "expires_at": 1_700_003_600_000,
        "scopes": ["user:inference", "user:profile"],
    }
    data.update(overrides)
    return Credential(**data)  # type: ignore[arg-type]


@pytest.fixture()
def store(tmp_path: Path) -> CredentialStore:
    return CredentialStore(FileStorage(tmp_path / "credentials.json"))


class TestCredentialModels:
    def test_camel_case_serialisation(self) -> None:
        data = _credential().model_dump(by_alias=True)
        assert data == {
            "accessToken": "sk-ant-oat01-access",
            "refreshToken": "sk-ant-ort01-refresh",
            "expiresAt": 1_700_003_600_000,
            "scopes": ["user:inference", "user:profile"],
            "isMax": True,
        }

    def test_parse_from_aliases(self) -> None:
        credential = Credential.model_validate(
            {
                "accessToken": "a",
                "refreshToken": "r",
                "expiresAt": 1,
                "scopes": ["x"],
                "isMax": True,
            }
        )
        assert credential.access_token == "a"
        assert credential.scopes == ["x"]

    def test_envelope_key(self) -> None:
        envelope = CredentialEnvelope(claude_ai_oauth=_credential())
        assert list(envelope.model_dump(by_alias=True)) == ["claudeAiOauth"]


class TestSaveCredentials:
    def test_writes_envelope(self, store: CredentialStore) -> None:
        credential = _credential()
        assert store.save_credentials(credential) is True

        content = store.storage.path.read_text(encoding="utf-8")  # type: ignore[attr-defined]
        assert json.loads(content) == {
            "claudeAiOauth": {
                "accessToken": "sk-ant-oat01-access",
                "refreshToken": "sk-ant-ort01-refresh",
                "expiresAt": 1_700_003_600_000,
                "scopes": ["user:inference", "user:profile"],
                "isMax": True,
            }
        }

    def test_pretty_printed_with_two_spaces(self, store: CredentialStore) -> None:
        store.save_credentials(_credential())
        content = store.storage.path.read_text(encoding="utf-8")  # type: ignore[attr-defined]
        assert "\n" in content
        assert '\n  "claudeAiOauth"' in content
        assert '\n    "accessToken"' in content

    def test_overwrites_previous_file(self, store: CredentialStore) -> None:
        store.storage.write('{"stale": true, "padding": "' + "x" * 500 + '"}')
        store.save_credentials(_credential(access_token="new"))
        data = json.loads(store.storage.read() or "")
        assert data["claudeAiOauth"]["accessToken"] == "new"
        assert "stale" not in data

    def test_round_trip(self, store: CredentialStore) -> None:
        credential = _credential(scopes=["b", "a"])
        store.save_credentials(credential)
        assert store.load() == credential

    def test_write_failure_returns_false(
        self, plain_output: OutputManager, capsys: pytest.CaptureFixture[str]
    ) -> None:
        store = CredentialStore(MemoryStorage(write_error=OSError(28, "No space left on device")))
        assert store.save_credentials(_credential()) is False
        assert "Failed to save credentials" in capsys.readouterr().err


class TestLoad:
    def test_missing(self, store: CredentialStore) -> None:
        assert store.load() is None

    def test_corrupt(self) -> None:
        assert CredentialStore(MemoryStorage("not json")).load() is None

    def test_wrong_shape(self) -> None:
        assert CredentialStore(MemoryStorage('{"accessToken": "a"}')).load() is None

    def test_not_utf8(self, tmp_path: Path) -> None:
        target = tmp_path / "credentials.json"
        target.write_bytes(b"\xff\xfe\xfa garbage")
        assert CredentialStore(FileStorage(target)).load() is None

    def test_corrupt_logs_debug_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(no_color=True, verbose=True))
        store = CredentialStore(MemoryStorage("not json"))
        assert store.load() is None
        assert "[debug] Ignoring corrupt credentials file" in capsys.readouterr().err

    def test_unreadable_logs_debug_line(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        set_output(OutputManager(no_color=True, verbose=True))
        target = tmp_path / "credentials.json"
        target.mkdir()
        assert CredentialStore(FileStorage(target)).load() is None
        assert "[debug] Cannot read credentials file" in capsys.readouterr().err
