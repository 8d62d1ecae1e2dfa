from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials

from ytrelay.exceptions import AuthError
from ytrelay.schemas.auth import TokenSet
from ytrelay.services.token_manager import TokenManager


def _epoch_ms(delta: timedelta) -> int:
    return int((datetime.now(timezone.utc) + delta).timestamp() * 1000)


def _fail_refresh(self, request) -> None:
    raise AssertionError("refresh should not be called")


def test_env_refresh_token_is_adopted(settings) -> None:
    settings.refresh_token = "env-refresh"
    manager = TokenManager(settings)

    assert manager.has_refresh_token
    assert manager.tokens == TokenSet(refresh_token="env-refresh")
    assert not Path(settings.tokens_file).exists()


def test_missing_client_config_only_warns(settings, caplog) -> None:
    settings.client_secret = None
    manager = TokenManager(settings)

    assert not manager.is_configured
    assert "are not all set" in caplog.text


def test_load_persisted_supersedes_env_token(settings) -> None:
    stored = TokenSet(
        access_token="stored-access",
        refresh_token="stored-refresh",
        token_type="Bearer",
        expiry_date=_epoch_ms(timedelta(hours=1)),
    )
    Path(settings.tokens_file).write_text(json.dumps(stored.model_dump(exclude_none=True)))
    settings.refresh_token = "env-refresh"

    manager = TokenManager(settings)
    assert manager.load_persisted() == stored
    assert manager.tokens == stored


def test_load_persisted_ignores_corrupt_file(token_manager, settings, caplog) -> None:
    Path(settings.tokens_file).write_text("{not json")

    assert token_manager.load_persisted() is None
    assert token_manager.tokens is None
    assert "Ignoring token file" in caplog.text


def test_load_persisted_without_file(token_manager) -> None:
    assert token_manager.load_persisted() is None
    assert token_manager.tokens is None


def test_set_tokens_overwrites_store(token_manager, settings) -> None:
    token_manager.set_tokens(TokenSet(access_token="one", refresh_token="r1"))
    token_manager.set_tokens(TokenSet(access_token="two"))

    saved = json.loads(Path(settings.tokens_file).read_text())
    assert saved == {"access_token": "two"}
    assert token_manager.tokens == TokenSet(access_token="two")


def test_set_tokens_keeps_memory_when_write_fails(settings, tmp_path, caplog) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    settings.tokens_file = str(blocker / "youtube_tokens.json")
    manager = TokenManager(settings)

    manager.set_tokens(TokenSet(access_token="memory-only"))

    assert manager.tokens.access_token == "memory-only"
    assert "kept in memory only" in caplog.text


def test_valid_access_token_skips_refresh(token_manager, monkeypatch) -> None:
    monkeypatch.setattr(Credentials, "refresh", _fail_refresh)
    token_manager.set_tokens(
        TokenSet(
            access_token="cached",
            refresh_token="refresh",
            expiry_date=_epoch_ms(timedelta(hours=1)),
        )
    )

    assert token_manager.get_valid_access_token() == "cached"


def test_expired_token_is_refreshed_once(token_manager, settings, monkeypatch) -> None:
    calls = []

    def fake_refresh(self, request) -> None:
        calls.append(request)
        self.token = "fresh"
        self.expiry = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=1)

    monkeypatch.setattr(Credentials, "refresh", fake_refresh)
    token_manager.set_tokens(
        TokenSet(
            access_token="stale",
            refresh_token="refresh",
            expiry_date=_epoch_ms(timedelta(hours=-1)),
        )
    )

    assert token_manager.get_valid_access_token() == "fresh"
    assert len(calls) == 1
    assert calls[0].timeout == settings.token_timeout_seconds

    # The refreshed token is cached and persisted
    assert token_manager.get_valid_access_token() == "fresh"
    assert len(calls) == 1
    saved = json.loads(Path(settings.tokens_file).read_text())
    assert saved["access_token"] == "fresh"
    assert saved["refresh_token"] == "refresh"


def test_no_refresh_token_raises(token_manager) -> None:
    with pytest.raises(AuthError):
        token_manager.get_valid_access_token()


def test_rejected_refresh_raises_auth_error(token_manager, monkeypatch) -> None:
    def rejected(self, request) -> None:
        raise RefreshError("invalid_grant: Token has been expired or revoked.")

    monkeypatch.setattr(Credentials, "refresh", rejected)
    token_manager.set_tokens(TokenSet(refresh_token="revoked"))

    with pytest.raises(AuthError, match="invalid_grant"):
        token_manager.get_valid_access_token()


def test_unconfigured_client_cannot_refresh(settings, monkeypatch) -> None:
    monkeypatch.setattr(Credentials, "refresh", _fail_refresh)
    settings.client_id = None
    settings.refresh_token = "refresh"
    manager = TokenManager(settings)

    with pytest.raises(AuthError, match="not configured"):
        manager.get_valid_access_token()
