"""Shared fixtures: isolated settings, token manager and a fake YouTube client."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from ytrelay.config import Settings
from ytrelay.dependencies import get_token_manager, get_upload_relay
from ytrelay.main import app
from ytrelay.services.token_manager import TokenManager
from ytrelay.services.youtube_service import UploadRelay

OAUTH_ENV_VARS = [
    "YT_CLIENT_ID",
    "CLIENT_ID",
    "YT_CLIENT_SECRET",
    "CLIENT_SECRET",
    "YT_REDIRECT_URI",
    "REDIRECT_URI",
    "YT_REFRESH_TOKEN",
    "REFRESH_TOKEN",
]


class FakeInsertRequest:
    def __init__(self, response: dict[str, Any] | None, error: Exception | None):
        self.response = response
        self.error = error

    def next_chunk(self):
        if self.error is not None:
            raise self.error
        return None, self.response


class FakeYouTube:
    """Stands in for ``build("youtube", "v3")`` and records insert calls."""

    def __init__(self, response: dict[str, Any] | None = None):
        self.response = response or {"id": "abc123", "kind": "youtube#video"}
        self.error: Exception | None = None
        self.inserts: list[dict[str, Any]] = []

    def videos(self):
        return self

    def insert(self, **kwargs):
        media = kwargs["media_body"]
        self.inserts.append({**kwargs, "size": media.size()})
        return FakeInsertRequest(self.response, self.error)


@pytest.fixture(autouse=True)
def _clean_oauth_env(monkeypatch) -> None:
    for name in OAUTH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        client_id="client-id.apps.googleusercontent.com",
        client_secret="client-secret",
        redirect_uri="http://localhost:5000/oauth2callback",
        tokens_file=str(tmp_path / "youtube_tokens.json"),
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def token_manager(settings) -> TokenManager:
    return TokenManager(settings)


@pytest.fixture
def youtube() -> FakeYouTube:
    return FakeYouTube()


@pytest.fixture
def relay(token_manager, youtube) -> UploadRelay:
    return UploadRelay(token_manager, client_factory=lambda creds, timeout: youtube)


@pytest.fixture
def client(token_manager, relay):
    app.dependency_overrides[get_token_manager] = lambda: token_manager
    app.dependency_overrides[get_upload_relay] = lambda: relay
    yield TestClient(app)
    app.dependency_overrides.clear()
