from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from notekeeper.config import Settings
from notekeeper.dependencies import get_summarizer
from notekeeper.main import create_app

PASSWORD = "secret1"


class FakeSummarizer:
    """Stands in for the OpenAI summarizer and records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None

    async def summarize(self, *, title: str, content: str) -> str:
        self.calls.append((title, content))
        if self.error is not None:
            raise self.error
        return f"Summary of {title}."


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'notes.db'}",
        jwt_secret="test-secret",
        openai_api_key=None,
        log_level="WARNING",
    )


@pytest.fixture
def summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture
def app(settings, summarizer):
    app = create_app(settings)
    app.dependency_overrides[get_summarizer] = lambda: summarizer
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, username: str, email: str, password: str = PASSWORD):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bob_token(client) -> str:
    response = register(client, "bob", "bob@x.com")
    assert response.status_code == 201
    return response.json()["token"]


@pytest.fixture
def alice_token(client) -> str:
    response = register(client, "alice", "alice@mail.com")
    assert response.status_code == 201
    return response.json()["token"]


@pytest.fixture
def bob(client, bob_token) -> dict[str, str]:
    """Authorization headers for bob."""
    return auth_headers(bob_token)


@pytest.fixture
def alice(client, alice_token) -> dict[str, str]:
    """Authorization headers for alice."""
    return auth_headers(alice_token)


def create_note(client: TestClient, headers: dict[str, str], title: str, content: str, **extra) -> dict:
    response = client.post("/api/notes", json={"title": title, "content": content, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["note"]
