"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from motifia_backend.api.server import create_app
from motifia_backend.config import Settings, reset_settings
from motifia_backend.domain.words import WordDraft
from motifia_backend.infra.identity import Identity, IdentityExchangeError
from motifia_backend.infra.word_store import WordStore


ADMIN_EMAIL = "admin@example.com"


class FakeIdentityProvider:
    """Identity provider that maps known authorization codes to identities."""

    def __init__(self, identities: dict[str, Identity] | None = None):
        self.identities = identities or {}
        self.calls: list[str] = []

    def exchange_code(self, code: str) -> Identity:
        self.calls.append(code)
        identity = self.identities.get(code)
        if identity is None:
            raise IdentityExchangeError("unknown code")
        return identity


@pytest.fixture(autouse=True)
def _reset_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'words.sqlite3'}"


@pytest.fixture
def store(database_url: str) -> WordStore:
    s = WordStore.from_url(database_url)
    yield s
    s.dispose()


@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(
        database_url=database_url,
        authorized_email=ADMIN_EMAIL,
        session_secret="test-secret",
        environment="development",
        _env_file=None,
    )


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider(
        {
            "admin-code": Identity(email=ADMIN_EMAIL, name="Admin", picture="https://example.com/a.png"),
            "guest-code": Identity(email="guest@example.com", name="Guest", picture="https://example.com/g.png"),
        }
    )


@pytest.fixture
def app(settings: Settings, store: WordStore, identity_provider: FakeIdentityProvider):
    return create_app(settings, store=store, identity_provider=identity_provider)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    resp = client.post("/api/auth/google", json={"code": "admin-code"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def sample_words(store: WordStore) -> dict[str, int]:
    """A few stored words, keyed by word text."""
    drafts = [
        WordDraft.build(word="cat", part_of_speech="noun", motif="CEG", mnemonic="three notes"),
        WordDraft.build(word="run", part_of_speech="verb", motif="DF#A"),
        WordDraft.build(word="quick", part_of_speech="adjective", motif="A*C"),
    ]
    return {d.word: store.create(d).id for d in drafts}
