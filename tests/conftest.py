"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["BACKEND_PROVIDER"] = "stub"
os.environ["API_BASE_URL"] = "http://backend.test"
os.environ["API_TOKEN"] = "test-token"
os.environ["APP_BASE_URL"] = "http://testserver"
os.environ["LOG_LEVEL"] = "WARNING"

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def backend():
    """Get a stub backend."""
    from socialcast.adapters.backend.stub import StubBackend

    return StubBackend()


@pytest.fixture
def store():
    """Get an empty account store."""
    from socialcast.services.account_store import AccountLinkStore

    return AccountLinkStore()


@pytest.fixture
def oauth(backend, store):
    """Get a handshake coordinator over the stub backend."""
    from socialcast.services.oauth import OAuthHandshakeCoordinator

    return OAuthHandshakeCoordinator(backend, store)


@pytest.fixture
def scheduler():
    """Get a scheduler with a frozen clock."""
    from socialcast.services.scheduler import PublishScheduler

    return PublishScheduler(clock=lambda: NOW)


@pytest.fixture
def fanout(backend, store, scheduler):
    """Get a fan-out coordinator over the stub backend."""
    from socialcast.services.fanout import PublishFanoutCoordinator

    return PublishFanoutCoordinator(backend, store, scheduler)


@pytest.fixture
def draft_session(backend):
    """Get an authoring session backed by the stub generator."""
    from socialcast.services.drafts import ContentDraftSession

    return ContentDraftSession(backend)


@pytest.fixture
def connect(store):
    """Mark platforms as connected in the store."""
    from socialcast.domain.models import SocialAccount

    def _connect(*platforms: str) -> None:
        for platform in platforms:
            store.upsert(SocialAccount(id=f"acc-{platform}", platform=platform, connected=True))

    return _connect


@pytest.fixture
def workspace(backend):
    """Get an API workspace over the stub backend."""
    from socialcast.api.deps import Workspace

    return Workspace.create(backend)


@pytest.fixture
def test_client(workspace) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app bound to the test workspace."""
    from socialcast.api.deps import get_workspace
    from socialcast.main import app

    app.dependency_overrides[get_workspace] = lambda: workspace
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
