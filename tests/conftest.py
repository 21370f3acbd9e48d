"""Common test fixtures for the notes API."""

import os

# Settings are read at import time; provide the required Supabase values
# before anything imports notes_api.
os.environ.setdefault("APP_SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("APP_SUPABASE_ANON_KEY", "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoiYW5vbiJ9.test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from notes_api.core.schemas.auth import AuthUser  # noqa: E402
from notes_api.core.services.note_service import NoteService  # noqa: E402
from notes_api.dependencies import (  # noqa: E402
    get_current_user,
    get_note_repository,
    get_note_service,
)
from notes_api.main import app  # noqa: E402
from tests.fakes import InMemoryNoteRepository  # noqa: E402


@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Restrict anyio tests to asyncio only (trio is not installed)."""
    return request.param


@pytest.fixture
def repo():
    """Fresh in-memory store per test."""
    return InMemoryNoteRepository()


@pytest.fixture
def note_service(repo):
    return NoteService(repo)


class _Identity:
    """Mutable holder so a test can switch the acting user mid-test."""

    def __init__(self, user_id: str) -> None:
        self.user = AuthUser(id=user_id, email=f"{user_id}@example.com")

    def act_as(self, user_id: str) -> None:
        self.user = AuthUser(id=user_id, email=f"{user_id}@example.com")


@pytest.fixture
def identity():
    return _Identity("u1")


@pytest.fixture
def client(repo, identity):
    """TestClient with auth and storage replaced by in-memory fakes."""
    app.dependency_overrides[get_current_user] = lambda: identity.user
    app.dependency_overrides[get_note_repository] = lambda: repo
    app.dependency_overrides[get_note_service] = lambda: NoteService(repo)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """TestClient with the real bearer-token dependency in place."""
    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
