"""Unit tests for the session context and auth backends."""

import pytest

from vitae.contexts.drafting.local_drafts import LocalDraftCache
from vitae.contexts.session.auth import (
    AnonymousAuthBackend,
    AuthError,
    Session,
    SessionContext,
    StaticAuthBackend,
)


@pytest.mark.unit
def test_anonymous_session(storage):
    context = SessionContext(storage=storage)

    assert context.user_id is None
    assert context.is_logged_in is False
    assert context.auth_headers() == {}

    with pytest.raises(AuthError):
        AnonymousAuthBackend().sign_in("ada@example.com", "secret")


@pytest.mark.unit
def test_static_session_and_sign_out(storage):
    backend = StaticAuthBackend(Session(user_id="u1", access_token="tok", email="ada@example.com"))
    context = SessionContext(auth=backend, storage=storage)

    assert context.user_id == "u1"
    assert context.auth_headers() == {"Authorization": "Bearer tok"}

    context.sign_out()

    assert context.is_logged_in is False
    assert context.auth_headers() == {}
    assert context.toasts[-1].title == "Signed out"


@pytest.mark.unit
def test_local_draft_cache(storage):
    cache = LocalDraftCache(storage)
    first = cache.save({"personal": {"fullName": "Ada"}}, "First")
    second = cache.save({"personal": {"fullName": "Ada"}}, "Second", "modern-minimal")

    assert [e["title"] for e in cache.entries()] == ["Second", "First"]
    assert cache.get(second["id"])["templateId"] == "modern-minimal"

    cache.remove(first["id"])
    assert cache.get(first["id"]) is None
    assert len(cache.entries()) == 1
