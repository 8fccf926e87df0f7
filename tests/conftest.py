"""Shared fixtures: a fresh SQLite store per test and services acting as different users."""

import itertools

import pytest

from folio.contexts.editing import (
    RecordingInvalidator,
    ResumeService,
    ResumeStore,
    StaticIdentity,
)

OWNER_ID = "user-alice"
OTHER_ID = "user-bob"


@pytest.fixture
def store(tmp_path):
    resume_store = ResumeStore.create(tmp_path / "folio.db")
    yield resume_store
    resume_store.close()


@pytest.fixture
def invalidator():
    return RecordingInvalidator()


@pytest.fixture
def service(store, invalidator):
    """Service acting as OWNER_ID."""
    return ResumeService(StaticIdentity(OWNER_ID), store, invalidator)


@pytest.fixture
def other_service(store):
    """Service acting as OTHER_ID against the same store."""
    return ResumeService(StaticIdentity(OTHER_ID), store)


@pytest.fixture
def anonymous_service(store):
    """Service with no authenticated session."""
    return ResumeService(StaticIdentity(None), store)


@pytest.fixture
def ticking_clock(monkeypatch):
    """Make store timestamps strictly increasing so updated_at ordering is deterministic."""
    counter = itertools.count()
    monkeypatch.setattr(
        "folio.contexts.editing.resume_store.now_exact",
        lambda: f"2025-01-01T00:00:00.{next(counter):06d}",
    )
