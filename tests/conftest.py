"""Shared fixtures: in-memory store, fixed clock, failing store double."""

from datetime import datetime, timezone

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.cycles import FixedClock
from finance_tracker.repositories import TagRepository
from finance_tracker.services.storage import DocumentStore, InMemoryDocumentStore, StorageError


class FailingDocumentStore(DocumentStore):
    """Store whose every call fails with the same error."""

    def __init__(self, error: Exception = None):
        self.error = error or StorageError("permission denied")
        self.calls = []

    async def create(self, collection, fields):
        self.calls.append(("create", collection))
        raise self.error

    async def set(self, collection, document_id, fields, merge=False):
        self.calls.append(("set", collection))
        raise self.error

    async def get(self, collection, document_id):
        self.calls.append(("get", collection))
        raise self.error

    async def delete(self, collection, document_id):
        self.calls.append(("delete", collection))
        raise self.error

    async def list(self, collection):
        self.calls.append(("list", collection))
        raise self.error


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc))


@pytest.fixture
def repository(store, clock):
    return TagRepository(store, clock=clock, audit_logger=AuditLogger())


@pytest.fixture
def failing_store():
    return FailingDocumentStore()


@pytest.fixture
def failing_repository(failing_store, clock):
    return TagRepository(failing_store, clock=clock, audit_logger=AuditLogger())
