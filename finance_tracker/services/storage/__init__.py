"""
Storage Services Package

Provides the abstract document store interface and its implementations.
Google Sheets is the hosted backend; the in-memory store serves tests
and local development.
"""

from typing import Optional

from finance_tracker.config import Settings, get_settings
from finance_tracker.services.storage.interface import (
    DocumentStore,
    StorageError,
    StoreConnectionError,
    new_document_id,
)
from finance_tracker.services.storage.memory import InMemoryDocumentStore
from finance_tracker.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsDocumentStore,
)


def create_document_store(settings: Optional[Settings] = None) -> DocumentStore:
    """Build the document store selected by DOCUMENT_STORE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.document_store.backend

    if backend == "google_sheets":
        return GoogleSheetsDocumentStore(GoogleSheetsClient(settings.google_sheets))
    return InMemoryDocumentStore()


__all__ = [
    # Interface
    "DocumentStore",
    "new_document_id",
    # Exceptions
    "StorageError",
    "StoreConnectionError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsDocumentStore",
    "InMemoryDocumentStore",
    # Factory
    "create_document_store",
]
