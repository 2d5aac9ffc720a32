"""Services package."""

from finance_tracker.services.storage import (
    DocumentStore,
    GoogleSheetsClient,
    GoogleSheetsDocumentStore,
    InMemoryDocumentStore,
    StorageError,
    StoreConnectionError,
    create_document_store,
)

__all__ = [
    "DocumentStore",
    "GoogleSheetsClient",
    "GoogleSheetsDocumentStore",
    "InMemoryDocumentStore",
    "StorageError",
    "StoreConnectionError",
    "create_document_store",
]
