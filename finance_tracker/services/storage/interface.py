"""
Abstract Document Store Interface

DESIGN DECISION: The repositories never talk to a backend directly.
They receive a DocumentStore at construction time. This allows us to:
1. Swap Google Sheets for another document database later
2. Use in-memory storage for testing
3. Keep business logic decoupled from storage implementation

The interface is intentionally small: documents are flat dicts of
fields addressed by collection name and an opaque id the store assigns.
"""

import secrets
import string
from abc import ABC, abstractmethod
from typing import Any, Optional


DOCUMENT_ID_LENGTH = 20
_DOCUMENT_ID_ALPHABET = string.ascii_letters + string.digits

Fields = dict[str, Any]


def new_document_id() -> str:
    """Generate a random 20-character alphanumeric document id."""
    return "".join(
        secrets.choice(_DOCUMENT_ID_ALPHABET) for _ in range(DOCUMENT_ID_LENGTH)
    )


class DocumentStore(ABC):
    """
    Abstract interface for collection-scoped document storage.

    Any storage implementation (Google Sheets, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def create(self, collection: str, fields: Fields) -> str:
        """
        Create a document with a store-generated id.

        Args:
            collection: Collection name
            fields: Document fields

        Returns:
            The new document id

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def set(
        self,
        collection: str,
        document_id: str,
        fields: Fields,
        merge: bool = False,
    ) -> None:
        """
        Write fields to a document, creating it if needed.

        Args:
            collection: Collection name
            document_id: Target document id
            fields: Fields to write
            merge: Merge into existing fields instead of replacing them

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def get(self, collection: str, document_id: str) -> Optional[Fields]:
        """
        Retrieve a document's fields.

        Returns:
            The fields if the document exists, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> None:
        """
        Delete a document. Deleting a missing document is a no-op.

        Raises:
            StorageError: If the delete fails
        """
        pass

    @abstractmethod
    async def list(self, collection: str) -> list[tuple[str, Fields]]:
        """
        List every document in a collection.

        Returns:
            (document_id, fields) pairs in store order
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoreConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
