"""
In-Memory Document Store

Process-local storage with the same behaviour as the remote backends:
generated ids, idempotent deletes, insertion-ordered listings. Used by
the test suite and by the "memory" backend for local development.
"""

import copy
from typing import Optional

from finance_tracker.services.storage.interface import (
    DocumentStore,
    Fields,
    new_document_id,
)


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed document store.

    Fields are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self):
        self._collections: dict[str, dict[str, Fields]] = {}

    def _collection(self, name: str) -> dict[str, Fields]:
        return self._collections.setdefault(name, {})

    async def create(self, collection: str, fields: Fields) -> str:
        documents = self._collection(collection)
        document_id = new_document_id()
        while document_id in documents:
            document_id = new_document_id()
        documents[document_id] = copy.deepcopy(fields)
        return document_id

    async def set(
        self,
        collection: str,
        document_id: str,
        fields: Fields,
        merge: bool = False,
    ) -> None:
        documents = self._collection(collection)
        if merge and document_id in documents:
            documents[document_id].update(copy.deepcopy(fields))
        else:
            documents[document_id] = copy.deepcopy(fields)

    async def get(self, collection: str, document_id: str) -> Optional[Fields]:
        fields = self._collection(collection).get(document_id)
        return copy.deepcopy(fields) if fields is not None else None

    async def delete(self, collection: str, document_id: str) -> None:
        self._collection(collection).pop(document_id, None)

    async def list(self, collection: str) -> list[tuple[str, Fields]]:
        return [
            (document_id, copy.deepcopy(fields))
            for document_id, fields in self._collection(collection).items()
        ]

    def count(self, collection: str) -> int:
        """Number of documents currently in a collection."""
        return len(self._collection(collection))
