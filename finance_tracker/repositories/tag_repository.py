"""
Tag Repository

Create, read, list and delete tags in the "tags" collection of a
document store.

GUARANTEES:
- No method raises. Every outcome is a Success or one of the failure
  results (StoreFailure, NotFound, InvalidInput).
- Store faults are reported once and never retried here.
- Deleting a tag that does not exist succeeds.
- Audit faults are logged and never change the result.

The repository adds no locking or cross-document coordination. A list
snapshot may be stale by the time a later delete runs.
"""

from datetime import timezone
from typing import Any, Awaitable, Callable, Iterable, Optional, Union
from uuid import UUID

import structlog
from pydantic import ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.cycles import Clock, SystemClock
from finance_tracker.models.results import (
    InvalidInput,
    NotFound,
    StoreFailure,
    Success,
)
from finance_tracker.models.tag import NewTag, Tag, TagData, UsageType
from finance_tracker.services.storage import DocumentStore


TAGS_COLLECTION = "tags"

logger = structlog.get_logger(__name__)


def _validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for issue in error.errors():
        field = ".".join(str(part) for part in issue["loc"])
        messages.append(f"{field}: {issue['msg']}" if field else issue["msg"])
    return messages


def _id_errors(tag_id: object) -> list[str]:
    if not isinstance(tag_id, str) or not tag_id:
        return ["tag_id: must be a non-empty string"]
    if "/" in tag_id:
        return ["tag_id: must not contain '/'"]
    return []


class TagRepository:
    """
    Data access for tags.

    The store, clock and audit logger are injected so tests can run
    against an in-memory store with a fixed clock.
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
        collection: str = TAGS_COLLECTION,
    ):
        self._store = store
        self._clock = clock or SystemClock(timezone.utc)
        self._audit = audit_logger or AuditLogger()
        self._collection = collection

    @property
    def collection(self) -> str:
        return self._collection

    async def _record(
        self,
        action: Callable[..., Awaitable[None]],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Run one audit call. Audit faults are logged here and never raised."""
        try:
            await action(*args, **kwargs)
        except Exception as e:
            logger.error(
                "audit_record_failed",
                action=getattr(action, "__name__", repr(action)),
                error=str(e),
            )

    async def _invalid(
        self,
        operation: str,
        errors: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> InvalidInput:
        await self._record(self._audit.log_validation_failed, operation, errors, correlation_id)
        return InvalidInput(operation=operation, errors=errors)

    async def _store_failure(
        self,
        operation: str,
        error: Exception,
        tag_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> StoreFailure:
        await self._record(
            self._audit.log_store_failure,
            operation=operation,
            collection=self._collection,
            error=error,
            entity_id=tag_id,
            correlation_id=correlation_id,
        )
        return StoreFailure(operation=operation, cause=error)

    async def add_tag(
        self,
        name: str,
        person_id: str,
        usage_type: Union[UsageType, str],
        correlation_id: Optional[UUID] = None,
    ) -> Union[Success[str], InvalidInput, StoreFailure]:
        """
        Register a new tag.

        Returns:
            Success with the new tag id
        """
        try:
            new_tag = NewTag(name=name, person_id=person_id, usage_type=usage_type)
        except ValidationError as e:
            return await self._invalid("add_tag", _validation_messages(e), correlation_id)

        data = TagData(
            name=new_tag.name,
            person_id=new_tag.person_id,
            usage_type=new_tag.usage_type,
            created_at=self._clock.now(),
        )

        try:
            tag_id = await self._store.create(self._collection, data.to_document())
        except Exception as e:
            return await self._store_failure("add_tag", e, correlation_id=correlation_id)

        await self._record(
            self._audit.log_tag_created,
            tag_id=tag_id,
            name=data.name,
            person_id=data.person_id,
            usage_type=data.usage_type.value,
            correlation_id=correlation_id,
        )
        return Success(value=tag_id)

    async def delete_tag(
        self,
        tag_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Union[Success[None], InvalidInput, StoreFailure]:
        """Delete a tag. Missing tags count as deleted."""
        errors = _id_errors(tag_id)
        if errors:
            return await self._invalid("delete_tag", errors, correlation_id)

        try:
            await self._store.delete(self._collection, tag_id)
        except Exception as e:
            return await self._store_failure("delete_tag", e, tag_id, correlation_id)

        await self._record(self._audit.log_tag_deleted, tag_id, correlation_id)
        return Success(value=None)

    async def get_tag(
        self,
        tag_id: str,
    ) -> Union[Success[TagData], NotFound, InvalidInput, StoreFailure]:
        """
        Fetch the stored attributes of one tag.

        A missing tag is reported as NotFound, never as StoreFailure.
        A stored document that is not a valid tag is a StoreFailure
        whose cause is the validation error.
        """
        errors = _id_errors(tag_id)
        if errors:
            return await self._invalid("get_tag", errors)

        try:
            fields = await self._store.get(self._collection, tag_id)
        except Exception as e:
            return await self._store_failure("get_tag", e, tag_id)

        if fields is None:
            await self._record(self._audit.log_tag_not_found, tag_id)
            return NotFound(collection=self._collection, document_id=tag_id)

        try:
            data = TagData.model_validate(fields)
        except ValidationError as e:
            return await self._store_failure("get_tag", e, tag_id)

        return Success(value=data)

    async def list_tags(
        self,
        person_ids: Optional[Iterable[str]] = None,
        usage_type: Optional[Union[UsageType, str]] = None,
    ) -> Union[Success[list[Tag]], InvalidInput, StoreFailure]:
        """
        List tags in store order.

        Args:
            person_ids: Only tags owned by one of these people
            usage_type: Only tags for this flow

        Documents that are not valid tags are skipped with a warning.
        """
        if usage_type is not None:
            try:
                usage_type = UsageType(usage_type)
            except ValueError:
                return await self._invalid(
                    "list_tags", [f"usage_type: not a usage type: {usage_type!r}"]
                )
        if isinstance(person_ids, str):
            person_ids = [person_ids]
        owners = set(person_ids) if person_ids is not None else None

        try:
            documents = await self._store.list(self._collection)
        except Exception as e:
            return await self._store_failure("list_tags", e)

        tags = []
        for tag_id, fields in documents:
            try:
                tag = Tag.model_validate({**fields, "id": tag_id})
            except ValidationError as e:
                logger.warning(
                    "tag_document_skipped",
                    tag_id=tag_id,
                    errors=_validation_messages(e),
                )
                continue

            if owners is not None and tag.person_id not in owners:
                continue
            if usage_type is not None and tag.usage_type != usage_type:
                continue
            tags.append(tag)

        return Success(value=tags)

    async def tag_names(
        self,
        person_ids: Optional[Iterable[str]] = None,
        usage_type: Optional[Union[UsageType, str]] = None,
    ) -> Union[Success[dict[str, str]], InvalidInput, StoreFailure]:
        """Map tag ids to display names, for resolving tag ids on entries."""
        result = await self.list_tags(person_ids=person_ids, usage_type=usage_type)
        if not result.ok:
            return result
        return Success(value={tag.id: tag.display_name for tag in result.value})
