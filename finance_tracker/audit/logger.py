"""
Audit Logger

DESIGN DECISION: Every change to the tag registry and every store
failure is logged. This provides:
1. Complete traceability
2. Debugging capability
3. A history the user can inspect next to their data

The audit logger:
- Is async so it can write through the same document store
- Gracefully handles failures (doesn't break the caller if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_tracker.services.storage import DocumentStore


DEFAULT_AUDIT_COLLECTION = "auditLog"


def _configure_structlog(json_output: bool = True) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure stdlib logging and structlog for an application process.

    Replaces any handlers already on the root logger. Safe to call more
    than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    _configure_structlog(json_output)


# Configure structlog for local logging
_configure_structlog()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The document store audit collection (for persistence)
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        collection: str = DEFAULT_AUDIT_COLLECTION,
    ):
        """
        Initialize audit logger.

        Args:
            store: Document store for persistence.
                   If None, only logs locally.
            collection: Collection that receives audit events.
        """
        self._store = store
        self._collection = collection
        self._logger = structlog.get_logger(__name__)

    @property
    def persistent(self) -> bool:
        return self._store is not None

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the store if available.

        Returns True if the store write succeeded (or no store configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._store is None:
            return True

        try:
            await self._store.create(self._collection, event.to_document())
            return True
        except Exception as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    async def log_tag_created(
        self,
        tag_id: str,
        name: str,
        person_id: str,
        usage_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.tag_created(
            tag_id=tag_id,
            name=name,
            person_id=person_id,
            usage_type=usage_type,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_tag_deleted(
        self,
        tag_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.tag_deleted(tag_id, correlation_id))

    async def log_tag_not_found(
        self,
        tag_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.tag_not_found(tag_id, correlation_id))

    async def log_validation_failed(
        self,
        operation: str,
        errors: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.validation_failed(
            operation=operation,
            errors=errors,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_store_failure(
        self,
        operation: str,
        collection: str,
        error: BaseException,
        entity_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a document store failure."""
        event = AuditEventBuilder.store_failure(
            operation=operation,
            collection=collection,
            error=error,
            entity_id=entity_id,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action and pass it through all
    subsequent operations.
    """
    return uuid4()
