"""
Audit Models

Every change to the tag registry, and every failure while talking to
the document store, produces an audit event. Events are logged locally
and, when a store is configured, appended to the audit collection.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Tag registry
    TAG_CREATED = "tag_created"
    TAG_DELETED = "tag_deleted"
    TAG_NOT_FOUND = "tag_not_found"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    STORE_FAILURE = "store_failure"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'tag')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Store id of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
        }

    def to_document(self) -> dict:
        """
        Convert to fields for the audit collection.

        The event id travels as a field; the store assigns its own
        document id.
        """
        document = self.to_log_dict()
        document["timestamp"] = self.timestamp
        return document


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.tag_created(tag_id, name, usage_type)
        event = AuditEventBuilder.store_failure("add_tag", "tags", error)
    """

    @staticmethod
    def tag_created(
        tag_id: str,
        name: str,
        person_id: str,
        usage_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TAG_CREATED,
            entity_type="tag",
            entity_id=tag_id,
            correlation_id=correlation_id,
            description=f"Tag created: {name}",
            details={
                "name": name,
                "person_id": person_id,
                "usage_type": usage_type,
            },
        )

    @staticmethod
    def tag_deleted(
        tag_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TAG_DELETED,
            entity_type="tag",
            entity_id=tag_id,
            correlation_id=correlation_id,
            description=f"Tag deleted: {tag_id}",
        )

    @staticmethod
    def tag_not_found(
        tag_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TAG_NOT_FOUND,
            entity_type="tag",
            entity_id=tag_id,
            correlation_id=correlation_id,
            description=f"Tag lookup found nothing: {tag_id}",
        )

    @staticmethod
    def validation_failed(
        operation: str,
        errors: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="tag",
            correlation_id=correlation_id,
            description=f"{operation} rejected with {len(errors)} issues",
            details={
                "operation": operation,
                "errors": errors,
            },
        )

    @staticmethod
    def store_failure(
        operation: str,
        collection: str,
        error: BaseException,
        entity_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_FAILURE,
            severity=AuditSeverity.ERROR,
            entity_type="tag",
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"Document store failed during {operation}",
            details={
                "operation": operation,
                "collection": collection,
            },
            error_type=type(error).__name__,
            error_message=str(error),
        )
