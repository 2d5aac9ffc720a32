"""
Data Models Package

Pydantic models for tags, operation results and audit events.
"""

from finance_tracker.models.tag import (
    MISSING_TAG_LABEL,
    UNTITLED_TAG_NAME,
    NewTag,
    Tag,
    TagData,
    UsageType,
    tag_label,
)
from finance_tracker.models.results import (
    ErrorKind,
    Failure,
    InvalidInput,
    NotFound,
    StoreFailure,
    Success,
    failure_message,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Tag models
    "MISSING_TAG_LABEL",
    "UNTITLED_TAG_NAME",
    "NewTag",
    "Tag",
    "TagData",
    "UsageType",
    "tag_label",
    # Results
    "ErrorKind",
    "Failure",
    "InvalidInput",
    "NotFound",
    "StoreFailure",
    "Success",
    "failure_message",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
