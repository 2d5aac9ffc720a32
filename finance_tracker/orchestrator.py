"""
Application Wiring

Builds the tag registry and cycle key deriver from configuration.
Nothing here is a module-level singleton: callers create components
once at startup and pass them to whatever needs them.
"""

from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict

from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import Settings, get_settings
from finance_tracker.cycles import Clock, CycleKeyDeriver
from finance_tracker.repositories import TagRepository
from finance_tracker.services.storage import DocumentStore, create_document_store


logger = structlog.get_logger(__name__)


class AppComponents(BaseModel):
    """Everything the application layer needs from this package."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    store: DocumentStore
    audit_logger: AuditLogger
    tags: TagRepository
    cycles: CycleKeyDeriver


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    clock: Optional[Clock] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to build from. Defaults to get_settings().
        store: Use this store instead of the configured backend.
        clock: Clock for tag timestamps and cycle keys.

    Returns:
        AppComponents with a shared store and audit logger
    """
    settings = settings or get_settings()
    app_settings = settings.app
    store_settings = settings.document_store

    configure_logging(app_settings.log_level, app_settings.log_json)

    store = store or create_document_store(settings)
    audit_logger = AuditLogger(
        store if app_settings.audit_enabled else None,
        collection=store_settings.audit_collection,
    )

    tags = TagRepository(
        store,
        clock=clock,
        audit_logger=audit_logger,
        collection=store_settings.tags_collection,
    )
    cycles = CycleKeyDeriver(clock=clock, timezone=settings.cycle.tzinfo)

    logger.info(
        "app_components_created",
        backend=type(store).__name__,
        environment=app_settings.app_environment,
        cycle_timezone=settings.cycle.timezone,
        audit_persistent=audit_logger.persistent,
    )

    return AppComponents(
        store=store,
        audit_logger=audit_logger,
        tags=tags,
        cycles=cycles,
    )
