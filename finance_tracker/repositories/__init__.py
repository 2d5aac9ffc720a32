"""Repositories package."""

from finance_tracker.repositories.tag_repository import TAGS_COLLECTION, TagRepository

__all__ = ["TAGS_COLLECTION", "TagRepository"]
