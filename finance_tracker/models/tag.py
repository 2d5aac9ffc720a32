"""
Tag Models

Tags are user-defined labels attached to expenses and gains. They are
stored as documents in the "tags" collection with camelCase field names
(name, personId, usageType, createdAt); the document id is the tag id
and is not repeated inside the document.

DESIGN DECISION: Tags are immutable once created. There is no update
model, only creation input (NewTag) and stored data (TagData / Tag).
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


UNTITLED_TAG_NAME = "Untitled tag"
MISSING_TAG_LABEL = "Tag not found"


class UsageType(str, Enum):
    """Which financial flow a tag applies to."""
    EXPENSE = "expense"
    GAIN = "gain"


class NewTag(BaseModel):
    """
    Input for creating a tag.

    Names and owners are stripped and must not be empty.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name of the tag"
    )
    person_id: str = Field(
        ...,
        min_length=1,
        description="Owner of the tag"
    )
    usage_type: UsageType = Field(
        ...,
        description="Flow the tag classifies"
    )


class TagData(BaseModel):
    """Stored attributes of a tag (everything except its id)."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    name: str
    person_id: str = Field(alias="personId")
    usage_type: UsageType = Field(alias="usageType")
    created_at: datetime = Field(alias="createdAt")

    @property
    def display_name(self) -> str:
        """Name to show in listings; blank names get a placeholder."""
        return self.name.strip() or UNTITLED_TAG_NAME

    def to_document(self) -> dict:
        """Fields as written to the document store."""
        document = self.model_dump(by_alias=True, exclude={"id"})
        document["usageType"] = self.usage_type.value
        return document


class Tag(TagData):
    """A stored tag together with its document id."""

    id: str = Field(..., min_length=1)


def tag_label(names: dict[str, str], tag_id: str) -> str:
    """Resolve a tag id through a name map built by TagRepository.tag_names()."""
    return names.get(tag_id, MISSING_TAG_LABEL)
