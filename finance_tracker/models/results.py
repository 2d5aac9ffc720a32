"""
Operation Results

Repository operations never raise. They return one of the models below
and callers branch on `ok` (or on `kind` for failures):

    result = await tags.get_tag(tag_id)
    if result.ok:
        show(result.value)
    elif result.kind is ErrorKind.NOT_FOUND:
        ...

DESIGN DECISION: The failure set is closed. Every failure is one of
StoreFailure, NotFound or InvalidInput, each with a fixed shape, so
callers can handle all of them exhaustively.
"""

from enum import Enum
from typing import ClassVar, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of failure a repository operation can report."""
    STORE_FAILURE = "store_failure"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


class Success(BaseModel, Generic[T]):
    """Successful outcome carrying the operation's value."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: Literal[True] = True
    value: T


class StoreFailure(BaseModel):
    """
    The document store rejected or failed the operation.

    `cause` is the original exception, kept for diagnostics.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: Literal[False] = False
    kind: Literal[ErrorKind.STORE_FAILURE] = ErrorKind.STORE_FAILURE
    operation: str
    cause: BaseException

    user_message: ClassVar[str] = "The operation failed. Please try again."

    @property
    def message(self) -> str:
        return f"{self.operation} failed: {self.cause}"


class NotFound(BaseModel):
    """A lookup found no document with the requested id."""
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: Literal[ErrorKind.NOT_FOUND] = ErrorKind.NOT_FOUND
    collection: str
    document_id: str

    user_message: ClassVar[str] = "This item does not exist."

    @property
    def message(self) -> str:
        return f"No document '{self.document_id}' in '{self.collection}'"


class InvalidInput(BaseModel):
    """Arguments were rejected before reaching the store."""
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: Literal[ErrorKind.INVALID_INPUT] = ErrorKind.INVALID_INPUT
    operation: str
    errors: list[str] = Field(default_factory=list)

    user_message: ClassVar[str] = "Please check the information entered."

    @property
    def message(self) -> str:
        return f"{self.operation} rejected: {'; '.join(self.errors)}"


Failure = Union[StoreFailure, NotFound, InvalidInput]


def failure_message(result: Union[Success, Failure]) -> Optional[str]:
    """User-facing notice for a result, or None when it succeeded."""
    if result.ok:
        return None
    return result.user_message
