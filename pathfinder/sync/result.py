"""Tagged result type produced by every gateway call and controller operation.

``RemoteResult`` is a closed union of three frozen variants. Consumers dispatch
with ``match`` and must handle all three:

    match controller.state.value:
        case Loading():
            ...
        case Success(value=items):
            ...
        case Error(message=message):
            ...

Form-style controllers also rest in ``Idle`` before the first operation and
after the UI acknowledges a result (``UiState``).
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, TypeAlias, TypeVar

__all__ = [
    "ResultTag",
    "Idle",
    "Loading",
    "Success",
    "Error",
    "RemoteResult",
    "UiState",
]

T = TypeVar("T")


class ResultTag(Enum):
    """Discriminator for result variants (useful for logging and serialization)."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Idle:
    """Nothing has been requested yet, or the last result was acknowledged."""

    tag: ClassVar[ResultTag] = ResultTag.IDLE


@dataclass(frozen=True)
class Loading:
    """An operation is in flight."""

    tag: ClassVar[ResultTag] = ResultTag.LOADING


@dataclass(frozen=True)
class Success(Generic[T]):
    """The operation completed with a value.

    Attributes:
        value: Projected payload (a record, a tuple of records, or a message).
    """

    value: T
    tag: ClassVar[ResultTag] = ResultTag.SUCCESS


@dataclass(frozen=True)
class Error:
    """The operation failed.

    Attributes:
        message: Opaque, human-readable message. Transport, server, not-found
            and precondition failures all look the same to the consumer.
    """

    message: str
    tag: ClassVar[ResultTag] = ResultTag.ERROR


RemoteResult: TypeAlias = Loading | Success[T] | Error
UiState: TypeAlias = Idle | Loading | Success[str] | Error
