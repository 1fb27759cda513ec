# clinic_booking/services/scheduling/result.py
"""
Validation outcome passed from the engine to its callers.

Validators return Ok(value) or Err(kind, message) instead of raising;
only the HTTP layer turns an Err into a response status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    OUT_OF_WINDOW = "out_of_window"
    SLOT_BUSY = "slot_busy"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
