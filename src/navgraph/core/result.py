"""
Result Type Implementation.

Registration operations on the graph return Ok/Err instead of raising, so a
builder can walk a large registry, collect every conflict and keep going.
Err usually carries one of the NavGraphError subclasses; unwrap() raises it.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful registration."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents a rejected registration."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"Called unwrap on Err: {self.error}")


Result = Union[Ok[T], Err[E]]


def map_ok(result: Result[T, E], func: Callable[[T], U]) -> Result[U, E]:
    """Apply `func` to the contained value if Ok, otherwise pass the Err through."""
    if isinstance(result, Ok):
        return Ok(func(result.value))
    return result  # type: ignore
