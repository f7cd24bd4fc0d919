from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .errors import ApiError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T

    @property
    def error(self) -> None:
        return None

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    error: ApiError

    @property
    def data(self) -> None:
        return None

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err]

# Combinators. Both leave an Err untouched, so failure payloads pass through.

def map(result: Result[T], f: Callable[[T], U]) -> Result[U]:
    if isinstance(result, Ok):
        return Ok(f(result.data))
    return result


def and_then(result: Result[T], f: Callable[[T], Result[U]]) -> Result[U]:
    if isinstance(result, Ok):
        return f(result.data)
    return result
