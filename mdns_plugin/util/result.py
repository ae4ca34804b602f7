"""Explicit success/failure results for best-effort operations."""

import dataclasses
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")


@dataclasses.dataclass(frozen=True)
class Success(Generic[ValueT]):
    """The operation completed and produced `value`."""

    value: ValueT


@dataclasses.dataclass(frozen=True)
class Failure:
    """The operation raised `error`."""

    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


Result = Success[ValueT] | Failure


async def capture_async(
    operation: Callable[[], Awaitable[ValueT]],
) -> "Result[ValueT]":
    """Awaits `operation()` and wraps the outcome.

    Any `Exception` raised by the operation becomes a `Failure`. Cancellation
    and other `BaseException`s are not captured. Nothing is logged; reporting
    a failure is up to the caller.
    """
    try:
        return Success(await operation())
    except Exception as e:  # pylint: disable=broad-exception-caught
        return Failure(e)
