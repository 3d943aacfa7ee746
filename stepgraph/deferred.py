from typing import TYPE_CHECKING, Generic, TypeVar

import anyio

from .exceptions import DeferredStateError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Generator
    from types import TracebackType
    from typing import Any

T = TypeVar("T")

_PENDING = object()


class Deferred(Generic[T]):
    """
    A one-shot container for the eventual outcome of a computation. It is completed
    exactly once, with either a value or an exception, and may be awaited by any
    number of tasks.

    Deferreds can be completed by hand, which makes them suitable for driving steps
    from outside the graph. They must be created within a running event loop.
    """

    def __init__(self) -> None:
        self._event = anyio.Event()
        self._value: "Any" = _PENDING
        self._exception: BaseException | None = None
        self._exception_tb: "TracebackType | None" = None

    @classmethod
    def succeeded(cls, value: T) -> "Deferred[T]":
        deferred = cls()
        deferred.set_result(value)
        return deferred

    @classmethod
    def failed(cls, exception: BaseException) -> "Deferred[Any]":
        deferred = cls()
        deferred.set_exception(exception)
        return deferred

    def done(self) -> bool:
        return self._event.is_set()

    def _ensure_pending(self) -> None:
        if self.done():
            raise DeferredStateError("Deferred has already been completed.")

    def set_result(self, value: T) -> None:
        self._ensure_pending()
        self._value = value
        self._event.set()

    def set_exception(self, exception: BaseException) -> None:
        self._ensure_pending()
        self._exception = exception
        self._exception_tb = exception.__traceback__
        self._event.set()

    def exception(self) -> BaseException | None:
        if not self.done():
            raise DeferredStateError("Deferred has not been completed yet.")

        return self._exception

    def result(self) -> T:
        if (exception := self.exception()) is not None:
            # restore the original traceback so repeated awaits do not extend it
            raise exception.with_traceback(self._exception_tb)

        return self._value

    async def wait(self) -> T:
        await self._event.wait()
        return self.result()

    def __await__(self) -> "Generator[Any, None, T]":
        return self.wait().__await__()

    def __repr__(self) -> str:
        if not self.done():
            state = "pending"
        elif self._exception is not None:
            state = f"failed={self._exception!r}"
        else:
            state = f"value={self._value!r}"

        return f"<Deferred {state}>"
