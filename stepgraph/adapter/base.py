from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence
    from typing import Any

H = TypeVar("H")


class Adapter(ABC, Generic[H]):
    """
    The capabilities an engine needs from an asynchronous-value implementation. `H`
    is the handle type, e.g. a future or a `Deferred`.
    """

    @abstractmethod
    def wrap_success(self, value: "Any") -> H:
        """
        A handle that succeeds with `value`. If `value` is awaitable, the handle
        adopts its eventual outcome instead.
        """
        raise NotImplementedError()

    @abstractmethod
    def wrap_failure(self, error: BaseException) -> H:
        """A handle that has failed with `error`."""
        raise NotImplementedError()

    @abstractmethod
    def combine_all(self, handles: "Sequence[H]") -> H:
        """
        A handle of the list of values of `handles`, in their given order. It fails
        as soon as any of `handles` fails, with that handle's error.
        """
        raise NotImplementedError()

    @abstractmethod
    def chain(self, handle: H, fn: "Callable[[Any], H]") -> H:
        """
        A handle that, once `handle` succeeds, adopts the outcome of the handle
        returned by `fn(value)`. If `handle` fails, `fn` is never called.
        """
        raise NotImplementedError()
