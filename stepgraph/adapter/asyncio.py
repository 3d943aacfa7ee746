import asyncio
import inspect
from typing import TYPE_CHECKING

from .base import Adapter

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence
    from typing import Any


class AsyncioAdapter(Adapter["asyncio.Future[Any]"]):
    """
    An Adapter producing asyncio futures. Unless a loop is given, the running loop
    is looked up whenever a handle is created.
    """

    def __init__(self, loop: "asyncio.AbstractEventLoop | None" = None) -> None:
        self.loop = loop

    def _get_loop(self) -> "asyncio.AbstractEventLoop":
        return self.loop or asyncio.get_running_loop()

    def wrap_success(self, value: "Any") -> "asyncio.Future[Any]":
        loop = self._get_loop()

        if inspect.isawaitable(value):
            return asyncio.ensure_future(value, loop=loop)

        future = loop.create_future()
        future.set_result(value)
        return future

    def wrap_failure(self, error: BaseException) -> "asyncio.Future[Any]":
        future = self._get_loop().create_future()
        future.set_exception(error)
        return future

    def combine_all(
        self, handles: "Sequence[asyncio.Future[Any]]"
    ) -> "asyncio.Future[list[Any]]":
        if not handles:
            return self.wrap_success([])

        return asyncio.gather(*handles)

    def chain(
        self,
        handle: "asyncio.Future[Any]",
        fn: "Callable[[Any], asyncio.Future[Any]]",
    ) -> "asyncio.Future[Any]":
        async def _chain() -> "Any":
            return await fn(await handle)

        return asyncio.ensure_future(_chain(), loop=self._get_loop())
