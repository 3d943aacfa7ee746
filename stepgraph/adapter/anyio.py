import inspect
from typing import TYPE_CHECKING

import anyio

from stepgraph.deferred import Deferred

from .base import Adapter

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable, Callable, Sequence
    from typing import Any

    from anyio.abc import TaskGroup


class AnyioAdapter(Adapter[Deferred["Any"]]):
    """
    An Adapter producing `Deferred` handles, usable on any backend supported by
    anyio. Pending work is started in the given task group, so the task group only
    exits once every resolved step has completed.
    """

    def __init__(self, task_group: "TaskGroup") -> None:
        self.task_group = task_group

    def wrap_success(self, value: "Any") -> Deferred["Any"]:
        if not inspect.isawaitable(value):
            return Deferred.succeeded(value)

        deferred: Deferred["Any"] = Deferred()
        self.task_group.start_soon(self._adopt, value, deferred)
        return deferred

    def wrap_failure(self, error: BaseException) -> Deferred["Any"]:
        return Deferred.failed(error)

    def combine_all(self, handles: "Sequence[Deferred[Any]]") -> Deferred[list["Any"]]:
        if not handles:
            return Deferred.succeeded([])

        combined: Deferred[list["Any"]] = Deferred()
        self.task_group.start_soon(self._combine, list(handles), combined)
        return combined

    def chain(
        self, handle: Deferred["Any"], fn: "Callable[[Any], Deferred[Any]]"
    ) -> Deferred["Any"]:
        chained: Deferred["Any"] = Deferred()
        self.task_group.start_soon(self._chain, handle, fn, chained)
        return chained

    @staticmethod
    async def _adopt(awaitable: "Awaitable[Any]", deferred: Deferred["Any"]) -> None:
        try:
            value = await awaitable
        except Exception as e:
            deferred.set_exception(e)
        else:
            deferred.set_result(value)

    @staticmethod
    async def _combine(
        handles: list[Deferred["Any"]], combined: Deferred[list["Any"]]
    ) -> None:
        values: list["Any"] = [None] * len(handles)

        async def _collect(index: int, handle: Deferred["Any"]) -> None:
            try:
                values[index] = await handle
            except Exception as e:
                # first failure wins, later ones are dropped
                if not combined.done():
                    combined.set_exception(e)

        async with anyio.create_task_group() as tg:
            for index, handle in enumerate(handles):
                tg.start_soon(_collect, index, handle)

        if not combined.done():
            combined.set_result(values)

    @staticmethod
    async def _chain(
        handle: Deferred["Any"],
        fn: "Callable[[Any], Deferred[Any]]",
        chained: Deferred["Any"],
    ) -> None:
        try:
            value = await fn(await handle)
        except Exception as e:
            chained.set_exception(e)
        else:
            chained.set_result(value)
