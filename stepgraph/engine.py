"""
Resolution of steps graphs into asynchronous handles.
"""

import inspect
from typing import TYPE_CHECKING, Generic, TypeVar

from .adapter import AsyncioAdapter
from .config import Config
from .exceptions import HandlerFailure
from .walk import Walk, required_names

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable, Hashable, Mapping, Sequence
    from typing import Any

    from .adapter import Adapter
    from .step import Handler, Step

    StepName = Hashable

H = TypeVar("H")


def _failure(name: "StepName", error: Exception) -> HandlerFailure:
    failure = HandlerFailure(name, error)
    failure.__cause__ = error
    return failure


async def _guard(name: "StepName", awaitable: "Awaitable[Any]") -> "Any":
    try:
        return await awaitable
    except Exception as e:
        raise _failure(name, e) from e


class Engine(Generic[H]):
    """
    Resolves steps graphs using the given Adapter. Calling an engine with a graph
    returns a handle for every required step (all steps of the graph by default),
    invoking the handler of every step they transitively depend on exactly once.

    Structural problems (cycles, missing or invalid steps) are raised directly from
    the call, before any handler downstream of them runs. Handler errors never are:
    they fail the step's handle, and the handles of all its dependents, with a
    `HandlerFailure`.

    Engines are stateless between calls.
    """

    def __init__(self, adapter: "Adapter[H]", config: Config | None = None) -> None:
        self.adapter = adapter
        self.config = config or Config()

    def _invoke(self, name: "StepName", handler: "Handler", args: list["Any"]) -> H:
        try:
            result = handler(*args)
        except Exception as e:
            return self.adapter.wrap_failure(_failure(name, e))

        if inspect.isawaitable(result):
            result = _guard(name, result)

        return self.adapter.wrap_success(result)

    def _link(self, name: "StepName", step: "Step", handles: list[H]) -> H:
        if not step.dependencies:
            return self._invoke(name, step.handler, [])

        return self.adapter.chain(
            self.adapter.combine_all(handles),
            lambda values: self._invoke(name, step.handler, values),
        )

    def __call__(
        self,
        graph: "Mapping[StepName, Any]",
        required: "Sequence[StepName] | None" = None,
    ) -> dict["StepName", H]:
        names = required_names(
            graph, required, warn_duplicates=self.config.warn_duplicate_required
        )
        return Walk(graph, self._link).resolve(names)


def make_engine(adapter: "Adapter[H]", config: Config | None = None) -> Engine[H]:
    return Engine(adapter, config=config)


resolve: "Engine[Any]" = make_engine(AsyncioAdapter())
"""Resolve a steps graph into asyncio futures. Needs a running asyncio loop."""
