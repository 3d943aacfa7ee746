from functools import partial
from typing import TYPE_CHECKING

import anyio
import sniffio

from .adapter import AnyioAdapter
from .config import Config
from .engine import make_engine

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Hashable, Mapping, Sequence
    from typing import Any

    StepName = Hashable


async def _execute(
    graph: "Mapping[StepName, Any]",
    required: "Sequence[StepName] | None",
    config: Config,
) -> dict["StepName", "Any"]:
    values: dict["StepName", "Any"] = {}
    failure: Exception | None = None

    async with anyio.create_task_group() as tg:
        # failures are held until the task group exits so that steps already
        # started are not cancelled and the error is not wrapped in a group
        try:
            handles = make_engine(AnyioAdapter(tg), config=config)(graph, required)

            for name, handle in handles.items():
                values[name] = await handle
        except Exception as e:
            failure = e

    if failure is not None:
        raise failure

    return values


async def execute(
    graph: "Mapping[StepName, Any]",
    required: "Sequence[StepName] | None" = None,
    *,
    config: Config | None = None,
) -> dict["StepName", "Any"]:
    """
    Resolve a steps graph and wait for every required step, returning their values.

    Returns only once every step that was started has completed. If a required step
    fails, the `HandlerFailure` of the first failing one, in required order, is
    raised.
    """
    if config is None:
        config = Config()

    with anyio.fail_after(config.timeout):
        return await _execute(graph, required, config)


def run(
    graph: "Mapping[StepName, Any]",
    required: "Sequence[StepName] | None" = None,
    **settings: "Any",
) -> dict["StepName", "Any"]:
    """Blocking version of `execute`, running on a new event loop."""
    try:
        library = sniffio.current_async_library()
    except sniffio.AsyncLibraryNotFoundError:
        config = Config(**settings)
        return anyio.run(
            partial(execute, graph, required, config=config),
            backend=config.backend,
            backend_options=config.backend_options or None,
        )

    raise RuntimeError(
        f"Running a steps graph from within an event loop ({library}) is forbidden"
        " as it would block it. Use `execute` instead."
    )
