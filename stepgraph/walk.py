import warnings
from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from .exceptions import CircularDependencyError, MissingStepError
from .step import Step, as_step

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Mapping, Sequence
    from typing import Any

    StepName = Hashable
    Graph = Mapping[StepName, Any]

R = TypeVar("R")


class Color(Enum):
    WHITE = "unvisited"
    GRAY = "visiting"
    BLACK = "visited"


@dataclass(slots=True)
class _Frame(Generic[R]):
    name: Hashable
    step: Step
    results: list[R] = field(default_factory=list)


def required_names(
    graph: "Graph", required: "Sequence[StepName] | None", warn_duplicates: bool = True
) -> list["StepName"]:
    if required is None:
        return list(graph)
    elif isinstance(required, str | bytes):
        raise TypeError(
            "Required steps must be a sequence of step names, not a single string."
        )

    names = list(required)

    if warn_duplicates and len(set(names)) != len(names):
        warnings.warn(
            "Some required steps are listed more than once; each is resolved once.",
            stacklevel=3,
        )

    return names


class Walk(Generic[R]):
    """
    Traversal state for a single resolution of a steps graph.

    Steps are visited depth-first, following the dependencies of each step in their
    declared order. The first time a step is finished, `link` is called with the
    step and the results already linked for its dependencies; its return value is
    memoized so every later reference to the step reuses it.

    The walk uses an explicit stack rather than recursion, so graph depth is not
    bounded by the interpreter's recursion limit. A walk is not thread safe and must
    not be reused across resolutions.
    """

    def __init__(
        self,
        graph: "Graph",
        link: "Callable[[StepName, Step, list[R]], R]",
    ) -> None:
        self.graph = graph
        self.link = link
        self.colors: dict["StepName", Color] = {}
        self.memo: dict["StepName", R] = {}
        self.order: list["StepName"] = []

    def color(self, name: "StepName") -> Color:
        return self.colors.get(name, Color.WHITE)

    def _enter(self, name: "StepName", frames: list[_Frame[R]]) -> _Frame[R]:
        if self.color(name) is Color.GRAY:
            # every gray step is on the stack, in visiting order
            path = [frame.name for frame in frames]
            raise CircularDependencyError(name, [*path[path.index(name) :], name])

        try:
            spec = self.graph[name]
        except KeyError:
            dependent = frames[-1].name if frames else None
            raise MissingStepError(name, dependent) from None

        frame = _Frame(name=name, step=as_step(name, spec))
        self.colors[name] = Color.GRAY
        return frame

    def visit(self, root: "StepName") -> R:
        if self.color(root) is Color.BLACK:
            return self.memo[root]

        frames: list[_Frame[R]] = [self._enter(root, [])]

        while True:
            frame = frames[-1]
            dependencies = frame.step.dependencies

            if len(frame.results) < len(dependencies):
                dependency = dependencies[len(frame.results)]

                if self.color(dependency) is Color.BLACK:
                    frame.results.append(self.memo[dependency])
                else:
                    frames.append(self._enter(dependency, frames))

                continue

            frames.pop()

            result = self.link(frame.name, frame.step, frame.results)
            self.memo[frame.name] = result
            self.colors[frame.name] = Color.BLACK
            self.order.append(frame.name)

            if not frames:
                return result

            frames[-1].results.append(result)

    def resolve(self, required: "Sequence[StepName]") -> dict["StepName", R]:
        return {name: self.visit(name) for name in required}
