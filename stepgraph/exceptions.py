from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Hashable, Sequence
    from typing import Any


class StepGraphError(Exception):
    def __init__(self, *args: "Any", **kwargs: "Any") -> None:
        super().__init__(*args, **kwargs)


##
## GRAPH RESOLUTION
##


class GraphResolutionError(StepGraphError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class CircularDependencyError(GraphResolutionError):
    def __init__(self, step: "Hashable", cycle: "Sequence[Hashable]") -> None:
        self.step = step
        self.cycle = tuple(cycle)

        cycle_str = " -> ".join(repr(name) for name in self.cycle)
        super().__init__(
            f"Circular dependency on step {step!r} in steps graph: {cycle_str}"
        )


class MissingStepError(GraphResolutionError):
    def __init__(
        self, step: "Hashable", dependent: "Hashable | None" = None
    ) -> None:
        self.step = step
        self.dependent = dependent

        if dependent is None:
            super().__init__(f"Missing step {step!r} in steps graph.")
        else:
            super().__init__(
                f"Missing step {step!r} in steps graph, required by {dependent!r}."
            )


class InvalidStepError(GraphResolutionError):
    def __init__(self, step: "Hashable", reason: str) -> None:
        self.step = step
        super().__init__(f"Step {step!r} is not a valid step declaration: {reason}")


##
## STEP EXECUTION
##


class HandlerFailure(StepGraphError):
    """
    The failure of a step's handler. Dependents of a failed step fail with the same
    instance, so `step` always names the step whose handler raised.
    """

    def __init__(self, step: "Hashable", original: BaseException) -> None:
        self.step = step
        self.original = original
        super().__init__(f"Step {step!r} failed: {original!r}")


class DeferredStateError(StepGraphError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
