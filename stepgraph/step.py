import inspect
from collections.abc import Callable, Hashable, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .exceptions import InvalidStepError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable

    StepName = Hashable
    Handler = Callable[..., Any | Awaitable[Any]]


def _accepts_positional(fn: "Callable[..., Any]", count: int) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # builtins and some C callables expose no signature, so trust the caller
        return True

    try:
        signature.bind(*range(count))
    except TypeError:
        return False

    return True


class Step(BaseModel):
    dependencies: tuple[Hashable, ...] = ()
    handler: Callable[..., Any]

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_arity(self) -> "Step":
        if not _accepts_positional(self.handler, len(self.dependencies)):
            raise ValueError(
                f"Handler {getattr(self.handler, '__name__', self.handler)!r} must"
                f" accept {len(self.dependencies)} positional argument(s), one per"
                " dependency."
            )

        return self


def constant(value: "Any") -> Step:
    """A step without dependencies that realizes to `value`."""
    return Step(handler=lambda: value)


def step(*dependencies: "StepName") -> "Callable[[Handler], Step]":
    """
    Declare a step from a function. The function receives the realized values of
    `dependencies`, positionally and in the order given here.

        @step("x", "y")
        async def z(x, y):
            return x + y
    """

    def decorator(fn: "Handler") -> Step:
        return Step(dependencies=dependencies, handler=fn)

    return decorator


def as_step(name: "StepName", spec: "Any") -> Step:
    """
    Coerce a graph entry into a `Step`. Besides `Step` instances, a bare callable is
    a step without dependencies and a sequence `[*dependencies, handler]` declares
    a step with its handler last.
    """
    if isinstance(spec, Step):
        return spec

    try:
        if callable(spec):
            return Step(handler=spec)
        elif isinstance(spec, Sequence) and not isinstance(spec, str | bytes):
            if not spec:
                raise InvalidStepError(name, "an empty declaration has no handler.")
            elif not callable(spec[-1]):
                raise InvalidStepError(
                    name, "the last element of a step declaration must be callable."
                )

            return Step(dependencies=tuple(spec[:-1]), handler=spec[-1])
    except ValidationError as e:
        raise InvalidStepError(name, str(e)) from e

    raise InvalidStepError(
        name, f"expected a Step, a callable or a sequence, got {type(spec).__name__}."
    )
