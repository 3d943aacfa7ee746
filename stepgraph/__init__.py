from .adapter import Adapter, AnyioAdapter, AsyncioAdapter
from .config import Config
from .deferred import Deferred
from .engine import Engine, make_engine, resolve
from .exceptions import (
    CircularDependencyError,
    HandlerFailure,
    InvalidStepError,
    MissingStepError,
)
from .runner import execute, run
from .step import Step, constant, step
from .topology import Topology, topology

__all__ = [
    "Adapter",
    "AnyioAdapter",
    "AsyncioAdapter",
    "Config",
    "Deferred",
    "Engine",
    "make_engine",
    "resolve",
    "CircularDependencyError",
    "HandlerFailure",
    "InvalidStepError",
    "MissingStepError",
    "execute",
    "run",
    "Step",
    "constant",
    "step",
    "Topology",
    "topology",
]
