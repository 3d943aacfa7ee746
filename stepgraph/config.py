from typing import Any, Literal

from pydantic import Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    backend: Literal["asyncio", "trio"] = "asyncio"
    """Async backend used by blocking runs."""

    backend_options: dict[str, Any] = Field(default_factory=dict)
    """Extra options for the async backend of blocking runs."""

    timeout: PositiveFloat | None = None
    """Max time in seconds to wait for every required step when running a graph."""

    warn_duplicate_required: bool = True
    """Warn when a step is listed more than once in the required steps."""

    model_config = SettingsConfigDict(env_prefix="STEPGRAPH_")
