from .anyio import AnyioAdapter
from .asyncio import AsyncioAdapter
from .base import Adapter

__all__ = ["Adapter", "AnyioAdapter", "AsyncioAdapter"]
