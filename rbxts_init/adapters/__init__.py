"""Adapters — tool bindings for external commands.

Public re-exports for convenient access.
"""

from rbxts_init.adapters.base import Adapter, ExecutionContext
from rbxts_init.adapters.mock import MockAdapter
from rbxts_init.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
]
