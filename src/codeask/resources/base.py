"""Abstract resource registry.

The registry hides where resource definitions live (server config,
local file, fixed list).
"""

from abc import ABC, abstractmethod

from .models import Resource


class ResourceRegistry(ABC):
    """Source of the resources a question may be asked about."""

    @abstractmethod
    async def list_resources(self) -> list[Resource]:
        """List every configured resource."""


class StaticResourceRegistry(ResourceRegistry):
    """Registry backed by a fixed list of names."""

    def __init__(self, names: list[str] | None = None):
        self._resources = [Resource(name=name) for name in names or []]

    async def list_resources(self) -> list[Resource]:
        return list(self._resources)
