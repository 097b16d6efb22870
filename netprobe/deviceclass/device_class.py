"""
Capability provider backed by a declarative device class.

This is the innermost layer of every composed provider. Code communicators
wrap it and expose the same methods.
"""

import logging
from typing import Callable, List, Sequence

from ..core.models import (
    CPUComponent,
    DiskComponent,
    HardwareHealthComponent,
    Interface,
    MemoryComponent,
    Properties,
    SBCComponent,
    ServerComponent,
    UPSComponent,
)
from ..network.connection import connection_from_context
from .registry import DeviceClassRegistry


logger = logging.getLogger(__name__)


Filter = Callable[[object], bool]

# capability name -> provider method
CAPABILITIES = {
    "properties": "get_properties",
    "interfaces": "get_interfaces",
    "cpu": "get_cpu_component",
    "memory": "get_memory_component",
    "disk": "get_disk_component",
    "ups": "get_ups_component",
    "server": "get_server_component",
    "sbc": "get_sbc_component",
    "hardware_health": "get_hardware_health_component",
}


def apply_filters(entries: Sequence, filters: Sequence[Filter]) -> List:
    """Keep the entries every filter accepts."""
    return [entry for entry in entries if all(f(entry) for f in filters)]


class DeviceClass:
    """Generic capability implementations of one device class."""

    def __init__(self, name: str, registry: DeviceClassRegistry):
        self.name = name
        self.registry = registry

    def __repr__(self) -> str:
        return f"DeviceClass({self.name!r})"

    async def _collect(self, capability: str):
        reader = self.registry.lookup(self.name, capability)
        port = connection_from_context()
        logger.debug(f"{self.name}: collecting {capability}")
        return await reader.collect(port)

    async def get_properties(self) -> Properties:
        return await self._collect("properties")

    async def get_interfaces(self, *filters: Filter) -> List[Interface]:
        return apply_filters(await self._collect("interfaces"), filters)

    async def get_cpu_component(self, *filters: Filter) -> CPUComponent:
        component = await self._collect("cpu")
        component.cpus = apply_filters(component.cpus, filters)
        return component

    async def get_memory_component(self, *filters: Filter) -> MemoryComponent:
        component = await self._collect("memory")
        component.pools = apply_filters(component.pools, filters)
        return component

    async def get_disk_component(self, *filters: Filter) -> DiskComponent:
        component = await self._collect("disk")
        component.storages = apply_filters(component.storages, filters)
        return component

    async def get_ups_component(self) -> UPSComponent:
        return await self._collect("ups")

    async def get_server_component(self) -> ServerComponent:
        return await self._collect("server")

    async def get_sbc_component(self, *filters: Filter) -> SBCComponent:
        """
        Read the SBC component.

        Every filter is applied to both ``agents`` and ``realms``, so it must
        accept ``SBCComponentAgent`` and ``SBCComponentRealm`` entries alike.
        """
        component = await self._collect("sbc")
        component.agents = apply_filters(component.agents, filters)
        component.realms = apply_filters(component.realms, filters)
        return component

    async def get_hardware_health_component(self, *filters: Filter) -> HardwareHealthComponent:
        component = await self._collect("hardware_health")
        component.fans = apply_filters(component.fans, filters)
        component.power_supply = apply_filters(component.power_supply, filters)
        component.temperature = apply_filters(component.temperature, filters)
        component.voltage = apply_filters(component.voltage, filters)
        return component
