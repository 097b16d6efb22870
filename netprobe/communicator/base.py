"""
Code communicators: imperative vendor overrides on top of a device class.

A communicator wraps another provider (a device class or another
communicator). Capabilities it does not override are delegated unchanged.
"""

import logging
from typing import List

from ..core.errors import DecodeError, WalkError
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
from ..deviceclass.device_class import Filter
from ..network.connection import SNMPAccessPort


logger = logging.getLogger(__name__)


class CodeCommunicator:
    """Provider that delegates every capability to ``inner``."""

    def __init__(self, inner):
        self.inner = inner

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"

    async def get_properties(self) -> Properties:
        return await self.inner.get_properties()

    async def get_interfaces(self, *filters: Filter) -> List[Interface]:
        return await self.inner.get_interfaces(*filters)

    async def get_cpu_component(self, *filters: Filter) -> CPUComponent:
        return await self.inner.get_cpu_component(*filters)

    async def get_memory_component(self, *filters: Filter) -> MemoryComponent:
        return await self.inner.get_memory_component(*filters)

    async def get_disk_component(self, *filters: Filter) -> DiskComponent:
        return await self.inner.get_disk_component(*filters)

    async def get_ups_component(self) -> UPSComponent:
        return await self.inner.get_ups_component()

    async def get_server_component(self) -> ServerComponent:
        return await self.inner.get_server_component()

    async def get_sbc_component(self, *filters: Filter) -> SBCComponent:
        return await self.inner.get_sbc_component(*filters)

    async def get_hardware_health_component(self, *filters: Filter) -> HardwareHealthComponent:
        return await self.inner.get_hardware_health_component(*filters)


async def walk_uint_sum(port: SNMPAccessPort, oid: str, name: str) -> int:
    """
    Walk ``oid`` and sum every value as an unsigned integer.

    Every value is decoded before the sum is returned; a failing walk or a
    single undecodable value fails the whole read.
    """
    try:
        responses = await port.walk(oid)
    except WalkError as e:
        raise e.with_context(f"failed to get {name}") from e

    total = 0
    for response in responses:
        try:
            total += response.get_value().uint64()
        except DecodeError as e:
            raise e.with_context(f"failed to parse {name} value") from e

    logger.debug(f"{name}: {len(responses)} values, sum {total}")
    return total
