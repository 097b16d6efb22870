"""
SNMP access port contract and its binding to a running collection.

A port is bound to the running collection through a context variable, so
nested device class and communicator layers reach it without threading it
through every call signature.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, List, Optional

from ..core.errors import NoConnectionError
from ..core.models import Device
from .value import SNMPResponse


logger = logging.getLogger(__name__)


class SNMPAccessPort(ABC):
    """Minimal SNMP capability the collection core consumes."""

    @abstractmethod
    async def walk(self, oid: str) -> List[SNMPResponse]:
        """
        Walk the subtree below ``oid``.

        Returns the responses in OID order. An absent subtree yields an
        empty list; transport failures raise ``WalkError``.
        """

    @abstractmethod
    async def get(self, *oids: str) -> List[SNMPResponse]:
        """Read single instances. Missing instances are left out."""

    async def close(self):
        """Release transport resources."""


_connection: ContextVar[Optional[SNMPAccessPort]] = ContextVar("netprobe_connection", default=None)
_device: ContextVar[Optional[Device]] = ContextVar("netprobe_device", default=None)


def connection_from_context() -> SNMPAccessPort:
    """Return the bound access port or raise ``NoConnectionError``."""
    port = _connection.get()
    if port is None:
        raise NoConnectionError()
    return port


def device_from_context() -> Optional[Device]:
    """Return the device bound to the running collection, if any."""
    return _device.get()


@asynccontextmanager
async def open_session(port: SNMPAccessPort, device: Optional[Device] = None) -> AsyncIterator[SNMPAccessPort]:
    """
    Bind ``port`` (and optionally ``device``) for one collection run.

    The binding is reset and the port closed on every exit path, including
    errors and cancellation.
    """
    conn_token = _connection.set(port)
    device_token = _device.set(device)
    logger.debug(f"Bound access port {port!r}")
    try:
        yield port
    finally:
        _device.reset(device_token)
        _connection.reset(conn_token)
        await port.close()
        logger.debug(f"Released access port {port!r}")
