"""Shared fixtures: an in-memory SNMP device and the bundled device classes."""

import pytest

from netprobe.core.errors import WalkError
from netprobe.deviceclass import build_registry
from netprobe.deviceclass.readers import index_sort_key
from netprobe.network.connection import SNMPAccessPort
from netprobe.network.value import SNMPResponse


class FakeAccessPort(SNMPAccessPort):
    """
    Simulated device state keyed by full OID.

    ``failures`` maps walk roots to the exception the walk raises.
    """

    def __init__(self, data=None, failures=None):
        self.data = dict(data or {})
        self.failures = dict(failures or {})
        self.walks = []
        self.gets = []
        self.closed = False

    async def walk(self, oid):
        self.walks.append(oid)
        if oid in self.failures:
            raise self.failures[oid]
        prefix = oid + "."
        oids = sorted((o for o in self.data if o.startswith(prefix)), key=index_sort_key)
        return [SNMPResponse(o, self.data[o]) for o in oids]

    async def get(self, *oids):
        self.gets.extend(oids)
        for oid in oids:
            if oid in self.failures:
                raise self.failures[oid]
        return [SNMPResponse(o, self.data[o]) for o in oids if o in self.data]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_port():
    """The fake access port class; call it with the device data."""
    return FakeAccessPort


@pytest.fixture
def registry():
    """Registry with the bundled device class definitions."""
    return build_registry()


@pytest.fixture
def walk_error():
    def make(oid, message="request timed out"):
        return WalkError(message, oid)
    return make
