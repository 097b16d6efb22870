"""Tests for error conversion in the pysnmp-backed access port."""

import pytest
from pysnmp.error import PySnmpError

from netprobe.core.config import SNMPConfig
from netprobe.core.errors import WalkError
from netprobe.network.snmp_client import SNMPClient


SYS_DESCR = "1.3.6.1.2.1.1.1.0"


def unreachable_client():
    client = SNMPClient("no-such-host.invalid", SNMPConfig(timeout=0.1, retries=0))

    async def bad_transport():
        raise PySnmpError("Bad IPv4/UDP transport address no-such-host.invalid@161")

    client._target = bad_transport
    return client


@pytest.mark.asyncio
async def test_walk_wraps_pysnmp_errors():
    client = unreachable_client()
    with pytest.raises(WalkError) as exc:
        await client.walk("1.3.6.1.2.1.1")
    assert exc.value.oid == "1.3.6.1.2.1.1"
    assert "no-such-host.invalid" in str(exc.value)
    assert isinstance(exc.value.__cause__, PySnmpError)


@pytest.mark.asyncio
async def test_get_wraps_pysnmp_errors():
    client = unreachable_client()
    with pytest.raises(WalkError) as exc:
        await client.get(SYS_DESCR)
    assert exc.value.oid == SYS_DESCR
    assert isinstance(exc.value.__cause__, PySnmpError)
