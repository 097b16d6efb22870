"""Tests for collection runs over a bound access port."""

import asyncio
import json

import pytest

from netprobe.communicator import CompositionResolver
from netprobe.core.collection import collect_device
from netprobe.core.errors import NoConnectionError
from netprobe.core.models import Device
from netprobe.network.connection import SNMPAccessPort, connection_from_context, device_from_context


IF_TABLE = "1.3.6.1.2.1.2.2.1"


class BlockingPort(SNMPAccessPort):
    """Port whose first walk never completes."""

    def __init__(self):
        self.walks = []
        self.started = asyncio.Event()
        self.closed = False

    async def walk(self, oid):
        self.walks.append(oid)
        self.started.set()
        await asyncio.Event().wait()

    async def get(self, *oids):
        return []

    async def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_failing_capability_does_not_abort_others(registry, fake_port):
    provider = CompositionResolver(registry).resolve("generic")
    port = fake_port({
        f"{IF_TABLE}.1.1": 1,
        f"{IF_TABLE}.10.1": "garbage",
        "1.3.6.1.2.1.25.3.3.1.2.1": 7,
        "1.3.6.1.2.1.25.1.6.0": 80,
    })

    result = await collect_device(provider, Device(device_class="generic"), port, ["interfaces", "cpu", "ups", "server"])

    assert "interfaces" in result.errors
    assert result.unsupported == ["ups"]
    assert [c.load for c in result.results["cpu"].cpus] == [7.0]
    assert result.results["server"].procs == 80
    assert port.closed


@pytest.mark.asyncio
async def test_binding_is_released_after_run(registry, fake_port):
    provider = CompositionResolver(registry).resolve("generic")
    await collect_device(provider, Device(device_class="generic"), fake_port({}), ["cpu"])

    with pytest.raises(NoConnectionError):
        connection_from_context()
    assert device_from_context() is None


@pytest.mark.asyncio
async def test_cancellation_releases_port(registry):
    provider = CompositionResolver(registry).resolve("generic")
    port = BlockingPort()

    task = asyncio.ensure_future(collect_device(provider, Device(device_class="generic"), port, ["cpu"]))
    await port.started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert port.walks == ["1.3.6.1.2.1.25.3.3.1.2"]
    assert port.closed


@pytest.mark.asyncio
async def test_properties_update_device(registry, fake_port):
    provider = CompositionResolver(registry).resolve("aviat")
    device = Device(device_class="aviat")

    result = await collect_device(provider, device, fake_port({}), ["properties"])

    assert device.properties.vendor == "Aviat"
    assert result.to_dict()["device"] == {"class": "aviat", "properties": {"vendor": "Aviat"}}


@pytest.mark.asyncio
async def test_result_is_serializable(registry, fake_port):
    provider = CompositionResolver(registry).resolve("generic")
    port = fake_port({f"{IF_TABLE}.1.1": 1, f"{IF_TABLE}.8.1": 2})

    result = await collect_device(provider, Device(device_class="generic"), port, ["interfaces", "sbc"])

    data = json.loads(json.dumps(result.to_dict()))
    assert data["results"]["interfaces"] == [{"ifIndex": 1, "ifOperStatus": "down"}]
    assert data["unsupported"] == ["sbc"]
    assert data["errors"] == {}


@pytest.mark.asyncio
async def test_unknown_capability(registry, fake_port):
    provider = CompositionResolver(registry).resolve("generic")
    port = fake_port({})
    with pytest.raises(ValueError):
        await collect_device(provider, Device(device_class="generic"), port, ["toaster"])
    assert not port.closed
