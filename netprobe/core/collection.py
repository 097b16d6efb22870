"""
Collection runs.

One run reads a set of capabilities from one device over one access port.
A failing capability is recorded and the run continues with the next one.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..deviceclass.device_class import CAPABILITIES
from ..network.connection import SNMPAccessPort, open_session
from .errors import CapabilityUnsupportedError
from .models import Device, Model


logger = logging.getLogger(__name__)


@dataclass
class CollectionResult:
    """Everything one run collected from a device."""

    device: Device
    results: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    unsupported: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        results = {}
        for capability, value in self.results.items():
            if isinstance(value, list):
                results[capability] = [v.to_dict() for v in value]
            elif isinstance(value, Model):
                results[capability] = value.to_dict()
        return {
            "device": self.device.to_dict(),
            "results": results,
            "errors": self.errors,
            "unsupported": self.unsupported,
            "duration_ms": self.duration_ms,
        }


async def collect_device(
    provider,
    device: Device,
    port: SNMPAccessPort,
    capabilities: Optional[Iterable[str]] = None,
) -> CollectionResult:
    """
    Collect ``capabilities`` (all by default) through ``provider``.

    The port is bound for the whole run and closed afterwards.
    """
    capabilities = list(capabilities) if capabilities is not None else list(CAPABILITIES)
    unknown = [c for c in capabilities if c not in CAPABILITIES]
    if unknown:
        raise ValueError(f"unknown capabilities: {', '.join(unknown)}")

    start_time = time.time()
    result = CollectionResult(device=device)

    async with open_session(port, device):
        for capability in capabilities:
            method = getattr(provider, CAPABILITIES[capability])
            try:
                value = await method()
            except CapabilityUnsupportedError:
                logger.debug(f"{device.device_class}: {capability} not supported")
                result.unsupported.append(capability)
                continue
            except Exception as e:
                logger.warning(f"{device.device_class}: {capability} collection failed: {e}")
                result.errors[capability] = str(e)
                continue

            result.results[capability] = value
            if capability == "properties":
                device.properties = value

    result.duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Collection for {device.device_class} completed in {result.duration_ms:.0f}ms - "
        f"{len(result.results)} collected, {len(result.errors)} failed, "
        f"{len(result.unsupported)} unsupported"
    )
    return result
