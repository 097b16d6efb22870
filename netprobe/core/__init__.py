"""Core module containing data models, errors and configuration."""

from .models import (
    Device,
    Properties,
    Interface,
    Status,
    HardwareHealthComponentState,
    CPUComponent,
    MemoryComponent,
    DiskComponent,
    UPSComponent,
    ServerComponent,
    SBCComponent,
    HardwareHealthComponent,
)
from .config import Config
from .errors import (
    NetprobeError,
    NoConnectionError,
    CapabilityUnsupportedError,
    DeviceClassError,
    WalkError,
    DecodeError,
    EnumDecodeError,
    ThresholdError,
)

__all__ = [
    "Device",
    "Properties",
    "Interface",
    "Status",
    "HardwareHealthComponentState",
    "CPUComponent",
    "MemoryComponent",
    "DiskComponent",
    "UPSComponent",
    "ServerComponent",
    "SBCComponent",
    "HardwareHealthComponent",
    "Config",
    "NetprobeError",
    "NoConnectionError",
    "CapabilityUnsupportedError",
    "DeviceClassError",
    "WalkError",
    "DecodeError",
    "EnumDecodeError",
    "ThresholdError",
]
