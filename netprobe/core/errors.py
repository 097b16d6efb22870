"""
Error kinds raised while collecting device telemetry.

A failure in one capability never aborts sibling capabilities; callers
decide per capability. ``CapabilityUnsupportedError`` means "no telemetry
available", every other error means the collection attempt failed.
"""

from typing import Any, Optional


class NetprobeError(Exception):
    """Base class for all collection errors."""

    def with_context(self, context: str) -> "NetprobeError":
        """Return a copy of this error with a prefixed message."""
        err = type(self).__new__(type(self))
        err.__dict__.update(self.__dict__)
        err.args = (f"{context}: {self}",)
        return err


class NoConnectionError(NetprobeError):
    """No SNMP access port is bound to the running collection."""

    def __init__(self, message: str = "snmp client is empty"):
        super().__init__(message)


class CapabilityUnsupportedError(NetprobeError):
    """The device class chain declares no implementation for a capability."""

    def __init__(self, device_class: str, capability: str):
        super().__init__(f"capability '{capability}' is not supported by device class '{device_class}'")
        self.device_class = device_class
        self.capability = capability


class DeviceClassError(NetprobeError):
    """A device class definition is unknown or malformed."""


class WalkError(NetprobeError):
    """Transport level failure while walking or reading an OID subtree."""

    def __init__(self, message: str, oid: Optional[str] = None):
        super().__init__(message)
        self.oid = oid


class DecodeError(NetprobeError):
    """A returned value could not be converted to its required type."""

    def __init__(self, oid: str, requested_type: str, raw: Any = None, reason: str = ""):
        message = f"failed to decode value of '{oid}' as {requested_type}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.oid = oid
        self.requested_type = requested_type
        self.raw = raw


class EnumDecodeError(NetprobeError):
    """An integer or label is outside the documented set of an enum."""

    def __init__(self, enum_name: str, value: Any):
        super().__init__(f"invalid {enum_name} '{value}'")
        self.enum_name = enum_name
        self.value = value


class ThresholdError(NetprobeError):
    """Warning/critical thresholds are structurally inconsistent."""
