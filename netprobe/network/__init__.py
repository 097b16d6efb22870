"""SNMP access: value decoding, the access port contract and its pysnmp client."""

from .connection import SNMPAccessPort, connection_from_context, device_from_context, open_session
from .value import SNMPResponse, SNMPValue

__all__ = [
    "SNMPAccessPort",
    "SNMPResponse",
    "SNMPValue",
    "connection_from_context",
    "device_from_context",
    "open_session",
]
