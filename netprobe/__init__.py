"""netprobe - normalized device telemetry over SNMP."""

__version__ = "0.1.0"
