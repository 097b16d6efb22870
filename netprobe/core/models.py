"""
Normalized data model for device telemetry.

These dataclasses are the technology-agnostic structures every capability
populates. Every optional field is either ``None`` (absent) or holds a
decoded, type-correct value. Serialization omits absent fields and writes
enum labels, never ordinals.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union, get_args, get_origin, get_type_hints

from .errors import EnumDecodeError


def _opt(key: Optional[str] = None, serialize: bool = True):
    """Optional model field, serialized under ``key``."""
    metadata = {"serialize": serialize}
    if key:
        metadata["key"] = key
    return field(default=None, metadata=metadata)


def _group(key: Optional[str] = None):
    """Component group collection; empty means unsupported."""
    metadata = {}
    if key:
        metadata["key"] = key
    return field(default_factory=list, metadata=metadata)


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


def _deserialize(tp: Any, value: Any) -> Any:
    if get_origin(tp) is Union:
        tp = next(arg for arg in get_args(tp) if arg is not type(None))
    if get_origin(tp) in (list, List):
        (item_type,) = get_args(tp)
        return [_deserialize(item_type, v) for v in value]
    if isinstance(tp, type):
        if issubclass(tp, Enum):
            try:
                return tp(value)
            except ValueError:
                raise EnumDecodeError(tp.__name__, value)
        if is_dataclass(tp):
            return tp.from_dict(value)
        if tp is float and isinstance(value, int) and not isinstance(value, bool):
            return float(value)
    return value


class Model:
    """Mixin giving dataclasses a field-per-attribute serialization."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting absent optional fields."""
        data = {}
        for f in fields(self):
            if not f.metadata.get("serialize", True):
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            data[f.metadata.get("key", f.name)] = _serialize(value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build an instance from its serialized form."""
        hints = get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            key = f.metadata.get("key", f.name)
            if key not in data or data[key] is None:
                continue
            kwargs[f.name] = _deserialize(hints[f.name], data[key])
        return cls(**kwargs)


class Status(str, Enum):
    """Interface admin/oper status (IF-MIB)."""

    UP = "up"
    DOWN = "down"
    TESTING = "testing"
    UNKNOWN = "unknown"
    DORMANT = "dormant"
    NOT_PRESENT = "notPresent"
    LOWER_LAYER_DOWN = "lowerLayerDown"

    @classmethod
    def from_code(cls, code: int) -> "Status":
        """Return the status encoded by an IF-MIB code (1..7)."""
        if isinstance(code, bool) or not isinstance(code, int) or code not in _STATUS_BY_CODE:
            raise EnumDecodeError("status code", code)
        return _STATUS_BY_CODE[code]

    def to_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {status: code for code, status in enumerate(Status, start=1)}
_STATUS_BY_CODE = {code: status for status, code in _STATUS_CODES.items()}


class HardwareHealthComponentState(str, Enum):
    """State of a hardware component, ordered from best to worst."""

    INITIAL = "initial"
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    SHUTDOWN = "shutdown"
    NOT_PRESENT = "not_present"
    NOT_FUNCTIONING = "not_functioning"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: str, fallback: bool = False) -> "HardwareHealthComponentState":
        """Parse a state label; unknown labels map to UNKNOWN only with ``fallback``."""
        try:
            return cls(label)
        except ValueError:
            if fallback:
                return cls.UNKNOWN
            raise EnumDecodeError("hardware health state", label)

    @classmethod
    def from_int(cls, ordinal: int) -> "HardwareHealthComponentState":
        members = list(cls)
        if isinstance(ordinal, bool) or not isinstance(ordinal, int) or not 0 <= ordinal < len(members):
            raise EnumDecodeError("hardware health state ordinal", ordinal)
        return members[ordinal]

    def to_int(self) -> int:
        return list(type(self)).index(self)


def worst_state(states: Iterable[Optional[HardwareHealthComponentState]]) -> Optional[HardwareHealthComponentState]:
    """Aggregate states, the highest ordinal wins. Absent states are ignored."""
    present = [s for s in states if s is not None]
    if not present:
        return None
    return max(present, key=lambda s: s.to_int())


@dataclass
class Properties(Model):
    """Descriptive properties; absence means not determinable."""

    vendor: Optional[str] = _opt()
    model: Optional[str] = _opt()
    model_series: Optional[str] = _opt()
    serial_number: Optional[str] = _opt()
    os_version: Optional[str] = _opt()


@dataclass
class Device(Model):
    """A device resolved to a class, with its properties."""

    device_class: str = field(metadata={"key": "class"})
    properties: Properties = field(default_factory=Properties)


#
# Interface technology sub-structures
#

@dataclass
class EthernetLikeInterface(Model):
    dot3_stats_alignment_errors: Optional[int] = _opt("dot3StatsAlignmentErrors")
    dot3_stats_fcs_errors: Optional[int] = _opt("dot3StatsFCSErrors")
    dot3_stats_single_collision_frames: Optional[int] = _opt("dot3StatsSingleCollisionFrames")
    dot3_stats_multiple_collision_frames: Optional[int] = _opt("dot3StatsMultipleCollisionFrames")
    dot3_stats_sqe_test_errors: Optional[int] = _opt("dot3StatsSQETestErrors")
    dot3_stats_deferred_transmissions: Optional[int] = _opt("dot3StatsDeferredTransmissions")
    dot3_stats_late_collisions: Optional[int] = _opt("dot3StatsLateCollisions")
    dot3_stats_excessive_collisions: Optional[int] = _opt("dot3StatsExcessiveCollisions")
    dot3_stats_internal_mac_transmit_errors: Optional[int] = _opt("dot3StatsInternalMacTransmitErrors")
    dot3_stats_carrier_sense_errors: Optional[int] = _opt("dot3StatsCarrierSenseErrors")
    dot3_stats_frame_too_longs: Optional[int] = _opt("dot3StatsFrameTooLongs")
    dot3_stats_internal_mac_receive_errors: Optional[int] = _opt("dot3StatsInternalMacReceiveErrors")
    dot3_hc_stats_alignment_errors: Optional[int] = _opt("dot3HCStatsAlignmentErrors")
    dot3_hc_stats_fcs_errors: Optional[int] = _opt("dot3HCStatsFCSErrors")
    dot3_hc_stats_internal_mac_transmit_errors: Optional[int] = _opt("dot3HCStatsInternalMacTransmitErrors")
    dot3_hc_stats_frame_too_longs: Optional[int] = _opt("dot3HCStatsFrameTooLongs")
    dot3_hc_stats_internal_mac_receive_errors: Optional[int] = _opt("dot3HCStatsInternalMacReceiveErrors")
    ether_stats_crc_align_errors: Optional[int] = _opt("etherStatsCRCAlignErrors")


@dataclass
class RadioInterface(Model):
    """Radio link; bitrates in bit/s."""

    level_out: Optional[int] = _opt()
    level_in: Optional[int] = _opt()
    maxbitrate_out: Optional[int] = _opt()
    maxbitrate_in: Optional[int] = _opt()


@dataclass
class Rate(Model):
    """A value referring to a time span."""

    time: str = ""
    value: float = 0.0


@dataclass
class OpticalChannel(Model):
    channel: Optional[str] = _opt()
    rx_power: Optional[float] = _opt()
    tx_power: Optional[float] = _opt()


@dataclass
class DWDMInterface(Model):
    rx_power: Optional[float] = _opt()
    tx_power: Optional[float] = _opt()
    corrected_fec: Optional[List[Rate]] = _opt()
    uncorrected_fec: Optional[List[Rate]] = _opt()
    channels: Optional[List[OpticalChannel]] = _opt()


@dataclass
class OpticalTransponderInterface(Model):
    identifier: Optional[str] = _opt()
    label: Optional[str] = _opt()
    rx_power: Optional[float] = _opt()
    tx_power: Optional[float] = _opt()
    corrected_fec: Optional[int] = _opt()
    uncorrected_fec: Optional[int] = _opt()


@dataclass
class OpticalAmplifierInterface(Model):
    identifier: Optional[str] = _opt()
    label: Optional[str] = _opt()
    rx_power: Optional[float] = _opt()
    tx_power: Optional[float] = _opt()
    gain: Optional[float] = _opt()


@dataclass
class OpticalOPMInterface(Model):
    identifier: Optional[str] = _opt()
    label: Optional[str] = _opt()
    rx_power: Optional[float] = _opt()
    channels: Optional[List[OpticalChannel]] = _opt()


@dataclass
class SAPInterface(Model):
    """Service access point counters."""

    inbound: Optional[int] = _opt()
    outbound: Optional[int] = _opt()


@dataclass
class VLAN(Model):
    name: Optional[str] = _opt()
    status: Optional[str] = _opt()


@dataclass
class VLANInformation(Model):
    vlans: Optional[List[VLAN]] = _opt()


@dataclass
class Interface(Model):
    """
    One network interface.

    ``max_speed_in``/``max_speed_out`` are only set when inbound and outbound
    capacity differ from a symmetric ``if_speed``. ``sub_type`` refines the
    port type internally and is never serialized.
    """

    if_index: Optional[int] = _opt("ifIndex")
    if_descr: Optional[str] = _opt("ifDescr")
    if_type: Optional[str] = _opt("ifType")
    if_mtu: Optional[int] = _opt("ifMtu")
    if_speed: Optional[int] = _opt("ifSpeed")
    if_phys_address: Optional[str] = _opt("ifPhysAddress")
    if_admin_status: Optional[Status] = _opt("ifAdminStatus")
    if_oper_status: Optional[Status] = _opt("ifOperStatus")
    if_last_change: Optional[int] = _opt("ifLastChange")
    if_in_octets: Optional[int] = _opt("ifInOctets")
    if_in_ucast_pkts: Optional[int] = _opt("ifInUcastPkts")
    if_in_nucast_pkts: Optional[int] = _opt("ifInNUcastPkts")
    if_in_discards: Optional[int] = _opt("ifInDiscards")
    if_in_errors: Optional[int] = _opt("ifInErrors")
    if_in_unknown_protos: Optional[int] = _opt("ifInUnknownProtos")
    if_out_octets: Optional[int] = _opt("ifOutOctets")
    if_out_ucast_pkts: Optional[int] = _opt("ifOutUcastPkts")
    if_out_nucast_pkts: Optional[int] = _opt("ifOutNUcastPkts")
    if_out_discards: Optional[int] = _opt("ifOutDiscards")
    if_out_errors: Optional[int] = _opt("ifOutErrors")
    if_out_qlen: Optional[int] = _opt("ifOutQLen")
    if_specific: Optional[str] = _opt("ifSpecific")
    if_name: Optional[str] = _opt("ifName")
    if_in_multicast_pkts: Optional[int] = _opt("ifInMulticastPkts")
    if_in_broadcast_pkts: Optional[int] = _opt("ifInBroadcastPkts")
    if_out_multicast_pkts: Optional[int] = _opt("ifOutMulticastPkts")
    if_out_broadcast_pkts: Optional[int] = _opt("ifOutBroadcastPkts")
    if_hc_in_octets: Optional[int] = _opt("ifHCInOctets")
    if_hc_in_ucast_pkts: Optional[int] = _opt("ifHCInUcastPkts")
    if_hc_in_multicast_pkts: Optional[int] = _opt("ifHCInMulticastPkts")
    if_hc_in_broadcast_pkts: Optional[int] = _opt("ifHCInBroadcastPkts")
    if_hc_out_octets: Optional[int] = _opt("ifHCOutOctets")
    if_hc_out_ucast_pkts: Optional[int] = _opt("ifHCOutUcastPkts")
    if_hc_out_multicast_pkts: Optional[int] = _opt("ifHCOutMulticastPkts")
    if_hc_out_broadcast_pkts: Optional[int] = _opt("ifHCOutBroadcastPkts")
    if_high_speed: Optional[int] = _opt("ifHighSpeed")
    if_alias: Optional[str] = _opt("ifAlias")

    max_speed_in: Optional[int] = _opt()
    max_speed_out: Optional[int] = _opt()

    sub_type: Optional[str] = _opt(serialize=False)

    ethernet_like: Optional[EthernetLikeInterface] = _opt()
    radio: Optional[RadioInterface] = _opt()
    dwdm: Optional[DWDMInterface] = _opt()
    optical_transponder: Optional[OpticalTransponderInterface] = _opt()
    optical_amplifier: Optional[OpticalAmplifierInterface] = _opt()
    optical_opm: Optional[OpticalOPMInterface] = _opt()
    sap: Optional[SAPInterface] = _opt()
    vlan: Optional[VLANInformation] = _opt()


#
# Device components
#

@dataclass
class CPU(Model):
    label: Optional[str] = _opt()
    load: Optional[float] = _opt()


@dataclass
class CPUComponent(Model):
    cpus: List[CPU] = _group()


@dataclass
class MemoryPool(Model):
    label: Optional[str] = _opt()
    usage: Optional[float] = _opt()


@dataclass
class MemoryComponent(Model):
    pools: List[MemoryPool] = _group()


@dataclass
class DiskComponentStorage(Model):
    type: Optional[str] = _opt()
    description: Optional[str] = _opt()
    available: Optional[int] = _opt()
    used: Optional[int] = _opt()


@dataclass
class DiskComponent(Model):
    storages: List[DiskComponentStorage] = _group()


@dataclass
class UPSComponent(Model):
    alarm_low_voltage_disconnect: Optional[int] = _opt()
    battery_amperage: Optional[float] = _opt()
    battery_capacity: Optional[float] = _opt()
    battery_current: Optional[float] = _opt()
    battery_remaining_time: Optional[float] = _opt()
    battery_temperature: Optional[float] = _opt()
    battery_voltage: Optional[float] = _opt()
    current_load: Optional[float] = _opt()
    mains_voltage_applied: Optional[bool] = _opt()
    rectifier_current: Optional[float] = _opt()
    system_voltage: Optional[float] = _opt()


@dataclass
class ServerComponent(Model):
    procs: Optional[int] = _opt()
    users: Optional[int] = _opt()


@dataclass
class SBCComponentAgent(Model):
    """Per-agent session counters (voice)."""

    hostname: Optional[str] = _opt()
    current_active_sessions_inbound: Optional[int] = _opt()
    current_session_rate_inbound: Optional[int] = _opt()
    current_active_sessions_outbound: Optional[int] = _opt()
    current_session_rate_outbound: Optional[int] = _opt()
    period_asr: Optional[int] = _opt()
    status: Optional[int] = _opt()


@dataclass
class SBCComponentRealm(Model):
    """Per-realm session counters (voice)."""

    name: Optional[str] = _opt()
    current_active_sessions_inbound: Optional[int] = _opt()
    current_session_rate_inbound: Optional[int] = _opt()
    current_active_sessions_outbound: Optional[int] = _opt()
    current_session_rate_outbound: Optional[int] = _opt()
    period_asr: Optional[int] = _opt()
    active_local_contacts: Optional[int] = _opt()
    status: Optional[int] = _opt()


@dataclass
class SBCComponent(Model):
    agents: List[SBCComponentAgent] = _group()
    realms: List[SBCComponentRealm] = _group()
    global_call_per_second: Optional[int] = _opt()
    global_concurrent_sessions: Optional[int] = _opt()
    active_local_contacts: Optional[int] = _opt()
    transcoding_capacity: Optional[int] = _opt()
    license_capacity: Optional[int] = _opt()
    system_redundancy: Optional[int] = _opt()
    system_health_score: Optional[int] = _opt()


@dataclass
class HardwareHealthComponentFan(Model):
    description: Optional[str] = _opt()
    state: Optional[HardwareHealthComponentState] = _opt()


@dataclass
class HardwareHealthComponentPowerSupply(Model):
    description: Optional[str] = _opt()
    state: Optional[HardwareHealthComponentState] = _opt()


@dataclass
class HardwareHealthComponentTemperature(Model):
    description: Optional[str] = _opt()
    temperature: Optional[float] = _opt()
    state: Optional[HardwareHealthComponentState] = _opt()


@dataclass
class HardwareHealthComponentVoltage(Model):
    description: Optional[str] = _opt()
    voltage: Optional[float] = _opt()
    state: Optional[HardwareHealthComponentState] = _opt()


@dataclass
class HardwareHealthComponent(Model):
    environment_monitor_state: Optional[HardwareHealthComponentState] = _opt()
    fans: List[HardwareHealthComponentFan] = _group()
    power_supply: List[HardwareHealthComponentPowerSupply] = _group()
    temperature: List[HardwareHealthComponentTemperature] = _group()
    voltage: List[HardwareHealthComponentVoltage] = _group()

    @property
    def overall_state(self) -> Optional[HardwareHealthComponentState]:
        """Worst state across the monitor state and all readings."""
        states = [self.environment_monitor_state]
        for group in (self.fans, self.power_supply, self.temperature, self.voltage):
            states.extend(entry.state for entry in group)
        return worst_state(states)
