"""
Decoding of raw SNMP values into typed values.

The decoder never scales or converts units; callers do that explicitly
where the MIB documents a unit (e.g. kbit/s readings multiplied by 1000).
"""

import string
from dataclasses import dataclass
from typing import Any, Union

from pyasn1.type import univ
from pysnmp.proto.rfc1902 import IpAddress

from ..core.errors import DecodeError


UINT64_MAX = 2 ** 64 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_PRINTABLE = set(string.printable)


class SNMPValue:
    """A raw value returned for ``oid``, decodable to one semantic type."""

    def __init__(self, oid: str, raw: Any):
        self.oid = oid
        self.raw = raw

    def __repr__(self) -> str:
        return f"SNMPValue(oid={self.oid!r}, raw={self.raw!r})"

    def _fail(self, requested: str, reason: str = "") -> DecodeError:
        return DecodeError(self.oid, requested, self.raw, reason)

    def _octets(self) -> bytes:
        raw = self.raw
        if isinstance(raw, univ.OctetString):
            return raw.asOctets()
        return bytes(raw)

    def _text(self, requested: str) -> str:
        raw = self.raw
        if isinstance(raw, str):
            return raw
        if isinstance(raw, (bytes, bytearray, univ.OctetString)):
            try:
                return self._octets().decode("utf-8")
            except UnicodeDecodeError:
                raise self._fail(requested, "value is not text")
        raise self._fail(requested, f"unsupported raw type {type(raw).__name__}")

    def _integer(self, requested: str) -> int:
        raw = self.raw
        if isinstance(raw, bool) or raw is None:
            raise self._fail(requested)
        if isinstance(raw, int):
            return raw
        if isinstance(raw, univ.Integer):
            return int(raw)
        if isinstance(raw, float):
            if raw.is_integer():
                return int(raw)
            raise self._fail(requested, "value is not integral")
        text = self._text(requested).strip()
        try:
            return int(text)
        except ValueError:
            raise self._fail(requested, f"'{text}' is not an integer")

    def uint64(self) -> int:
        value = self._integer("uint64")
        if not 0 <= value <= UINT64_MAX:
            raise self._fail("uint64", f"{value} is out of range")
        return value

    def int64(self) -> int:
        value = self._integer("int64")
        if not INT64_MIN <= value <= INT64_MAX:
            raise self._fail("int64", f"{value} is out of range")
        return value

    def float64(self) -> float:
        raw = self.raw
        if isinstance(raw, bool) or raw is None:
            raise self._fail("float64")
        if isinstance(raw, (int, float)):
            return float(raw)
        if isinstance(raw, univ.Integer):
            return float(int(raw))
        text = self._text("float64").strip()
        try:
            return float(text)
        except ValueError:
            raise self._fail("float64", f"'{text}' is not a number")

    def string(self) -> str:
        raw = self.raw
        if raw is None:
            raise self._fail("string")
        if isinstance(raw, str):
            return raw
        if isinstance(raw, IpAddress):
            return raw.prettyPrint()
        if isinstance(raw, (bytes, bytearray, univ.OctetString)):
            octets = self._octets()
            try:
                text = octets.decode("utf-8")
            except UnicodeDecodeError:
                text = None
            if text is not None and all(c in _PRINTABLE for c in text):
                return text
            # binary content such as physical addresses
            return ":".join(f"{b:02x}" for b in octets)
        if isinstance(raw, (univ.Integer, univ.ObjectIdentifier)):
            return raw.prettyPrint()
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return str(raw)
        raise self._fail("string", f"unsupported raw type {type(raw).__name__}")

    def decode(self, kind: str) -> Union[int, float, str]:
        """Decode by type name: ``uint``, ``int``, ``float`` or ``string``."""
        try:
            method = _DECODERS[kind]
        except KeyError:
            raise self._fail(kind, "unknown value type")
        return getattr(self, method)()


_DECODERS = {
    "uint": "uint64",
    "uint64": "uint64",
    "int": "int64",
    "int64": "int64",
    "float": "float64",
    "float64": "float64",
    "string": "string",
}


@dataclass
class SNMPResponse:
    """One (OID, raw value) pair returned by a walk or get."""

    oid: str
    raw: Any

    def get_value(self) -> SNMPValue:
        return SNMPValue(self.oid, self.raw)

    def index(self, base_oid: str) -> str:
        """OID suffix below ``base_oid`` ("" for the base itself)."""
        oid = self.oid.lstrip(".")
        base = base_oid.lstrip(".")
        if oid == base:
            return ""
        if oid.startswith(base + "."):
            return oid[len(base) + 1:]
        return oid
