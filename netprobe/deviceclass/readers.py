"""
Declarative value readers used by device class definitions.

A reader turns one or more SNMP subtrees into decoded values. Column reads
walk a table column and key every value by its OID index; scalar reads get
one instance. Every returned value is decoded before anything is combined,
so one bad value fails the whole read.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from ..core.errors import DecodeError
from ..core.models import HardwareHealthComponentState, Status
from ..network.connection import SNMPAccessPort
from ..network.value import SNMPValue


logger = logging.getLogger(__name__)


def index_sort_key(index: str) -> Tuple:
    """Order OID indices numerically ("2" before "10")."""
    return tuple(int(p) if p.isdigit() else p for p in index.split("."))


class Reader(ABC):
    """Reads one field."""

    @abstractmethod
    async def read_column(self, port: SNMPAccessPort) -> Dict[str, Any]:
        """Return decoded values keyed by OID index."""

    @abstractmethod
    async def read_scalar(self, port: SNMPAccessPort) -> Optional[Any]:
        """Return one decoded value, or None if the device has none."""


class ValueReader(Reader):
    """
    Reads ``oid`` and decodes it as ``type``.

    ``mapping`` translates raw values to labels before the type is applied,
    ``regex`` extracts a part of a string value (first group if any) and
    ``multiply`` scales the decoded number. Values missing from ``mapping``
    are a decode error unless ``unmapped`` is "keep".
    """

    def __init__(
        self,
        oid: str,
        type: str = "string",
        multiply: Optional[float] = None,
        mapping: Optional[Dict[Any, Any]] = None,
        regex: Optional[str] = None,
        unmapped: str = "error",
    ):
        self.oid = oid
        self.type = type
        self.multiply = multiply
        self.mapping = {str(k): v for k, v in mapping.items()} if mapping else None
        self.regex = re.compile(regex) if regex else None
        self.keep_unmapped = unmapped == "keep"

    def __repr__(self) -> str:
        return f"ValueReader(oid={self.oid!r}, type={self.type!r})"

    def _mapping_key(self, value: SNMPValue) -> str:
        try:
            return str(value.int64())
        except DecodeError:
            return value.string()

    def convert(self, value: SNMPValue) -> Optional[Any]:
        if self.mapping is not None:
            key = self._mapping_key(value)
            if key not in self.mapping:
                if self.keep_unmapped:
                    return key
                raise DecodeError(value.oid, f"{self.type} (mapping)", value.raw, f"unmapped value '{key}'")
            result = self.mapping[key]
            if self.type == "hardware_health_state":
                return HardwareHealthComponentState.from_label(result)
            return result

        if self.type == "status":
            return Status.from_code(value.int64())
        if self.type == "hardware_health_state":
            return HardwareHealthComponentState.from_label(value.string())

        if self.regex is not None:
            match = self.regex.search(value.string())
            if match is None:
                return None
            text = match.group(1) if match.groups() else match.group(0)
            result = SNMPValue(value.oid, text).decode(self.type)
        else:
            result = value.decode(self.type)

        if self.multiply is not None:
            result = result * self.multiply
        return result

    async def read_column(self, port: SNMPAccessPort) -> Dict[str, Any]:
        results = {}
        for response in await port.walk(self.oid):
            value = self.convert(response.get_value())
            if value is not None:
                results[response.index(self.oid)] = value
        return results

    async def read_scalar(self, port: SNMPAccessPort) -> Optional[Any]:
        responses = await port.get(self.oid)
        if not responses:
            return None
        return self.convert(responses[0].get_value())


class ConstantReader(Reader):
    """A fixed value declared by the device class."""

    def __init__(self, value: Any):
        self.value = value

    async def read_column(self, port: SNMPAccessPort) -> Dict[str, Any]:
        # constants have no index of their own, GroupReader applies them per row
        return {}

    async def read_scalar(self, port: SNMPAccessPort) -> Optional[Any]:
        return self.value


class _CombinedReader(Reader):
    """Combines the values of several readers sharing the same index."""

    def __init__(self, *readers: Reader):
        self.readers = readers

    @abstractmethod
    def combine(self, values: List[Any]) -> Optional[Any]:
        pass

    async def read_column(self, port: SNMPAccessPort) -> Dict[str, Any]:
        # constant operands apply to every index of the other operands
        columns = [
            None if isinstance(r, ConstantReader) else await r.read_column(port)
            for r in self.readers
        ]
        indexed = [column for column in columns if column is not None]
        if not indexed:
            return {}
        results = {}
        for index in indexed[0]:
            if not all(index in column for column in indexed):
                continue
            values = [
                reader.value if column is None else column[index]
                for reader, column in zip(self.readers, columns)
            ]
            value = self.combine(values)
            if value is not None:
                results[index] = value
        return results

    async def read_scalar(self, port: SNMPAccessPort) -> Optional[Any]:
        values = [await r.read_scalar(port) for r in self.readers]
        if any(v is None for v in values):
            return None
        return self.combine(values)


class PercentageReader(_CombinedReader):
    """used / total * 100; absent where total is zero."""

    def combine(self, values: List[Any]) -> Optional[Any]:
        used, total = values
        if not total:
            return None
        return float(used) / float(total) * 100


class ProductReader(_CombinedReader):
    def combine(self, values: List[Any]) -> Optional[Any]:
        result = 1
        for value in values:
            result *= value
        return result


class DifferenceReader(_CombinedReader):
    def combine(self, values: List[Any]) -> Optional[Any]:
        first, *rest = values
        return first - sum(rest)


class RowFilter:
    """Keeps table rows whose ``reader`` value is one of ``values``."""

    def __init__(self, reader: Reader, values: List[Any]):
        self.reader = reader
        self.values = {str(v) for v in values}

    async def matching_indices(self, port: SNMPAccessPort) -> set:
        column = await self.reader.read_column(port)
        return {index for index, value in column.items() if str(value) in self.values}


class GroupReader:
    """
    Reads a table into rows, one per OID index.

    Nested group readers fill a sub-structure of the same row (e.g. the
    radio block of an interface).
    """

    def __init__(self, properties: Dict[str, Any], only_if: Optional[RowFilter] = None):
        self.properties = properties
        self.only_if = only_if

    async def read_indexed(self, port: SNMPAccessPort) -> Dict[str, Dict[str, Any]]:
        rows: Dict[str, Dict[str, Any]] = {}
        constants = {}
        for name, reader in self.properties.items():
            if isinstance(reader, ConstantReader):
                constants[name] = reader.value
                continue
            if isinstance(reader, GroupReader):
                column = await reader.read_indexed(port)
            else:
                column = await reader.read_column(port)
            for index, value in column.items():
                rows.setdefault(index, {})[name] = value

        if self.only_if is not None:
            keep = await self.only_if.matching_indices(port)
            rows = {index: row for index, row in rows.items() if index in keep}

        for row in rows.values():
            for name, value in constants.items():
                row.setdefault(name, value)

        return {index: rows[index] for index in sorted(rows, key=index_sort_key)}

    async def read_rows(self, port: SNMPAccessPort) -> List[Dict[str, Any]]:
        return list((await self.read_indexed(port)).values())


class ScalarGroupReader:
    """Reads single values and nested tables into one structure."""

    def __init__(self, properties: Dict[str, Any]):
        self.properties = properties

    async def read(self, port: SNMPAccessPort) -> Dict[str, Any]:
        data = {}
        for name, reader in self.properties.items():
            if isinstance(reader, GroupReader):
                data[name] = await reader.read_rows(port)
            else:
                value = await reader.read_scalar(port)
                if value is not None:
                    data[name] = value
        return data


class CapabilityReader:
    """Collects one capability into its normalized model."""

    def __init__(self, model: type, reader, many: bool = False):
        self.model = model
        self.reader = reader
        self.many = many

    async def collect(self, port: SNMPAccessPort):
        logger.debug(f"Collecting {self.model.__name__}")
        if self.many:
            rows = await self.reader.read_rows(port)
            return [self.model.from_dict(row) for row in rows]
        return self.model.from_dict(await self.reader.read(port))
