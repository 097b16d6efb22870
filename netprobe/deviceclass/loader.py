"""
Loading of YAML device class definitions.

A definition names the class, its parent and the capabilities it declares::

    name: aviat
    parent: generic
    properties:
      vendor:
        value: Aviat
    components:
      cpu:
        cpus:
          load: {oid: 1.3.6.1.2.1.25.3.3.1.2, type: float}

Field specs are readers: ``{oid, type, multiply, mapping, regex}``,
``{value}``, ``{percentage: {used, total}}``, ``{product: [...]}`` or
``{difference: [...]}``. Any other mapping is a table (or a sub-structure
of a table row) whose rows may be restricted with ``only_if``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.errors import DeviceClassError
from ..core.models import (
    CPUComponent,
    DiskComponent,
    HardwareHealthComponent,
    Interface,
    MemoryComponent,
    Properties,
    SBCComponent,
    ServerComponent,
    UPSComponent,
)
from .readers import (
    CapabilityReader,
    ConstantReader,
    DifferenceReader,
    GroupReader,
    PercentageReader,
    ProductReader,
    Reader,
    RowFilter,
    ScalarGroupReader,
    ValueReader,
)
from .registry import DeviceClassRegistry


logger = logging.getLogger(__name__)


BUILTIN_DEFINITIONS = Path(__file__).parent / "definitions"

COMPONENT_MODELS = {
    "cpu": CPUComponent,
    "memory": MemoryComponent,
    "disk": DiskComponent,
    "ups": UPSComponent,
    "server": ServerComponent,
    "sbc": SBCComponent,
    "hardware_health": HardwareHealthComponent,
}

_VALUE_KEYS = {"oid", "type", "multiply", "mapping", "regex", "unmapped"}


def parse_reader(spec: Any, where: str) -> Optional[Reader]:
    """Build a reader from ``spec``; None if ``spec`` describes a table."""
    if not isinstance(spec, dict):
        raise DeviceClassError(f"{where}: expected a mapping, got {spec!r}")

    if "oid" in spec:
        unknown = set(spec) - _VALUE_KEYS
        if unknown:
            raise DeviceClassError(f"{where}: unknown keys {sorted(unknown)}")
        return ValueReader(
            str(spec["oid"]),
            type=spec.get("type", "string"),
            multiply=spec.get("multiply"),
            mapping=spec.get("mapping"),
            regex=spec.get("regex"),
            unmapped=spec.get("unmapped", "error"),
        )
    if "value" in spec:
        return ConstantReader(spec["value"])
    if "percentage" in spec:
        parts = spec["percentage"]
        return PercentageReader(
            _require_reader(parts.get("used"), f"{where}.percentage.used"),
            _require_reader(parts.get("total"), f"{where}.percentage.total"),
        )
    if "product" in spec:
        return ProductReader(*[_require_reader(s, f"{where}.product") for s in spec["product"]])
    if "difference" in spec:
        return DifferenceReader(*[_require_reader(s, f"{where}.difference") for s in spec["difference"]])
    return None


def _require_reader(spec: Any, where: str) -> Reader:
    reader = parse_reader(spec, where)
    if reader is None:
        raise DeviceClassError(f"{where}: expected a value reader")
    return reader


def parse_group(spec: Dict[str, Any], where: str) -> GroupReader:
    properties = {}
    only_if = None
    for name, field_spec in spec.items():
        if name == "only_if":
            values = field_spec.get("values")
            if not values:
                raise DeviceClassError(f"{where}.only_if: 'values' is required")
            condition = {k: v for k, v in field_spec.items() if k != "values"}
            only_if = RowFilter(_require_reader(condition, f"{where}.only_if"), values)
            continue
        reader = parse_reader(field_spec, f"{where}.{name}")
        properties[name] = reader if reader is not None else parse_group(field_spec, f"{where}.{name}")
    return GroupReader(properties, only_if=only_if)


def parse_scalar_group(spec: Dict[str, Any], where: str) -> ScalarGroupReader:
    if not isinstance(spec, dict):
        raise DeviceClassError(f"{where}: expected a mapping, got {spec!r}")
    properties = {}
    for name, field_spec in spec.items():
        reader = parse_reader(field_spec, f"{where}.{name}")
        properties[name] = reader if reader is not None else parse_group(field_spec, f"{where}.{name}")
    return ScalarGroupReader(properties)


def parse_capabilities(data: Dict[str, Any], where: str) -> Dict[str, CapabilityReader]:
    """Build the capability readers a definition declares."""
    capabilities = {}

    if data.get("properties"):
        capabilities["properties"] = CapabilityReader(
            Properties, parse_scalar_group(data["properties"], f"{where}.properties")
        )

    for name, spec in (data.get("components") or {}).items():
        component_where = f"{where}.components.{name}"
        if name == "interfaces":
            if not isinstance(spec, dict):
                raise DeviceClassError(f"{component_where}: expected a mapping")
            capabilities[name] = CapabilityReader(Interface, parse_group(spec, component_where), many=True)
        elif name in COMPONENT_MODELS:
            capabilities[name] = CapabilityReader(COMPONENT_MODELS[name], parse_scalar_group(spec, component_where))
        else:
            raise DeviceClassError(f"{component_where}: unknown component '{name}'")

    return capabilities


def load_definition(registry: DeviceClassRegistry, data: Dict[str, Any], source: str = "<dict>"):
    """Register the device class described by ``data``."""
    name = data.get("name") if isinstance(data, dict) else None
    if not name:
        raise DeviceClassError(f"{source}: device class definition has no name")

    capabilities = parse_capabilities(data, name)
    registry.add_class(name, data.get("parent"))
    for capability, reader in capabilities.items():
        registry.register(name, capability, reader)
    logger.debug(f"Loaded device class {name} from {source}: {sorted(capabilities)}")


def load_file(registry: DeviceClassRegistry, path: Union[str, Path]):
    path = Path(path)
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    load_definition(registry, data, source=str(path))


def load_directory(registry: DeviceClassRegistry, directory: Union[str, Path]):
    """Register every ``*.yaml`` definition in ``directory``."""
    directory = Path(directory)
    if not directory.is_dir():
        raise DeviceClassError(f"device class directory '{directory}' does not exist")
    for path in sorted(directory.glob("*.yaml")):
        load_file(registry, path)


def build_registry(directories: Optional[List[str]] = None, load_builtin: bool = True) -> DeviceClassRegistry:
    """Create a registry with the bundled and the configured definitions."""
    registry = DeviceClassRegistry()
    if load_builtin:
        load_directory(registry, BUILTIN_DEFINITIONS)
    for directory in directories or []:
        load_directory(registry, directory)
    logger.info(f"Loaded {len(registry.classes)} device classes")
    return registry
