"""Declarative device classes and capability lookup."""

from .device_class import CAPABILITIES, DeviceClass, apply_filters
from .loader import build_registry, load_definition, load_directory, load_file
from .registry import DeviceClassRegistry

__all__ = [
    "CAPABILITIES",
    "DeviceClass",
    "DeviceClassRegistry",
    "apply_filters",
    "build_registry",
    "load_definition",
    "load_directory",
    "load_file",
]
