"""
Registration table for device classes and their capabilities.

Capabilities are stored flat, keyed by (class name, capability). A lookup
walks from the requested class toward its most generic ancestor and takes
the first class that declares the capability.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..core.errors import CapabilityUnsupportedError, DeviceClassError


logger = logging.getLogger(__name__)


class DeviceClassRegistry:
    """Device classes, their parents and their capability readers."""

    def __init__(self):
        self._parents: Dict[str, Optional[str]] = {}
        self._capabilities: Dict[Tuple[str, str], object] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._parents

    @property
    def classes(self) -> List[str]:
        return sorted(self._parents)

    def add_class(self, name: str, parent: Optional[str] = None):
        if name in self._parents:
            raise DeviceClassError(f"device class '{name}' is already registered")
        if parent == name:
            raise DeviceClassError(f"device class '{name}' cannot be its own parent")
        self._parents[name] = parent
        logger.debug(f"Registered device class {name} (parent: {parent})")

    def register(self, name: str, capability: str, reader):
        """Declare ``reader`` as the implementation of ``capability`` for class ``name``."""
        if name not in self._parents:
            raise DeviceClassError(f"unknown device class '{name}'")
        self._capabilities[(name, capability)] = reader

    def ancestors(self, name: str) -> List[str]:
        """Return ``name`` followed by its ancestors, most generic last."""
        chain = []
        current = name
        while current is not None:
            if current not in self._parents:
                raise DeviceClassError(f"unknown device class '{current}'")
            if current in chain:
                raise DeviceClassError(f"device class hierarchy of '{name}' contains a cycle")
            chain.append(current)
            current = self._parents[current]
        return chain

    def lookup(self, name: str, capability: str):
        """Return the nearest reader for ``capability`` along the class chain."""
        for cls in self.ancestors(name):
            reader = self._capabilities.get((cls, capability))
            if reader is not None:
                return reader
        raise CapabilityUnsupportedError(name, capability)

    def declares(self, name: str, capability: str) -> bool:
        return (name, capability) in self._capabilities
