"""
Composition of capability providers.

The provider for a device class is its declarative ``DeviceClass`` wrapped
by the code communicators registered for the class and its ancestors. The
most generic ancestor's communicators sit innermost, so a more specific
override runs closer to the caller and sees every more generic override
already applied.
"""

import logging
from typing import Dict, List, Optional, Tuple, Type

from ..deviceclass.device_class import DeviceClass
from ..deviceclass.registry import DeviceClassRegistry
from .base import CodeCommunicator


logger = logging.getLogger(__name__)


_communicators: Dict[str, List[Type[CodeCommunicator]]] = {}


def register_communicator(class_name: str):
    """Class decorator registering a communicator for ``class_name``."""

    def decorator(cls: Type[CodeCommunicator]) -> Type[CodeCommunicator]:
        _communicators.setdefault(class_name, []).append(cls)
        return cls

    return decorator


def registered_communicators() -> Dict[str, List[Type[CodeCommunicator]]]:
    """Copy of the default registration table."""
    return {name: list(classes) for name, classes in _communicators.items()}


class CompositionResolver:
    """Builds the provider for a device class. Performs no SNMP access."""

    def __init__(
        self,
        registry: DeviceClassRegistry,
        communicators: Optional[Dict[str, List[Type[CodeCommunicator]]]] = None,
    ):
        self.registry = registry
        if communicators is None:
            communicators = registered_communicators()
        # frozen: resolvers may be shared by concurrent collection runs
        self._communicators: Dict[str, Tuple[Type[CodeCommunicator], ...]] = {
            name: tuple(classes) for name, classes in communicators.items()
        }

    def chain(self, class_name: str) -> List[Type[CodeCommunicator]]:
        """Communicators for ``class_name`` in wrapping order, innermost first."""
        chain = []
        for cls in reversed(self.registry.ancestors(class_name)):
            chain.extend(self._communicators.get(cls, ()))
        return chain

    def resolve(self, class_name: str):
        provider = DeviceClass(class_name, self.registry)
        for communicator in self.chain(class_name):
            provider = communicator(provider)
        logger.debug(f"Resolved {class_name} to {provider!r}")
        return provider
