"""Code communicators and the composition of capability providers."""

from .base import CodeCommunicator, walk_uint_sum
from .resolver import CompositionResolver, register_communicator, registered_communicators

# vendor communicators register themselves on import
from .aviat import AviatCommunicator

__all__ = [
    "AviatCommunicator",
    "CodeCommunicator",
    "CompositionResolver",
    "register_communicator",
    "registered_communicators",
    "walk_uint_sum",
]
