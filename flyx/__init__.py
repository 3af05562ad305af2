"""
FlyX - Flyweight eXchange

An in-process registry that shares immutable intrinsic-state objects between
many caller-owned entities, plus ready-made flyweight families for text,
forests, particle systems and web pages.
"""

from .errors import FlyweightError, InvalidKeyError
from .keys import FlyweightKey
from .registry import FlyweightRegistry, RegistryStats, SharingReport

__all__ = [
    # Core
    "FlyweightRegistry",
    "FlyweightKey",
    # Accounting
    "RegistryStats",
    "SharingReport",
    # Exceptions
    "FlyweightError",
    "InvalidKeyError",
]
