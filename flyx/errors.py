"""
FlyX Exceptions
===============
"""

from typing import Any


class FlyweightError(Exception):
    """Base class for all FlyX errors."""

    pass


class InvalidKeyError(FlyweightError, ValueError):
    """Raised when a key is rejected at get_or_create time."""

    def __init__(self, key: Any, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid flyweight key {key!r}: {reason}")
