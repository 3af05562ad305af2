"""
FlyX Keys - Value-Typed Flyweight Keys
======================================

Keys address shared flyweights inside a FlyweightRegistry. A key must be
hashable, equality-comparable and immutable; frozen dataclasses give all three
for free.

Usage:
    @dataclass(frozen=True)
    class GlyphKey(FlyweightKey):
        character: str
        font_family: str

    key = GlyphKey("a", "Arial")
    key.validate()          # raises InvalidKeyError on None / "" fields
    key.fields()            # ("a", "Arial")
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Tuple

from .errors import InvalidKeyError


@dataclass(frozen=True)
class FlyweightKey:
    """
    Base class for composite flyweight keys.

    Subclasses declare their fields as a frozen dataclass. The default
    validation rejects ``None`` and empty strings in any field; subclasses
    extend ``validate`` for domain rules and call ``super().validate()``.
    """

    def fields(self) -> Tuple[Any, ...]:
        """Return field values in declaration order."""
        return tuple(getattr(self, f.name) for f in dataclasses.fields(self))

    def validate(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if value is None:
                raise InvalidKeyError(self, f"field '{field.name}' is None")
            if isinstance(value, str) and not value:
                raise InvalidKeyError(self, f"field '{field.name}' is empty")

    def __str__(self) -> str:
        return "-".join(str(value) for value in self.fields())
