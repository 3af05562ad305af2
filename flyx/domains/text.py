"""
Text Flyweights
===============

Character formatting for a text editor. The glyph (character, font family,
font style) is intrinsic and shared; position, size and color are extrinsic
and live on each DocumentCharacter.
"""

from dataclasses import dataclass
from typing import List

from ..errors import InvalidKeyError
from ..keys import FlyweightKey
from ..registry import FlyweightRegistry, SharingReport


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class CharacterKey(FlyweightKey):
    character: str
    font_family: str
    font_style: str  # bold, italic, normal

    def validate(self) -> None:
        super().validate()
        if not isinstance(self.character, str) or len(self.character) != 1:
            raise InvalidKeyError(self, "character must be a single character")


class CharacterFlyweight:
    """Shared glyph: the intrinsic state of a character."""

    __slots__ = ("_character", "_font_family", "_font_style")

    def __init__(self, character: str, font_family: str, font_style: str):
        self._character = character
        self._font_family = font_family
        self._font_style = font_style

    @classmethod
    def from_key(cls, key: CharacterKey) -> "CharacterFlyweight":
        return cls(key.character, key.font_family, key.font_style)

    @property
    def character(self) -> str:
        return self._character

    @property
    def font_family(self) -> str:
        return self._font_family

    @property
    def font_style(self) -> str:
        return self._font_style

    def render(self, position: Position, font_size: int, color: str) -> str:
        return (
            f"Character '{self._character}' at ({position.x}, {position.y}) "
            f"with font: {self._font_family} {self._font_style} {font_size}px {color}"
        )

    def __repr__(self) -> str:
        return (
            f"CharacterFlyweight({self._character!r}, "
            f"{self._font_family!r}, {self._font_style!r})"
        )


def character_registry(**kwargs) -> FlyweightRegistry[CharacterKey, CharacterFlyweight]:
    """Create an empty registry of character flyweights."""
    kwargs.setdefault("name", "characters")
    return FlyweightRegistry(CharacterFlyweight.from_key, **kwargs)


@dataclass(frozen=True)
class DocumentCharacter:
    """A placed character: shared glyph plus extrinsic state."""

    flyweight: CharacterFlyweight
    position: Position
    font_size: int
    color: str

    def render(self) -> str:
        return self.flyweight.render(self.position, self.font_size, self.color)


class TextDocument:
    """
    A document made of many characters sharing a few glyph flyweights.

    Example:
        document = TextDocument(character_registry())
        document.add_character("H", "Arial", "bold", Position(0, 0), 12, "black")
        document.render()
        # ["Character 'H' at (0, 0) with font: Arial bold 12px black"]
    """

    def __init__(self, registry: FlyweightRegistry[CharacterKey, CharacterFlyweight]):
        self._registry = registry
        self._characters: List[DocumentCharacter] = []

    @property
    def registry(self) -> FlyweightRegistry[CharacterKey, CharacterFlyweight]:
        return self._registry

    def add_character(
        self,
        character: str,
        font_family: str,
        font_style: str,
        position: Position,
        font_size: int,
        color: str,
    ) -> DocumentCharacter:
        flyweight = self._registry.get_or_create(
            CharacterKey(character, font_family, font_style)
        )
        placed = DocumentCharacter(flyweight, position, font_size, color)
        self._characters.append(placed)
        return placed

    def add_text(
        self,
        text: str,
        font_family: str,
        font_style: str,
        origin: Position,
        font_size: int,
        color: str,
        advance: int = 10,
    ) -> List[DocumentCharacter]:
        """Lay out ``text`` on one line, ``advance`` units per character."""
        return [
            self.add_character(
                char,
                font_family,
                font_style,
                Position(origin.x + i * advance, origin.y),
                font_size,
                color,
            )
            for i, char in enumerate(text)
        ]

    @property
    def characters(self) -> List[DocumentCharacter]:
        return list(self._characters)

    def render(self) -> List[str]:
        return [placed.render() for placed in self._characters]

    def character_count(self) -> int:
        return len(self._characters)

    def flyweight_count(self) -> int:
        return self._registry.count()

    def report(self) -> SharingReport:
        return self._registry.report(self.character_count())

    def memory_footprint(self) -> str:
        report = self.report()
        return (
            f"Total characters: {report.instances}, "
            f"Unique flyweights: {report.flyweights}, "
            f"Memory saved: {report.saved} objects"
        )
