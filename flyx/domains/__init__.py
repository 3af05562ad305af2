"""
FlyX Domains - Concrete Flyweight Families
==========================================

Each module pairs a shared flyweight type with a caller-side context that
holds the extrinsic state:

- text: CharacterFlyweight shared by a TextDocument
- forest: TreeType shared by a Forest
- particles: ParticleType shared by a ParticleSystem
- web: WebElementType shared by a WebPage
"""

from .forest import Forest, Tree, TreeKey, TreeType, tree_registry
from .particles import (
    EXPLOSION,
    SMOKE,
    SPARK,
    Particle,
    ParticleKey,
    ParticlePhysics,
    ParticleSystem,
    ParticleType,
    Velocity,
    particle_registry,
)
from .text import (
    CharacterFlyweight,
    CharacterKey,
    DocumentCharacter,
    Position,
    TextDocument,
    character_registry,
)
from .web import (
    WebElement,
    WebElementKey,
    WebElementType,
    WebPage,
    button_key,
    heading_key,
    paragraph_key,
    web_element_registry,
)

__all__ = [
    # text
    "CharacterFlyweight",
    "CharacterKey",
    "DocumentCharacter",
    "Position",
    "TextDocument",
    "character_registry",
    # forest
    "Forest",
    "Tree",
    "TreeKey",
    "TreeType",
    "tree_registry",
    # particles
    "EXPLOSION",
    "SMOKE",
    "SPARK",
    "Particle",
    "ParticleKey",
    "ParticlePhysics",
    "ParticleSystem",
    "ParticleType",
    "Velocity",
    "particle_registry",
    # web
    "WebElement",
    "WebElementKey",
    "WebElementType",
    "WebPage",
    "button_key",
    "heading_key",
    "paragraph_key",
    "web_element_registry",
]
