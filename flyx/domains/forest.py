"""
Forest Flyweights
=================

A forest of many trees rendered from a handful of shared tree types.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..keys import FlyweightKey
from ..registry import FlyweightRegistry, SharingReport


@dataclass(frozen=True)
class TreeKey(FlyweightKey):
    name: str
    color: str
    sprite: str


class TreeType:
    """Shared tree species data (name, color, sprite image)."""

    __slots__ = ("_name", "_color", "_sprite")

    def __init__(self, name: str, color: str, sprite: str):
        self._name = name
        self._color = color
        self._sprite = sprite

    @classmethod
    def from_key(cls, key: TreeKey) -> "TreeType":
        return cls(key.name, key.color, key.sprite)

    @property
    def name(self) -> str:
        return self._name

    @property
    def color(self) -> str:
        return self._color

    @property
    def sprite(self) -> str:
        return self._sprite

    def render(self, canvas: str, x: int, y: int, size: int) -> str:
        return (
            f"Drawing {self._name} tree ({self._color}, {self._sprite}) "
            f"at ({x}, {y}) with size {size} on {canvas}"
        )

    def __repr__(self) -> str:
        return f"TreeType({self._name!r}, {self._color!r}, {self._sprite!r})"


def tree_registry(**kwargs) -> FlyweightRegistry[TreeKey, TreeType]:
    kwargs.setdefault("name", "tree-types")
    return FlyweightRegistry(TreeType.from_key, **kwargs)


@dataclass(frozen=True)
class Tree:
    x: int
    y: int
    size: int
    tree_type: TreeType

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def render(self, canvas: str) -> str:
        return self.tree_type.render(canvas, self.x, self.y, self.size)


class Forest:
    def __init__(self, registry: FlyweightRegistry[TreeKey, TreeType]):
        self._registry = registry
        self._trees: List[Tree] = []

    def plant_tree(
        self, x: int, y: int, size: int, name: str, color: str, sprite: str
    ) -> Tree:
        tree_type = self._registry.get_or_create(TreeKey(name, color, sprite))
        tree = Tree(x, y, size, tree_type)
        self._trees.append(tree)
        return tree

    def render(self, canvas: str) -> List[str]:
        return [tree.render(canvas) for tree in self._trees]

    def tree_count(self) -> int:
        return len(self._trees)

    def tree_type_count(self) -> int:
        return self._registry.count()

    def trees_by_type(self, type_name: str) -> List[Tree]:
        return [tree for tree in self._trees if tree.tree_type.name == type_name]

    def report(self) -> SharingReport:
        return self._registry.report(self.tree_count())

    def statistics(self) -> str:
        report = self.report()
        return (
            f"Forest contains {report.instances} trees using "
            f"{report.flyweights} different types. "
            f"Memory savings: {report.saved} objects"
        )
