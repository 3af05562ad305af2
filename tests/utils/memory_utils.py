"""
Memory testing utilities for flyweight sharing.

These utilities count live objects by type name so tests can verify that a
context allocates one flyweight per distinct key rather than one per instance.

Examples:
    Count what an operation leaves behind:

        >>> with MemoryTracker() as tracker:
        ...     document = create_hello_document(character_registry())
        >>> tracker.growth("CharacterFlyweight")
        4

    Assert a bound on shared objects:

        >>> tracker.assert_growth_at_most("CharacterFlyweight", 4)
"""

import gc
from collections import defaultdict
from typing import Dict, Optional


def count_types() -> Dict[str, int]:
    """Count instances of each object type currently in memory.

    Returns:
        Dictionary mapping type names to counts
    """
    gc.collect()
    counts = defaultdict(int)
    for obj in gc.get_objects():
        counts[type(obj).__name__] += 1
    return counts


def count_instances(type_name: str) -> int:
    """Count live objects whose type is named ``type_name``."""
    return count_types().get(type_name, 0)


class MemoryTracker:
    """Context manager for tracking object counts during operations."""

    def __init__(self):
        self.initial_counts: Optional[Dict[str, int]] = None
        self.final_counts: Optional[Dict[str, int]] = None

    def __enter__(self):
        self.initial_counts = count_types()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.final_counts = count_types()

    def growth(self, type_name: str) -> int:
        """Change in live ``type_name`` objects between enter and exit."""
        final = self.final_counts if self.final_counts is not None else count_types()
        return final.get(type_name, 0) - self.initial_counts.get(type_name, 0)

    def assert_growth_at_most(self, type_name: str, limit: int) -> None:
        growth = self.growth(type_name)
        assert growth <= limit, f"{type_name} count grew by {growth} (limit: {limit})"
