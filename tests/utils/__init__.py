"""
Test utilities for FlyX.

This package contains shared testing utilities to help write
better, more maintainable tests.
"""

from .memory_utils import MemoryTracker, count_instances, count_types

__all__ = [
    "count_instances",
    "count_types",
    "MemoryTracker",
]
