"""
Flyweight Registry
==================

This module provides FlyweightRegistry, a keyed cache that deduplicates
immutable intrinsic-state objects. Many logical entities (characters, trees,
particles) hold a reference to a small number of shared flyweights while the
caller keeps the per-instance extrinsic state.

Key Features:
- Lazy population: a flyweight is built on the first request for its key
- Identity sharing: equal keys always return the same instance
- Thread-safe check-then-insert under a single lock
- Hit/miss statistics and sharing reports for memory accounting
- Optional LRU bound (cachetools) for long-running processes

Usage:
    registry = FlyweightRegistry(CharacterFlyweight.from_key)

    a = registry.get_or_create(CharacterKey("l", "Arial", "normal"))
    b = registry.get_or_create(CharacterKey("l", "Arial", "normal"))
    assert a is b
    assert registry.count() == 1

There is no module-level default registry. Callers construct one and hand it
to every context that should share flyweights.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar

from cachetools import Cache, LRUCache

from .errors import FlyweightError, InvalidKeyError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
F = TypeVar("F")

__all__ = [
    "FlyweightError",
    "FlyweightRegistry",
    "InvalidKeyError",
    "RegistryStats",
    "SharingReport",
]


# ============================================================================
# STATISTICS
# ============================================================================


@dataclass(frozen=True)
class RegistryStats:
    """Point-in-time snapshot of registry counters."""

    hits: int
    misses: int
    size: int
    evictions: int = 0

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_ratio(self) -> float:
        return self.hits / self.requests if self.requests else 0.0


@dataclass(frozen=True)
class SharingReport:
    """
    Memory accounting for a context that shares flyweights.

    Attributes:
        instances: Number of logical entities tracked by the caller
        flyweights: Number of distinct shared flyweights
    """

    instances: int
    flyweights: int

    @property
    def saved(self) -> int:
        """Objects that did not have to be allocated thanks to sharing."""
        return self.instances - self.flyweights

    @property
    def ratio(self) -> float:
        """Logical instances per shared flyweight."""
        return self.instances / self.flyweights if self.flyweights else 0.0


class _CountingLRUCache(LRUCache):
    """LRUCache that reports evictions back to its registry."""

    def __init__(self, maxsize: int, on_evict: Callable[[Any, Any], None]):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self):
        key, value = super().popitem()
        self._on_evict(key, value)
        return key, value

    def peek(self, key: Any, default: Any = None) -> Any:
        """Read a value without refreshing its recency."""
        if key in self:
            return Cache.__getitem__(self, key)
        return default


# ============================================================================
# REGISTRY
# ============================================================================


class FlyweightRegistry(Generic[K, F]):
    """
    Keyed cache of shared, immutable flyweights.

    For any two requests with equal keys the registry returns the identical
    flyweight (``a is b``), never a copy. The map only grows unless a
    ``maxsize`` is configured, in which case the least recently used
    flyweights are evicted and sharing holds only while a key is resident.

    Args:
        factory: Callable building a flyweight from its key
        name: Label for log records and repr (defaults to the factory name)
        maxsize: None for an unbounded registry, or an LRU bound
        validate: Reject None keys and call ``key.validate()`` when present
    """

    _MISSING = object()

    def __init__(
        self,
        factory: Callable[[K], F],
        *,
        name: Optional[str] = None,
        maxsize: Optional[int] = None,
        validate: bool = True,
    ) -> None:
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {factory!r}")
        if maxsize is not None and maxsize < 1:
            raise ValueError(f"maxsize must be positive or None, got {maxsize}")

        self._factory = factory
        self._name = name or getattr(factory, "__qualname__", type(factory).__name__)
        self._maxsize = maxsize
        self._validate = validate

        self._flyweights: Dict[K, F] = self._new_map()
        self._lock = threading.RLock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _new_map(self) -> Dict[K, F]:
        if self._maxsize is None:
            return {}
        return _CountingLRUCache(self._maxsize, self._on_evict)

    @property
    def name(self) -> str:
        return self._name

    @property
    def maxsize(self) -> Optional[int]:
        return self._maxsize

    def _check_key(self, key: K) -> None:
        if key is None:
            raise InvalidKeyError(key, "key is None")
        try:
            hash(key)
        except TypeError as e:
            raise InvalidKeyError(key, f"key is not hashable ({e})") from e
        validate = getattr(key, "validate", None)
        if callable(validate):
            validate()

    def _on_evict(self, key: K, flyweight: F) -> None:
        self._evictions += 1
        logger.debug(f"[{self._name}] Evicted flyweight for: {key}")

    def get_or_create(self, key: K) -> F:
        """
        Return the flyweight for key, building it on the first request.

        Raises:
            InvalidKeyError: If validation is enabled and the key is rejected.
                Nothing is inserted and the counters are untouched.
        """
        if self._validate:
            self._check_key(key)

        with self._lock:
            flyweight = self._flyweights.get(key, self._MISSING)
            if flyweight is not self._MISSING:
                self._hits += 1
                return flyweight

            # Factory runs inside the lock so a key is only ever built once
            flyweight = self._factory(key)
            self._flyweights[key] = flyweight
            self._misses += 1
            logger.debug(f"[{self._name}] Creating new flyweight for: {key}")
            return flyweight

    def get(self, key: K, default: Optional[F] = None) -> Optional[F]:
        """
        Look up a flyweight without creating it or touching the counters.

        In bounded mode the lookup does not refresh the key's LRU position.
        """
        with self._lock:
            if self._maxsize is None:
                return self._flyweights.get(key, default)
            return self._flyweights.peek(key, default)

    def count(self) -> int:
        """Number of distinct flyweights currently held."""
        with self._lock:
            return len(self._flyweights)

    def list(self) -> List[K]:
        """Snapshot of all known keys; later insertions do not affect it."""
        with self._lock:
            return list(self._flyweights.keys())

    keys = list

    def stats(self) -> RegistryStats:
        with self._lock:
            return RegistryStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._flyweights),
                evictions=self._evictions,
            )

    def report(self, instances: int) -> SharingReport:
        """Build a sharing report for a caller tracking ``instances`` entities."""
        if instances < 0:
            raise ValueError(f"instances must be non-negative, got {instances}")
        return SharingReport(instances=instances, flyweights=self.count())

    def clear(self) -> None:
        """Drop every flyweight and reset the counters."""
        with self._lock:
            # Fresh map: dropped entries are not evictions
            self._flyweights = self._new_map()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            try:
                return key in self._flyweights
            except TypeError:
                return False

    def __repr__(self) -> str:
        bound = "unbounded" if self._maxsize is None else f"maxsize={self._maxsize}"
        return f"FlyweightRegistry({self._name!r}, size={self.count()}, {bound})"
