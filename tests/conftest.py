"""
Shared pytest fixtures and configuration for FlyX tests.
"""

import pytest

from flyx import FlyweightRegistry
from flyx.domains import (
    character_registry,
    particle_registry,
    tree_registry,
    web_element_registry,
)
from tests.test_factories import create_counting_factory


@pytest.fixture
def counting_factory():
    """Provide a factory that records every key it builds."""
    return create_counting_factory()


@pytest.fixture
def registry(counting_factory):
    """Provide a fresh unbounded registry backed by the counting factory."""
    return FlyweightRegistry(counting_factory, name="test")


@pytest.fixture
def characters():
    return character_registry()


@pytest.fixture
def tree_types():
    return tree_registry()


@pytest.fixture
def particle_types():
    return particle_registry()


@pytest.fixture
def element_types():
    return web_element_registry()
