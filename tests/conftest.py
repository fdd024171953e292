"""
Test configuration and fixtures for the minuscule poset engine.

Posets are cached per configuration since every test treats them as
read-only.
"""
import pytest

from minuscule.cartan import minuscule_weights, supported_ranks, supported_types
from minuscule.poset import build_minuscule_poset
from minuscule.verification import enumerate_ideals

_CACHE = {}


def get_poset(lie_type, n, k):
    key = (lie_type, n, k)
    if key not in _CACHE:
        _CACHE[key] = build_minuscule_poset(lie_type, n, k)
    return _CACHE[key]


def all_configurations():
    return [(t, n, k)
            for t in supported_types()
            for n in supported_ranks(t)
            for k in minuscule_weights(t, n)]


# A smaller spread used by the more expensive tests
SAMPLE_CONFIGURATIONS = [
    ("A", 2, 1), ("A", 4, 2), ("A", 5, 3), ("A", 6, 2),
    ("D", 4, 1), ("D", 4, 3), ("D", 5, 5), ("D", 6, 1),
    ("E", 6, 1), ("E", 6, 6), ("E", 7, 7),
]


@pytest.fixture
def a42():
    """Type A_4, omega_2: the 2 x 3 rectangle."""
    return get_poset("A", 4, 2)


@pytest.fixture
def d41():
    """Type D_4, omega_1: the vector representation."""
    return get_poset("D", 4, 1)


@pytest.fixture
def e61():
    """Type E_6, omega_1: the 27-dimensional representation."""
    return get_poset("E", 6, 1)


@pytest.fixture
def e77():
    return get_poset("E", 7, 7)


@pytest.fixture
def a42_ideals(a42):
    return enumerate_ideals(a42)


@pytest.fixture
def d41_ideals(d41):
    return enumerate_ideals(d41)
