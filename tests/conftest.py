"""
Pytest configuration and fixtures.
"""

import math
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from approxlab.family import ApproximationVariant, ReferenceImplementation
from approxlab.functions import sine_family


@pytest.fixture
def family():
    """The bundled sine family."""
    return sine_family()


@pytest.fixture
def sin_reference(family):
    return family.reference('sin')


class CallCounter:
    """Wraps a function and counts its calls."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return self.fn(x)


@pytest.fixture
def counting_reference():
    """Reference implementation that records how often it is called."""
    counter = CallCounter(math.sin)
    return ReferenceImplementation("sin", counter), counter


@pytest.fixture
def identity_variant():
    return ApproximationVariant("identity", lambda x: x)


@pytest.fixture
def symmetric_range():
    """Sample points over [-pi, pi]."""
    n = 2001
    return [-math.pi + 2 * math.pi * i / (n - 1) for i in range(n)]
