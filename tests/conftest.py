"""Shared fixtures for investigator tests."""

import pytest

from investigator import Introspector


@pytest.fixture
def introspector():
    """An empty Introspector."""
    return Introspector()


@pytest.fixture
def load(introspector):
    """Load an object and return the Introspector."""
    def _load(obj):
        introspector.load(obj)
        return introspector
    return _load
