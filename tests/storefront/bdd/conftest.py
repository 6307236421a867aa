"""Shared BDD fixtures for guest order linking."""

import pytest


@pytest.fixture()
def context():
    """Values handed between steps of a scenario."""
    return {}
