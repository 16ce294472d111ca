"""Shared BDD fixtures for the Checkout domain."""

import pytest


@pytest.fixture()
def cart_items():
    return []


@pytest.fixture()
def outcome():
    """Container for the result or error of the step under test."""
    return {"result": None, "exc": None}
