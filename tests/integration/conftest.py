"""Shared fixtures for integration tests."""

import os

import pytest

from faers_dashboard.data_sources.fda import FDAClient


def pytest_collection_modifyitems(config, items):
    if os.environ.get("OPENFDA_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="OPENFDA_INTEGRATION not set, skipping live openFDA test")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def fda_client():
    """FDAClient against the live API; tests close it themselves."""
    return FDAClient()
