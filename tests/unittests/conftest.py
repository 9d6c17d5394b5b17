# tests/unittests/conftest.py

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test collected below this directory with 'unittests'."""
    for item in items:
        if "unittests" in item.path.parts:
            item.add_marker("unittests")
