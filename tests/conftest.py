"""
Pytest configuration and shared fixtures.
"""

import pytest

from inventory import Inventory


@pytest.fixture
def inventory() -> Inventory:
    """An empty inventory."""
    return Inventory()


@pytest.fixture
def stocked_inventory() -> Inventory:
    """Three products, one of them below the default low-stock threshold."""
    inv = Inventory()
    inv.add(1, "Widget", 9.99, 3)
    inv.add(2, "Gadget", 5.0, 10)
    inv.add(3, "Gizmo", 0.5, 5)
    return inv


@pytest.fixture
def data_file(tmp_path):
    """Path to a not-yet-existing data file."""
    return tmp_path / "inventory.txt"


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a scripted sequence; EOFError once it runs out."""
    def _feed(*answers):
        remaining = list(answers)

        def fake_input(prompt=""):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
    return _feed
