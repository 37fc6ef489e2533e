"""Shared fixtures."""

from decimal import Decimal

import pytest

from calc_tools.config import Settings


@pytest.fixture
def settings():
    """Settings with explicit defaults, independent of the environment."""
    return Settings(
        currency_symbol="$",
        settlement_epsilon=Decimal("0.01"),
        simulation_seed=None,
        max_simulation_cells=5_000_000,
        clock_interval_seconds=1.0,
    )


@pytest.fixture
def trio():
    """Three participants, in display order."""
    return ["Alice", "Bob", "Carol"]
