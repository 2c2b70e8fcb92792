"""Pytest configuration and fixtures."""

import pytest

from cpamm.exchange import Exchange
from cpamm.ledger import AssetLedger, AssetType, MintCapability
from cpamm.pools import PoolRegistry
from tests.helpers import fixed_clock, make_ledger, make_registry


@pytest.fixture
def ledger_and_caps() -> tuple[AssetLedger, dict[AssetType, MintCapability]]:
    """Ledger with all test coins registered, plus their mint capabilities."""
    return make_ledger()


@pytest.fixture
def ledger(ledger_and_caps) -> AssetLedger:
    return ledger_and_caps[0]


@pytest.fixture
def caps(ledger_and_caps) -> dict[AssetType, MintCapability]:
    return ledger_and_caps[1]


@pytest.fixture
def registry_and_caps() -> tuple[PoolRegistry, dict[AssetType, MintCapability]]:
    """Registry with default config and a fixed clock."""
    return make_registry()


@pytest.fixture
def exchange() -> Exchange:
    """Fresh exchange with a fixed clock and no assets."""
    return Exchange(clock=fixed_clock)
