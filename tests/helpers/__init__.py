"""Test helpers module for shared test utilities.

- constants: Asset types and their metadata
- factories: Ledger, registry and balance factory functions
"""

from tests.helpers.constants import (
    COIN_METADATA,
    DAI,
    UNREGISTERED,
    USDC,
    USDC_BRIDGED,
    USDT,
    WBTC,
    WETH,
)
from tests.helpers.factories import FIXED_TIMESTAMP, fixed_clock, funded, make_ledger, make_registry

__all__ = [
    # Constants
    "USDC",
    "WETH",
    "DAI",
    "USDT",
    "WBTC",
    "USDC_BRIDGED",
    "UNREGISTERED",
    "COIN_METADATA",
    # Factories
    "FIXED_TIMESTAMP",
    "fixed_clock",
    "make_ledger",
    "make_registry",
    "funded",
]
