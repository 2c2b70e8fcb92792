"""Asset ledger package.

In-memory reference implementation of the asset-transfer ledger the pool
core depends on: typed balances, mint/burn capabilities, supply tracking.
"""

from .accounts import AccountStore
from .assets import AssetType, Balance
from .ledger import AssetInfo, AssetLedger, BurnCapability, MintCapability

__all__ = [
    "AccountStore",
    "AssetInfo",
    "AssetLedger",
    "AssetType",
    "Balance",
    "BurnCapability",
    "MintCapability",
]
