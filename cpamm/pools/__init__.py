"""Pool management package.

Provides PoolRegistry, the Pool state machine and pair canonicalization.
"""

from .canonical import OrderedPair, Ordering, canonicalize, compare_asset_types, order_pair
from .pool import Pool, PoolSnapshot
from .registry import PoolRegistry, share_token_metadata, share_token_type

__all__ = [
    "PoolRegistry",
    "Pool",
    "PoolSnapshot",
    "OrderedPair",
    "Ordering",
    "canonicalize",
    "compare_asset_types",
    "order_pair",
    "share_token_metadata",
    "share_token_type",
]
