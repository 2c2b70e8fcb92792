"""Constant-product AMM pool core."""

from cpamm.config import DEFAULT_POOL_CONFIG, InvariantCheck, PoolConfig
from cpamm.errors import AmmError
from cpamm.exchange import Exchange, get_default_exchange
from cpamm.pools import PoolRegistry

__version__ = "0.1.0"
__all__ = [
    "AmmError",
    "DEFAULT_POOL_CONFIG",
    "Exchange",
    "InvariantCheck",
    "PoolConfig",
    "PoolRegistry",
    "get_default_exchange",
    "__version__",
]
