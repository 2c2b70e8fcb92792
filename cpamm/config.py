"""Pool configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from cpamm.constants import MINIMUM_LIQUIDITY_AMOUNT, SHARE_DECIMALS


class InvariantCheck(str, Enum):
    """How a swap proves the constant product did not decrease."""

    # (Sa + a_in - a_out) * (Sb + b_in - b_out) >= Sa * Sb
    CONSTANT_PRODUCT = "constant_product"
    # k_before from pre-swap reserves plus deltas, k_after from post-swap
    # reserves plus the same deltas again
    LEGACY = "legacy"


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for pool behavior.

    Attributes:
        minimum_liquidity: Shares locked forever on a pool's first deposit
        share_decimals: Decimals of every share token
        invariant_check: Swap invariant formula (see InvariantCheck)
        truncate_invariant: Wrap both invariant products to u64 before
            comparing, reproducing a narrowing cast. Off by default.
        strict_pair_order: Reject asset pairs given in non-canonical order
            with InvalidPair instead of normalizing them.
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY_AMOUNT
    share_decimals: int = SHARE_DECIMALS
    invariant_check: InvariantCheck = InvariantCheck.CONSTANT_PRODUCT
    truncate_invariant: bool = False
    strict_pair_order: bool = False

    def __post_init__(self) -> None:
        if self.minimum_liquidity < 0:
            raise ValueError(f"minimum_liquidity must be non-negative: {self.minimum_liquidity}")
        if not (0 <= self.share_decimals <= 255):
            raise ValueError(f"share_decimals must be in [0, 255]: {self.share_decimals}")


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


def load_config_from_env(env: Mapping[str, str] | None = None) -> PoolConfig:
    """Build a PoolConfig from environment variables.

    - CPAMM_INVARIANT_CHECK: "constant_product" (default) or "legacy"
    - CPAMM_TRUNCATE_INVARIANT: wrap invariant products to u64 (default: false)
    - CPAMM_STRICT_PAIR_ORDER: reject non-canonical pairs (default: false)

    Raises:
        ValueError: If CPAMM_INVARIANT_CHECK is not a known mode
    """
    source = os.environ if env is None else env
    return PoolConfig(
        invariant_check=InvariantCheck(
            source.get("CPAMM_INVARIANT_CHECK", InvariantCheck.CONSTANT_PRODUCT.value).lower()
        ),
        truncate_invariant=_env_flag(source, "CPAMM_TRUNCATE_INVARIANT", False),
        strict_pair_order=_env_flag(source, "CPAMM_STRICT_PAIR_ORDER", False),
    )
