"""Share accounting for constant-product pools.

Computes shares to mint on deposit and reserves to return on redemption.
All products are formed before any division, at double width, and every
division truncates. Deposits that are not in the pool's ratio are credited
with the smaller of the two implied share counts, so the difference stays
in the pool.

First deposit (total_supply == 0):
    total = floor(sqrt(amount_a * amount_b))
    locked = MINIMUM_LIQUIDITY_AMOUNT (never redeemable)
    caller = total - locked

Subsequent deposits:
    shares = min(amount_a * T // Sa, amount_b * T // Sb)

Redemption:
    amount_x = shares * Sx // T
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from cpamm.errors import (
    BelowMinimumLiquidity,
    InsufficientInitialLiquidity,
    ZeroLiquidityMinted,
    ZeroRedemption,
)
from cpamm.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class SharesMinted:
    """Shares created by one deposit."""

    total: int
    # Part of total that goes to the locked sink (first deposit only)
    locked: int = 0

    @property
    def to_caller(self) -> int:
        return self.total - self.locked


def initial_shares(amount_a: int, amount_b: int, minimum_liquidity: int) -> SharesMinted:
    """Shares for the first deposit into an empty pool.

    Raises:
        InsufficientInitialLiquidity: If sqrt(amount_a * amount_b) does not
            exceed minimum_liquidity
    """
    product = (S(amount_a) * S(amount_b)).to_u128_checked()
    initial = product.isqrt()
    if initial <= minimum_liquidity:
        raise InsufficientInitialLiquidity(
            f"Initial liquidity {initial.value} must exceed minimum {minimum_liquidity}"
        )
    return SharesMinted(total=initial.to_u64(), locked=minimum_liquidity)


def proportional_shares(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> SharesMinted:
    """Shares for a deposit into a pool that already has supply.

    Raises:
        ZeroLiquidityMinted: If the deposit is worth zero shares, or a
            reserve is empty so no share price exists
    """
    if reserve_a == 0 or reserve_b == 0:
        raise ZeroLiquidityMinted(f"Pool reserves are empty: ({reserve_a}, {reserve_b})")

    supply = S(total_supply)
    shares_a = (S(amount_a) * supply).to_u128_checked() // reserve_a
    shares_b = (S(amount_b) * supply).to_u128_checked() // reserve_b
    shares = shares_a.min(shares_b)

    logger.debug(
        "proportional_shares",
        shares_a=shares_a.value,
        shares_b=shares_b.value,
        total_supply=total_supply,
    )

    if shares == 0:
        raise ZeroLiquidityMinted(
            f"Deposit ({amount_a}, {amount_b}) mints zero shares against supply {total_supply}"
        )
    return SharesMinted(total=shares.to_u64())


def redemption_amounts(
    shares: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
    minimum_liquidity: int,
) -> tuple[int, int]:
    """Reserves returned for burning ``shares``.

    Raises:
        BelowMinimumLiquidity: If total_supply does not exceed the locked floor
        ZeroRedemption: If either returned amount would be zero
    """
    if total_supply <= minimum_liquidity:
        raise BelowMinimumLiquidity(
            f"Share supply {total_supply} is not above the locked minimum {minimum_liquidity}"
        )

    amount_a = (S(shares) * S(reserve_a)).to_u128_checked() // total_supply
    amount_b = (S(shares) * S(reserve_b)).to_u128_checked() // total_supply

    if amount_a == 0 or amount_b == 0:
        raise ZeroRedemption(
            f"Redeeming {shares} shares returns ({amount_a.value}, {amount_b.value})"
        )
    return amount_a.to_u64(), amount_b.to_u64()
