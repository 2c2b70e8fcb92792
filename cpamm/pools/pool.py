"""Constant-product pool state machine.

A Pool owns two reserve balances for one canonical asset pair, the mint and
burn capabilities of its share token, and the locked minimum-liquidity
shares. Every mutating operation runs under the pool's own lock, validates
completely, and only then moves balances, so a rejected operation leaves
the pool and the caller's balances untouched.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from cpamm.amm.shares import initial_shares, proportional_shares, redemption_amounts
from cpamm.amm.swap import check_swap, quote_amount_out
from cpamm.config import DEFAULT_POOL_CONFIG, PoolConfig
from cpamm.constants import MAX_AMOUNT
from cpamm.errors import AmountOverflow, AssetTypeMismatch, InsufficientBalance
from cpamm.events import EventLog, LiquidityRemoved, LiquiditySupplied, Swapped
from cpamm.ledger import AssetLedger, AssetType, Balance, BurnCapability, MintCapability
from cpamm.pools.canonical import OrderedPair

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolSnapshot:
    """Consistent read of a pool's state."""

    coin_a: AssetType
    coin_b: AssetType
    share_token: AssetType
    reserve_a: int
    reserve_b: int
    share_supply: int
    locked_shares: int


class Pool:
    """One constant-product pool.

    Created only by PoolRegistry. The share capabilities are private: shares
    are minted and burned exclusively through supply() and remove().
    """

    def __init__(
        self,
        pair: OrderedPair,
        share_token: AssetType,
        mint_cap: MintCapability,
        burn_cap: BurnCapability,
        ledger: AssetLedger,
        events: EventLog,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        self._pair = pair
        self._share_token = share_token
        self.__mint_cap = mint_cap
        self.__burn_cap = burn_cap
        self._ledger = ledger
        self._events = events
        self._config = config
        self._reserve_a = ledger.zero(pair.coin_a)
        self._reserve_b = ledger.zero(pair.coin_b)
        # Minimum-liquidity sink: shares parked here are never handed out
        self._locked = ledger.zero(share_token)
        self._lock = threading.Lock()

    @property
    def pair(self) -> OrderedPair:
        return self._pair

    @property
    def coin_a(self) -> AssetType:
        return self._pair.coin_a

    @property
    def coin_b(self) -> AssetType:
        return self._pair.coin_b

    @property
    def share_token(self) -> AssetType:
        return self._share_token

    @property
    def reserve_a(self) -> int:
        return self._reserve_a.value

    @property
    def reserve_b(self) -> int:
        return self._reserve_b.value

    @property
    def share_supply(self) -> int:
        """Total outstanding shares, read from the ledger."""
        return self._ledger.total_supply(self._share_token) or 0

    @property
    def locked_shares(self) -> int:
        return self._locked.value

    def snapshot(self) -> PoolSnapshot:
        with self._lock:
            return PoolSnapshot(
                coin_a=self.coin_a,
                coin_b=self.coin_b,
                share_token=self._share_token,
                reserve_a=self._reserve_a.value,
                reserve_b=self._reserve_b.value,
                share_supply=self.share_supply,
                locked_shares=self._locked.value,
            )

    def _expect(self, balance: Balance, asset_type: AssetType) -> None:
        if balance.asset_type != asset_type:
            raise AssetTypeMismatch(f"Expected a {asset_type} balance, got {balance.asset_type}")

    def supply(self, balance_a: Balance, balance_b: Balance) -> Balance:
        """Deposit both reserves and receive shares.

        The deposit balances are consumed on success and left untouched on
        failure.

        Returns:
            The caller's shares (the locked floor is excluded on first deposit)

        Raises:
            InsufficientInitialLiquidity: First deposit too small
            ZeroLiquidityMinted: Later deposit worth zero shares
            AmountOverflow: A reserve would exceed u64
        """
        self._expect(balance_a, self.coin_a)
        self._expect(balance_b, self.coin_b)

        with self._lock:
            amount_a, amount_b = balance_a.value, balance_b.value
            total_supply = self.share_supply
            if total_supply == 0:
                minted = initial_shares(amount_a, amount_b, self._config.minimum_liquidity)
            else:
                minted = proportional_shares(
                    amount_a,
                    amount_b,
                    self._reserve_a.value,
                    self._reserve_b.value,
                    total_supply,
                )

            if self._reserve_a.value + amount_a > MAX_AMOUNT or self._reserve_b.value + amount_b > MAX_AMOUNT:
                raise AmountOverflow(f"Deposit ({amount_a}, {amount_b}) would overflow pool {self._pair}")

            shares = self._ledger.mint(minted.total, self.__mint_cap)
            self._reserve_a.merge(balance_a)
            self._reserve_b.merge(balance_b)
            if minted.locked:
                self._locked.merge(shares.extract(minted.locked))

            self._events.emit(
                LiquiditySupplied(
                    coin_a=str(self.coin_a),
                    coin_b=str(self.coin_b),
                    amount_a=amount_a,
                    amount_b=amount_b,
                    shares_minted=shares.value,
                    timestamp=self._events.now(),
                )
            )
        return shares

    def remove(self, shares: Balance) -> tuple[Balance, Balance]:
        """Burn shares and receive the proportional part of both reserves.

        Returns:
            (balance_a, balance_b)

        Raises:
            BelowMinimumLiquidity: Only the locked floor is outstanding
            ZeroRedemption: Either returned amount would be zero
            InsufficientBalance: More shares than are outstanding outside the locked floor
        """
        self._expect(shares, self._share_token)

        with self._lock:
            shares_burned = shares.value
            total_supply = self.share_supply
            amount_a, amount_b = redemption_amounts(
                shares_burned,
                self._reserve_a.value,
                self._reserve_b.value,
                total_supply,
                self._config.minimum_liquidity,
            )
            redeemable = total_supply - self._locked.value
            if shares_burned > redeemable:
                raise InsufficientBalance(
                    f"Cannot redeem {shares_burned} shares of {self._pair}; only {redeemable} are outstanding"
                )

            out_a = self._reserve_a.extract(amount_a)
            out_b = self._reserve_b.extract(amount_b)
            self._ledger.burn(shares, self.__burn_cap)

            self._events.emit(
                LiquidityRemoved(
                    coin_a=str(self.coin_a),
                    coin_b=str(self.coin_b),
                    shares_burned=shares_burned,
                    amount_a=amount_a,
                    amount_b=amount_b,
                    timestamp=self._events.now(),
                )
            )
        return out_a, out_b

    def swap(
        self,
        in_a: Balance,
        amount_a_out: int,
        in_b: Balance,
        amount_b_out: int,
    ) -> tuple[Balance, Balance]:
        """Swap with simultaneous in/out legs on both sides.

        Both input balances are consumed on success.

        Returns:
            (out_a, out_b) balances of amount_a_out and amount_b_out

        Raises:
            NoAmountProvided: Both inputs are zero
            InsufficientBalance: An out amount exceeds what the reserve can pay
            InvariantViolated: The constant product would decrease
        """
        self._expect(in_a, self.coin_a)
        self._expect(in_b, self.coin_b)

        with self._lock:
            amount_a_in, amount_b_in = in_a.value, in_b.value
            quote = check_swap(
                self._reserve_a.value,
                self._reserve_b.value,
                amount_a_in,
                amount_a_out,
                amount_b_in,
                amount_b_out,
                invariant_check=self._config.invariant_check,
                truncate=self._config.truncate_invariant,
            )

            self._reserve_a.merge(in_a)
            self._reserve_b.merge(in_b)
            out_a = self._reserve_a.extract(amount_a_out)
            out_b = self._reserve_b.extract(amount_b_out)

            logger.debug(
                "swap_applied",
                pair=str(self._pair),
                k_before=quote.k_before,
                k_after=quote.k_after,
            )
            self._events.emit(
                Swapped(
                    coin_a=str(self.coin_a),
                    coin_b=str(self.coin_b),
                    amount_a_in=amount_a_in,
                    amount_a_out=amount_a_out,
                    amount_b_in=amount_b_in,
                    amount_b_out=amount_b_out,
                    timestamp=self._events.now(),
                )
            )
        return out_a, out_b

    def quote_a_to_b(self, amount_a_in: int) -> int:
        """Largest amount of B an exact input of A can take out."""
        with self._lock:
            return quote_amount_out(amount_a_in, self._reserve_a.value, self._reserve_b.value)

    def quote_b_to_a(self, amount_b_in: int) -> int:
        """Largest amount of A an exact input of B can take out."""
        with self._lock:
            return quote_amount_out(amount_b_in, self._reserve_b.value, self._reserve_a.value)

    def __repr__(self) -> str:
        return (
            f"Pool({self._pair}, reserves=({self._reserve_a.value}, {self._reserve_b.value}), "
            f"share_supply={self.share_supply})"
        )
