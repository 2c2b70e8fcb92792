"""Pool registry.

Maps each canonical asset pair to at most one Pool. Pair-level operations
accept the two asset types in either order: arguments are normalized to the
canonical order (or rejected with InvalidPair when the registry is configured
with strict_pair_order) and results come back in the caller's order.

Locking: the registry lock only guards the pair -> Pool map (creation is an
atomic insert-if-absent). Each Pool serializes its own mutations, so
distinct pools are mutated concurrently.
"""

from __future__ import annotations

import threading

import structlog

from cpamm.config import DEFAULT_POOL_CONFIG, PoolConfig
from cpamm.constants import REGISTRY_ADDRESS, SHARE_SYMBOL_PREFIX_LEN, SHARE_TOKEN_MODULE, SHARE_TOKEN_STRUCT
from cpamm.errors import AssetAlreadyRegistered, InvalidPair, PoolAlreadyExists, PoolNotFound
from cpamm.events import EventLog, PoolCreated
from cpamm.ledger import AssetLedger, AssetType, Balance
from cpamm.ledger.assets import normalize_address
from cpamm.pools.canonical import OrderedPair, order_pair
from cpamm.pools.pool import Pool

logger = structlog.get_logger()


def share_token_type(pair: OrderedPair, address: str = REGISTRY_ADDRESS) -> AssetType:
    """The share token type of a pair: ``<address>::swap::LPToken<A,B>``."""
    return AssetType(
        address=address,
        module=SHARE_TOKEN_MODULE,
        name=f"{SHARE_TOKEN_STRUCT}<{pair.coin_a},{pair.coin_b}>",
    )


def share_token_metadata(symbol_a: str, symbol_b: str) -> tuple[str, str]:
    """Display name and symbol of a share token.

    Name is ``"<symbol_a>-<symbol_b> LP token"``; symbol joins the first four
    characters of each underlying symbol with ``-``.
    """
    name = f"{symbol_a}-{symbol_b} LP token"
    symbol = f"{symbol_a[:SHARE_SYMBOL_PREFIX_LEN]}-{symbol_b[:SHARE_SYMBOL_PREFIX_LEN]}"
    return name, symbol


class PoolRegistry:
    """Registry of constant-product pools keyed by canonical pair.

    Args:
        ledger: Asset ledger holding the pooled assets and share tokens
        config: Pool behavior (defaults to DEFAULT_POOL_CONFIG)
        events: Event log; a fresh one is created if omitted
        share_address: Address share token types are published under
    """

    def __init__(
        self,
        ledger: AssetLedger,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        events: EventLog | None = None,
        share_address: str = REGISTRY_ADDRESS,
    ) -> None:
        self._ledger = ledger
        self._config = config
        self._events = events if events is not None else EventLog()
        self._share_address = normalize_address(share_address)
        self._pools: dict[OrderedPair, Pool] = {}
        self._lock = threading.Lock()

    @property
    def ledger(self) -> AssetLedger:
        return self._ledger

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def share_address(self) -> str:
        return self._share_address

    def _resolve(self, type_a: AssetType, type_b: AssetType) -> tuple[OrderedPair, bool]:
        pair, swapped = order_pair(self._ledger, type_a, type_b)
        if swapped and self._config.strict_pair_order:
            raise InvalidPair(f"Pair must be given in canonical order: {pair.coin_a}, {pair.coin_b}")
        return pair, swapped

    def create_pool(self, type_a: AssetType, type_b: AssetType) -> Pool:
        """Create the pool for a pair.

        Raises:
            InvalidPair: Equal types (or non-canonical order in strict mode)
            UninitializedAsset: Either type is not registered
            PoolAlreadyExists: The canonical pair already has a pool or share token
        """
        pair, _ = self._resolve(type_a, type_b)
        share_token = share_token_type(pair, self._share_address)
        name, symbol = share_token_metadata(
            self._ledger.symbol(pair.coin_a),
            self._ledger.symbol(pair.coin_b),
        )

        with self._lock:
            if pair in self._pools:
                raise PoolAlreadyExists(f"Pool already exists for {pair}")
            try:
                mint_cap, burn_cap = self._ledger.register(
                    share_token,
                    name=name,
                    symbol=symbol,
                    decimals=self._config.share_decimals,
                )
            except AssetAlreadyRegistered as err:
                raise PoolAlreadyExists(f"Share token for {pair} is already registered: {share_token}") from err
            pool = Pool(
                pair=pair,
                share_token=share_token,
                mint_cap=mint_cap,
                burn_cap=burn_cap,
                ledger=self._ledger,
                events=self._events,
                config=self._config,
            )
            # Emitted before the pool is reachable so it precedes any pool event
            self._events.emit(
                PoolCreated(
                    coin_a=str(pair.coin_a),
                    coin_b=str(pair.coin_b),
                    share_token=str(share_token),
                    timestamp=self._events.now(),
                )
            )
            self._pools[pair] = pool
        return pool

    def get_pool(self, type_a: AssetType, type_b: AssetType) -> Pool:
        """Get the pool for a pair (either order unless strict).

        Raises:
            PoolNotFound: No pool registered for the canonical pair
        """
        pair, _ = self._resolve(type_a, type_b)
        pool = self._pools.get(pair)
        if pool is None:
            raise PoolNotFound(f"No pool for {pair}")
        return pool

    def has_pool(self, type_a: AssetType, type_b: AssetType) -> bool:
        pair, _ = order_pair(self._ledger, type_a, type_b)
        return pair in self._pools

    def pools(self) -> list[Pool]:
        """All pools, in canonical pair order."""
        with self._lock:
            pools = list(self._pools.values())
        return sorted(pools, key=lambda p: (str(p.coin_a), str(p.coin_b)))

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    # Pair-level operations in the caller's argument order

    def supply(self, type_a: AssetType, type_b: AssetType, balance_a: Balance, balance_b: Balance) -> Balance:
        """Deposit into the pair's pool; balance_a must be of type_a."""
        pool = self.get_pool(type_a, type_b)
        if pool.coin_a == type_a:
            return pool.supply(balance_a, balance_b)
        return pool.supply(balance_b, balance_a)

    def remove(self, type_a: AssetType, type_b: AssetType, shares: Balance) -> tuple[Balance, Balance]:
        """Redeem shares; returns (balance of type_a, balance of type_b)."""
        pool = self.get_pool(type_a, type_b)
        out_a, out_b = pool.remove(shares)
        if pool.coin_a == type_a:
            return out_a, out_b
        return out_b, out_a

    def swap(
        self,
        type_a: AssetType,
        type_b: AssetType,
        in_a: Balance,
        amount_a_out: int,
        in_b: Balance,
        amount_b_out: int,
    ) -> tuple[Balance, Balance]:
        """Swap on the pair's pool; returns (out of type_a, out of type_b)."""
        pool = self.get_pool(type_a, type_b)
        if pool.coin_a == type_a:
            return pool.swap(in_a, amount_a_out, in_b, amount_b_out)
        out_b, out_a = pool.swap(in_b, amount_b_out, in_a, amount_a_out)
        return out_a, out_b

    def quote(self, type_in: AssetType, type_out: AssetType, amount_in: int) -> int:
        """Exact-in quote: largest amount of type_out that amount_in of type_in can take."""
        pool = self.get_pool(type_in, type_out)
        if pool.coin_a == type_in:
            return pool.quote_a_to_b(amount_in)
        return pool.quote_b_to_a(amount_in)

    def __repr__(self) -> str:
        return f"PoolRegistry({len(self._pools)} pools)"
