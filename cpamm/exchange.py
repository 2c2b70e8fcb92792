"""Exchange service: the pool registry wired to an account store.

The Exchange is what the HTTP surface talks to. It moves caller funds out of
the AccountStore, hands Balances to the PoolRegistry, and credits the
results back. If the registry rejects an operation the withdrawn balances
are still intact and go straight back to the account.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from cpamm.config import PoolConfig, load_config_from_env
from cpamm.errors import ReservedAssetType, UninitializedAsset
from cpamm.events import EventLog
from cpamm.ledger import AccountStore, AssetInfo, AssetLedger, AssetType, Balance, MintCapability
from cpamm.pools import Pool, PoolRegistry

logger = structlog.get_logger()


class Exchange:
    """Ledger, accounts, event log and pool registry behind one facade.

    Args:
        config: Pool behavior for the registry
        clock: Event timestamp source (seconds); defaults to wall clock
    """

    def __init__(self, config: PoolConfig | None = None, clock: Callable[[], int] | None = None) -> None:
        self.ledger = AssetLedger()
        self.accounts = AccountStore(self.ledger)
        self.events = EventLog(clock)
        self.registry = PoolRegistry(self.ledger, config or PoolConfig(), self.events)
        # Mint capabilities of assets registered through the exchange (faucet)
        self._faucet_caps: dict[AssetType, MintCapability] = {}

    # --- Assets and accounts ---

    def register_asset(self, asset_type: AssetType, *, name: str, symbol: str, decimals: int) -> AssetInfo:
        """Register an asset and keep its mint capability as a faucet.

        Raises:
            ReservedAssetType: If the type sits under the share token address
            AssetAlreadyRegistered: If the type is already registered
        """
        if asset_type.address == self.registry.share_address:
            raise ReservedAssetType(f"Address {asset_type.address} is reserved for pool share tokens")
        mint_cap, _burn_cap = self.ledger.register(asset_type, name=name, symbol=symbol, decimals=decimals)
        self._faucet_caps[asset_type] = mint_cap
        logger.info("asset_registered", asset=str(asset_type), symbol=symbol)
        return self.ledger.asset_info(asset_type)

    def mint(self, account: str, asset_type: AssetType, amount: int) -> int:
        """Credit ``account`` with new units; returns the account's new balance.

        Raises:
            UninitializedAsset: If the asset was not registered through the exchange
        """
        cap = self._faucet_caps.get(asset_type)
        if cap is None:
            raise UninitializedAsset(f"No faucet for asset type: {asset_type}")
        self.accounts.deposit(account, self.ledger.mint(amount, cap))
        return self.accounts.balance_of(account, asset_type)

    @contextmanager
    def _withdrawn(self, account: str, *legs: tuple[AssetType, int]) -> Iterator[list[Balance]]:
        """Withdraw several legs; whatever is left in them on exit goes back."""
        balances: list[Balance] = []
        try:
            for asset_type, amount in legs:
                balances.append(self.accounts.withdraw(account, asset_type, amount))
            yield balances
        finally:
            for balance in balances:
                self.accounts.deposit(account, balance)

    # --- Pool operations ---

    def create_pool(self, type_a: AssetType, type_b: AssetType) -> Pool:
        return self.registry.create_pool(type_a, type_b)

    def supply(self, account: str, type_a: AssetType, type_b: AssetType, amount_a: int, amount_b: int) -> int:
        """Deposit from ``account``; returns shares credited."""
        pool = self.registry.get_pool(type_a, type_b)
        with self._withdrawn(account, (type_a, amount_a), (type_b, amount_b)) as (balance_a, balance_b):
            shares = self.registry.supply(type_a, type_b, balance_a, balance_b)
        minted = shares.value
        self.accounts.deposit(account, shares)
        logger.debug("account_supplied", account=account, pool=str(pool.pair), shares=minted)
        return minted

    def remove(self, account: str, type_a: AssetType, type_b: AssetType, shares: int) -> tuple[int, int]:
        """Redeem shares from ``account``; returns amounts in (type_a, type_b) order."""
        pool = self.registry.get_pool(type_a, type_b)
        with self._withdrawn(account, (pool.share_token, shares)) as (share_balance,):
            out_a, out_b = self.registry.remove(type_a, type_b, share_balance)
        amounts = out_a.value, out_b.value
        self.accounts.deposit(account, out_a)
        self.accounts.deposit(account, out_b)
        return amounts

    def swap(
        self,
        account: str,
        type_a: AssetType,
        type_b: AssetType,
        amount_a_in: int,
        amount_a_out: int,
        amount_b_in: int,
        amount_b_out: int,
    ) -> tuple[int, int]:
        """Swap for ``account``; returns amounts paid out in (type_a, type_b) order."""
        with self._withdrawn(account, (type_a, amount_a_in), (type_b, amount_b_in)) as (in_a, in_b):
            out_a, out_b = self.registry.swap(type_a, type_b, in_a, amount_a_out, in_b, amount_b_out)
        amounts = out_a.value, out_b.value
        self.accounts.deposit(account, out_a)
        self.accounts.deposit(account, out_b)
        return amounts


_default_exchange: Exchange | None = None
_default_lock = threading.Lock()


def get_default_exchange() -> Exchange:
    """Process-wide Exchange, configured from the environment on first use."""
    global _default_exchange
    with _default_lock:
        if _default_exchange is None:
            config = load_config_from_env()
            logger.info(
                "exchange_created",
                invariant_check=config.invariant_check.value,
                truncate_invariant=config.truncate_invariant,
                strict_pair_order=config.strict_pair_order,
            )
            _default_exchange = Exchange(config)
        return _default_exchange
