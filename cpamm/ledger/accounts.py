"""Per-account balance store.

Maps (account, asset_type) -> Balance. Used by the HTTP surface to hold
caller funds between requests; the pool core itself only sees Balances.
"""

from __future__ import annotations

import threading

from cpamm.errors import InsufficientBalance
from cpamm.ledger.assets import AssetType, Balance
from cpamm.ledger.ledger import AssetLedger


class AccountStore:
    """Account balances backed by an AssetLedger.

    Zero balances are omitted to keep the table sparse.
    """

    def __init__(self, ledger: AssetLedger) -> None:
        self._ledger = ledger
        self._balances: dict[tuple[str, AssetType], Balance] = {}
        self._lock = threading.Lock()

    def balance_of(self, account: str, asset_type: AssetType) -> int:
        """Get balance for (account, asset_type). Returns 0 if not found."""
        with self._lock:
            balance = self._balances.get((account, asset_type))
            return balance.value if balance is not None else 0

    def deposit(self, account: str, balance: Balance) -> None:
        """Move ``balance`` into the account. ``balance`` is left at zero."""
        if balance.value == 0:
            return
        key = (account, balance.asset_type)
        with self._lock:
            held = self._balances.get(key)
            if held is None:
                held = self._ledger.zero(balance.asset_type)
            held.merge(balance)
            self._balances[key] = held

    def withdraw(self, account: str, asset_type: AssetType, amount: int) -> Balance:
        """Take ``amount`` out of the account.

        Raises:
            InsufficientBalance: If the account holds less than amount
        """
        key = (account, asset_type)
        with self._lock:
            held = self._balances.get(key)
            if held is None:
                if amount == 0:
                    return self._ledger.zero(asset_type)
                raise InsufficientBalance(f"Account {account} holds no {asset_type}")
            taken = held.extract(amount)
            if held.value == 0:
                del self._balances[key]
            return taken

    def balances(self, account: str) -> dict[AssetType, int]:
        """All non-zero balances of an account."""
        with self._lock:
            return {
                asset_type: balance.value
                for (owner, asset_type), balance in self._balances.items()
                if owner == account
            }

    def __repr__(self) -> str:
        return f"AccountStore({len(self._balances)} entries)"
