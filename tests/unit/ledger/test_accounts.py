"""Tests for the per-account balance store."""

import pytest

from cpamm.errors import InsufficientBalance
from cpamm.ledger import AccountStore
from tests.helpers import USDC, WETH, funded


class TestAccountStore:
    def test_deposit_and_withdraw(self, ledger, caps):
        store = AccountStore(ledger)
        store.deposit("alice", funded(ledger, caps, USDC, 100))
        assert store.balance_of("alice", USDC) == 100

        taken = store.withdraw("alice", USDC, 40)
        assert taken.value == 40
        assert store.balance_of("alice", USDC) == 60

    def test_deposit_consumes_balance(self, ledger, caps):
        store = AccountStore(ledger)
        balance = funded(ledger, caps, USDC, 100)
        store.deposit("alice", balance)
        assert balance.value == 0

    def test_withdraw_more_than_held_raises(self, ledger, caps):
        store = AccountStore(ledger)
        store.deposit("alice", funded(ledger, caps, USDC, 10))
        with pytest.raises(InsufficientBalance):
            store.withdraw("alice", USDC, 11)
        assert store.balance_of("alice", USDC) == 10

    def test_withdraw_from_empty_account(self, ledger):
        store = AccountStore(ledger)
        with pytest.raises(InsufficientBalance):
            store.withdraw("bob", USDC, 1)
        assert store.withdraw("bob", USDC, 0).value == 0

    def test_balances_skip_zero_entries(self, ledger, caps):
        store = AccountStore(ledger)
        store.deposit("alice", funded(ledger, caps, USDC, 10))
        store.deposit("alice", funded(ledger, caps, WETH, 5))
        store.deposit("bob", funded(ledger, caps, WETH, 7))
        store.withdraw("alice", USDC, 10)

        assert store.balances("alice") == {WETH: 5}
        assert store.balances("bob") == {WETH: 7}
        assert store.balances("carol") == {}
