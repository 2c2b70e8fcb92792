"""Tests for canonical ordering of asset pairs."""

import pytest

from cpamm.errors import InvalidPair, UninitializedAsset
from cpamm.ledger import AssetType
from cpamm.pools import OrderedPair, Ordering, canonicalize, compare_asset_types, order_pair
from tests.helpers import DAI, UNREGISTERED, USDC, USDC_BRIDGED, USDT, WBTC, WETH


class TestCompareAssetTypes:
    """Struct name, then module, then address decide."""

    def test_name_decides_first(self):
        # WBTC lives at a larger address but its name sorts first
        assert compare_asset_types(WBTC, WETH) < 0
        assert compare_asset_types(WETH, WBTC) > 0

    def test_module_breaks_name_tie(self):
        alpha = AssetType("0x9", "alpha", "X")
        beta = AssetType("0x1", "beta", "X")
        assert compare_asset_types(alpha, beta) < 0

    def test_address_breaks_module_tie(self):
        assert compare_asset_types(USDC, USDC_BRIDGED) < 0

    def test_bytewise_not_case_folded(self):
        """Uppercase bytes sort before lowercase."""
        upper = AssetType("0x1", "coin", "Zeta")
        lower = AssetType("0x1", "coin", "alpha")
        assert compare_asset_types(upper, lower) < 0

    def test_shorter_prefix_sorts_first(self):
        assert compare_asset_types(AssetType("0x1", "coin", "USD"), USDC) < 0

    def test_equal(self):
        assert compare_asset_types(USDC, AssetType.parse("0x1::coin::USDC")) == 0

    def test_padded_address_compares_equal(self):
        assert compare_asset_types(AssetType("0x01", "coin", "USDC"), USDC) == 0


class TestCanonicalize:
    @pytest.mark.parametrize(
        "first,second",
        [(DAI, USDC), (USDC, USDT), (WBTC, WETH), (USDC, USDC_BRIDGED), (DAI, WETH)],
    )
    def test_exactly_one_order_is_canonical(self, ledger, first, second):
        assert canonicalize(ledger, first, second) is Ordering.SMALLER
        assert canonicalize(ledger, second, first) is Ordering.LARGER

    def test_equal_types_rejected(self, ledger):
        with pytest.raises(InvalidPair):
            canonicalize(ledger, USDC, USDC)

    def test_uninitialized_rejected(self, ledger):
        with pytest.raises(UninitializedAsset):
            canonicalize(ledger, USDC, UNREGISTERED)
        with pytest.raises(UninitializedAsset):
            canonicalize(ledger, UNREGISTERED, USDC)

    def test_uninitialized_checked_before_equality(self, ledger):
        with pytest.raises(UninitializedAsset):
            canonicalize(ledger, UNREGISTERED, UNREGISTERED)

    def test_order_pair(self, ledger):
        pair, swapped = order_pair(ledger, WETH, USDC)
        assert (pair.coin_a, pair.coin_b) == (USDC, WETH)
        assert swapped is True

        pair, swapped = order_pair(ledger, USDC, WETH)
        assert swapped is False


class TestOrderedPair:
    def test_rejects_non_canonical(self):
        with pytest.raises(InvalidPair):
            OrderedPair(WETH, USDC)
        with pytest.raises(InvalidPair):
            OrderedPair(USDC, USDC)

    def test_str(self):
        assert str(OrderedPair(USDC, WETH)) == "0x1::coin::USDC/0x1::coin::WETH"
