"""Canonical ordering of asset type pairs.

A pool is stored and looked up under exactly one ordering of its two asset
types. The order is total and deterministic: compare the struct names, then
the module names, then the addresses, each as UTF-8 byte strings. The first
part that differs decides.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cpamm.errors import InvalidPair, UninitializedAsset
from cpamm.ledger import AssetLedger, AssetType


class Ordering(Enum):
    """Result of comparing two distinct asset types."""

    SMALLER = "smaller"  # (type_a, type_b) is already canonical
    LARGER = "larger"  # must be swapped


@dataclass(frozen=True)
class OrderedPair:
    """Two distinct asset types in canonical order."""

    coin_a: AssetType
    coin_b: AssetType

    def __post_init__(self) -> None:
        if compare_asset_types(self.coin_a, self.coin_b) >= 0:
            raise InvalidPair(f"Pair is not in canonical order: {self.coin_a}, {self.coin_b}")

    def __str__(self) -> str:
        return f"{self.coin_a}/{self.coin_b}"


def _cmp_bytes(left: str, right: str) -> int:
    lb, rb = left.encode("utf-8"), right.encode("utf-8")
    return (lb > rb) - (lb < rb)


def compare_asset_types(type_a: AssetType, type_b: AssetType) -> int:
    """Three-way compare: negative, zero or positive like a classic cmp()."""
    for left, right in (
        (type_a.name, type_b.name),
        (type_a.module, type_b.module),
        (type_a.address, type_b.address),
    ):
        result = _cmp_bytes(left, right)
        if result != 0:
            return result
    return 0


def canonicalize(ledger: AssetLedger, type_a: AssetType, type_b: AssetType) -> Ordering:
    """Decide whether (type_a, type_b) is canonical.

    Raises:
        UninitializedAsset: If either type is not registered in the ledger
        InvalidPair: If the two types are equal
    """
    for asset_type in (type_a, type_b):
        if not ledger.is_initialized(asset_type):
            raise UninitializedAsset(f"Asset type is not registered: {asset_type}")

    result = compare_asset_types(type_a, type_b)
    if result == 0:
        raise InvalidPair(f"Pair must hold two distinct asset types: {type_a}")
    return Ordering.SMALLER if result < 0 else Ordering.LARGER


def order_pair(ledger: AssetLedger, type_a: AssetType, type_b: AssetType) -> tuple[OrderedPair, bool]:
    """Canonicalize and build the OrderedPair.

    Returns:
        (pair, swapped) where swapped is True if type_b sorts first
    """
    if canonicalize(ledger, type_a, type_b) is Ordering.SMALLER:
        return OrderedPair(type_a, type_b), False
    return OrderedPair(type_b, type_a), True
