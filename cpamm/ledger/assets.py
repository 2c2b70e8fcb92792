"""Asset type identifiers and typed balances.

An asset type is named like a qualified type: ``<address>::<module>::<name>``.
A Balance is an amount of exactly one asset type. Balances move by value:
merging consumes the source, extracting splits off a new Balance.
"""

from __future__ import annotations

from dataclasses import dataclass

from cpamm.constants import MAX_AMOUNT
from cpamm.errors import AmountOverflow, AssetTypeMismatch, InsufficientBalance


_HEX_DIGITS = frozenset("0123456789abcdef")


def normalize_address(address: str) -> str:
    """Lowercase a hex address and drop its leading zeros (``0x01`` -> ``0x1``).

    Non-hex addresses are only lowercased.
    """
    lowered = address.lower()
    if not lowered.startswith("0x"):
        return lowered
    digits = lowered[2:]
    if not digits or not set(digits) <= _HEX_DIGITS:
        return lowered
    return "0x" + (digits.lstrip("0") or "0")


@dataclass(frozen=True)
class AssetType:
    """Globally unique identifier of a fungible asset kind."""

    address: str
    module: str
    name: str

    def __post_init__(self) -> None:
        if not self.address or not self.module or not self.name:
            raise ValueError(f"Asset type parts must be non-empty: {self.address!r}, {self.module!r}, {self.name!r}")
        object.__setattr__(self, "address", normalize_address(self.address))

    @classmethod
    def parse(cls, type_name: str) -> AssetType:
        """Parse ``address::module::name``.

        The name part may itself contain ``::`` (generic parameters), so only
        the first two separators split.

        Raises:
            ValueError: If the string has fewer than three parts
        """
        parts = type_name.strip().split("::", 2)
        if len(parts) != 3:
            raise ValueError(f"Asset type must look like 'address::module::name': {type_name!r}")
        return cls(address=parts[0], module=parts[1], name=parts[2])

    def __str__(self) -> str:
        return f"{self.address}::{self.module}::{self.name}"


class Balance:
    """A typed amount of one asset.

    Only the ledger (``zero``/``mint``) and ``extract`` create balances with
    value. Values never exceed the native width.
    """

    __slots__ = ("_asset_type", "_value")

    def __init__(self, asset_type: AssetType, value: int = 0) -> None:
        if value < 0 or value > MAX_AMOUNT:
            raise AmountOverflow(f"Balance value out of range for {asset_type}: {value}")
        self._asset_type = asset_type
        self._value = value

    @property
    def asset_type(self) -> AssetType:
        return self._asset_type

    @property
    def value(self) -> int:
        return self._value

    def merge(self, other: Balance) -> None:
        """Move all of ``other`` into this balance. ``other`` is left at zero.

        Raises:
            AssetTypeMismatch: If the asset types differ
            AmountOverflow: If the merged value exceeds the native width
        """
        if other._asset_type != self._asset_type:
            raise AssetTypeMismatch(f"Cannot merge {other._asset_type} into {self._asset_type}")
        merged = self._value + other._value
        if merged > MAX_AMOUNT:
            raise AmountOverflow(f"Merged balance exceeds u64: {self._value} + {other._value}")
        self._value = merged
        other._value = 0

    def extract(self, amount: int) -> Balance:
        """Split ``amount`` off into a new balance.

        Raises:
            InsufficientBalance: If amount exceeds the current value
        """
        if amount < 0:
            raise ValueError(f"Extract amount must be non-negative: {amount}")
        if amount > self._value:
            raise InsufficientBalance(
                f"Cannot extract {amount} from balance of {self._value} {self._asset_type}"
            )
        self._value -= amount
        return Balance(self._asset_type, amount)

    def extract_all(self) -> Balance:
        """Split the whole value off into a new balance."""
        return self.extract(self._value)

    def __repr__(self) -> str:
        return f"Balance({self._asset_type}, {self._value})"
