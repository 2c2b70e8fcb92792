"""In-memory asset ledger.

Holds the registry of fungible asset types, their metadata and total supply,
and the capabilities that allow minting and burning them. Supply is tracked
at double width (u128); individual balances are native width (u64).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from cpamm.constants import MAX_SHARE_SUPPLY
from cpamm.errors import (
    AmountOverflow,
    AssetAlreadyRegistered,
    AssetTypeMismatch,
    CapabilityMismatch,
    UninitializedAsset,
)
from cpamm.ledger.assets import AssetType, Balance

logger = structlog.get_logger()


class MintCapability:
    """Authority to mint one asset type. Compared by identity."""

    __slots__ = ("asset_type",)

    def __init__(self, asset_type: AssetType) -> None:
        self.asset_type = asset_type

    def __repr__(self) -> str:
        return f"MintCapability({self.asset_type})"


class BurnCapability:
    """Authority to burn one asset type. Compared by identity."""

    __slots__ = ("asset_type",)

    def __init__(self, asset_type: AssetType) -> None:
        self.asset_type = asset_type

    def __repr__(self) -> str:
        return f"BurnCapability({self.asset_type})"


@dataclass(frozen=True)
class AssetInfo:
    """Metadata of a registered asset type."""

    asset_type: AssetType
    name: str
    symbol: str
    decimals: int


@dataclass
class _AssetRecord:
    info: AssetInfo
    mint_cap: MintCapability
    burn_cap: BurnCapability
    supply: int = 0


class AssetLedger:
    """Registry of fungible asset types with supply accounting.

    Thread-safe: supply updates and registration run under one short lock.
    """

    def __init__(self) -> None:
        self._assets: dict[AssetType, _AssetRecord] = {}
        self._lock = threading.Lock()

    def register(
        self,
        asset_type: AssetType,
        *,
        name: str,
        symbol: str,
        decimals: int,
    ) -> tuple[MintCapability, BurnCapability]:
        """Register a new asset type and hand out its mint/burn capabilities.

        Raises:
            AssetAlreadyRegistered: If the type is already registered
            ValueError: If decimals is out of range
        """
        if not (0 <= decimals <= 255):
            raise ValueError(f"decimals must be in [0, 255]: {decimals}")
        with self._lock:
            if asset_type in self._assets:
                raise AssetAlreadyRegistered(f"Asset already registered: {asset_type}")
            mint_cap = MintCapability(asset_type)
            burn_cap = BurnCapability(asset_type)
            self._assets[asset_type] = _AssetRecord(
                info=AssetInfo(asset_type=asset_type, name=name, symbol=symbol, decimals=decimals),
                mint_cap=mint_cap,
                burn_cap=burn_cap,
            )
        logger.debug("asset_registered", asset=str(asset_type), symbol=symbol, decimals=decimals)
        return mint_cap, burn_cap

    def _record(self, asset_type: AssetType) -> _AssetRecord:
        record = self._assets.get(asset_type)
        if record is None:
            raise UninitializedAsset(f"Asset type is not registered: {asset_type}")
        return record

    def is_initialized(self, asset_type: AssetType) -> bool:
        return asset_type in self._assets

    def total_supply(self, asset_type: AssetType) -> int | None:
        """Total outstanding amount, or None if the type is not registered."""
        record = self._assets.get(asset_type)
        if record is None:
            return None
        with self._lock:
            return record.supply

    def asset_info(self, asset_type: AssetType) -> AssetInfo:
        return self._record(asset_type).info

    def name(self, asset_type: AssetType) -> str:
        return self._record(asset_type).info.name

    def symbol(self, asset_type: AssetType) -> str:
        return self._record(asset_type).info.symbol

    def decimals(self, asset_type: AssetType) -> int:
        return self._record(asset_type).info.decimals

    def assets(self) -> list[AssetInfo]:
        """All registered assets, sorted by their string form."""
        return sorted((r.info for r in self._assets.values()), key=lambda info: str(info.asset_type))

    def zero(self, asset_type: AssetType) -> Balance:
        """An empty balance of a registered asset type."""
        self._record(asset_type)
        return Balance(asset_type)

    def mint(self, amount: int, cap: MintCapability) -> Balance:
        """Create ``amount`` new units.

        Raises:
            CapabilityMismatch: If cap was not issued by this ledger
            AmountOverflow: If amount exceeds u64 or supply would exceed u128
        """
        record = self._record(cap.asset_type)
        if record.mint_cap is not cap:
            raise CapabilityMismatch(f"Mint capability not valid for {cap.asset_type}")
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        balance = Balance(cap.asset_type, amount)
        with self._lock:
            if record.supply + amount > MAX_SHARE_SUPPLY:
                raise AmountOverflow(f"Total supply of {cap.asset_type} would exceed u128")
            record.supply += amount
        return balance

    def burn(self, balance: Balance, cap: BurnCapability) -> None:
        """Destroy ``balance``; its value leaves the total supply.

        Raises:
            CapabilityMismatch: If cap was not issued by this ledger
            AssetTypeMismatch: If the balance is not of the capability's type
        """
        record = self._record(cap.asset_type)
        if record.burn_cap is not cap:
            raise CapabilityMismatch(f"Burn capability not valid for {cap.asset_type}")
        if balance.asset_type != cap.asset_type:
            raise AssetTypeMismatch(f"Cannot burn {balance.asset_type} with capability for {cap.asset_type}")
        burned = balance.extract_all()
        with self._lock:
            record.supply -= burned.value
