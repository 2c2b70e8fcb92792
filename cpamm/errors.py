"""Pool error classes.

Every rejected operation raises one of these. The ``code`` attribute is the
stable name callers (and the HTTP layer) switch on. No error is recovered
internally: the operation did not happen and state is unchanged.
"""

from typing import ClassVar


class AmmError(Exception):
    """Base error for pool operations."""

    code: ClassVar[str] = "AmmError"


class InvalidPair(AmmError):
    """The two asset types are equal, or given in non-canonical order where that is rejected."""

    code = "InvalidPair"


class UninitializedAsset(AmmError):
    """An asset type is not a registered fungible asset."""

    code = "UninitializedAsset"


class PoolAlreadyExists(AmmError):
    """A pool for the canonical pair is already registered."""

    code = "PoolAlreadyExists"


class PoolNotFound(AmmError):
    """No pool is registered for the canonical pair."""

    code = "PoolNotFound"


class InsufficientInitialLiquidity(AmmError):
    """First deposit does not exceed the minimum liquidity floor."""

    code = "InsufficientInitialLiquidity"


class ZeroLiquidityMinted(AmmError):
    """A deposit would mint zero shares."""

    code = "ZeroLiquidityMinted"


class BelowMinimumLiquidity(AmmError):
    """Share supply is not above the locked floor, nothing can be redeemed."""

    code = "BelowMinimumLiquidity"


class ZeroRedemption(AmmError):
    """A redemption would return zero of either reserve."""

    code = "ZeroRedemption"


class NoAmountProvided(AmmError):
    """A swap supplies no input on either side."""

    code = "NoAmountProvided"


class InvariantViolated(AmmError):
    """A swap would decrease the constant product."""

    code = "InvariantViolated"


class ReservedAssetType(AmmError):
    """The asset type lives under the address share tokens are published at."""

    code = "ReservedAssetType"


# --- Asset ledger errors ---


class LedgerError(AmmError):
    """Base error for asset ledger operations."""

    code = "LedgerError"


class InsufficientBalance(LedgerError):
    """Extraction amount exceeds the balance value."""

    code = "InsufficientBalance"


class AssetAlreadyRegistered(LedgerError):
    """The asset type has already been registered."""

    code = "AssetAlreadyRegistered"


class AmountOverflow(LedgerError):
    """A balance or total supply would exceed its width."""

    code = "AmountOverflow"


class AssetTypeMismatch(LedgerError):
    """Two balances of different asset types were combined."""

    code = "AssetTypeMismatch"


class CapabilityMismatch(LedgerError):
    """A mint/burn capability was used for another asset type."""

    code = "CapabilityMismatch"
