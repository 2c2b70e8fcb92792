"""Pydantic models for the pool API."""

from cpamm.models.requests import (
    MintRequest,
    PairRequest,
    RegisterAssetRequest,
    RemoveRequest,
    SupplyRequest,
    SwapRequest,
)
from cpamm.models.responses import (
    AssetResponse,
    BalancesResponse,
    ErrorResponse,
    PoolResponse,
    QuoteResponse,
    RemoveResponse,
    SupplyResponse,
    SwapResponse,
)

__all__ = [
    "RegisterAssetRequest",
    "MintRequest",
    "PairRequest",
    "SupplyRequest",
    "RemoveRequest",
    "SwapRequest",
    "AssetResponse",
    "PoolResponse",
    "BalancesResponse",
    "SupplyResponse",
    "RemoveResponse",
    "SwapResponse",
    "QuoteResponse",
    "ErrorResponse",
]
