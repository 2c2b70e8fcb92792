"""Pydantic models for API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cpamm.ledger import AssetInfo
from cpamm.models.types import Uint64, Uint128
from cpamm.pools import PoolSnapshot


class AssetResponse(BaseModel):
    asset_type: str = Field(alias="assetType")
    name: str
    symbol: str
    decimals: int
    total_supply: Uint128 = Field(alias="totalSupply")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_info(cls, info: AssetInfo, total_supply: int) -> AssetResponse:
        return cls(
            asset_type=str(info.asset_type),
            name=info.name,
            symbol=info.symbol,
            decimals=info.decimals,
            total_supply=str(total_supply),
        )


class PoolResponse(BaseModel):
    """A pool's state, coins in canonical order."""

    coin_a: str = Field(alias="coinA")
    coin_b: str = Field(alias="coinB")
    share_token: str = Field(alias="shareToken")
    reserve_a: Uint64 = Field(alias="reserveA")
    reserve_b: Uint64 = Field(alias="reserveB")
    share_supply: Uint128 = Field(alias="shareSupply")
    locked_shares: Uint64 = Field(alias="lockedShares")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_snapshot(cls, snapshot: PoolSnapshot) -> PoolResponse:
        return cls(
            coin_a=str(snapshot.coin_a),
            coin_b=str(snapshot.coin_b),
            share_token=str(snapshot.share_token),
            reserve_a=str(snapshot.reserve_a),
            reserve_b=str(snapshot.reserve_b),
            share_supply=str(snapshot.share_supply),
            locked_shares=str(snapshot.locked_shares),
        )


class BalancesResponse(BaseModel):
    account: str
    balances: dict[str, Uint64]


class SupplyResponse(BaseModel):
    shares: Uint64


class RemoveResponse(BaseModel):
    """Amounts returned, in the request's coin order."""

    amount_a: Uint64 = Field(alias="amountA")
    amount_b: Uint64 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    """Amounts paid out, in the request's coin order."""

    amount_a_out: Uint64 = Field(alias="amountAOut")
    amount_b_out: Uint64 = Field(alias="amountBOut")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    amount_in: Uint64 = Field(alias="amountIn")
    amount_out: Uint64 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str = Field(description="Error code, e.g. PoolNotFound")
    detail: str
