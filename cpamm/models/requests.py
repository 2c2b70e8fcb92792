"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from cpamm.ledger import AssetType
from cpamm.models.types import AccountId, AssetTypeName, Uint64


class RegisterAssetRequest(BaseModel):
    """Register a fungible asset type (dev bootstrap)."""

    asset_type: AssetTypeName = Field(alias="assetType")
    name: str = Field(min_length=1, max_length=64)
    symbol: str = Field(min_length=1, max_length=32)
    decimals: int = Field(default=8, ge=0, le=255)

    model_config = {"populate_by_name": True}

    @property
    def parsed_type(self) -> AssetType:
        return AssetType.parse(self.asset_type)


class MintRequest(BaseModel):
    """Credit an account with newly minted units of an API-registered asset."""

    asset_type: AssetTypeName = Field(alias="assetType")
    amount: Uint64

    model_config = {"populate_by_name": True}


class PairRequest(BaseModel):
    """Two asset types, in any order."""

    coin_a: AssetTypeName = Field(alias="coinA")
    coin_b: AssetTypeName = Field(alias="coinB")

    model_config = {"populate_by_name": True}

    @property
    def parsed_pair(self) -> tuple[AssetType, AssetType]:
        return AssetType.parse(self.coin_a), AssetType.parse(self.coin_b)


class SupplyRequest(PairRequest):
    account: AccountId
    amount_a: Uint64 = Field(alias="amountA")
    amount_b: Uint64 = Field(alias="amountB")


class RemoveRequest(PairRequest):
    account: AccountId
    shares: Uint64


class SwapRequest(PairRequest):
    """Swap with in/out legs on both sides, amounts in the request's coin order."""

    account: AccountId
    amount_a_in: Uint64 = Field(default="0", alias="amountAIn")
    amount_a_out: Uint64 = Field(default="0", alias="amountAOut")
    amount_b_in: Uint64 = Field(default="0", alias="amountBIn")
    amount_b_out: Uint64 = Field(default="0", alias="amountBOut")
