"""API endpoints for the pool exchange."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cpamm.events import AnyEvent
from cpamm.exchange import Exchange, get_default_exchange
from cpamm.ledger import AssetType
from cpamm.models import (
    AssetResponse,
    BalancesResponse,
    MintRequest,
    PairRequest,
    PoolResponse,
    QuoteResponse,
    RegisterAssetRequest,
    RemoveRequest,
    RemoveResponse,
    SupplyRequest,
    SupplyResponse,
    SwapRequest,
    SwapResponse,
)
from cpamm.models.types import validate_uint64

router = APIRouter()


def get_exchange() -> Exchange:
    """Dependency provider for the exchange instance.

    Override this in tests to inject a fresh exchange:
        app.dependency_overrides[get_exchange] = lambda: exchange
    """
    return get_default_exchange()


def _parse_type(raw: str) -> AssetType:
    try:
        return AssetType.parse(raw)
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err


# --- Assets and accounts ---


@router.post("/assets", status_code=201)
def register_asset(request: RegisterAssetRequest, exchange: Exchange = Depends(get_exchange)) -> AssetResponse:
    info = exchange.register_asset(
        request.parsed_type,
        name=request.name,
        symbol=request.symbol,
        decimals=request.decimals,
    )
    return AssetResponse.from_info(info, exchange.ledger.total_supply(info.asset_type) or 0)


@router.get("/assets")
def list_assets(exchange: Exchange = Depends(get_exchange)) -> list[AssetResponse]:
    return [
        AssetResponse.from_info(info, exchange.ledger.total_supply(info.asset_type) or 0)
        for info in exchange.ledger.assets()
    ]


@router.post("/accounts/{account}/mint")
def mint(account: str, request: MintRequest, exchange: Exchange = Depends(get_exchange)) -> BalancesResponse:
    exchange.mint(account, _parse_type(request.asset_type), int(request.amount))
    return get_balances(account, exchange)


@router.get("/accounts/{account}/balances")
def get_balances(account: str, exchange: Exchange = Depends(get_exchange)) -> BalancesResponse:
    balances = exchange.accounts.balances(account)
    return BalancesResponse(
        account=account,
        balances={str(asset_type): str(value) for asset_type, value in sorted(balances.items(), key=lambda kv: str(kv[0]))},
    )


# --- Pools ---


@router.post("/pools", status_code=201)
def create_pool(request: PairRequest, exchange: Exchange = Depends(get_exchange)) -> PoolResponse:
    type_a, type_b = request.parsed_pair
    pool = exchange.create_pool(type_a, type_b)
    return PoolResponse.from_snapshot(pool.snapshot())


@router.get("/pools")
def list_pools(exchange: Exchange = Depends(get_exchange)) -> list[PoolResponse]:
    return [PoolResponse.from_snapshot(pool.snapshot()) for pool in exchange.registry.pools()]


@router.get("/pools/{coin_a}/{coin_b}")
def get_pool(coin_a: str, coin_b: str, exchange: Exchange = Depends(get_exchange)) -> PoolResponse:
    pool = exchange.registry.get_pool(_parse_type(coin_a), _parse_type(coin_b))
    return PoolResponse.from_snapshot(pool.snapshot())


@router.get("/pools/{coin_in}/{coin_out}/quote")
def quote(coin_in: str, coin_out: str, amount_in: str, exchange: Exchange = Depends(get_exchange)) -> QuoteResponse:
    """Fee-less exact-in quote under the constant-product invariant."""
    try:
        amount = int(validate_uint64(amount_in))
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    amount_out = exchange.registry.quote(_parse_type(coin_in), _parse_type(coin_out), amount)
    return QuoteResponse(amount_in=str(amount), amount_out=str(amount_out))


@router.post("/pools/supply")
def supply(request: SupplyRequest, exchange: Exchange = Depends(get_exchange)) -> SupplyResponse:
    type_a, type_b = request.parsed_pair
    shares = exchange.supply(request.account, type_a, type_b, int(request.amount_a), int(request.amount_b))
    return SupplyResponse(shares=str(shares))


@router.post("/pools/remove")
def remove(request: RemoveRequest, exchange: Exchange = Depends(get_exchange)) -> RemoveResponse:
    type_a, type_b = request.parsed_pair
    amount_a, amount_b = exchange.remove(request.account, type_a, type_b, int(request.shares))
    return RemoveResponse(amount_a=str(amount_a), amount_b=str(amount_b))


@router.post("/pools/swap")
def swap(request: SwapRequest, exchange: Exchange = Depends(get_exchange)) -> SwapResponse:
    type_a, type_b = request.parsed_pair
    out_a, out_b = exchange.swap(
        request.account,
        type_a,
        type_b,
        int(request.amount_a_in),
        int(request.amount_a_out),
        int(request.amount_b_in),
        int(request.amount_b_out),
    )
    return SwapResponse(amount_a_out=str(out_a), amount_b_out=str(out_b))


# --- Events ---


@router.get("/events")
def list_events(kind: str | None = None, exchange: Exchange = Depends(get_exchange)) -> list[AnyEvent]:
    return exchange.events.events(kind)  # type: ignore[return-value]
