"""API endpoints for the logit AMM."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from logit_amm.api.registry import PoolRegistry, get_default_registry
from logit_amm.errors import PoolError
from logit_amm.models.api import CreatePoolRequest, PoolSnapshot, QuoteResponse, TradeSide
from logit_amm.pool.pool import LogitPool

logger = structlog.get_logger()

router = APIRouter()


def get_registry() -> PoolRegistry:
    """Dependency provider for the pool registry.

    Override this in tests to inject a fresh registry:
        app.dependency_overrides[get_registry] = lambda: registry
    """
    return get_default_registry()


def _snapshot(pool_id: str, pool: LogitPool) -> PoolSnapshot:
    state = pool.state
    return PoolSnapshot(
        pool_id=pool_id,
        address=pool.address,
        short_token=state.short_token,
        underlying_token=state.underlying_token,
        scalar=state.scalar,
        anchor=state.anchor,
        liquidity_fee=state.liquidity_fee,
        short_cache=state.short_cache,
        underlying_cache=state.underlying_cache,
        total_shares=pool.total_supply,
        proportion=pool.get_proportion(),
        spot_exchange_rate=pool.get_spot_exchange_rate(),
        spot_rate=pool.get_spot_rate(),
    )


def _lookup(registry: PoolRegistry, pool_id: str) -> LogitPool:
    pool = registry.get(pool_id)
    if pool is None:
        raise HTTPException(status_code=404, detail=f"Unknown pool: {pool_id}")
    return pool


@router.post("/pools", response_model_by_alias=True)
async def create_pool(
    request: CreatePoolRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> PoolSnapshot:
    """Deploy a simulated pool seeded with the requested reserves.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Seed too small / invalid curve parameters: 422 with the reason
    """
    try:
        pool_id = registry.create(
            int(request.short_reserve),
            int(request.underlying_reserve),
            int(request.scalar),
            int(request.anchor),
        )
    except (PoolError, ValueError) as err:
        logger.warning("pool_creation_rejected", error=type(err).__name__, detail=str(err))
        raise HTTPException(status_code=422, detail=str(err)) from err

    pool = _lookup(registry, pool_id)
    return _snapshot(pool_id, pool)


@router.get("/pools", response_model_by_alias=True)
async def list_pools(registry: PoolRegistry = Depends(get_registry)) -> list[str]:
    return registry.ids()


@router.get("/pools/{pool_id}", response_model_by_alias=True)
async def get_pool(pool_id: str, registry: PoolRegistry = Depends(get_registry)) -> PoolSnapshot:
    return _snapshot(pool_id, _lookup(registry, pool_id))


@router.get(
    "/pools/{pool_id}/quote", response_model_by_alias=True, response_model_exclude_none=True
)
async def get_quote(
    pool_id: str,
    side: TradeSide,
    size: int = Query(gt=0),
    registry: PoolRegistry = Depends(get_registry),
) -> QuoteResponse:
    """Quote a trade of `size` short tokens.

    An unavailable price is not an HTTP error: the response carries
    valid=false, amount 0 and the reason.
    """
    pool = _lookup(registry, pool_id)
    quote = pool.quote_sell(size) if side is TradeSide.SELL else pool.quote_buy(size)
    error = quote.error

    logger.debug(
        "quote_served",
        pool_id=pool_id,
        side=side.value,
        size=size,
        amount=quote.amount,
        error=error.value if error else None,
    )
    return QuoteResponse(
        pool_id=pool_id,
        side=side,
        size=size,
        rate=quote.rate.rate_or_zero,
        amount=quote.amount,
        valid=quote.is_valid,
        error=error.value if error else None,
    )
