"""Pydantic models for the pool HTTP API."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from logit_amm.models.types import Address, Int256, Uint256


class TradeSide(str, Enum):
    """Direction of a quoted trade, from the trader's side of the short token."""

    SELL = "sell"
    BUY = "buy"


class CreatePoolRequest(BaseModel):
    """Seed reserves and curve parameters for a new simulated pool."""

    model_config = ConfigDict(populate_by_name=True)

    short_reserve: Uint256 = Field(alias="shortReserve")
    underlying_reserve: Uint256 = Field(alias="underlyingReserve")
    scalar: Int256
    anchor: Int256


class PoolSnapshot(BaseModel):
    """Cached state and spot pricing of one pool."""

    model_config = ConfigDict(populate_by_name=True)

    pool_id: str = Field(alias="poolId")
    address: Address
    short_token: Address = Field(alias="shortToken")
    underlying_token: Address = Field(alias="underlyingToken")
    scalar: Int256
    anchor: Int256
    liquidity_fee: Uint256 = Field(alias="liquidityFee")
    short_cache: Uint256 = Field(alias="shortCache")
    underlying_cache: Uint256 = Field(alias="underlyingCache")
    total_shares: Uint256 = Field(alias="totalShares")
    proportion: Uint256
    spot_exchange_rate: Uint256 = Field(alias="spotExchangeRate")
    spot_rate: Int256 = Field(alias="spotRate")


class QuoteResponse(BaseModel):
    """Quote for trading `size` short against underlying.

    `amount` is the underlying paid out (sell) or owed (buy). An invalid
    quote carries amount 0 and the reason in `error`.
    """

    model_config = ConfigDict(populate_by_name=True)

    pool_id: str = Field(alias="poolId")
    side: TradeSide
    size: Uint256
    rate: Uint256
    amount: Uint256
    valid: bool
    error: str | None = None
