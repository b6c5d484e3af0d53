"""Pydantic models and shared types for the pool API."""

from logit_amm.models.api import CreatePoolRequest, PoolSnapshot, QuoteResponse, TradeSide
from logit_amm.models.types import Address, Int256, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "CreatePoolRequest",
    "Int256",
    "PoolSnapshot",
    "QuoteResponse",
    "TradeSide",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
