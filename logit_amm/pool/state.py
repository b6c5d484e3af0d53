"""Pool ledger state.

PoolState is the single source of truth for the last reconciled view of a
pool: the two balance caches plus the curve parameters fixed at
initialization. One instance belongs to one pool.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PoolState:
    """Cached balances and curve parameters of one pool.

    Attributes:
        short_token: Address of the short token, set by initialize()
        underlying_token: Address of the underlying token, set by initialize()
        scalar: Curve steepness divisor (non-zero once initialized)
        anchor: Rate at a 50/50 pool, 1e9 precision
        liquidity_fee: Directional fee, 1e9 precision
        short_cache: Short balance at the end of the last operation
        underlying_cache: Underlying balance at the end of the last operation
        initialized: True once initialize() succeeded
    """

    short_token: str | None = None
    underlying_token: str | None = None
    scalar: int = 0
    anchor: int = 0
    liquidity_fee: int = 0
    short_cache: int = 0
    underlying_cache: int = 0
    initialized: bool = False

    @property
    def caches(self) -> tuple[int, int]:
        return self.short_cache, self.underlying_cache

    @property
    def has_liquidity(self) -> bool:
        """True when both caches are non-zero, i.e. the curve can price."""
        return self.short_cache > 0 and self.underlying_cache > 0
