"""Factory functions for creating test pools and tokens.

Usage:
    from tests.helpers import make_pool
    # or
    from tests.helpers.factories import make_pool, make_tokens

    pool, short, underlying = make_pool()
"""

from collections.abc import Callable

from logit_amm.config import DEFAULT_POOL_CONFIG, PoolConfig
from logit_amm.pool.pool import LogitPool
from logit_amm.tokens import InMemoryToken
from tests.helpers.constants import (
    ALICE,
    DEFAULT_ANCHOR,
    DEFAULT_RESERVE,
    DEFAULT_SCALAR,
    POOL,
    SHORT,
    UNDERLYING,
)


class HookedToken(InMemoryToken):
    """InMemoryToken with a hook run before every transfer.

    Set `before_transfer` to re-enter the pool from inside a payout, or
    set `fail_transfers` to make every transfer report failure.
    """

    def __init__(self, address: str, symbol: str = "") -> None:
        super().__init__(address, symbol=symbol)
        self.before_transfer: Callable[[], None] | None = None
        self.fail_transfers = False

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        if self.before_transfer is not None:
            self.before_transfer()
        if self.fail_transfers:
            return False
        return super().transfer(sender, to, amount)


def make_tokens(hooked: bool = False) -> tuple[InMemoryToken, InMemoryToken]:
    """Create a (short, underlying) token pair."""
    token_cls = HookedToken if hooked else InMemoryToken
    return token_cls(SHORT, symbol="SHORT"), token_cls(UNDERLYING, symbol="UNDER")


def make_pool(
    short_reserve: int = DEFAULT_RESERVE,
    underlying_reserve: int = DEFAULT_RESERVE,
    scalar: int = DEFAULT_SCALAR,
    anchor: int = DEFAULT_ANCHOR,
    provider: str = ALICE,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
    hooked: bool = False,
    seed: bool = True,
) -> tuple[LogitPool, InMemoryToken, InMemoryToken]:
    """Create an initialized pool, seeded with liquidity by default.

    Args:
        short_reserve: Short tokens deposited before the first mint
        underlying_reserve: Underlying tokens deposited before the first mint
        scalar: Curve steepness divisor
        anchor: Rate at a 50/50 pool (1e9 precision)
        provider: Receiver of the first mint's shares
        config: Pool configuration
        hooked: Use HookedToken for both tokens
        seed: If False, the pool is initialized but holds no liquidity

    Returns:
        Tuple of (pool, short, underlying)
    """
    pool = LogitPool(POOL, config=config)
    short, underlying = make_tokens(hooked=hooked)
    pool.initialize(short, underlying, scalar, anchor)
    if seed:
        short.mint(pool.address, short_reserve)
        underlying.mint(pool.address, underlying_reserve)
        pool.mint(provider)
    return pool, short, underlying
