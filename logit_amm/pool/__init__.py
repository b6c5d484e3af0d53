"""Pool ledger, liquidity and swap execution."""

from logit_amm.pool.liquidity import (
    LiquidityManager,
    initial_shares,
    proportional_shares,
    redemption_amounts,
)
from logit_amm.pool.pool import LogitPool
from logit_amm.pool.state import PoolState
from logit_amm.pool.swap import SwapExecutor, SwapResult, fee_margin

__all__ = [
    "LiquidityManager",
    "LogitPool",
    "PoolState",
    "SwapExecutor",
    "SwapResult",
    "fee_margin",
    "initial_shares",
    "proportional_shares",
    "redemption_amounts",
]
