"""Short-token share of pool value.

The proportion is the short cache as a fraction of the combined caches,
scaled by 1e18. The trade variants model the pool after a trade of
`amount` short tokens, with the denominator held at the pre-trade total.
"""

from logit_amm.constants import PROPORTION_SCALE
from logit_amm.safe_int import S


def spot_proportion(short_cache: int, underlying_cache: int) -> int:
    """Current proportion: short * 1e18 / (short + underlying).

    Returns 0 for an empty pool.
    """
    total = S(short_cache) + S(underlying_cache)
    if not total:
        return 0
    return ((S(short_cache) * PROPORTION_SCALE) // total).value


def trade_proportion_in(amount: int, short_cache: int, underlying_cache: int) -> int:
    """Proportion after `amount` short is sold into the pool.

    Returns 0 for an empty pool.
    """
    total = S(short_cache) + S(underlying_cache)
    if not total:
        return 0
    return (((S(short_cache) + amount) * PROPORTION_SCALE) // total).value


def trade_proportion_out(amount: int, short_cache: int, underlying_cache: int) -> int:
    """Proportion after `amount` short is bought out of the pool.

    Returns 0 for an empty pool.

    Raises:
        Underflow: If amount exceeds the short cache
    """
    remaining = S(short_cache) - amount
    total = S(short_cache) + S(underlying_cache)
    if not total:
        return 0
    return ((remaining * PROPORTION_SCALE) // total).value
