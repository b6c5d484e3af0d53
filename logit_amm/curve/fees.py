"""Directional liquidity fee.

Selling short into the pool pays rate + fee; buying short out of it pays
rate - fee. Both directions therefore quote underlying = size / rate
with the spread working against the trader.
"""

from logit_amm.constants import MAX_RATE
from logit_amm.curve.result import RateError, RateResult


def executed_rate_selling(rate: RateResult, fee: int, *, max_rate: int = MAX_RATE) -> RateResult:
    """Rate applied when selling short for underlying."""
    if not rate.is_valid or rate.rate is None:
        return rate
    executed = rate.rate + fee
    if executed > max_rate:
        return RateResult.with_error(RateError.RATE_OVERFLOW, f"rate {executed} above {max_rate}")
    return RateResult.ok(executed)


def executed_rate_buying(rate: RateResult, fee: int) -> RateResult:
    """Rate applied when buying short with underlying."""
    if not rate.is_valid or rate.rate is None:
        return rate
    executed = rate.rate - fee
    if executed <= 0:
        return RateResult.with_error(RateError.NEGATIVE_RATE, f"rate {rate.rate} within fee {fee}")
    return RateResult.ok(executed)
