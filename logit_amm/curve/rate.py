"""Logit exchange-rate curve.

rate(p) = ln(p / (1 - p)) / scalar + anchor

The logit maps a proportion in (0, 1) onto the whole real line, so price
impact steepens without bound as either side of the pool approaches
exhaustion. At p = 0.5 the logit is 1 and the rate equals the anchor.

Everything is integer math: the proportion and its logit are scaled by
1e18, the logarithm is evaluated in 64.64 fixed point and rescaled to the
1e9 rate precision. Since the logit is scaled, ln(p') - ln(1e18) recovers
the logarithm of the unscaled ratio.
"""

from functools import lru_cache

import structlog

from logit_amm.constants import MAX_RATE, PROPORTION_SCALE, RATE_PRECISION
from logit_amm.curve.result import RateError, RateResult
from logit_amm.math.fixed_point import (
    DomainError,
    FixedPointOverflowError,
    div_trunc,
    ln_scaled,
)
from logit_amm.safe_int import S

logger = structlog.get_logger()


def logit(proportion: int) -> int:
    """Logit transform p * 1e18 / (1e18 - p) of a 1e18-scaled proportion.

    Raises:
        Underflow: If proportion exceeds 1e18
        DivisionByZero: If proportion equals 1e18
    """
    return ((S(proportion) * PROPORTION_SCALE) // (S(PROPORTION_SCALE) - proportion)).value


@lru_cache(maxsize=8)
def _ln_unit(precision: int) -> int:
    """ln(1e18) at the given precision, the offset removing the logit scale."""
    return ln_scaled(PROPORTION_SCALE, precision)


def calculate_rate(
    anchor: int,
    scalar: int,
    proportion: int,
    *,
    precision: int = RATE_PRECISION,
    max_rate: int = MAX_RATE,
) -> RateResult:
    """Convert a proportion into an exchange rate.

    Args:
        anchor: Rate at a 50/50 pool, at `precision`
        scalar: Curve steepness divisor (non-zero)
        proportion: Short share of the pool, scaled by 1e18
        precision: Rate denominator (default 1e9)
        max_rate: Largest representable rate (default uint128 max)

    Returns:
        RateResult with the raw (fee-less) rate, or an error tag when the
        curve has no executable price for this proportion
    """
    if scalar == 0:
        return RateResult.with_error(RateError.ZERO_SCALAR)
    if not 0 < proportion < PROPORTION_SCALE:
        return RateResult.with_error(
            RateError.PROPORTION_OUT_OF_RANGE, f"proportion {proportion} not in (0, 1e18)"
        )

    transformed = logit(proportion)
    try:
        ln_transformed = ln_scaled(transformed, precision)
    except DomainError as err:
        logger.debug("rate_log_domain", proportion=proportion, logit=transformed)
        return RateResult.with_error(RateError.LOG_DOMAIN, str(err))
    except FixedPointOverflowError as err:
        logger.debug("rate_log_overflow", proportion=proportion, logit=transformed)
        return RateResult.with_error(RateError.LOG_OVERFLOW, str(err))

    rate = div_trunc(ln_transformed - _ln_unit(precision), scalar) + anchor

    if rate < 0:
        return RateResult.with_error(RateError.NEGATIVE_RATE, f"rate {rate} below zero")
    if rate > max_rate:
        return RateResult.with_error(RateError.RATE_OVERFLOW, f"rate {rate} above {max_rate}")
    return RateResult.ok(rate)
