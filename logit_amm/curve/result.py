"""Result types for curve calculations.

Curve math never signals failure with a bare zero: every rate carries an
explicit error tag, so "no executable price" can't be mistaken for a
legitimate rate. The numeric pool getters collapse errors back to 0 only
at the outermost layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RateError(Enum):
    """Reasons a curve produced no executable rate."""

    EMPTY_POOL = "empty_pool"
    ZERO_SCALAR = "zero_scalar"
    INSUFFICIENT_SHORT = "insufficient_short"
    PROPORTION_OUT_OF_RANGE = "proportion_out_of_range"
    LOG_DOMAIN = "log_domain"
    LOG_OVERFLOW = "log_overflow"
    NEGATIVE_RATE = "negative_rate"
    RATE_OVERFLOW = "rate_overflow"
    INSUFFICIENT_UNDERLYING = "insufficient_underlying"
    ZERO_QUOTE = "zero_quote"


@dataclass(frozen=True)
class RateResult:
    """Result of a rate calculation.

    Attributes:
        rate: The rate at 1e9 precision, or None on failure.
        error: If calculation failed, the type of error that occurred.
        error_detail: Optional human-readable detail about the error.

    Examples:
        result = RateResult.ok(1_010_000_000)
        assert result.is_valid

        result = RateResult.with_error(RateError.LOG_DOMAIN)
        assert result.rate_or_zero == 0
    """

    rate: int | None
    error: RateError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if calculation succeeded."""
        return self.error is None

    @property
    def rate_or_zero(self) -> int:
        """The rate, or the 0 sentinel if the curve had no price."""
        return self.rate if self.rate is not None else 0

    @classmethod
    def ok(cls, rate: int) -> RateResult:
        """Create a successful result."""
        return cls(rate=rate)

    @classmethod
    def with_error(cls, error: RateError, detail: str | None = None) -> RateResult:
        """Create an error result."""
        return cls(rate=None, error=error, error_detail=detail)


@dataclass(frozen=True)
class Quote:
    """A priced trade of `size` short tokens against underlying.

    Attributes:
        size: Short tokens sold into (sell) or bought out of (buy) the pool
        rate: Executed rate including the liquidity fee
        amount: Underlying paid out (sell) or owed (buy), 0 when invalid
    """

    size: int
    rate: RateResult
    amount: int

    @property
    def is_valid(self) -> bool:
        return self.rate.is_valid and self.amount > 0

    @property
    def error(self) -> RateError | None:
        if self.rate.error is not None:
            return self.rate.error
        if self.amount <= 0:
            return RateError.ZERO_QUOTE
        return None
