"""Mathematical utilities for the logit AMM.

This package provides the fixed-point primitives behind the rate curve:
- 64.64 signed fixed point with bit-exact log_2 / ln (ABDK-style)
"""

from logit_amm.math.fixed_point import (
    DomainError,
    FixedPointError,
    FixedPointOverflowError,
    ln,
    ln_scaled,
)

__all__ = ["DomainError", "FixedPointError", "FixedPointOverflowError", "ln", "ln_scaled"]
