"""Configuration for pools and the HTTP service."""

import os
from dataclasses import dataclass

from logit_amm.constants import MAX_RATE, MINIMUM_LIQUIDITY, PROTOCOL_MIN_FEE, RATE_PRECISION


@dataclass(frozen=True)
class PoolConfig:
    """Protocol parameters a pool is created with.

    All fields are fixed for the lifetime of a pool; there is no fee schedule
    or governance hook that can change them afterwards.

    Attributes:
        minimum_liquidity: Shares locked to the null holder on first mint
        liquidity_fee: Fee added to/subtracted from the raw rate (1e9 scale)
        rate_precision: Denominator of rates and fees (1e9)
        max_rate: Largest rate with an executable price (uint128)
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    liquidity_fee: int = PROTOCOL_MIN_FEE
    rate_precision: int = RATE_PRECISION
    max_rate: int = MAX_RATE

    def __post_init__(self) -> None:
        if self.liquidity_fee <= 0:
            raise ValueError(f"liquidity_fee must be positive, got {self.liquidity_fee}")
        if self.minimum_liquidity < 0:
            raise ValueError(f"minimum_liquidity cannot be negative: {self.minimum_liquidity}")
        if self.rate_precision <= 0:
            raise ValueError(f"rate_precision must be positive, got {self.rate_precision}")


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()


@dataclass(frozen=True)
class ApiSettings:
    """HTTP service settings read from the environment.

    - LOGIT_AMM_HOST: Host to bind to (default: 0.0.0.0)
    - LOGIT_AMM_PORT: Port to bind to (default: 8000)
    - LOGIT_AMM_DEBUG: Enable debug/reload mode (default: false)
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ApiSettings":
        return cls(
            host=os.environ.get("LOGIT_AMM_HOST", "0.0.0.0"),
            port=int(os.environ.get("LOGIT_AMM_PORT", "8000")),
            debug=os.environ.get("LOGIT_AMM_DEBUG", "false").lower() in ("true", "1", "yes"),
        )
