"""Reference curve and end-to-end trade scenarios.

The reference functions re-derive the curve in floating point, straight
from the formula, independently of the fixed-point engine:

    rate = ln(p / (1 - p)) / scalar + anchor +/- fee
    quote = size / rate

run_trade() deploys a fresh pool with in-memory tokens, seeds it, reads
every quote the pool offers, executes one trade and reports the on-ledger
numbers side by side with the reference ones. Float is fine here: this
is a cross-check, not a pricing path.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from decimal import Decimal

import structlog

from logit_amm.config import DEFAULT_POOL_CONFIG, PoolConfig
from logit_amm.constants import PROPORTION_SCALE, RATE_PRECISION
from logit_amm.pool.pool import LogitPool
from logit_amm.tokens import InMemoryToken

logger = structlog.get_logger()

# Relative tolerance between ledger and reference values. Calibrated
# against the fixed-point logarithm, whose rescaled result is exact to one
# unit of 1e-9; not a proven bound for extreme skews.
REFERENCE_TOLERANCE = 1e-4

TOKEN_DECIMALS = 18


def to_units(amount: int, decimals: int = TOKEN_DECIMALS) -> float:
    """Convert a raw integer amount to whole-token units."""
    return float(Decimal(amount) / Decimal(10**decimals))


def is_close(actual: float, expected: float, tolerance: float = REFERENCE_TOLERANCE) -> bool:
    """Relative comparison, falling back to absolute around zero."""
    return math.isclose(actual, expected, rel_tol=tolerance, abs_tol=tolerance * 1e-3)


# =============================================================================
# Floating-point reference
# =============================================================================


def reference_proportion(short_cache: int, underlying_cache: int) -> float:
    return (short_cache * PROPORTION_SCALE // (short_cache + underlying_cache)) / PROPORTION_SCALE


def reference_trade_proportion(
    size: int, short_cache: int, underlying_cache: int, selling_short: bool
) -> float:
    numerator = short_cache + size if selling_short else short_cache - size
    return (numerator * PROPORTION_SCALE // (short_cache + underlying_cache)) / PROPORTION_SCALE


def _curve(proportion: float, scalar: int, anchor: int) -> float:
    return math.log(proportion / (1 - proportion)) / scalar + anchor / RATE_PRECISION


def reference_exchange_rate(
    size: int,
    scalar: int,
    anchor: int,
    fee: float,
    short_cache: int,
    underlying_cache: int,
    selling_short: bool,
) -> float:
    """Executed rate for a trade, fee included, as a plain float."""
    proportion = reference_trade_proportion(size, short_cache, underlying_cache, selling_short)
    signed_fee = fee if selling_short else -fee
    return _curve(proportion, scalar, anchor) + signed_fee


def reference_spot_exchange_rate(
    scalar: int, anchor: int, short_cache: int, underlying_cache: int
) -> float:
    return _curve(reference_proportion(short_cache, underlying_cache), scalar, anchor)


def reference_spot_rate(spot_exchange_rate: float) -> float:
    """Spot premium 1 - 1 / rate."""
    return 1 - 1 / spot_exchange_rate


def reference_quote(size: int, exchange_rate: float) -> float:
    """Underlying (in token units) exchanged for size short at exchange_rate."""
    return to_units(size) / exchange_rate


# =============================================================================
# Scenarios
# =============================================================================


def _address(n: int) -> str:
    return "0x" + f"{n:040x}"


POOL_ADDRESS = _address(0xA11)
SHORT_ADDRESS = _address(0x5107)
UNDERLYING_ADDRESS = _address(0x0DE1)
PROVIDER_ADDRESS = _address(0x1)


@dataclass(frozen=True)
class TradeParams:
    """Pool seed and trade to run.

    Amounts are raw integers (18 decimals); anchor is at 1e9 precision.
    """

    short_reserve: int
    underlying_reserve: int
    trade_size: int
    scalar: int = 100
    anchor: int = 1_010_000_000
    selling_short: bool = False
    receiver: str = PROVIDER_ADDRESS


@dataclass
class TradeReport:
    """Ledger values next to reference values for one scenario."""

    params: TradeParams
    shares: int
    proportion: float
    trade_proportion: float
    buy_rate: float
    sell_rate: float
    fee: float
    short_to_underlying: float
    underlying_to_short: float
    spot_exchange_rate: float
    spot_rate: float
    short_cache: float
    underlying_cache: float
    expected: dict[str, float] = field(default_factory=dict)

    @property
    def slippage(self) -> float:
        return self.underlying_to_short / to_units(self.params.trade_size) - 1

    def mismatches(self, tolerance: float = REFERENCE_TOLERANCE) -> list[str]:
        """Names of fields further from the reference than tolerance."""
        values = asdict(self)
        return [
            name
            for name, expected in self.expected.items()
            if not is_close(values[name], expected, tolerance)
        ]


def deploy_pool(
    short_reserve: int,
    underlying_reserve: int,
    scalar: int,
    anchor: int,
    provider: str = PROVIDER_ADDRESS,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
    pool_address: str = POOL_ADDRESS,
) -> tuple[LogitPool, InMemoryToken, InMemoryToken]:
    """Create, fund, initialize and seed a pool; returns (pool, short, underlying)."""
    pool = LogitPool(pool_address, config=config)
    short = InMemoryToken(SHORT_ADDRESS, symbol="SHORT")
    underlying = InMemoryToken(UNDERLYING_ADDRESS, symbol="UNDER")
    short.mint(pool.address, short_reserve)
    underlying.mint(pool.address, underlying_reserve)
    pool.initialize(short, underlying, scalar, anchor)
    pool.mint(provider)
    return pool, short, underlying


def run_trade(params: TradeParams, config: PoolConfig = DEFAULT_POOL_CONFIG) -> TradeReport:
    """Deploy a pool, quote and execute one trade, and report the results."""
    pool, short, underlying = deploy_pool(
        params.short_reserve,
        params.underlying_reserve,
        params.scalar,
        params.anchor,
        provider=params.receiver,
        config=config,
    )
    size = params.trade_size
    short_cache, underlying_cache = pool.get_caches()
    fee = pool.liquidity_fee / config.rate_precision

    expected_buy_rate = reference_exchange_rate(
        size, params.scalar, params.anchor, fee, short_cache, underlying_cache, False
    )
    expected_sell_rate = reference_exchange_rate(
        size, params.scalar, params.anchor, fee, short_cache, underlying_cache, True
    )
    expected_spot = reference_spot_exchange_rate(
        params.scalar, params.anchor, short_cache, underlying_cache
    )
    expected_underlying_to_short = reference_quote(size, expected_buy_rate)
    expected_short_to_underlying = reference_quote(size, expected_sell_rate)
    if params.selling_short:
        expected_short_cache = to_units(short_cache + size)
        expected_underlying_cache = to_units(underlying_cache) - expected_short_to_underlying
    else:
        expected_short_cache = to_units(short_cache - size)
        expected_underlying_cache = to_units(underlying_cache) + expected_underlying_to_short

    report = TradeReport(
        params=params,
        shares=pool.balance_of(params.receiver),
        proportion=pool.get_proportion() / PROPORTION_SCALE,
        trade_proportion=(
            pool.get_short_proportion_in(size)
            if params.selling_short
            else pool.get_short_proportion_out(size)
        )
        / PROPORTION_SCALE,
        buy_rate=pool.get_exchange_rate_out(size) / config.rate_precision,
        sell_rate=pool.get_exchange_rate_in(size) / config.rate_precision,
        fee=fee,
        short_to_underlying=to_units(pool.get_short_to_underlying_quote(size)),
        underlying_to_short=to_units(pool.get_underlying_to_short_quote(size)),
        spot_exchange_rate=pool.get_spot_exchange_rate() / config.rate_precision,
        spot_rate=pool.get_spot_rate() / config.rate_precision,
        short_cache=0.0,
        underlying_cache=0.0,
        expected={
            "proportion": reference_proportion(short_cache, underlying_cache),
            "trade_proportion": reference_trade_proportion(
                size, short_cache, underlying_cache, params.selling_short
            ),
            "buy_rate": expected_buy_rate,
            "sell_rate": expected_sell_rate,
            "short_to_underlying": expected_short_to_underlying,
            "underlying_to_short": expected_underlying_to_short,
            "spot_exchange_rate": expected_spot,
            "spot_rate": reference_spot_rate(expected_spot),
            "short_cache": expected_short_cache,
            "underlying_cache": expected_underlying_cache,
        },
    )

    if params.selling_short:
        short.mint(pool.address, size)
        pool.swap_short_to_underlying(size, params.receiver)
    else:
        underlying.mint(pool.address, pool.get_underlying_to_short_quote(size))
        pool.swap_underlying_to_short(size, params.receiver)

    short_after, underlying_after = pool.get_caches()
    report.short_cache = to_units(short_after)
    report.underlying_cache = to_units(underlying_after)

    logger.info(
        "trade_simulated",
        selling_short=params.selling_short,
        trade_size=to_units(size),
        buy_rate=report.buy_rate,
        sell_rate=report.sell_rate,
        slippage=report.slippage,
        mismatches=report.mismatches(),
    )
    return report
