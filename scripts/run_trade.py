#!/usr/bin/env python3
"""Run one trade against a freshly seeded logit pool and compare it with
the floating-point reference curve.

Usage:
    python scripts/run_trade.py --short 100000 --underlying 100000 --size 1000
    python scripts/run_trade.py --size 10000 --sell --anchor 1.0 -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

import structlog

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from logit_amm.constants import RATE_PRECISION  # noqa: E402
from logit_amm.errors import PoolError  # noqa: E402
from logit_amm.simulation import REFERENCE_TOLERANCE, TradeParams, run_trade  # noqa: E402

logger = structlog.get_logger()


def _wei(units: str) -> int:
    return int(Decimal(units) * 10**18)


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate a trade on a logit AMM pool")
    parser.add_argument("--short", default="100000", help="Short reserve in token units")
    parser.add_argument("--underlying", default="100000", help="Underlying reserve in token units")
    parser.add_argument("--size", default="1000", help="Trade size in short token units")
    parser.add_argument("--scalar", type=int, default=100, help="Curve scalar (default: 100)")
    parser.add_argument("--anchor", default="1.01", help="Rate at a 50/50 pool (default: 1.01)")
    parser.add_argument(
        "--sell", action="store_true", help="Sell short into the pool instead of buying it"
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=REFERENCE_TOLERANCE,
        help=f"Relative tolerance against the reference (default: {REFERENCE_TOLERANCE})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    params = TradeParams(
        short_reserve=_wei(args.short),
        underlying_reserve=_wei(args.underlying),
        trade_size=_wei(args.size),
        scalar=args.scalar,
        anchor=int(Decimal(args.anchor) * RATE_PRECISION),
        selling_short=args.sell,
    )

    try:
        report = run_trade(params)
    except PoolError as err:
        logger.error("trade_failed", error=type(err).__name__, detail=str(err))
        return 1

    print("=" * 58)
    print(f"{'field':<22}{'ledger':>18}{'reference':>18}")
    print("=" * 58)
    for name, expected in report.expected.items():
        print(f"{name:<22}{getattr(report, name):>18.10f}{expected:>18.10f}")
    print(f"{'fee':<22}{report.fee:>18.10f}")
    print(f"{'slippage':<22}{report.slippage:>18.10f}")

    mismatches = report.mismatches(args.tolerance)
    if mismatches:
        print(f"\nOutside tolerance: {', '.join(mismatches)}")
        return 1
    print("\nAll values within tolerance")
    return 0


if __name__ == "__main__":
    sys.exit(main())
