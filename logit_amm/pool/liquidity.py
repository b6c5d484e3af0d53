"""Liquidity share accounting.

Deposits are never passed in: mint() measures them as the growth of each
actual balance over its cache. Withdrawals work the same way in reverse,
burn() redeems whatever shares have been sent to the pool's own address.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from logit_amm.constants import NULL_ADDRESS
from logit_amm.errors import InvariantViolationError, ZeroBurnedError, ZeroLiquidityError
from logit_amm.events import Burn, Mint
from logit_amm.safe_int import S

if TYPE_CHECKING:
    from logit_amm.pool.pool import LogitPool

logger = structlog.get_logger()


def initial_shares(short_deposited: int, underlying_deposited: int, minimum_liquidity: int) -> int:
    """Shares for the first deposit: isqrt(S * U) - minimum_liquidity.

    Raises:
        ZeroLiquidityError: If the deposit does not cover the locked minimum
    """
    root = math.isqrt(short_deposited * underlying_deposited)
    if root <= minimum_liquidity:
        raise ZeroLiquidityError(
            f"Initial deposit too small: sqrt({short_deposited} * {underlying_deposited}) = {root}"
            f" <= {minimum_liquidity}"
        )
    return root - minimum_liquidity


def proportional_shares(
    short_deposited: int,
    underlying_deposited: int,
    short_cache: int,
    underlying_cache: int,
    total_shares: int,
) -> int:
    """Shares for a later deposit: the smaller of the two pro-rata ratios.

    Taking the minimum means an unbalanced deposit is credited only for
    its balanced part; the excess is donated to existing holders.

    Raises:
        ZeroLiquidityError: If the deposit earns no shares
    """
    if short_cache == 0 or underlying_cache == 0:
        raise ZeroLiquidityError("Cannot add liquidity to a pool with an empty side")
    by_short = (S(short_deposited) * total_shares) // short_cache
    by_underlying = (S(underlying_deposited) * total_shares) // underlying_cache
    shares = by_short.min(by_underlying).value
    if shares <= 0:
        raise ZeroLiquidityError(
            f"Deposit ({short_deposited}, {underlying_deposited}) earns no shares"
        )
    return shares


def redemption_amounts(
    shares: int,
    short_balance: int,
    underlying_balance: int,
    total_shares: int,
) -> tuple[int, int]:
    """Pro-rata payout for redeeming shares.

    Raises:
        ZeroBurnedError: If either payout rounds down to zero
    """
    if total_shares == 0:
        raise ZeroBurnedError("No shares outstanding")
    short_out = ((S(shares) * short_balance) // total_shares).value
    underlying_out = ((S(shares) * underlying_balance) // total_shares).value
    if short_out == 0 or underlying_out == 0:
        raise ZeroBurnedError(
            f"Burning {shares} of {total_shares} shares pays ({short_out}, {underlying_out})"
        )
    return short_out, underlying_out


class LiquidityManager:
    """Mints and burns pool shares against the ledger.

    Must only be called by LogitPool from inside its mutating section;
    it reads and writes the pool's state without locking.
    """

    def __init__(self, pool: LogitPool) -> None:
        self._pool = pool

    def mint(self, receiver: str) -> int:
        """Mint shares to receiver for tokens already sent to the pool.

        Returns:
            Number of shares minted

        Raises:
            ZeroLiquidityError: If the deposit earns no shares
        """
        pool = self._pool
        state = pool.state
        short_balance, underlying_balance = pool.balances()

        if short_balance < state.short_cache or underlying_balance < state.underlying_cache:
            raise InvariantViolationError(
                f"Balances ({short_balance}, {underlying_balance}) below caches {state.caches}"
            )
        short_deposited = short_balance - state.short_cache
        underlying_deposited = underlying_balance - state.underlying_cache

        total_shares = pool.shares.total_supply
        if total_shares == 0:
            minimum = pool.config.minimum_liquidity
            shares = initial_shares(short_deposited, underlying_deposited, minimum)
            pool.shares.mint(NULL_ADDRESS, minimum)
            logger.debug("minimum_liquidity_locked", pool=pool.address, shares=minimum)
        else:
            shares = proportional_shares(
                short_deposited,
                underlying_deposited,
                state.short_cache,
                state.underlying_cache,
                total_shares,
            )

        pool.shares.mint(receiver, shares)
        pool.update_caches(short_balance, underlying_balance)
        pool.publish(
            Mint(
                pool=pool.address,
                receiver=receiver,
                short_deposited=short_deposited,
                underlying_deposited=underlying_deposited,
                shares=shares,
            )
        )
        return shares

    def burn(self, receiver: str) -> tuple[int, int]:
        """Redeem the shares held by the pool's own address.

        Returns:
            Tuple of (short_out, underlying_out) sent to receiver

        Raises:
            ZeroBurnedError: If either payout is zero
        """
        pool = self._pool
        short_balance, underlying_balance = pool.balances()
        shares = pool.shares.balance_of(pool.address)

        short_out, underlying_out = redemption_amounts(
            shares, short_balance, underlying_balance, pool.shares.total_supply
        )

        pool.shares.burn(pool.address, shares)
        pool.transfer_out(pool.short_token, receiver, short_out)
        pool.transfer_out(pool.underlying_token, receiver, underlying_out)

        short_balance, underlying_balance = pool.balances()
        pool.update_caches(short_balance, underlying_balance)
        pool.publish(
            Burn(
                pool=pool.address,
                receiver=receiver,
                shares=shares,
                short_out=short_out,
                underlying_out=underlying_out,
            )
        )
        return short_out, underlying_out
