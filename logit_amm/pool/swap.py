"""Swap quoting and execution.

Both directions price the trade at the proportion the pool would have
after it, then pay out first and verify afterwards:

    Idle -> RateComputed -> TransferSent -> InvariantChecked -> CacheUpdated

The counter-side payment is never passed in. It is inferred from how far
the actual balances moved away from the caches once the payout is done,
and the swap is rejected unless that movement covers the trade.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from logit_amm.curve.fees import executed_rate_buying, executed_rate_selling
from logit_amm.curve.proportion import trade_proportion_in, trade_proportion_out
from logit_amm.curve.rate import calculate_rate
from logit_amm.curve.result import Quote, RateError, RateResult
from logit_amm.errors import InvariantViolationError, RateUnavailableError, ZeroAmountError
from logit_amm.events import Swap
from logit_amm.safe_int import S

if TYPE_CHECKING:
    from logit_amm.pool.pool import LogitPool

logger = structlog.get_logger()


@dataclass
class SwapResult:
    """Result of an executed swap."""

    amount_in: int
    amount_out: int
    pool_address: str
    token_in: str
    token_out: str
    # Executed rate including the fee, 1e9 precision
    rate: int


def fee_margin(amount: int, liquidity_fee: int) -> int:
    """Amount plus the fee-bounded tolerance accepted as repayment."""
    return amount + amount // liquidity_fee


class SwapExecutor:
    """Prices and executes swaps against a pool's curve.

    The quote methods are pure reads of the pool state. The swap methods
    must only be called by LogitPool from inside its mutating section.
    """

    def __init__(self, pool: LogitPool) -> None:
        self._pool = pool

    def _raw_rate(self, proportion: int) -> RateResult:
        state = self._pool.state
        config = self._pool.config
        return calculate_rate(
            state.anchor,
            state.scalar,
            proportion,
            precision=config.rate_precision,
            max_rate=config.max_rate,
        )

    def _to_quote(self, size: int, rate: RateResult) -> Quote:
        if not rate.is_valid or rate.rate is None:
            return Quote(size=size, rate=rate, amount=0)
        amount = (S(size) * self._pool.config.rate_precision) // rate.rate
        return Quote(size=size, rate=rate, amount=amount.value)

    def spot_rate(self) -> RateResult:
        """Raw curve rate at the current proportion, without fee."""
        state = self._pool.state
        if not state.has_liquidity:
            return RateResult.with_error(RateError.EMPTY_POOL)
        return self._raw_rate(self._pool.get_proportion())

    def quote_sell(self, size: int) -> Quote:
        """Underlying paid out for selling `size` short into the pool."""
        state = self._pool.state
        if not state.has_liquidity:
            return Quote(size=size, rate=RateResult.with_error(RateError.EMPTY_POOL), amount=0)

        proportion = trade_proportion_in(size, state.short_cache, state.underlying_cache)
        rate = executed_rate_selling(
            self._raw_rate(proportion), state.liquidity_fee, max_rate=self._pool.config.max_rate
        )
        quote = self._to_quote(size, rate)
        if quote.amount >= state.underlying_cache:
            detail = f"payout {quote.amount} exhausts underlying {state.underlying_cache}"
            return Quote(
                size=size,
                rate=RateResult.with_error(RateError.INSUFFICIENT_UNDERLYING, detail),
                amount=0,
            )
        return quote

    def quote_buy(self, size: int) -> Quote:
        """Underlying owed for buying `size` short out of the pool."""
        state = self._pool.state
        if not state.has_liquidity:
            return Quote(size=size, rate=RateResult.with_error(RateError.EMPTY_POOL), amount=0)
        if size > state.short_cache:
            detail = f"size {size} exceeds short cache {state.short_cache}"
            return Quote(
                size=size,
                rate=RateResult.with_error(RateError.INSUFFICIENT_SHORT, detail),
                amount=0,
            )

        proportion = trade_proportion_out(size, state.short_cache, state.underlying_cache)
        rate = executed_rate_buying(self._raw_rate(proportion), state.liquidity_fee)
        return self._to_quote(size, rate)

    def _require_quote(self, quote: Quote, direction: str) -> int:
        if quote.is_valid and quote.rate.rate is not None:
            return quote.rate.rate
        error = quote.error
        logger.warning(
            "swap_rate_unavailable",
            pool=self._pool.address,
            direction=direction,
            size=quote.size,
            reason=error.value if error else None,
            detail=quote.rate.error_detail,
        )
        raise RateUnavailableError(
            f"No executable {direction} rate for size {quote.size}: "
            f"{error.value if error else 'unknown'}"
        )

    def swap_short_to_underlying(self, amount_in: int, receiver: str) -> SwapResult:
        """Sell amount_in short, already sent to the pool, for underlying.

        Raises:
            ZeroAmountError: If amount_in is zero
            RateUnavailableError: If the curve has no price for this trade
            TransferFailedError: If paying out the underlying fails
            InvariantViolationError: If neither the short deposit nor an
                underlying repayment covers the trade
        """
        if amount_in == 0:
            raise ZeroAmountError("amount_in must be positive")

        pool = self._pool
        state = pool.state
        short_cache, underlying_cache = state.caches

        quote = self.quote_sell(amount_in)
        rate = self._require_quote(quote, "sell")

        pool.transfer_out(pool.underlying_token, receiver, quote.amount)

        short_balance, underlying_balance = pool.balances()
        short_in = S(short_balance).saturating_sub(short_cache).value
        expected_underlying = S(underlying_cache) - quote.amount
        underlying_in = S(underlying_balance).saturating_sub(expected_underlying).value

        if short_in < amount_in and underlying_in < fee_margin(quote.amount, state.liquidity_fee):
            raise InvariantViolationError(
                f"Sell of {amount_in} short not covered: short_in={short_in}, "
                f"underlying_in={underlying_in}, quote={quote.amount}"
            )

        pool.update_caches(short_balance, underlying_balance)
        pool.publish(
            Swap(
                pool=pool.address,
                receiver=receiver,
                short_in=short_in,
                underlying_in=underlying_in,
                short_out=0,
                underlying_out=quote.amount,
                rate=rate,
                short_cache_before=short_cache,
                underlying_cache_before=underlying_cache,
                short_cache=short_balance,
                underlying_cache=underlying_balance,
            )
        )
        return SwapResult(
            amount_in=amount_in,
            amount_out=quote.amount,
            pool_address=pool.address,
            token_in=pool.short_token.address,
            token_out=pool.underlying_token.address,
            rate=rate,
        )

    def swap_underlying_to_short(self, amount_out: int, receiver: str) -> SwapResult:
        """Buy amount_out short, paying the quoted underlying up front.

        Raises:
            ZeroAmountError: If amount_out is zero
            RateUnavailableError: If the curve has no price for this trade
            TransferFailedError: If paying out the short fails
            InvariantViolationError: If neither the underlying deposit nor a
                short repayment covers the trade
        """
        if amount_out == 0:
            raise ZeroAmountError("amount_out must be positive")

        pool = self._pool
        state = pool.state
        short_cache, underlying_cache = state.caches

        quote = self.quote_buy(amount_out)
        rate = self._require_quote(quote, "buy")

        pool.transfer_out(pool.short_token, receiver, amount_out)

        short_balance, underlying_balance = pool.balances()
        expected_short = S(short_cache) - amount_out
        short_in = S(short_balance).saturating_sub(expected_short).value
        underlying_in = S(underlying_balance).saturating_sub(underlying_cache).value

        if underlying_in < quote.amount and short_in < fee_margin(amount_out, state.liquidity_fee):
            raise InvariantViolationError(
                f"Buy of {amount_out} short not covered: underlying_in={underlying_in}, "
                f"short_in={short_in}, quote={quote.amount}"
            )

        pool.update_caches(short_balance, underlying_balance)
        pool.publish(
            Swap(
                pool=pool.address,
                receiver=receiver,
                short_in=short_in,
                underlying_in=underlying_in,
                short_out=amount_out,
                underlying_out=0,
                rate=rate,
                short_cache_before=short_cache,
                underlying_cache_before=underlying_cache,
                short_cache=short_balance,
                underlying_cache=underlying_balance,
            )
        )
        return SwapResult(
            amount_in=quote.amount,
            amount_out=amount_out,
            pool_address=pool.address,
            token_in=pool.underlying_token.address,
            token_out=pool.short_token.address,
            rate=rate,
        )
