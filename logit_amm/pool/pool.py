"""Logit curve liquidity pool.

LogitPool ties the ledger state, the share token and the two token
collaborators together and exposes the pool's entry points:

- initialize(): bind tokens and curve parameters, once
- mint() / burn(): add and remove liquidity
- swap_short_to_underlying() / swap_underlying_to_short(): trade
- sync() / skim(): reconcile caches with actual balances

Mutating operations run one at a time under a per-pool lock. Re-entering
any of them while the lock is held (for example from a token callback
during a transfer) raises ReentrancyError. A failed operation leaves no
trace: the ledger state and every collaborator that supports rollback are
restored to their state on entry, and its queued events are dropped.
Events of a successful operation are delivered after the lock is released.

A token that does not implement SupportsRollback keeps any payout made
before a later check fails; only the pool's caches are restored. The pool
logs a warning when initialized with such a token.

Read-only queries never take the lock. They return plain numbers with 0
standing in for "no price"; quote_sell()/quote_buy() give the tagged
Quote when the reason matters.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

import structlog

from logit_amm.config import DEFAULT_POOL_CONFIG, PoolConfig
from logit_amm.constants import NULL_ADDRESS, PROPORTION_SCALE
from logit_amm.curve.proportion import spot_proportion, trade_proportion_in, trade_proportion_out
from logit_amm.curve.result import Quote, RateResult
from logit_amm.errors import (
    AlreadyInitializedError,
    NotInitializedError,
    ReentrancyError,
    TransferFailedError,
)
from logit_amm.events import EventBus, PoolEvent, Sync
from logit_amm.models.types import normalize_address
from logit_amm.pool.liquidity import LiquidityManager
from logit_amm.pool.state import PoolState
from logit_amm.pool.swap import SwapExecutor, SwapResult
from logit_amm.tokens import InMemoryToken, SupportsRollback, TokenLedger

logger = structlog.get_logger()


class LogitPool:
    """Two-token pool priced by the logit curve.

    Args:
        address: The pool's own account on the token ledgers; also the
            address of its share token
        config: Protocol parameters (fee, minimum liquidity, precision)
        events: Event bus to publish to; a private one is created if None
    """

    def __init__(
        self,
        address: str,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        events: EventBus | None = None,
    ) -> None:
        self.address = normalize_address(address, validate=True)
        self.config = config
        self.events = events if events is not None else EventBus()
        self.state = PoolState()
        self.shares = InMemoryToken(
            self.address, symbol="LOGIT-LP", locked_accounts=(NULL_ADDRESS,)
        )
        self._short_token: TokenLedger | None = None
        self._underlying_token: TokenLedger | None = None
        self._lock = threading.Lock()
        self._lock_owner: int | None = None
        self._pending_events: list[PoolEvent] = []
        self.liquidity = LiquidityManager(self)
        self.swaps = SwapExecutor(self)

    def __repr__(self) -> str:
        return f"LogitPool({self.address}, caches={self.state.caches})"

    # --- Collaborators ---

    @property
    def short_token(self) -> TokenLedger:
        if self._short_token is None:
            raise NotInitializedError("Pool has no short token")
        return self._short_token

    @property
    def underlying_token(self) -> TokenLedger:
        if self._underlying_token is None:
            raise NotInitializedError("Pool has no underlying token")
        return self._underlying_token

    def balances(self) -> tuple[int, int]:
        """Actual (short, underlying) balances held by the pool."""
        return (
            self.short_token.balance_of(self.address),
            self.underlying_token.balance_of(self.address),
        )

    def transfer_out(self, token: TokenLedger, to: str, amount: int) -> None:
        """Send amount of token from the pool to `to`.

        Raises:
            TransferFailedError: If the token reports failure
        """
        if not token.transfer(self.address, to, amount):
            raise TransferFailedError(f"Transfer of {amount} {token.address} to {to} failed")

    def publish(self, event: PoolEvent) -> None:
        """Queue event for delivery once the current operation commits."""
        self._pending_events.append(event)

    def update_caches(self, short_balance: int, underlying_balance: int) -> None:
        """Write observed balances to the ledger and queue Sync."""
        before = self.state.caches
        self.state.short_cache = short_balance
        self.state.underlying_cache = underlying_balance
        self.publish(
            Sync(
                pool=self.address,
                short_cache_before=before[0],
                underlying_cache_before=before[1],
                short_cache=short_balance,
                underlying_cache=underlying_balance,
            )
        )

    # --- Locking and rollback ---

    def _rollback_targets(self) -> list[SupportsRollback]:
        targets: list[object] = [self.shares, self._short_token, self._underlying_token]
        return [t for t in targets if t is not None and isinstance(t, SupportsRollback)]

    @contextmanager
    def _mutating(self, operation: str) -> Iterator[None]:
        """Run one mutating operation exclusively and atomically."""
        owner = threading.get_ident()
        if self._lock_owner == owner:
            logger.warning("pool_reentrancy_rejected", pool=self.address, operation=operation)
            raise ReentrancyError(f"{operation} re-entered while the pool is locked")

        with self._lock:
            self._lock_owner = owner
            self._pending_events = []
            state_checkpoint = replace(self.state)
            checkpoints = [(target, target.checkpoint()) for target in self._rollback_targets()]
            try:
                yield
            except BaseException as err:
                self.state = state_checkpoint
                for target, checkpoint in reversed(checkpoints):
                    target.rollback(checkpoint)
                self._pending_events = []
                logger.warning(
                    "pool_operation_reverted",
                    pool=self.address,
                    operation=operation,
                    error=type(err).__name__,
                    detail=str(err),
                )
                raise
            finally:
                self._lock_owner = None
            committed, self._pending_events = self._pending_events, []

        # Delivered after release so subscribers may call back into the pool
        for event in committed:
            self.events.emit(event)

    def _require_initialized(self) -> None:
        if not self.state.initialized:
            raise NotInitializedError(f"Pool {self.address} is not initialized")

    # --- Entry points ---

    def initialize(
        self,
        short_token: TokenLedger,
        underlying_token: TokenLedger,
        scalar: int,
        anchor: int,
    ) -> None:
        """Bind the token pair and curve parameters.

        The liquidity fee is set to the protocol minimum from the config.

        Raises:
            AlreadyInitializedError: If the pool was initialized before
            ValueError: If scalar is zero or both tokens are the same
        """
        with self._mutating("initialize"):
            if self.state.initialized:
                raise AlreadyInitializedError(f"Pool {self.address} already initialized")
            if scalar == 0:
                raise ValueError("scalar must be non-zero")
            short_address = normalize_address(short_token.address)
            underlying_address = normalize_address(underlying_token.address)
            if short_address == underlying_address:
                raise ValueError("short and underlying tokens must differ")

            self._short_token = short_token
            self._underlying_token = underlying_token
            self.state.short_token = short_address
            self.state.underlying_token = underlying_address
            self.state.scalar = scalar
            self.state.anchor = anchor
            self.state.liquidity_fee = self.config.liquidity_fee
            self.state.initialized = True

        for token in (short_token, underlying_token):
            if not isinstance(token, SupportsRollback):
                logger.warning(
                    "token_without_rollback",
                    pool=self.address,
                    token=token.address,
                    detail="transfers made before a failed check will not be undone",
                )

        logger.info(
            "pool_initialized",
            pool=self.address,
            short_token=short_address,
            underlying_token=underlying_address,
            scalar=scalar,
            anchor=anchor,
            liquidity_fee=self.state.liquidity_fee,
        )

    def mint(self, receiver: str) -> int:
        """Mint shares for tokens sent to the pool since the last operation."""
        with self._mutating("mint"):
            self._require_initialized()
            return self.liquidity.mint(receiver)

    def burn(self, receiver: str) -> tuple[int, int]:
        """Redeem shares sent to the pool; returns (short_out, underlying_out)."""
        with self._mutating("burn"):
            self._require_initialized()
            return self.liquidity.burn(receiver)

    def swap_short_to_underlying(self, amount_in: int, receiver: str) -> SwapResult:
        """Sell amount_in short (already sent to the pool) for underlying."""
        with self._mutating("swap_short_to_underlying"):
            self._require_initialized()
            return self.swaps.swap_short_to_underlying(amount_in, receiver)

    def swap_underlying_to_short(self, amount_out: int, receiver: str) -> SwapResult:
        """Buy amount_out short for the quoted underlying (already sent)."""
        with self._mutating("swap_underlying_to_short"):
            self._require_initialized()
            return self.swaps.swap_underlying_to_short(amount_out, receiver)

    def sync(self) -> None:
        """Force the caches to match the actual balances."""
        with self._mutating("sync"):
            self._require_initialized()
            self.update_caches(*self.balances())

    def skim(self, to: str) -> tuple[int, int]:
        """Send any balance above the caches to `to`; returns the amounts."""
        with self._mutating("skim"):
            self._require_initialized()
            short_balance, underlying_balance = self.balances()
            short_excess = max(0, short_balance - self.state.short_cache)
            underlying_excess = max(0, underlying_balance - self.state.underlying_cache)
            if short_excess:
                self.transfer_out(self.short_token, to, short_excess)
            if underlying_excess:
                self.transfer_out(self.underlying_token, to, underlying_excess)
            return short_excess, underlying_excess

    # --- Share token ---

    @property
    def total_supply(self) -> int:
        return self.shares.total_supply

    def balance_of(self, account: str) -> int:
        """Share balance of account."""
        return self.shares.balance_of(account)

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move shares between holders (e.g. to the pool before burn)."""
        return self.shares.transfer(sender, to, amount)

    # --- Queries ---

    @property
    def liquidity_fee(self) -> int:
        return self.state.liquidity_fee

    def get_caches(self) -> tuple[int, int]:
        return self.state.caches

    def get_proportion(self) -> int:
        return spot_proportion(self.state.short_cache, self.state.underlying_cache)

    def get_short_proportion_in(self, size: int) -> int:
        return trade_proportion_in(size, self.state.short_cache, self.state.underlying_cache)

    def get_short_proportion_out(self, size: int) -> int:
        if size > self.state.short_cache:
            return 0
        return trade_proportion_out(size, self.state.short_cache, self.state.underlying_cache)

    def spot_rate_result(self) -> RateResult:
        return self.swaps.spot_rate()

    def get_spot_exchange_rate(self) -> int:
        """Raw curve rate at the current proportion (no fee), 0 if none."""
        return self.spot_rate_result().rate_or_zero

    def get_spot_rate(self) -> int:
        """Spot premium: 1 - 1 / spot exchange rate, at rate precision.

        Negative when the exchange rate is below 1. Returns 0 when the
        curve has no spot price.
        """
        exchange_rate = self.get_spot_exchange_rate()
        if exchange_rate == 0:
            return 0
        return self.config.rate_precision - PROPORTION_SCALE // exchange_rate

    def quote_sell(self, size: int) -> Quote:
        return self.swaps.quote_sell(size)

    def quote_buy(self, size: int) -> Quote:
        return self.swaps.quote_buy(size)

    def get_exchange_rate_in(self, size: int) -> int:
        """Executed rate for selling size short, fee included."""
        return self.quote_sell(size).rate.rate_or_zero

    def get_exchange_rate_out(self, size: int) -> int:
        """Executed rate for buying size short, fee included."""
        return self.quote_buy(size).rate.rate_or_zero

    def get_short_to_underlying_quote(self, size: int) -> int:
        """Underlying received for selling size short."""
        return self.quote_sell(size).amount

    def get_underlying_to_short_quote(self, size: int) -> int:
        """Underlying owed for buying size short."""
        return self.quote_buy(size).amount
