"""Observable pool events.

Every successful mutating operation emits its events once it has
committed; a failed operation emits nothing. Subscribers receive the
event objects. Every emission is also written to the structured log so
monitoring can follow the pool without subscribing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class Sync:
    """Caches reconciled with actual balances."""

    pool: str
    short_cache_before: int
    underlying_cache_before: int
    short_cache: int
    underlying_cache: int


@dataclass(frozen=True)
class Mint:
    """Shares minted against detected deposits."""

    pool: str
    receiver: str
    short_deposited: int
    underlying_deposited: int
    shares: int


@dataclass(frozen=True)
class Burn:
    """Shares redeemed for both tokens."""

    pool: str
    receiver: str
    shares: int
    short_out: int
    underlying_out: int


@dataclass(frozen=True)
class Swap:
    """Trade completed against the curve.

    `short_in`/`underlying_in` are the inbound amounts observed from
    balance deltas, `short_out`/`underlying_out` the amounts paid out.
    """

    pool: str
    receiver: str
    short_in: int
    underlying_in: int
    short_out: int
    underlying_out: int
    rate: int
    short_cache_before: int
    underlying_cache_before: int
    short_cache: int
    underlying_cache: int


PoolEvent = Sync | Mint | Burn | Swap

Subscriber = Callable[[PoolEvent], None]


class EventBus:
    """Fan-out of pool events to subscribers.

    Keeps the emitted history so callers that did not subscribe up front
    can still inspect what happened.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self.history: list[PoolEvent] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: PoolEvent) -> None:
        """Record event and deliver it to every subscriber.

        The operation behind the event has already committed, so a failing
        subscriber is logged and does not stop delivery to the others.
        """
        kind = type(event).__name__
        self.history.append(event)
        logger.info("pool_event", kind=kind, **asdict(event))
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("pool_event_subscriber_failed", kind=kind, pool=event.pool)
