"""Pool error classes.

Every error aborts the whole operation: cache writes happen only after all
checks pass and external collaborators are rolled back to their entry
checkpoint, so none of these leave the pool in a partial state.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    pass


class AlreadyInitializedError(PoolError):
    """initialize() called on a pool that already has tokens and a curve."""

    pass


class NotInitializedError(PoolError):
    """Mutating operation called before initialize()."""

    pass


class ZeroAmountError(PoolError):
    """Swap requested with a zero amount."""

    pass


class ZeroLiquidityError(PoolError):
    """Deposit too small to mint any shares."""

    pass


class ZeroBurnedError(PoolError):
    """Burn would pay out zero of either token."""

    pass


class RateUnavailableError(PoolError):
    """The curve has no executable price at this size and skew."""

    pass


class InvariantViolationError(PoolError):
    """Post-transfer balances fall outside the fee-bounded expected range."""

    pass


class TransferFailedError(PoolError):
    """The token collaborator reported a failed transfer."""

    pass


class ReentrancyError(PoolError):
    """A mutating operation was entered while another one holds the pool lock."""

    pass
