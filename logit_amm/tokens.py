"""Token ledger collaborator.

The pool only needs two capabilities from a token: reading a balance and
moving funds out of its own account. TokenLedger captures that contract.
Collaborators that can also snapshot and restore their state implement
SupportsRollback, which lets a failed pool operation undo transfers made
before the failure.

InMemoryToken is a minimal ERC20-style ledger used for the pool's share
token, for simulations and for tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from logit_amm.models.types import normalize_address

logger = structlog.get_logger()


@runtime_checkable
class TokenLedger(Protocol):
    """Fungible token consumed by the pool."""

    address: str

    def balance_of(self, account: str) -> int:
        """Balance held by account."""
        ...

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move amount from sender to to. Returns False on failure."""
        ...


@runtime_checkable
class SupportsRollback(Protocol):
    """Collaborator whose state can be restored after a failed operation."""

    def checkpoint(self) -> object:
        """Capture the current state."""
        ...

    def rollback(self, checkpoint: object) -> None:
        """Restore a state captured by checkpoint()."""
        ...


class InMemoryToken:
    """ERC20-style balance ledger held in memory.

    transfer() follows the boolean-returning convention: an insufficient
    balance, a negative amount or a locked sender returns False rather than
    raising, and it is up to the caller to check the result.
    """

    def __init__(
        self,
        address: str,
        symbol: str = "",
        decimals: int = 18,
        locked_accounts: tuple[str, ...] = (),
    ) -> None:
        self.address = normalize_address(address, validate=True)
        self.symbol = symbol
        self.decimals = decimals
        # Balances of these accounts can never be transferred or burned
        self.locked_accounts = frozenset(normalize_address(a) for a in locked_accounts)
        self._balances: dict[str, int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"InMemoryToken({self.symbol or self.address})"

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        sender_key = normalize_address(sender)
        to_key = normalize_address(to)
        balance = self._balances.get(sender_key, 0)
        if sender_key in self.locked_accounts or amount < 0 or balance < amount:
            logger.debug(
                "token_transfer_rejected",
                token=self.symbol,
                sender=sender_key,
                amount=amount,
                balance=balance,
            )
            return False
        self._balances[sender_key] = balance - amount
        self._balances[to_key] = self._balances.get(to_key, 0) + amount
        return True

    def mint(self, to: str, amount: int) -> None:
        """Create amount new tokens for to.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Cannot mint negative amount: {amount}")
        key = normalize_address(to)
        self._balances[key] = self._balances.get(key, 0) + amount
        self._total_supply += amount

    def burn(self, account: str, amount: int) -> None:
        """Destroy amount tokens held by account.

        Raises:
            ValueError: If account is locked, or amount is negative or exceeds the balance
        """
        key = normalize_address(account)
        if key in self.locked_accounts:
            raise ValueError(f"Cannot burn from locked account {key}")
        balance = self._balances.get(key, 0)
        if amount < 0 or balance < amount:
            raise ValueError(f"Cannot burn {amount} from balance {balance}")
        self._balances[key] = balance - amount
        self._total_supply -= amount

    def checkpoint(self) -> tuple[dict[str, int], int]:
        return dict(self._balances), self._total_supply

    def rollback(self, checkpoint: object) -> None:
        balances, total_supply = checkpoint  # type: ignore[misc]
        self._balances = dict(balances)
        self._total_supply = total_supply
