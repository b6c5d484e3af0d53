"""Tests for the in-memory token ledger."""

import pytest

from logit_amm.tokens import InMemoryToken, SupportsRollback, TokenLedger
from tests.helpers import ALICE, BOB, SHORT


@pytest.fixture
def token() -> InMemoryToken:
    token = InMemoryToken(SHORT, symbol="SHORT")
    token.mint(ALICE, 100)
    return token


class TestInMemoryToken:
    def test_satisfies_protocols(self, token):
        assert isinstance(token, TokenLedger)
        assert isinstance(token, SupportsRollback)

    def test_mint_and_supply(self, token):
        assert token.balance_of(ALICE) == 100
        assert token.total_supply == 100

    def test_transfer(self, token):
        assert token.transfer(ALICE, BOB, 40)
        assert token.balance_of(ALICE) == 60
        assert token.balance_of(BOB) == 40
        assert token.total_supply == 100

    def test_transfer_insufficient_balance_returns_false(self, token):
        assert not token.transfer(ALICE, BOB, 101)
        assert token.balance_of(ALICE) == 100

    def test_transfer_negative_returns_false(self, token):
        assert not token.transfer(ALICE, BOB, -1)

    def test_addresses_are_case_insensitive(self, token):
        assert token.balance_of(ALICE.upper().replace("0X", "0x")) == 100

    def test_burn(self, token):
        token.burn(ALICE, 30)
        assert token.balance_of(ALICE) == 70
        assert token.total_supply == 70

    def test_burn_more_than_balance_raises(self, token):
        with pytest.raises(ValueError):
            token.burn(ALICE, 101)

    def test_mint_negative_raises(self, token):
        with pytest.raises(ValueError):
            token.mint(BOB, -1)

    def test_invalid_address_raises(self):
        with pytest.raises(ValueError):
            InMemoryToken("not-an-address")

    def test_checkpoint_and_rollback(self, token):
        checkpoint = token.checkpoint()
        token.transfer(ALICE, BOB, 50)
        token.mint(BOB, 10)

        token.rollback(checkpoint)

        assert token.balance_of(ALICE) == 100
        assert token.balance_of(BOB) == 0
        assert token.total_supply == 100


class TestLockedAccounts:
    @pytest.fixture
    def locked(self) -> InMemoryToken:
        token = InMemoryToken(SHORT, locked_accounts=(ALICE,))
        token.mint(ALICE, 100)
        return token

    def test_locked_account_can_receive(self, locked):
        locked.mint(ALICE, 5)
        assert locked.balance_of(ALICE) == 105

    def test_transfer_from_locked_account_fails(self, locked):
        assert not locked.transfer(ALICE, BOB, 1)
        assert locked.balance_of(ALICE) == 100
        assert locked.balance_of(BOB) == 0

    def test_burn_from_locked_account_raises(self, locked):
        with pytest.raises(ValueError):
            locked.burn(ALICE, 1)
        assert locked.total_supply == 100

    def test_lock_ignores_address_case(self):
        token = InMemoryToken(SHORT, locked_accounts=(ALICE.upper().replace("0X", "0x"),))
        token.mint(ALICE, 1)
        assert not token.transfer(ALICE, BOB, 1)
