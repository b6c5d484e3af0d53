"""Pytest configuration and fixtures."""

import pytest

from logit_amm.api.registry import PoolRegistry
from logit_amm.pool.pool import LogitPool
from logit_amm.tokens import InMemoryToken
from tests.helpers import make_pool


@pytest.fixture
def seeded_pool() -> tuple[LogitPool, InMemoryToken, InMemoryToken]:
    """A 100k/100k pool with scalar 100 and anchor 1.01, seeded by ALICE."""
    return make_pool()


@pytest.fixture
def pool(seeded_pool: tuple[LogitPool, InMemoryToken, InMemoryToken]) -> LogitPool:
    """The pool from seeded_pool, for tests that don't touch the tokens."""
    return seeded_pool[0]


@pytest.fixture
def empty_pool() -> tuple[LogitPool, InMemoryToken, InMemoryToken]:
    """An initialized pool with no liquidity."""
    return make_pool(seed=False)


@pytest.fixture
def registry() -> PoolRegistry:
    """A fresh, empty pool registry."""
    return PoolRegistry()
