"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Account addresses, amounts and curve parameters
- factories: Pool and token factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DEFAULT_ANCHOR,
    DEFAULT_RESERVE,
    DEFAULT_SCALAR,
    ONE,
    POOL,
    SHORT,
    TOKEN_DECIMALS,
    UNDERLYING,
)
from tests.helpers.factories import HookedToken, make_pool, make_tokens

__all__ = [
    # Constants
    "POOL",
    "SHORT",
    "UNDERLYING",
    "ALICE",
    "BOB",
    "ONE",
    "TOKEN_DECIMALS",
    "DEFAULT_RESERVE",
    "DEFAULT_SCALAR",
    "DEFAULT_ANCHOR",
    # Factories
    "HookedToken",
    "make_pool",
    "make_tokens",
]
