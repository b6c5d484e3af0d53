"""Logit AMM - a two-token pool priced by a logarithmic exchange-rate curve."""

from logit_amm.pool import LogitPool
from logit_amm.tokens import InMemoryToken, TokenLedger

__version__ = "0.1.0"
__all__ = ["InMemoryToken", "LogitPool", "TokenLedger", "__version__"]
