"""Pricing curve: proportion, logit rate and fee adjustment."""

from logit_amm.curve.fees import executed_rate_buying, executed_rate_selling
from logit_amm.curve.proportion import spot_proportion, trade_proportion_in, trade_proportion_out
from logit_amm.curve.rate import calculate_rate, logit
from logit_amm.curve.result import Quote, RateError, RateResult

__all__ = [
    "Quote",
    "RateError",
    "RateResult",
    "calculate_rate",
    "executed_rate_buying",
    "executed_rate_selling",
    "logit",
    "spot_proportion",
    "trade_proportion_in",
    "trade_proportion_out",
]
