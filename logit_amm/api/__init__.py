"""HTTP API for the logit AMM."""
