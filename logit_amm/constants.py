"""Protocol constants for the logit AMM.

Centralizes numeric scales and protocol parameters shared by the curve
engine and the pool ledger.
"""

from logit_amm.models.types import is_valid_address

# Proportions and logit values are expressed as integers scaled by 1e18
PROPORTION_SCALE = 10**18

# Rates and fees are expressed as integers scaled by 1e9
RATE_PRECISION = 10**9

# Shares permanently locked to the null holder on the first mint
MINIMUM_LIQUIDITY = 1000

# Liquidity fee every pool is initialized with (0.00025 at 1e9 precision)
PROTOCOL_MIN_FEE = 250_000

# Rates are stored as uint128; anything above has no executable price
MAX_RATE = 2**128 - 1


def _validate_address(name: str, address: str) -> str:
    """Validate and return an address constant.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Holder of the locked minimum liquidity (never spendable)
NULL_ADDRESS = _validate_address("null", "0x" + "00" * 20)
