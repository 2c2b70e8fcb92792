"""Protocol constants for the constant-product pool core.

Centralizes well-known addresses and pool parameters.
"""

from cpamm.safe_int import U64_MAX, U128_MAX

# Shares minted to the pool's locked sink on the first deposit.
# They can never be redeemed, so the share price of a pool can never be
# reset from a near-empty state.
MINIMUM_LIQUIDITY_AMOUNT = 1000

# Share token metadata
SHARE_DECIMALS = 8
SHARE_SYMBOL_PREFIX_LEN = 4
SHARE_TOKEN_MODULE = "swap"
SHARE_TOKEN_STRUCT = "LPToken"

# Address under which the registry publishes share token types
REGISTRY_ADDRESS = "0xa1"

# Widths: balances are native width, share supply is double width
MAX_AMOUNT = U64_MAX
MAX_SHARE_SUPPLY = U128_MAX
