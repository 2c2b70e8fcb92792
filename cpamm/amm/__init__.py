"""Constant-product pool arithmetic.

Pure functions: share accounting (deposit/redeem) and swap invariant checks.
"""

from .shares import SharesMinted, initial_shares, proportional_shares, redemption_amounts
from .swap import SwapQuote, check_swap, quote_amount_out

__all__ = [
    "SharesMinted",
    "initial_shares",
    "proportional_shares",
    "redemption_amounts",
    "SwapQuote",
    "check_swap",
    "quote_amount_out",
]
