"""Swap invariant checking.

A swap applies four deltas at once (in/out on each side) and is accepted
only if the constant product does not decrease. Two formulas are supported:

CONSTANT_PRODUCT:
    k_before = Sa * Sb
    k_after  = (Sa + a_in - a_out) * (Sb + b_in - b_out)

LEGACY (double-counted deltas):
    k_before = (Sa + a_in - a_out) * (Sb + b_in - b_out)
    k_after  = (Sa' + a_in - a_out) * (Sb' + b_in - b_out)
    where Sa', Sb' are the reserves after the deltas were applied, so the
    deltas count twice in k_after.

Products are formed at full precision. With truncation enabled both products
are wrapped to u64 before the comparison, reproducing a narrowing cast.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from cpamm.config import InvariantCheck
from cpamm.constants import MAX_AMOUNT
from cpamm.errors import AmountOverflow, InsufficientBalance, InvariantViolated, NoAmountProvided
from cpamm.safe_int import S, SafeInt, Underflow

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapQuote:
    """Outcome of a validated swap, before it is applied."""

    new_reserve_a: int
    new_reserve_b: int
    k_before: int
    k_after: int


def _apply_deltas(reserve: int, amount_in: int, amount_out: int, side: str) -> int:
    """reserve + in - out as a stored reserve (u64).

    The ins are merged before the outs are extracted, so reserve + in must
    itself fit the native width.
    """
    merged = S(reserve) + amount_in
    if merged > MAX_AMOUNT:
        raise AmountOverflow(f"Reserve {side} would exceed u64: {merged.value}")
    try:
        new_reserve = merged - amount_out
    except Underflow as err:
        raise InsufficientBalance(
            f"Reserve {side} holds {reserve} + {amount_in} in, cannot pay out {amount_out}"
        ) from err
    return new_reserve.value


def _legacy_leg(new_reserve: int, amount_in: int, amount_out: int) -> SafeInt:
    try:
        return S(new_reserve) + amount_in - amount_out
    except Underflow as err:
        raise InvariantViolated(
            f"Invariant leg underflows: {new_reserve} + {amount_in} - {amount_out}"
        ) from err


def check_swap(
    reserve_a: int,
    reserve_b: int,
    amount_a_in: int,
    amount_a_out: int,
    amount_b_in: int,
    amount_b_out: int,
    *,
    invariant_check: InvariantCheck = InvariantCheck.CONSTANT_PRODUCT,
    truncate: bool = False,
) -> SwapQuote:
    """Validate a swap against the pool reserves without mutating anything.

    Raises:
        NoAmountProvided: If both input amounts are zero
        InsufficientBalance: If an out amount exceeds reserve plus same-side in
        InvariantViolated: If the constant product would decrease
    """
    if min(amount_a_in, amount_a_out, amount_b_in, amount_b_out) < 0:
        raise ValueError(
            f"Swap amounts must be non-negative: ({amount_a_in}, {amount_a_out}, {amount_b_in}, {amount_b_out})"
        )
    if amount_a_in == 0 and amount_b_in == 0:
        raise NoAmountProvided("Swap must provide a nonzero input on at least one side")

    new_a = _apply_deltas(reserve_a, amount_a_in, amount_a_out, "a")
    new_b = _apply_deltas(reserve_b, amount_b_in, amount_b_out, "b")

    if invariant_check is InvariantCheck.CONSTANT_PRODUCT:
        k_before = S(reserve_a) * S(reserve_b)
        k_after = S(new_a) * S(new_b)
    else:
        k_before = S(new_a) * S(new_b)
        k_after = _legacy_leg(new_a, amount_a_in, amount_a_out) * _legacy_leg(
            new_b, amount_b_in, amount_b_out
        )
    k_before = k_before.to_u128_checked()
    k_after = k_after.to_u128_checked()

    if truncate:
        holds = k_after.wrap_u64() >= k_before.wrap_u64()
    else:
        holds = k_after >= k_before

    if not holds:
        logger.debug(
            "swap_invariant_violated",
            k_before=k_before.value,
            k_after=k_after.value,
            mode=invariant_check.value,
            truncate=truncate,
        )
        raise InvariantViolated(f"Constant product would decrease: {k_after.value} < {k_before.value}")

    return SwapQuote(
        new_reserve_a=new_a,
        new_reserve_b=new_b,
        k_before=k_before.value,
        k_after=k_after.value,
    )


def quote_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Largest output for an exact input that keeps (x + in) * (y - out) >= x * y.

    Formula: amount_out = floor(reserve_out * amount_in / (reserve_in + amount_in))

    Returns 0 for non-positive input or an empty pool.
    """
    if amount_in <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        return 0

    numerator = S(reserve_out) * S(amount_in)
    denominator = S(reserve_in) + S(amount_in)
    return (numerator // denominator).value
