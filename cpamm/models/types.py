"""Shared type definitions for API models.

Amounts travel as decimal strings so u128 values survive JSON clients that
parse numbers as doubles.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from cpamm.safe_int import U64_MAX, U128_MAX


def _validate_uint(value: Any, max_value: int, width: str) -> str:
    """Validate that a value is a decimal integer string within [0, max_value].

    Raises:
        ValueError: If value is not a valid non-negative integer within range
    """
    # Accept int directly
    if isinstance(value, int) and not isinstance(value, bool):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"{width} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"{width} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"{width} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"{width} overflow: {value}")
    return str(int_value)


def validate_uint64(value: Any) -> str:
    return _validate_uint(value, U64_MAX, "Uint64")


def validate_uint128(value: Any) -> str:
    return _validate_uint(value, U128_MAX, "Uint128")


# 64-bit unsigned integer as decimal string (validated)
Uint64 = Annotated[
    str,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# 128-bit unsigned integer as decimal string (validated)
Uint128 = Annotated[
    str,
    BeforeValidator(validate_uint128),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Qualified asset type name: address::module::name
AssetTypeName = Annotated[
    str,
    Field(pattern=r"^[^:\s]+::[^:\s]+::\S+$", description="Asset type as address::module::name"),
]

# Account identifier in the dev account store
AccountId = Annotated[str, Field(min_length=1, max_length=128)]
