"""Shared type definitions for the quoting API models.

Integers travel as decimal strings so that values above 2^53 survive JSON
clients that parse numbers as doubles.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from launchpad.constants import U64_MAX


def validate_uint64(value: Any) -> str:
    """Validate that a value is a valid u64 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid u64 as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    # Accept int directly
    if isinstance(value, int) and not isinstance(value, bool):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if int_value > U64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")

    return str(int_value)


# 64-bit unsigned integer as decimal string (validated)
Uint64 = Annotated[
    str,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer as decimal string"),
]
