"""Checked unsigned integers for curve arithmetic.

Curve math multiplies prices by 1e12 fixed-point factors and then by
settlement scales, so intermediates grow fast. SafeInt models a u128
register: every operation either yields a value the register can hold or
raises a MathOverflow subclass:

- Overflow: result above 2^128 - 1 (or above 2^64 - 1 on to_u64)
- Underflow: result below zero
- DivisionByZero: zero divisor

Usage:
    from launchpad.safe_int import S

    cost = (S(start_price) * exp_diff * PRECISION // k).value
"""

from __future__ import annotations

from functools import total_ordering

from launchpad.constants import U64_MAX, U128_MAX
from launchpad.errors import MathOverflow


class SafeIntError(MathOverflow):
    """Checked arithmetic failed."""

    code = "math_overflow"


class Overflow(SafeIntError):
    """Result does not fit the register width."""


class Underflow(SafeIntError):
    """Result would be negative."""


class DivisionByZero(SafeIntError):
    """Divisor is zero."""


@total_ordering
class SafeInt:
    """Immutable u128 value with checked operators.

    Operands may be SafeInt or plain int; results are always SafeInt.
    Floor division equals truncation because both operands are unsigned.

    Attributes:
        value: Wrapped integer
    """

    __slots__ = ("_value",)

    MAX = U128_MAX

    def __init__(self, value: SafeInt | int) -> None:
        """Wrap an int (bools rejected) or copy a SafeInt.

        Raises:
            TypeError: For any other type
            Underflow: If value < 0
            Overflow: If value > MAX
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = _in_range(value)

    @property
    def value(self) -> int:
        return self._value

    @classmethod
    def zero(cls) -> SafeInt:
        return cls(0)

    # --- Operators ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        return _difference(self._value, _raw(other))

    def __rsub__(self, other: int) -> SafeInt:
        return _difference(other, self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        return _quotient(self._value, _raw(other))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return _quotient(other, self._value)

    # --- Comparison and conversion ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _raw(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    # --- Named operations ---

    def max(self, other: SafeInt | int) -> SafeInt:
        """Larger of self and other."""
        return self if self._value >= _raw(other) else SafeInt(other)

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """self - other, clamped at zero. Never raises Underflow."""
        return SafeInt(max(self._value - _raw(other), 0))

    def to_u64(self) -> int:
        """Narrow to a u64 output value.

        Raises:
            Overflow: If the value exceeds 2^64 - 1
        """
        if self._value > U64_MAX:
            raise Overflow(f"{self._value} does not fit in u64")
        return self._value


def _raw(operand: SafeInt | int) -> int:
    return operand._value if isinstance(operand, SafeInt) else operand


def _in_range(value: int) -> int:
    if value < 0:
        raise Underflow(f"{value} is negative")
    if value > U128_MAX:
        raise Overflow(f"{value} does not fit in u128")
    return value


def _difference(minuend: int, subtrahend: int) -> SafeInt:
    if subtrahend > minuend:
        raise Underflow(f"{minuend} - {subtrahend} is negative")
    return SafeInt(minuend - subtrahend)


def _quotient(dividend: int, divisor: int) -> SafeInt:
    if divisor == 0:
        raise DivisionByZero(f"{dividend} // 0")
    return SafeInt(dividend // divisor)


# Short alias used throughout the curve math
S = SafeInt
