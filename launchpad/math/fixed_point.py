"""Deterministic fixed-point exp and ln.

All values are unsigned integers scaled by a caller-supplied `scale`
(1e12 for curve math). No floating point is used anywhere, so every
result is reproducible bit-for-bit on any interpreter.

- exp_taylor: e^x by a truncated Taylor series, each step overflow-checked
- ln_fixed: ln(x) for x >= 1 by power-of-two reduction and the atanh series
"""

from __future__ import annotations

from launchpad.constants import MAX_EXPONENT_UNITS, TAYLOR_TERMS
from launchpad.errors import ExponentOutOfRange, InvalidRange
from launchpad.safe_int import S

__all__ = [
    # Functions
    "exp_taylor",
    "ln_fixed",
    # Constants
    "ONE_18",
    "LN2_18",
    "LN_SERIES_TERMS",
]

# =============================================================================
# Constants
# =============================================================================

ONE_18 = 10**18

# ln(2) in 18-decimal fixed-point
LN2_18 = 693_147_180_559_945_309

# atanh series cap; z^2 <= 1/9 so the terms vanish well before this
LN_SERIES_TERMS = 40


# =============================================================================
# Exponential
# =============================================================================


def exp_taylor(x: int, scale: int, terms: int = TAYLOR_TERMS) -> int:
    """Compute e^(x/scale) * scale with a truncated Taylor series.

    result = 1 + x + x^2/2! + ... + x^terms/terms!, accumulated term by term
    as term_i = term_{i-1} * x / i / scale. Iteration stops once a term
    truncates to zero, so at most `terms` steps run and every intermediate
    stays bounded.

    Args:
        x: Non-negative exponent in `scale` fixed-point
        scale: Fixed-point scale (e.g. 1e12)
        terms: Maximum number of series terms

    Returns:
        e^x as `scale` fixed-point, truncated

    Raises:
        ExponentOutOfRange: If x exceeds MAX_EXPONENT_UNITS whole units
        MathOverflow: If any intermediate leaves the u128 range
    """
    if x > MAX_EXPONENT_UNITS * scale:
        raise ExponentOutOfRange(
            f"Exponent {x} exceeds {MAX_EXPONENT_UNITS} at scale {scale}"
        )

    sx = S(x)
    result = S(scale)
    term = S(scale)

    for i in range(1, terms + 1):
        term = term * sx // i // scale
        if not term:
            break
        result = result + term

    return result.value


# =============================================================================
# Logarithm
# =============================================================================


def ln_fixed(x: int, scale: int) -> int:
    """Compute ln(x/scale) * scale for x >= scale.

    The argument is rescaled to 18 decimals and halved until it drops below
    2.0, counting the halvings n. The remainder y in [1, 2) is handled by
    ln(y) = 2 * atanh(z) = 2 * (z + z^3/3 + z^5/5 + ...), z = (y-1)/(y+1),
    which converges quickly because z < 1/3. Then ln(x) = n*ln(2) + ln(y).

    Args:
        x: Argument in `scale` fixed-point, must be >= 1.0
        scale: Fixed-point scale of both argument and result

    Returns:
        ln(x) as `scale` fixed-point, truncated

    Raises:
        InvalidRange: If x < 1.0 (the curve only needs ratios above 1)
        MathOverflow: If x cannot be rescaled to 18 decimals within u128
    """
    if x < scale:
        raise InvalidRange(f"ln argument {x} below 1.0 at scale {scale}")

    y = (S(x) * ONE_18 // scale).value

    halvings = 0
    while y >= 2 * ONE_18:
        y //= 2
        halvings += 1

    z = ((y - ONE_18) * ONE_18) // (y + ONE_18)
    z_squared = (z * z) // ONE_18

    num = z
    series_sum = num

    # z + z^3/3 + z^5/5 + ... until the numerator truncates away
    for i in range(3, 2 * LN_SERIES_TERMS + 1, 2):
        num = (num * z_squared) // ONE_18
        if num == 0:
            break
        series_sum += num // i

    ln_18 = halvings * LN2_18 + 2 * series_sum

    return (S(ln_18) * scale // ONE_18).value
