"""Protocol constants for the launchpad pricing engine.

Centralizes scales, integer widths and the default tokenomics.
"""

# Integer widths used for checked arithmetic
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Reference (USD) prices are integers scaled by 1e8
PRICE_SCALE = 10**8

# Fixed-point precision for exponents and the growth constant
PRECISION = 10**12

# Settlement currency base units per whole coin (lamports per SOL)
SETTLEMENT_SCALE = 10**9

# Basis points denominator
BPS_DENOMINATOR = 10_000

# Taylor series for e^x: number of terms and the largest exponent (in whole
# units) for which that many terms stay below one part in PRECISION
TAYLOR_TERMS = 32
MAX_EXPONENT_UNITS = 4

# Platform fee ceiling (10%)
MAX_PLATFORM_FEE_BPS = 1_000

# Oracle prices older than this are not used
DEFAULT_MAX_PRICE_STALENESS = 60

# Default tokenomics
# 1B total supply, 800M sold on the curve, 200M reserved for the LP
TOTAL_SUPPLY = 1_000_000_000
CURVE_SUPPLY = 800_000_000
LP_SUPPLY = TOTAL_SUPPLY - CURVE_SUPPLY

# $0.00000420 -> $0.00006900 per token (scaled by PRICE_SCALE)
START_PRICE_USD = 420
END_PRICE_USD = 6_900

# $12,000 raised (scaled by PRICE_SCALE)
GRADUATION_USD = 12_000 * PRICE_SCALE
