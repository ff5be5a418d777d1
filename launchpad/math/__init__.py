"""Mathematical utilities for the pricing engine.

This package provides the deterministic fixed-point primitives behind the
bonding curve:
- exp_taylor: e^x via a truncated Taylor series
- ln_fixed: natural log via power-of-two reduction and the atanh series
"""

from launchpad.math.fixed_point import exp_taylor, ln_fixed

__all__ = ["exp_taylor", "ln_fixed"]
