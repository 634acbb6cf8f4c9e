"""
FixedPoint — Integer basis-point arithmetic

All authoritative price and quantity computations go through this module.
Factors are expressed in basis points (SCALE = 10000 == 1.00x) and every
division truncates toward zero. Operands are validated non-negative, so
floor division and truncation coincide and results are bit-for-bit
reproducible.

Floating point is NOT allowed here. Display estimates live in
src.core.math.weather.
"""

from typing import Final


# =============================================================================
# CONSTANTS
# =============================================================================

# Fixed-point denominator for weather factors (basis points)
SCALE: Final[int] = 10_000

# 1.00x factor
BPS_ONE: Final[int] = SCALE


# =============================================================================
# PRIMITIVES
# =============================================================================


def _require_int(value: int, name: str) -> None:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) on non-negative integers.

    Python ints are unbounded, so the intermediate product never overflows.

    Args:
        a: Non-negative multiplicand
        b: Non-negative multiplier
        denominator: Positive divisor

    Returns:
        Truncated quotient

    Raises:
        TypeError: If an operand is not an int
        ValueError: If a or b is negative, or denominator is not positive
    """
    _require_int(a, "a")
    _require_int(b, "b")
    _require_int(denominator, "denominator")

    if a < 0 or b < 0:
        raise ValueError(f"Operands must be non-negative, got a={a}, b={b}")
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")

    return (a * b) // denominator


def apply_bps(amount: int, factor_bps: int) -> int:
    """
    Scale an amount by a basis-point factor.

    amount * factor_bps / SCALE, truncated. 15000 bps on 100 -> 150.
    """
    return mul_div_floor(amount, factor_bps, SCALE)


def divide_by_bps(amount: int, factor_bps: int) -> int:
    """
    Inverse scaling: amount * SCALE / factor_bps, truncated.

    A factor above 1.00x shrinks the amount, a factor below 1.00x grows it.

    Raises:
        ValueError: If factor_bps is not positive
    """
    return mul_div_floor(amount, SCALE, factor_bps)


def ratio_bps(part: int, whole: int) -> int:
    """
    Share of `part` in `whole`, in basis points, truncated.

    Raises:
        ValueError: If whole is not positive (ratio undefined)
    """
    return mul_div_floor(part, SCALE, whole)


def bps_to_display(factor_bps: int) -> str:
    """Human-readable percent string for a factor, e.g. 7500 -> '75.00%'."""
    _require_int(factor_bps, "factor_bps")
    whole, frac = divmod(factor_bps, 100)
    return f"{whole}.{frac:02d}%"
