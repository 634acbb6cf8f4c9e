"""
Weather helpers for callers of the marketplace.

These run on the client side of the trust boundary: they turn raw weather
observations into the inputs the engines accept. The engines never call
them and never verify that a supplied factor came from here.

Pricing rule: final = base x (1 - 0.5 x clouds%), so 100% cloud cover
halves the price (5000 bps) and a clear sky leaves it at 1.00x.
"""

from typing import Final

from src.core.math.fixed_point import SCALE, apply_bps


# =============================================================================
# CONSTANTS
# =============================================================================

# Discount per cloud-cover percent point (0.5% == 50 bps)
CLOUD_DISCOUNT_BPS_PER_PCT: Final[int] = 50

# Microdegrees per degree for lat/lon snapshots
MICRODEGREES_PER_DEGREE: Final[int] = 1_000_000

MAX_LAT_MICRODEG: Final[int] = 90 * MICRODEGREES_PER_DEGREE
MAX_LON_MICRODEG: Final[int] = 180 * MICRODEGREES_PER_DEGREE

# Native currency decimals (wei per ether)
DEFAULT_DECIMALS: Final[int] = 18


# =============================================================================
# CONVERSIONS
# =============================================================================


def weather_factor_from_clouds(cloud_percent: int) -> int:
    """
    Price factor (bps) for a cloud-cover observation.

    Args:
        cloud_percent: Cloud cover 0..100

    Returns:
        10000 - 50 * cloud_percent (10000 at clear sky, 5000 at overcast)

    Raises:
        ValueError: If cloud_percent is outside 0..100
    """
    if not 0 <= cloud_percent <= 100:
        raise ValueError(f"cloud_percent must be within 0..100, got {cloud_percent}")
    return SCALE - CLOUD_DISCOUNT_BPS_PER_PCT * int(cloud_percent)


def to_microdegrees(degrees: float) -> int:
    """Degrees -> integer microdegrees, rounded to nearest."""
    return round(degrees * MICRODEGREES_PER_DEGREE)


def from_microdegrees(microdegrees: int) -> float:
    return microdegrees / MICRODEGREES_PER_DEGREE


def estimate_cost_display(
    unit_price: int,
    quantity: int,
    factor_bps: int,
    decimals: int = DEFAULT_DECIMALS,
) -> str:
    """
    Display estimate of a purchase cost in whole currency units.

    The integer cost is exact; only the conversion to a decimal string for
    display goes through float, mirroring what a wallet UI shows.

    Args:
        unit_price: Price per kWh in the smallest unit (e.g. wei)
        quantity: kWh to buy (negative values are treated as 0)
        factor_bps: Weather factor in basis points
        decimals: Currency decimals (18 for ether)

    Returns:
        Cost formatted with 6 decimal places
    """
    exact = apply_bps(unit_price * max(0, quantity), factor_bps)
    return f"{exact / 10**decimals:.6f}"
