"""
Core math modules

Integer basis-point arithmetic for authoritative computations, plus
display-only weather helpers for callers.
"""

# Fixed-point (authoritative, integer only)
from src.core.math.fixed_point import (
    BPS_ONE,
    SCALE,
    apply_bps,
    bps_to_display,
    divide_by_bps,
    mul_div_floor,
    ratio_bps,
)

# Weather helpers (caller side of the trust boundary)
from src.core.math.weather import (
    CLOUD_DISCOUNT_BPS_PER_PCT,
    MICRODEGREES_PER_DEGREE,
    estimate_cost_display,
    from_microdegrees,
    to_microdegrees,
    weather_factor_from_clouds,
)

__all__ = [
    # Fixed-point — Constants
    "SCALE",
    "BPS_ONE",
    # Fixed-point — Functions
    "mul_div_floor",
    "apply_bps",
    "divide_by_bps",
    "ratio_bps",
    "bps_to_display",
    # Weather — Constants
    "CLOUD_DISCOUNT_BPS_PER_PCT",
    "MICRODEGREES_PER_DEGREE",
    # Weather — Functions
    "weather_factor_from_clouds",
    "to_microdegrees",
    "from_microdegrees",
    "estimate_cost_display",
]
