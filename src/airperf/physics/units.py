"""Unit conversion and rounding helpers.

Small stateless helpers shared by the atmosphere model and the performance
calculators. Rounding follows the half-away-from-zero convention used by
flight manuals, not Python's round-half-to-even.

Typical usage example:
    from airperf.physics.units import feet_to_meters, round_half_away

    altitude_m = feet_to_meters(3000.0)
    distance = round_half_away(147.2649, 2)  # 147.26
"""

from decimal import ROUND_HALF_UP, Decimal

import numpy as np

FOOT_IN_METERS = 0.3048


def feet_to_meters(feet: float) -> float:
    """Convert feet to meters.

    Args:
        feet: Value in feet.

    Returns:
        Value in meters.
    """
    return feet * FOOT_IN_METERS


def meters_to_feet(meters: float) -> float:
    """Convert meters to feet.

    Args:
        meters: Value in meters.

    Returns:
        Value in feet.
    """
    return meters / FOOT_IN_METERS


def round_half_away(value: float, decimals: int = 2) -> float:
    """Round to a number of decimals, ties away from zero.

    The value is scaled by ``10 ** decimals`` in floating point and the
    product is rounded to the nearest integer, so ``round_half_away(x, 2)``
    equals ``round(x * 100) / 100`` with ties going away from zero.

    Args:
        value: Number to round.
        decimals: Number of decimal places to keep.

    Returns:
        Rounded value.

    Examples:
        >>> round_half_away(55.5555, 2)
        55.56
        >>> round_half_away(-0.125, 2)
        -0.13
    """
    base = float(10**decimals)
    # Decimal(float) is exact, so the tie test sees the real binary product.
    scaled = Decimal(value * base).to_integral_value(rounding=ROUND_HALF_UP)
    return float(scaled) / base


def format_number(value: float) -> str:
    """Format a number for messages in plain positional notation.

    Integral values lose their trailing ``.0`` and no value is printed in
    exponent notation.

    Args:
        value: Number to format.

    Returns:
        Shortest representation of the value that reads back exactly.

    Examples:
        >>> format_number(600.0)
        '600'
        >>> format_number(600.1)
        '600.1'
        >>> format_number(1e16)
        '10000000000000000'
    """
    return np.format_float_positional(float(value), trim="-")
