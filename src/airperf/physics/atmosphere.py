"""ICAO Standard Atmosphere temperature model.

This module models the temperature profile of the ICAO Standard Atmosphere as
four piecewise-linear bands (troposphere, tropopause and two stratosphere
segments) and derives the quantities takeoff calculations need from it:
standard temperature, temperature deviation and pressure altitude from QNH.

Altitudes are geopotential altitudes in meters, treated as equivalent to
pressure altitude.

Typical usage example:
    from airperf.physics.atmosphere import standard_temperature, temperature_deviation

    isa_temp = standard_temperature(1000.0)  # 8.5
    deviation = temperature_deviation(1000.0, 20.0)  # 11.5
"""

from dataclasses import dataclass

from airperf.core.logging_system import get_logger
from airperf.physics.units import format_number, round_half_away

logger = get_logger(__name__)

# Sea level reference values
ISA_TEMPERATURE_K = 288.15
ISA_PRESSURE_HPA = 1013.25
TROPOSPHERIC_LAPSE_RATE = 0.0065  # K/m
STRATOSPHERIC_LAPSE_RATE = 0.0010  # K/m
SPECIFIC_GAS_CONSTANT = 287.058  # J/(kg·K)
GRAVITATIONAL_ACCELERATION = 9.81  # m/s²

# Envelope of the model
MINIMUM_ALTITUDE_M = -1000.0
MAXIMUM_ALTITUDE_M = 80000.0


class AtmosphereError(Exception):
    """Raised when an altitude is not defined by the standard atmosphere."""


class BelowMinimumAltitudeError(AtmosphereError):
    """Altitude lies below the lower limit of the standard atmosphere.

    Attributes:
        min: Lowest defined altitude (m).
        altitude: Offending altitude (m).
    """

    def __init__(self, min: float, altitude: float) -> None:  # noqa: A002
        self.min = min
        self.altitude = altitude
        super().__init__(
            f"The pressure altitude {format_number(altitude)} m is below the minimum "
            f"defined ({format_number(min)} m) in the ICAO Standard Atmosphere"
        )


class AboveMaximumAltitudeError(AtmosphereError):
    """Altitude lies above the upper limit of the standard atmosphere.

    Attributes:
        max: Highest defined altitude (m).
        altitude: Offending altitude (m).
    """

    def __init__(self, max: float, altitude: float) -> None:  # noqa: A002
        self.max = max
        self.altitude = altitude
        super().__init__(
            f"The pressure altitude {format_number(altitude)} m is above the maximum "
            f"defined ({format_number(max)} m) in the ICAO Standard Atmosphere"
        )


@dataclass(frozen=True)
class AtmosphericLevel:
    """A band of the standard atmosphere.

    Attributes:
        base_altitude: Altitude where the band starts (m)
        lapse_rate: Temperature lapse (K/m), positive when it gets colder with height
        base_temperature: Temperature at base_altitude (°C)
    """

    base_altitude: float
    lapse_rate: float
    base_temperature: float

    def temperature_at(self, altitude_m: float) -> float:
        """Unrounded temperature at an altitude inside this band."""
        return self.base_temperature - (altitude_m - self.base_altitude) * self.lapse_rate


# Ascending by base altitude, first band starts at sea level
ATMOSPHERIC_LEVELS: tuple[AtmosphericLevel, ...] = (
    AtmosphericLevel(0.0, TROPOSPHERIC_LAPSE_RATE, 15.0),  # Troposphere
    AtmosphericLevel(11000.0, 0.0, -56.5),  # Tropopause
    AtmosphericLevel(20000.0, STRATOSPHERIC_LAPSE_RATE, -56.5),  # Stratosphere
    AtmosphericLevel(32000.0, 0.0, -44.5),  # Stratosphere
)


def atmospheric_level(altitude_m: float) -> AtmosphericLevel:
    """Find the band an altitude belongs to.

    Scans the bands in ascending order and keeps the last one whose base is at
    or below the altitude. Altitudes below sea level fall into the
    troposphere.

    Args:
        altitude_m: Geopotential altitude (m).

    Returns:
        The matching atmospheric band.
    """
    level = ATMOSPHERIC_LEVELS[0]
    for candidate in ATMOSPHERIC_LEVELS:
        if altitude_m < candidate.base_altitude:
            break
        level = candidate
    return level


def standard_temperature(altitude_m: float) -> float:
    """Calculate the ICAO standard temperature for an altitude.

    Args:
        altitude_m: Geopotential pressure altitude (m), within [-1000, 80000].

    Returns:
        Standard temperature in °C, rounded to 2 decimals.

    Raises:
        BelowMinimumAltitudeError: If altitude is below -1000 m.
        AboveMaximumAltitudeError: If altitude is above 80000 m.

    Examples:
        >>> standard_temperature(0.0)
        15.0
        >>> standard_temperature(11000.0)
        -56.5
    """
    if altitude_m < MINIMUM_ALTITUDE_M:
        logger.debug("Altitude %.2f m below standard atmosphere", altitude_m)
        raise BelowMinimumAltitudeError(min=MINIMUM_ALTITUDE_M, altitude=altitude_m)
    if altitude_m > MAXIMUM_ALTITUDE_M:
        logger.debug("Altitude %.2f m above standard atmosphere", altitude_m)
        raise AboveMaximumAltitudeError(max=MAXIMUM_ALTITUDE_M, altitude=altitude_m)

    return round_half_away(atmospheric_level(altitude_m).temperature_at(altitude_m), 2)


def pressure_altitude_from_qnh(qnh_hpa: float, field_elevation_m: float) -> float:
    """Calculate pressure altitude from QNH and field elevation.

    Uses the barometric altitude formula for the troposphere:
    PA = elevation + T0/L × (1 - (QNH/P0)^(R×L/g))

    Args:
        qnh_hpa: QNH of the location (hPa)
        field_elevation_m: Field elevation (m)

    Returns:
        Pressure altitude in meters, rounded to 2 decimals.

    Examples:
        >>> pressure_altitude_from_qnh(1013.25, 113.0)
        113.0
        >>> pressure_altitude_from_qnh(1021.0, 113.0)
        48.71
    """
    exponent = SPECIFIC_GAS_CONSTANT * TROPOSPHERIC_LAPSE_RATE / GRAVITATIONAL_ACCELERATION
    pressure_altitude = field_elevation_m + ISA_TEMPERATURE_K / TROPOSPHERIC_LAPSE_RATE * (
        1.0 - (qnh_hpa / ISA_PRESSURE_HPA) ** exponent
    )
    return round_half_away(pressure_altitude, 2)


def temperature_deviation(altitude_m: float, actual_temp_c: float) -> float:
    """Calculate deviation of the actual temperature from standard.

    Args:
        altitude_m: Geopotential pressure altitude (m)
        actual_temp_c: Measured temperature (°C)

    Returns:
        Actual minus standard temperature (°C), rounded to 2 decimals.

    Raises:
        AtmosphereError: If the altitude lies outside the standard atmosphere.
    """
    return round_half_away(actual_temp_c - standard_temperature(altitude_m), 2)
