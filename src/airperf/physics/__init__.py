"""Atmosphere model and unit helpers."""

from airperf.physics.atmosphere import (
    AboveMaximumAltitudeError,
    AtmosphereError,
    AtmosphericLevel,
    BelowMinimumAltitudeError,
    pressure_altitude_from_qnh,
    standard_temperature,
    temperature_deviation,
)

__all__ = [
    "AboveMaximumAltitudeError",
    "AtmosphereError",
    "AtmosphericLevel",
    "BelowMinimumAltitudeError",
    "pressure_altitude_from_qnh",
    "standard_temperature",
    "temperature_deviation",
]
