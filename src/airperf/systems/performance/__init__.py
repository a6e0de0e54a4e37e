"""Performance calculation systems.

This module provides aircraft takeoff performance calculations:
- Performance tables per engine variant
- Takeoff distances (ground roll, obstacle clearance)
- Corrections for altitude, temperature, slope and runway surface

TakeoffCalculator, which reads airfield configuration, is imported from
performance_calculator directly.
"""

from airperf.systems.performance.tables import PERFORMANCE_TABLES, Engine, PerformanceTable
from airperf.systems.performance.takeoff import (
    GrassSurfaceCondition,
    InvalidPressureAltitudeError,
    MassTooHighError,
    MassTooLowError,
    SlopeTooSteepError,
    SurfaceContamination,
    TakeoffCalculationError,
    TakeoffPerformance,
    TakeoffRequest,
    TemperatureTooHighError,
    TemperatureTooLowError,
    calculate_takeoff_distance,
)

__all__ = [
    "PERFORMANCE_TABLES",
    "Engine",
    "GrassSurfaceCondition",
    "InvalidPressureAltitudeError",
    "MassTooHighError",
    "MassTooLowError",
    "PerformanceTable",
    "SlopeTooSteepError",
    "SurfaceContamination",
    "TakeoffCalculationError",
    "TakeoffPerformance",
    "TakeoffRequest",
    "TemperatureTooHighError",
    "TemperatureTooLowError",
    "calculate_takeoff_distance",
]
