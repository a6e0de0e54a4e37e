"""Takeoff distance calculator for the FK9 Mk VI.

Calculations follow the approved flight manual and the FSM 3/75 circular
"Einflüsse auf die Länge der Startstrecke". A baseline distance is
interpolated from the engine's performance table by mass and then corrected,
in this order, for:
- Pressure altitude
- Temperature deviation from the ICAO standard atmosphere
- Runway slope
- Grass surface condition
- Runway contamination

Ground roll and distance to 50 ft run through the same chain independently.

Typical usage example:
    from airperf.systems.performance import Engine, calculate_takeoff_distance

    ground_roll, distance_50ft = calculate_takeoff_distance(
        Engine.ROTAX_912_ULS, mass_kg=525.0, pressure_altitude_ft=100.0, temperature_c=21.3
    )
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from airperf.core.logging_system import get_logger
from airperf.physics.atmosphere import AtmosphereError, temperature_deviation
from airperf.physics.units import feet_to_meters, format_number, round_half_away
from airperf.systems.performance.tables import (
    PERFORMANCE_TABLES,
    Engine,
    PerformanceTable,
)

logger = get_logger(__name__)

MIN_TEMPERATURE_C = -90.0
MAX_TEMPERATURE_C = 70.0
MAX_SLOPE_PCT = 25.0

# Tables are calibrated to a 120 m baseline, distances are referenced to 100 m
TABLE_BASELINE_M = 120.0
REFERENCE_DISTANCE_M = 100.0

GRASS_FACTOR = 1.2
WET_GRASS_FACTOR = 1.1
SOFT_GROUND_FACTOR = 1.5
DAMAGED_TURF_FACTOR = 1.1
HIGH_GRASS_FACTOR = 1.2


class SurfaceContamination(Enum):
    """Runway contamination and its distance multiplier."""

    INCONSPICUOUS = 1.0
    SLUSH = 1.3
    SNOW = 1.5
    POWDER_SNOW = 1.25

    @property
    def factor(self) -> float:
        """Multiplier applied to takeoff distances."""
        return float(self.value)


@dataclass(frozen=True)
class GrassSurfaceCondition:
    """Condition of a grass runway.

    Attributes:
        wet: Grass is wet
        soft_ground: Ground is soft
        damaged_turf: Turf is damaged
        high_grass: Grass is high
    """

    wet: bool = False
    soft_ground: bool = False
    damaged_turf: bool = False
    high_grass: bool = False


class TakeoffCalculationError(Exception):
    """Raised when takeoff inputs are outside the published data."""


class MassTooLowError(TakeoffCalculationError):
    """Mass below the lowest tabulated mass."""

    def __init__(self, min: float, mass: float) -> None:  # noqa: A002
        self.min = min
        self.mass = mass
        super().__init__(
            f"Mass {format_number(mass)} kg is below the minimum available data "
            f"({format_number(min)} kg)"
        )


class MassTooHighError(TakeoffCalculationError):
    """Mass above the highest tabulated mass."""

    def __init__(self, max: float, mass: float) -> None:  # noqa: A002
        self.max = max
        self.mass = mass
        super().__init__(
            f"Mass {format_number(mass)} kg is above the maximum available data "
            f"({format_number(max)} kg)"
        )


class TemperatureTooLowError(TakeoffCalculationError):
    """Temperature below the sensible operating range."""

    def __init__(self, min: float, temperature: float) -> None:  # noqa: A002
        self.min = min
        self.temperature = temperature
        super().__init__(
            f"Temperature {format_number(temperature)} °C is below the minimum sensible data "
            f"({format_number(min)} °C)"
        )


class TemperatureTooHighError(TakeoffCalculationError):
    """Temperature above the sensible operating range."""

    def __init__(self, max: float, temperature: float) -> None:  # noqa: A002
        self.max = max
        self.temperature = temperature
        super().__init__(
            f"Temperature {format_number(temperature)} °C is above the maximum sensible data "
            f"({format_number(max)} °C)"
        )


class SlopeTooSteepError(TakeoffCalculationError):
    """Runway slope steeper than the correction supports, uphill or downhill."""

    def __init__(self, max: float, slope: float) -> None:  # noqa: A002
        self.max = max
        self.slope = slope
        super().__init__(
            f"Slope {format_number(slope)} % is too steep to provide sensible data "
            f"(Maximum {format_number(max)} %)"
        )


class InvalidPressureAltitudeError(TakeoffCalculationError):
    """Pressure altitude not covered by the standard atmosphere.

    Attributes:
        source: The underlying atmosphere error.
    """

    def __init__(self, source: AtmosphereError) -> None:
        self.source = source
        super().__init__(
            f"The given pressure altitude is not defined by the ICAO standard atmosphere: {source}"
        )


class TakeoffPerformance(NamedTuple):
    """Takeoff distances as a ``(ground_roll_m, distance_50ft_m)`` pair.

    Attributes:
        ground_roll_m: Distance from brake release to liftoff (m)
        distance_50ft_m: Distance from brake release to clear 50 ft (m)
    """

    ground_roll_m: float
    distance_50ft_m: float

    def as_tuple(self) -> tuple[float, float]:
        """Return the distances as a plain tuple."""
        return (self.ground_roll_m, self.distance_50ft_m)


def validate_inputs(
    table: PerformanceTable, mass_kg: float, temperature_c: float, slope_pct: float
) -> None:
    """Check takeoff inputs against the limits of the published data.

    Checks run in order temperature, slope, mass; the first failure is raised.

    Raises:
        TakeoffCalculationError: If any input is out of range.
    """
    if temperature_c > MAX_TEMPERATURE_C:
        raise TemperatureTooHighError(max=MAX_TEMPERATURE_C, temperature=temperature_c)
    if temperature_c < MIN_TEMPERATURE_C:
        raise TemperatureTooLowError(min=MIN_TEMPERATURE_C, temperature=temperature_c)

    if abs(slope_pct) > MAX_SLOPE_PCT:
        raise SlopeTooSteepError(max=MAX_SLOPE_PCT, slope=slope_pct)

    if mass_kg < table.min_mass:
        raise MassTooLowError(min=table.min_mass, mass=mass_kg)
    if mass_kg > table.max_mass:
        raise MassTooHighError(max=table.max_mass, mass=mass_kg)


def base_distance(table: PerformanceTable, mass_kg: float, column: str) -> float:
    """Interpolate a table column and rescale it to the reference distance.

    Args:
        table: Performance table of the engine.
        mass_kg: Takeoff mass (kg).
        column: "ground_roll" or "distance_50ft".

    Returns:
        Uncorrected distance (m).
    """
    return table.interpolate(mass_kg, getattr(table, column)) / TABLE_BASELINE_M * REFERENCE_DISTANCE_M


def apply_pressure_altitude_correction(distance: float, pressure_altitude_ft: float) -> float:
    """Increase distance with pressure altitude. Never shortens the distance."""
    if pressure_altitude_ft > 3000.0:
        multiplier = 0.18
    elif pressure_altitude_ft > 1000.0:
        multiplier = 0.13
    else:
        multiplier = 0.10
    return distance * max(1.0 + multiplier * (pressure_altitude_ft / 1000.0), 1.0)


def temperature_deviation_for_correction(pressure_altitude_ft: float, temperature_c: float) -> float:
    """Temperature deviation used by the temperature correction.

    Temperatures below freezing are treated as 0 °C.

    Raises:
        InvalidPressureAltitudeError: If the pressure altitude is outside the
            standard atmosphere.
    """
    try:
        return temperature_deviation(feet_to_meters(pressure_altitude_ft), max(temperature_c, 0.0))
    except AtmosphereError as e:
        raise InvalidPressureAltitudeError(source=e) from e


def apply_temperature_correction(distance: float, deviation_c: float) -> float:
    """Add 1 % of distance per °C above standard (remove below)."""
    return distance * (1.0 + 0.01 * deviation_c)


def apply_slope_correction(distance: float, slope_pct: float) -> float:
    """Add 10 % of distance per percent uphill slope (remove downhill)."""
    return distance * (1.0 + 0.1 * slope_pct)


def apply_grass_surface_corrections(distance: float, grass: GrassSurfaceCondition) -> float:
    """Apply the grass runway penalty and each condition that is present."""
    distance *= GRASS_FACTOR
    if grass.wet:
        distance *= WET_GRASS_FACTOR
    if grass.soft_ground:
        distance *= SOFT_GROUND_FACTOR
    if grass.damaged_turf:
        distance *= DAMAGED_TURF_FACTOR
    if grass.high_grass:
        distance *= HIGH_GRASS_FACTOR
    return distance


def apply_contamination_correction(distance: float, contamination: SurfaceContamination) -> float:
    """Apply the runway contamination multiplier."""
    return distance * contamination.factor


def apply_corrections(
    distance: float,
    pressure_altitude_ft: float,
    temperature_c: float,
    slope_pct: float,
    grass: GrassSurfaceCondition | None,
    contamination: SurfaceContamination,
) -> float:
    """Run a baseline distance through the full correction chain.

    Args:
        distance: Uncorrected distance (m)
        pressure_altitude_ft: Pressure altitude (ft)
        temperature_c: Runway temperature (°C)
        slope_pct: Runway slope (%), negative when downhill
        grass: Grass runway condition, None for paved runways
        contamination: Runway contamination

    Returns:
        Corrected distance (m), rounded to 2 decimals.

    Raises:
        InvalidPressureAltitudeError: If the pressure altitude is outside the
            standard atmosphere.
    """
    distance = apply_pressure_altitude_correction(distance, pressure_altitude_ft)
    deviation = temperature_deviation_for_correction(pressure_altitude_ft, temperature_c)
    distance = apply_temperature_correction(distance, deviation)
    distance = apply_slope_correction(distance, slope_pct)
    if grass is not None:
        distance = apply_grass_surface_corrections(distance, grass)
    distance = apply_contamination_correction(distance, contamination)
    return round_half_away(distance, 2)


def calculate_takeoff_distance(
    engine: Engine,
    mass_kg: float,
    pressure_altitude_ft: float,
    temperature_c: float,
    slope_pct: float = 0.0,
    grass: GrassSurfaceCondition | None = None,
    contamination: SurfaceContamination = SurfaceContamination.INCONSPICUOUS,
) -> TakeoffPerformance:
    """Calculate ground roll and distance to 50 ft.

    Args:
        engine: Engine variant of the aircraft
        mass_kg: Takeoff mass (kg)
        pressure_altitude_ft: Pressure altitude (ft)
        temperature_c: Runway temperature (°C)
        slope_pct: Runway slope (%), negative when downhill
        grass: Grass runway condition, None for paved runways
        contamination: Runway contamination

    Returns:
        TakeoffPerformance with both distances in meters.

    Raises:
        TakeoffCalculationError: If an input is outside the published data or
            the pressure altitude is outside the standard atmosphere.

    Examples:
        >>> perf = calculate_takeoff_distance(
        ...     Engine.ROTAX_912_ULS, 472.5, 0.0, 15.0, grass=GrassSurfaceCondition()
        ... )
        >>> perf.as_tuple()
        (100.0, 225.0)
    """
    table = PERFORMANCE_TABLES[engine]
    try:
        validate_inputs(table, mass_kg, temperature_c, slope_pct)
    except TakeoffCalculationError as e:
        logger.debug("Rejected takeoff inputs for %s: %s", engine.name, e)
        raise

    ground_roll = apply_corrections(
        base_distance(table, mass_kg, "ground_roll"),
        pressure_altitude_ft,
        temperature_c,
        slope_pct,
        grass,
        contamination,
    )
    distance_50ft = apply_corrections(
        base_distance(table, mass_kg, "distance_50ft"),
        pressure_altitude_ft,
        temperature_c,
        slope_pct,
        grass,
        contamination,
    )

    logger.debug(
        "Takeoff %s at %.1f kg, PA=%.0f ft, OAT=%.1f °C, slope=%.1f %%: "
        "ground_roll=%.2f m, distance_50ft=%.2f m",
        engine.name,
        mass_kg,
        pressure_altitude_ft,
        temperature_c,
        slope_pct,
        ground_roll,
        distance_50ft,
    )

    return TakeoffPerformance(ground_roll_m=ground_roll, distance_50ft_m=distance_50ft)


@dataclass(frozen=True)
class TakeoffRequest:
    """Inputs of a single takeoff calculation.

    Attributes:
        engine: Engine variant
        mass_kg: Takeoff mass (kg)
        pressure_altitude_ft: Pressure altitude (ft)
        temperature_c: Runway temperature (°C)
        slope_pct: Runway slope (%)
        grass: Grass runway condition, None for paved runways
        contamination: Runway contamination
    """

    engine: Engine
    mass_kg: float
    pressure_altitude_ft: float
    temperature_c: float
    slope_pct: float = 0.0
    grass: GrassSurfaceCondition | None = None
    contamination: SurfaceContamination = SurfaceContamination.INCONSPICUOUS

    def calculate(self) -> TakeoffPerformance:
        """Calculate takeoff distances for this request."""
        return calculate_takeoff_distance(
            self.engine,
            self.mass_kg,
            self.pressure_altitude_ft,
            self.temperature_c,
            self.slope_pct,
            self.grass,
            self.contamination,
        )
