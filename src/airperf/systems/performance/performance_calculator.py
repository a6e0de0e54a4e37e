"""Takeoff performance calculator front end.

This module wraps the takeoff correction chain in a configurable object that
holds per-airfield defaults (engine, slope, surface) and can derive pressure
altitude from QNH and field elevation before calculating.
"""

from collections.abc import Mapping
from typing import Any

from airperf.core.config import TakeoffDefaults
from airperf.core.logging_system import get_logger
from airperf.physics.atmosphere import (
    pressure_altitude_from_qnh,
    standard_temperature,
    temperature_deviation,
)
from airperf.physics.units import feet_to_meters, meters_to_feet, round_half_away
from airperf.systems.performance.tables import PERFORMANCE_TABLES
from airperf.systems.performance.takeoff import (
    GrassSurfaceCondition,
    SurfaceContamination,
    TakeoffPerformance,
    TakeoffRequest,
)

logger = get_logger(__name__)

# Marks an argument that was not passed; None is a valid grass value (paved)
_UNSET: Any = object()


class TakeoffCalculator:
    """Calculate takeoff distances with configurable defaults.

    Examples:
        >>> calc = TakeoffCalculator({"engine": "uls", "grass": {"wet": True}})
        >>> perf = calc.calculate_takeoff_distance(600.0, 0.0, 15.0)
        >>> perf.ground_roll_m
        168.3
    """

    def __init__(self, config: TakeoffDefaults | Mapping[str, Any] | None = None):
        """Initialize takeoff calculator.

        Args:
            config: TakeoffDefaults, or a ``takeoff:`` section mapping with:
                - engine: "ul", "uls" or an Engine (default "uls")
                - slope_pct: Runway slope (default 0.0)
                - grass: None/False for paved, True or a dict of conditions
                - contamination: Contamination name (default "inconspicuous")

        Raises:
            ConfigError: If a setting is unknown or invalid.
        """
        if not isinstance(config, TakeoffDefaults):
            config = TakeoffDefaults.from_mapping(config)
        self.defaults = config

        self.engine = config.engine
        self.slope_pct = config.slope_pct
        self.grass = config.grass
        self.contamination = config.contamination

        table = PERFORMANCE_TABLES[self.engine]
        logger.info(
            "TakeoffCalculator initialized: engine=%s, mass range=%.1f-%.1f kg",
            self.engine.name,
            table.min_mass,
            table.max_mass,
        )

    def build_request(
        self,
        mass_kg: float,
        pressure_altitude_ft: float,
        temperature_c: float,
        slope_pct: float = _UNSET,
        grass: GrassSurfaceCondition | None = _UNSET,
        contamination: SurfaceContamination = _UNSET,
    ) -> TakeoffRequest:
        """Build a takeoff request; arguments not passed take the configured defaults."""
        return TakeoffRequest(
            engine=self.engine,
            mass_kg=mass_kg,
            pressure_altitude_ft=pressure_altitude_ft,
            temperature_c=temperature_c,
            slope_pct=self.slope_pct if slope_pct is _UNSET else slope_pct,
            grass=self.grass if grass is _UNSET else grass,
            contamination=self.contamination if contamination is _UNSET else contamination,
        )

    def calculate_takeoff_distance(
        self,
        mass_kg: float,
        pressure_altitude_ft: float,
        temperature_c: float,
        slope_pct: float = _UNSET,
        grass: GrassSurfaceCondition | None = _UNSET,
        contamination: SurfaceContamination = _UNSET,
    ) -> TakeoffPerformance:
        """Calculate takeoff distances.

        Args:
            mass_kg: Takeoff mass (kg)
            pressure_altitude_ft: Pressure altitude (ft)
            temperature_c: Runway temperature (°C)
            slope_pct: Runway slope (%), configured slope if not given
            grass: Grass condition, None for a paved runway, configured
                surface if not given
            contamination: Contamination, configured one if not given

        Returns:
            TakeoffPerformance with calculated distances

        Raises:
            TakeoffCalculationError: If inputs are outside the published data.
        """
        request = self.build_request(
            mass_kg, pressure_altitude_ft, temperature_c, slope_pct, grass, contamination
        )
        return request.calculate()

    @staticmethod
    def pressure_altitude_ft(qnh_hpa: float, field_elevation_ft: float) -> float:
        """Pressure altitude (ft, 0.1 ft resolution) for a QNH and field elevation (ft)."""
        pressure_altitude_m = pressure_altitude_from_qnh(qnh_hpa, feet_to_meters(field_elevation_ft))
        return round_half_away(meters_to_feet(pressure_altitude_m), 1)

    def calculate_from_qnh(
        self,
        mass_kg: float,
        qnh_hpa: float,
        field_elevation_ft: float,
        temperature_c: float,
        **kwargs: Any,
    ) -> TakeoffPerformance:
        """Calculate takeoff distances from QNH and field elevation.

        Args:
            mass_kg: Takeoff mass (kg)
            qnh_hpa: QNH (hPa)
            field_elevation_ft: Field elevation (ft)
            temperature_c: Runway temperature (°C)
            **kwargs: Overrides passed on to calculate_takeoff_distance

        Returns:
            TakeoffPerformance with calculated distances
        """
        pressure_altitude = self.pressure_altitude_ft(qnh_hpa, field_elevation_ft)
        logger.debug(
            "QNH %.2f hPa at %.0f ft gives pressure altitude %.1f ft",
            qnh_hpa,
            field_elevation_ft,
            pressure_altitude,
        )
        return self.calculate_takeoff_distance(mass_kg, pressure_altitude, temperature_c, **kwargs)

    def get_performance_summary(
        self, mass_kg: float, pressure_altitude_ft: float, temperature_c: float
    ) -> dict[str, Any]:
        """Get takeoff performance together with the atmosphere it was computed for.

        Args:
            mass_kg: Takeoff mass (kg)
            pressure_altitude_ft: Pressure altitude (ft)
            temperature_c: Runway temperature (°C)

        Returns:
            Dictionary with:
                - engine: Engine variant
                - mass_kg: Input mass
                - pressure_altitude_ft: Input pressure altitude
                - isa_temperature_c: Standard temperature at the pressure altitude
                - temperature_deviation_c: Deviation from standard
                - takeoff: TakeoffPerformance object

        Raises:
            TakeoffCalculationError: If the takeoff inputs are invalid.
        """
        takeoff = self.calculate_takeoff_distance(mass_kg, pressure_altitude_ft, temperature_c)
        altitude_m = feet_to_meters(pressure_altitude_ft)

        return {
            "engine": self.engine,
            "mass_kg": mass_kg,
            "pressure_altitude_ft": pressure_altitude_ft,
            "isa_temperature_c": standard_temperature(altitude_m),
            "temperature_deviation_c": temperature_deviation(altitude_m, temperature_c),
            "takeoff": takeoff,
        }
