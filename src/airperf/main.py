"""AirPerf - FK9 Mk VI takeoff performance calculator.

Command line entry point for takeoff distance, standard temperature and
pressure altitude calculations.

Typical usage:
    airperf takeoff --engine uls --mass 520 --pressure-altitude 364 --temperature 21
    airperf takeoff --mass 520 --qnh 996 --field-elevation 364 --temperature 21 --grass --wet
    airperf isa 1000
    airperf pressure-altitude --qnh 1021 --field-elevation 370
"""

import argparse
import sys
from dataclasses import replace
from typing import Any

from airperf.core.config import (
    GRASS_CONDITIONS,
    ConfigError,
    ConfigLoader,
    parse_contamination,
    parse_engine,
)
from airperf.core.logging_system import (
    LoggingError,
    get_logger,
    initialize_logging,
    shutdown_logging,
)
from airperf.physics.atmosphere import AtmosphereError, standard_temperature
from airperf.physics.units import feet_to_meters
from airperf.systems.performance.performance_calculator import TakeoffCalculator
from airperf.systems.performance.takeoff import (
    GrassSurfaceCondition,
    SurfaceContamination,
    TakeoffCalculationError,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2

DEFAULT_CONFIG: dict[str, Any] = {
    "takeoff": {
        "engine": "uls",
        "slope_pct": 0.0,
        "grass": None,
        "contamination": "inconspicuous",
    },
}


def load_config(path: str | None) -> ConfigLoader:
    """Load built-in defaults, overridden by a user YAML file if given.

    Raises:
        ConfigError: If the user file cannot be loaded.
    """
    config = ConfigLoader(DEFAULT_CONFIG)
    if path:
        config.merge(ConfigLoader.load(path))
    return config


def _grass_from_args(args: argparse.Namespace) -> GrassSurfaceCondition:
    return GrassSurfaceCondition(
        wet=args.wet,
        soft_ground=args.soft_ground,
        damaged_turf=args.damaged_turf,
        high_grass=args.high_grass,
    )


def _takeoff_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Surface and slope given on the command line; the rest comes from config."""
    overrides: dict[str, Any] = {}
    if args.slope is not None:
        overrides["slope_pct"] = args.slope
    if args.paved:
        overrides["grass"] = None
    elif args.grass or any(getattr(args, name) for name in GRASS_CONDITIONS):
        overrides["grass"] = _grass_from_args(args)
    if args.contamination:
        overrides["contamination"] = parse_contamination(args.contamination)
    return overrides


def run_takeoff(args: argparse.Namespace, config: ConfigLoader) -> int:
    """Calculate and print takeoff distances."""
    defaults = config.takeoff_defaults()
    if args.engine:
        defaults = replace(defaults, engine=parse_engine(args.engine))
    calculator = TakeoffCalculator(defaults)

    if args.pressure_altitude is not None:
        pressure_altitude = args.pressure_altitude
    else:
        pressure_altitude = calculator.pressure_altitude_ft(args.qnh, args.field_elevation)
        print(f"Pressure altitude:   {pressure_altitude:.1f} ft")

    performance = calculator.calculate_takeoff_distance(
        args.mass, pressure_altitude, args.temperature, **_takeoff_overrides(args)
    )

    print(f"Ground roll:         {performance.ground_roll_m:.2f} m")
    print(f"Distance to 50 ft:   {performance.distance_50ft_m:.2f} m")
    return EXIT_OK


def run_isa(args: argparse.Namespace, config: ConfigLoader) -> int:
    """Print the standard temperature at an altitude."""
    print(f"ISA temperature:     {standard_temperature(args.altitude):.2f} °C")
    return EXIT_OK


def run_pressure_altitude(args: argparse.Namespace, config: ConfigLoader) -> int:
    """Print the pressure altitude for a QNH and field elevation in feet."""
    pressure_altitude_ft = TakeoffCalculator.pressure_altitude_ft(args.qnh, args.field_elevation)
    pressure_altitude_m = feet_to_meters(pressure_altitude_ft)
    print(f"Pressure altitude:   {pressure_altitude_ft:.1f} ft ({pressure_altitude_m:.1f} m)")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(description="AirPerf - FK9 Mk VI takeoff performance")
    parser.add_argument("--config", type=str, help="YAML file with takeoff defaults")
    parser.add_argument("--log-config", type=str, help="YAML logging configuration")

    subparsers = parser.add_subparsers(dest="command", required=True)

    takeoff = subparsers.add_parser("takeoff", help="Calculate takeoff distances")
    takeoff.set_defaults(handler=run_takeoff)
    takeoff.add_argument("--engine", choices=["ul", "uls"], help="Engine: Rotax 912 UL or ULS")
    takeoff.add_argument("--mass", type=float, required=True, help="Takeoff mass (kg)")
    takeoff.add_argument("--temperature", type=float, required=True, help="Runway temperature (°C)")
    altitude = takeoff.add_mutually_exclusive_group(required=True)
    altitude.add_argument("--pressure-altitude", type=float, help="Pressure altitude (ft)")
    altitude.add_argument("--qnh", type=float, help="QNH (hPa), requires --field-elevation")
    takeoff.add_argument("--field-elevation", type=float, help="Field elevation (ft), with --qnh")
    takeoff.add_argument("--slope", type=float, help="Runway slope (%%), negative downhill")
    takeoff.add_argument("--paved", action="store_true", help="Paved runway, overrides the config")
    takeoff.add_argument("--grass", action="store_true", help="Grass runway")
    takeoff.add_argument("--wet", action="store_true", help="Wet grass")
    takeoff.add_argument("--soft-ground", action="store_true", help="Soft ground")
    takeoff.add_argument("--damaged-turf", action="store_true", help="Damaged turf")
    takeoff.add_argument("--high-grass", action="store_true", help="High grass")
    takeoff.add_argument(
        "--contamination",
        choices=[c.name.lower() for c in SurfaceContamination],
        help="Runway contamination",
    )

    isa = subparsers.add_parser("isa", help="ICAO standard temperature at an altitude")
    isa.set_defaults(handler=run_isa)
    isa.add_argument("altitude", type=float, help="Pressure altitude (m)")

    pressure = subparsers.add_parser("pressure-altitude", help="Pressure altitude from QNH")
    pressure.set_defaults(handler=run_pressure_altitude)
    pressure.add_argument("--qnh", type=float, required=True, help="QNH (hPa)")
    pressure.add_argument(
        "--field-elevation", type=float, required=True, help="Field elevation (ft)"
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "takeoff":
        if args.qnh is not None and args.field_elevation is None:
            parser.error("--qnh requires --field-elevation")
        if args.pressure_altitude is not None and args.field_elevation is not None:
            parser.error("--field-elevation is only used with --qnh")
        if args.paved and (args.grass or any(getattr(args, name) for name in GRASS_CONDITIONS)):
            parser.error("--paved cannot be combined with grass conditions")
    return args


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 2 for invalid input, 1 for unexpected errors).
    """
    args = parse_args(argv)

    try:
        initialize_logging(args.log_config, use_platform_dir=True)
    except LoggingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        config = load_config(args.config)
        return args.handler(args, config)
    except (TakeoffCalculationError, AtmosphereError, ConfigError) as e:
        logger.info("Calculation rejected: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return EXIT_FAILURE
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
