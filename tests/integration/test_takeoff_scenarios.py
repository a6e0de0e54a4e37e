"""End-to-end takeoff calculations for real airfields."""

from airperf.physics.atmosphere import pressure_altitude_from_qnh
from airperf.physics.units import feet_to_meters, meters_to_feet, round_half_away
from airperf.systems.performance import (
    Engine,
    GrassSurfaceCondition,
    SurfaceContamination,
    calculate_takeoff_distance,
)


def test_grass_strip_zellhausen() -> None:
    """Test a wet grass strip takeoff."""
    result = calculate_takeoff_distance(
        Engine.ROTAX_912_ULS,
        520.0,
        370.73,
        21.0,
        0.0,
        GrassSurfaceCondition(wet=True),
        SurfaceContamination.INCONSPICUOUS,
    )
    assert result == (152.6, 378.6)


def test_paved_runway_frankfurt() -> None:
    """Test a paved runway takeoff."""
    result = calculate_takeoff_distance(
        Engine.ROTAX_912_ULS, 520.0, 364.0, 21.0, 0.0, None, SurfaceContamination.INCONSPICUOUS
    )
    assert result == (115.52, 286.61)


def test_pressure_altitude_from_qnh() -> None:
    """Test pressure altitude for a low QNH."""
    assert pressure_altitude_from_qnh(996.0, 113.7) == 258.25


def test_pressure_altitude_in_feet() -> None:
    """Test pressure altitude round trip through meters."""
    result = round_half_away(meters_to_feet(pressure_altitude_from_qnh(996.0, feet_to_meters(364.0))), 1)
    assert result == 838.2


def test_pressure_altitude_in_feet_at_standard_pressure() -> None:
    """Test conversion rounding keeps the elevation at standard pressure."""
    result = round_half_away(
        meters_to_feet(pressure_altitude_from_qnh(1013.25, feet_to_meters(364.0))), 1
    )
    assert result == 364.0
