"""Tests for the takeoff calculator front end."""

import pytest

from airperf.core.config import ConfigError, TakeoffDefaults
from airperf.systems.performance import (
    Engine,
    GrassSurfaceCondition,
    MassTooHighError,
    SurfaceContamination,
)
from airperf.systems.performance.performance_calculator import TakeoffCalculator


class TestTakeoffCalculator:
    """Test configurable takeoff calculations."""

    @pytest.fixture
    def grass_strip_config(self) -> dict:
        """Wet grass strip with the ULS engine."""
        return {
            "engine": "uls",
            "slope_pct": 0.0,
            "grass": {"wet": True},
            "contamination": "inconspicuous",
        }

    def test_initialize_calculator(self, grass_strip_config: dict) -> None:
        """Test configuration is parsed into typed defaults."""
        calc = TakeoffCalculator(grass_strip_config)

        assert calc.engine is Engine.ROTAX_912_ULS
        assert calc.grass == GrassSurfaceCondition(wet=True)
        assert calc.contamination is SurfaceContamination.INCONSPICUOUS

    def test_default_configuration(self) -> None:
        """Test defaults describe a dry paved runway with the ULS engine."""
        calc = TakeoffCalculator()

        assert calc.engine is Engine.ROTAX_912_ULS
        assert calc.slope_pct == 0.0
        assert calc.grass is None

    def test_engine_names(self) -> None:
        """Test engines by alias and by enum value."""
        assert TakeoffCalculator({"engine": "UL"}).engine is Engine.ROTAX_912_UL
        assert TakeoffCalculator({"engine": "rotax_912_uls"}).engine is Engine.ROTAX_912_ULS

    def test_unknown_engine(self) -> None:
        """Test unknown engine names are rejected."""
        with pytest.raises(ConfigError, match="Unknown engine"):
            TakeoffCalculator({"engine": "o-360"})

    def test_grass_flag(self) -> None:
        """Test grass: true means a dry grass runway."""
        assert TakeoffCalculator({"grass": True}).grass == GrassSurfaceCondition()

    def test_uses_configured_defaults(self, grass_strip_config: dict) -> None:
        """Test configured grass condition applies to calculations."""
        calc = TakeoffCalculator(grass_strip_config)

        assert calc.calculate_takeoff_distance(600.0, 0.0, 15.0) == (168.3, 412.5)

    def test_overrides_take_precedence(self, grass_strip_config: dict) -> None:
        """Test per-call arguments override configured defaults."""
        calc = TakeoffCalculator(grass_strip_config)

        result = calc.calculate_takeoff_distance(
            472.5,
            0.0,
            15.0,
            grass=GrassSurfaceCondition(),
            contamination=SurfaceContamination.SNOW,
        )
        assert result == (150.0, 337.5)

    def test_paved_override(self, grass_strip_config: dict) -> None:
        """Test grass=None selects a paved runway over a configured grass strip."""
        calc = TakeoffCalculator(grass_strip_config)

        assert calc.calculate_takeoff_distance(520.0, 364.0, 21.0, grass=None) == (115.52, 286.61)
        assert calc.calculate_takeoff_distance(520.0, 364.0, 21.0) == (152.49, 378.32)

    def test_from_takeoff_defaults(self) -> None:
        """Test validated defaults are used as given."""
        defaults = TakeoffDefaults(engine=Engine.ROTAX_912_UL, slope_pct=1.0)
        calc = TakeoffCalculator(defaults)

        assert calc.defaults is defaults
        assert calc.engine is Engine.ROTAX_912_UL
        assert calc.slope_pct == 1.0

    def test_unknown_contamination(self) -> None:
        """Test unknown contamination names are rejected."""
        with pytest.raises(ConfigError, match="Unknown contamination 'mud'"):
            TakeoffCalculator({"contamination": "mud"})

    def test_takeoff_distance_increases_with_mass(self) -> None:
        """Test heavier aircraft needs longer takeoff roll."""
        calc = TakeoffCalculator()

        light = calc.calculate_takeoff_distance(500.0, 0.0, 15.0)
        heavy = calc.calculate_takeoff_distance(580.0, 0.0, 15.0)

        assert heavy.ground_roll_m > light.ground_roll_m
        assert heavy.distance_50ft_m > light.distance_50ft_m

    def test_altitude_increases_distance(self) -> None:
        """Test higher pressure altitude at standard temperature needs more distance."""
        calc = TakeoffCalculator()

        sea_level = calc.calculate_takeoff_distance(550.0, 0.0, 15.0)
        high = calc.calculate_takeoff_distance(550.0, 5000.0, 5.1)

        assert high.ground_roll_m > sea_level.ground_roll_m

    def test_ul_envelope(self) -> None:
        """Test the UL engine's upper mass limit applies."""
        calc = TakeoffCalculator({"engine": "ul"})

        with pytest.raises(MassTooHighError):
            calc.calculate_takeoff_distance(600.0, 0.0, 15.0)

    def test_pressure_altitude_from_qnh(self) -> None:
        """Test pressure altitude in feet from QNH and elevation in feet."""
        assert TakeoffCalculator.pressure_altitude_ft(996.0, 364.0) == 838.2
        assert TakeoffCalculator.pressure_altitude_ft(1013.25, 364.0) == 364.0

    def test_calculate_from_qnh(self) -> None:
        """Test QNH input matches the equivalent pressure altitude."""
        calc = TakeoffCalculator()

        from_qnh = calc.calculate_from_qnh(520.0, 1013.25, 364.0, 21.0)
        direct = calc.calculate_takeoff_distance(520.0, 364.0, 21.0)

        assert from_qnh == direct

    def test_performance_summary(self) -> None:
        """Test summary carries the atmosphere used."""
        calc = TakeoffCalculator()

        summary = calc.get_performance_summary(520.0, 364.0, 21.0)

        assert summary["engine"] is Engine.ROTAX_912_ULS
        assert summary["mass_kg"] == 520.0
        assert summary["isa_temperature_c"] == 14.28
        assert summary["temperature_deviation_c"] == 6.72
        assert summary["takeoff"] == (115.52, 286.61)
