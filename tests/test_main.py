"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from airperf.main import load_config, main


class TestTakeoffCommand:
    """Test the takeoff sub-command."""

    def test_paved_runway(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test takeoff distances on a paved runway."""
        exit_code = main(
            ["takeoff", "--mass", "520", "--pressure-altitude", "364", "--temperature", "21"]
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Ground roll:         115.52 m" in out
        assert "Distance to 50 ft:   286.61 m" in out

    def test_wet_grass(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test grass condition flags."""
        exit_code = main(
            [
                "takeoff",
                "--engine",
                "uls",
                "--mass",
                "520",
                "--pressure-altitude",
                "370.73",
                "--temperature",
                "21",
                "--wet",
            ]
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Ground roll:         152.60 m" in out
        assert "Distance to 50 ft:   378.60 m" in out

    def test_contamination(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test contamination choice."""
        exit_code = main(
            [
                "takeoff",
                "--mass",
                "472.5",
                "--pressure-altitude",
                "0",
                "--temperature",
                "15",
                "--grass",
                "--contamination",
                "powder_snow",
            ]
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "125.00 m" in out
        assert "281.25 m" in out

    def test_qnh_and_field_elevation(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test pressure altitude derived from QNH."""
        exit_code = main(
            [
                "takeoff",
                "--mass",
                "520",
                "--qnh",
                "996",
                "--field-elevation",
                "364",
                "--temperature",
                "21",
            ]
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Pressure altitude:   838.2 ft" in out

    def test_qnh_requires_field_elevation(self) -> None:
        """Test --qnh without --field-elevation is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["takeoff", "--mass", "520", "--qnh", "996", "--temperature", "21"])
        assert exc_info.value.code == 2

    def test_invalid_mass(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test validation errors are reported on stderr."""
        exit_code = main(
            ["takeoff", "--mass", "700", "--pressure-altitude", "0", "--temperature", "15"]
        )

        err = capsys.readouterr().err
        assert exit_code == 2
        assert "Mass 700 kg is above the maximum available data (600 kg)" in err

    def test_config_defaults(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test takeoff defaults from a YAML file."""
        config_file = tmp_path / "airfield.yaml"
        config_file.write_text("takeoff:\n  engine: uls\n  grass:\n    wet: true\n", encoding="utf-8")

        exit_code = main(
            [
                "--config",
                str(config_file),
                "takeoff",
                "--mass",
                "600",
                "--pressure-altitude",
                "0",
                "--temperature",
                "15",
            ]
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "168.30 m" in out
        assert "412.50 m" in out

    def test_missing_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a missing config file is reported."""
        exit_code = main(
            [
                "--config",
                "/nonexistent/airfield.yaml",
                "takeoff",
                "--mass",
                "600",
                "--pressure-altitude",
                "0",
                "--temperature",
                "15",
            ]
        )

        assert exit_code == 2
        assert "Configuration file not found" in capsys.readouterr().err

    def test_paved_overrides_grass_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test --paved wins over a grass runway from the config file."""
        config_file = tmp_path / "airfield.yaml"
        config_file.write_text("takeoff:\n  grass:\n    wet: true\n", encoding="utf-8")

        exit_code = main(
            [
                "--config",
                str(config_file),
                "takeoff",
                "--mass",
                "520",
                "--pressure-altitude",
                "364",
                "--temperature",
                "21",
                "--paved",
            ]
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Ground roll:         115.52 m" in out
        assert "Distance to 50 ft:   286.61 m" in out

    def test_paved_with_grass_conditions(self) -> None:
        """Test --paved cannot be combined with grass flags."""
        with pytest.raises(SystemExit) as exc_info:
            main(
                [
                    "takeoff",
                    "--mass",
                    "520",
                    "--pressure-altitude",
                    "364",
                    "--temperature",
                    "21",
                    "--paved",
                    "--wet",
                ]
            )
        assert exc_info.value.code == 2

    def test_field_elevation_with_pressure_altitude(self) -> None:
        """Test --field-elevation is rejected when it would be ignored."""
        with pytest.raises(SystemExit) as exc_info:
            main(
                [
                    "takeoff",
                    "--mass",
                    "520",
                    "--pressure-altitude",
                    "364",
                    "--field-elevation",
                    "364",
                    "--temperature",
                    "21",
                ]
            )
        assert exc_info.value.code == 2

    @pytest.mark.parametrize(
        ("setting", "message"),
        [
            ("engine: o360", "Unknown engine 'o360'"),
            ("contamination: mud", "Unknown contamination 'mud'"),
            ("grass:\n    muddy: true", "Unknown grass conditions: muddy"),
            ("slope_pct: steep", "Runway slope must be a number"),
        ],
    )
    def test_invalid_config_values(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], setting: str, message: str
    ) -> None:
        """Test invalid takeoff settings in the config file are input errors."""
        config_file = tmp_path / "airfield.yaml"
        config_file.write_text(f"takeoff:\n  {setting}\n", encoding="utf-8")

        exit_code = main(
            [
                "--config",
                str(config_file),
                "takeoff",
                "--mass",
                "520",
                "--pressure-altitude",
                "364",
                "--temperature",
                "21",
            ]
        )

        assert exit_code == 2
        assert message in capsys.readouterr().err


class TestAtmosphereCommands:
    """Test the atmosphere sub-commands."""

    def test_isa(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test standard temperature output."""
        assert main(["isa", "11000"]) == 0
        assert "-56.50 °C" in capsys.readouterr().out

    def test_isa_out_of_range(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test altitude outside the atmosphere."""
        assert main(["isa", "90000"]) == 2
        assert "above the maximum defined (80000 m)" in capsys.readouterr().err

    def test_pressure_altitude(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test pressure altitude output uses feet like the takeoff command."""
        assert main(["pressure-altitude", "--qnh", "996", "--field-elevation", "364"]) == 0
        assert "Pressure altitude:   838.2 ft (255.5 m)" in capsys.readouterr().out

    def test_pressure_altitude_at_standard_pressure(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test field elevation is the pressure altitude at 1013.25 hPa."""
        assert main(["pressure-altitude", "--qnh", "1013.25", "--field-elevation", "364"]) == 0
        assert "364.0 ft" in capsys.readouterr().out


class TestLoadConfig:
    """Test configuration defaults."""

    def test_builtin_defaults(self) -> None:
        """Test defaults without a user file."""
        config = load_config(None)
        assert config.get("takeoff.engine") == "uls"
        assert config.get("takeoff.contamination") == "inconspicuous"

    def test_user_file_overrides(self, tmp_path: Path) -> None:
        """Test user values override defaults and keep the rest."""
        config_file = tmp_path / "airfield.yaml"
        config_file.write_text("takeoff:\n  slope_pct: 1.5\n", encoding="utf-8")

        config = load_config(str(config_file))

        assert config.get("takeoff.slope_pct") == 1.5
        assert config.get("takeoff.engine") == "uls"


class TestLogging:
    """Test the command line sets up logging."""

    def test_run_writes_log_file(self, platform_log_dir: Path) -> None:
        """Test a run logs the calculation to the platform log file."""
        exit_code = main(
            ["takeoff", "--mass", "600", "--pressure-altitude", "0", "--temperature", "15"]
        )

        assert exit_code == 0
        content = (platform_log_dir / "airperf.log").read_text(encoding="utf-8")
        assert "Takeoff ROTAX_912_ULS at 600.0 kg" in content

    def test_missing_log_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a missing logging config is reported as an input error."""
        assert main(["--log-config", "/nonexistent/logging.yaml", "isa", "0"]) == 2
        assert "Logging config file not found" in capsys.readouterr().err
