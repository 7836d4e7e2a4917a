"""Tests for the geomagjax command line interface."""

from __future__ import annotations

from typer.testing import CliRunner

from geomagjax.cli import app
from geomagjax.igrf import synthesize

runner = CliRunner()


class TestField:
    def test_prints_components(self):
        result = runner.invoke(app, ["field", "2020.0", "45", "100"])
        assert result.exit_code == 0
        b = synthesize("value", 2020.0, "geodetic", 0.0, 45.0, 100.0)
        assert f"{float(b.north):12.2f} nT" in result.stdout
        assert "F (total)" in result.stdout

    def test_rate_units(self):
        result = runner.invoke(app, ["field", "2022.0", "90", "180", "--radius", "6871.2", "--rate"])
        assert result.exit_code == 0
        assert "nT/yr" in result.stdout

    def test_out_of_range_date(self):
        result = runner.invoke(app, ["field", "1800", "45", "100"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_invalid_colatitude(self):
        result = runner.invoke(app, ["field", "2020", "200", "100"])
        assert result.exit_code == 1

    def test_missing_coefficient_file(self, tmp_path):
        missing = tmp_path / "none.txt"
        result = runner.invoke(app, ["field", "2020", "45", "100", "--coefficients", str(missing)])
        assert result.exit_code == 1


class TestRange:
    def test_bundled_range(self):
        result = runner.invoke(app, ["range"])
        assert result.exit_code == 0
        assert "1900.0 <= date < 2030.0" in result.stdout
