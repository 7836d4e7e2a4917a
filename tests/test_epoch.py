"""Tests for epoch selection and the extrapolation advisory."""

from __future__ import annotations

import logging

import pytest

from geomagjax.coefficients import coefficient_table_from_arrays, load_default_coefficients
from geomagjax.errors import OutOfRangeError
from geomagjax.igrf import SynthesisMode, is_extrapolation_degraded, select_epoch
from geomagjax.igrf._epoch import warn_if_degraded


@pytest.fixture
def table():
    return load_default_coefficients()


def _geomag_records(caplog):
    return [r for r in caplog.records if r.name.startswith("geomagjax")]


class TestWindow:
    @pytest.mark.parametrize("date", [1900.0, 1950.3, 2020.0, 2029.9])
    def test_accepted(self, table, date):
        select_epoch(table, date)

    @pytest.mark.parametrize("date", [1899.9, 2030.0, 2031.0, float("nan"), float("inf")])
    def test_rejected(self, table, date):
        with pytest.raises(OutOfRangeError):
            select_epoch(table, date)

    def test_out_of_range_is_value_error(self, table):
        with pytest.raises(ValueError):
            select_epoch(table, 1800.0)


class TestInterpolation:
    def test_exact_epoch_weights(self, table):
        sel = select_epoch(table, 1965.0)
        assert (sel.index_low, sel.index_high) == (13, 14)
        assert sel.weight_low == 1.0
        assert sel.weight_high == 0.0

    def test_first_epoch(self, table):
        sel = select_epoch(table, 1900.0)
        assert (sel.index_low, sel.index_high) == (0, 1)
        assert (sel.weight_low, sel.weight_high) == (1.0, 0.0)

    def test_midpoint(self, table):
        sel = select_epoch(table, 1967.5)
        assert (sel.index_low, sel.index_high) == (13, 14)
        assert sel.weight_low == pytest.approx(0.5)
        assert sel.weight_high == pytest.approx(0.5)

    def test_weights_sum_to_one(self, table):
        for date in (1901.3, 1944.99, 2001.0, 2019.999):
            sel = select_epoch(table, date)
            assert sel.weight_low + sel.weight_high == pytest.approx(1.0, abs=1e-14)

    def test_rate_weights(self, table):
        sel = select_epoch(table, 1967.5, SynthesisMode.RATE)
        assert (sel.index_low, sel.index_high) == (13, 14)
        assert sel.weight_low == pytest.approx(-0.2)
        assert sel.weight_high == pytest.approx(0.2)

    def test_historical_degree(self, table):
        sel = select_epoch(table, 1950.0)
        assert sel.max_degree == 10
        assert sel.n_coefficients == 120

    def test_degree_boundary_uses_larger_degree(self, table):
        sel = select_epoch(table, 2017.5)
        assert (sel.index_low, sel.index_high) == (23, 24)
        assert sel.max_degree == 13
        assert sel.n_coefficients == 195

    def test_1995_bracket_uses_degree_13(self, table):
        sel = select_epoch(table, 1997.5)
        assert (sel.index_low, sel.index_high) == (19, 20)
        assert sel.max_degree == 13
        assert sel.n_coefficients == 195

    def test_1990_bracket_stays_at_degree_10(self, table):
        sel = select_epoch(table, 1992.5)
        assert (sel.index_low, sel.index_high) == (18, 19)
        assert sel.max_degree == 10
        assert sel.n_coefficients == 120


class TestExtrapolation:
    def test_last_epoch_value(self, table):
        sel = select_epoch(table, 2020.0)
        assert (sel.index_low, sel.index_high) == (24, 25)
        assert (sel.weight_low, sel.weight_high) == (1.0, 0.0)

    def test_after_last_epoch_value(self, table):
        sel = select_epoch(table, 2023.5)
        assert (sel.index_low, sel.index_high) == (24, 25)
        assert sel.weight_low == 1.0
        assert sel.weight_high == pytest.approx(3.5)

    def test_after_last_epoch_rate(self, table):
        sel = select_epoch(table, 2023.5, SynthesisMode.RATE)
        assert (sel.index_low, sel.index_high) == (24, 25)
        assert (sel.weight_low, sel.weight_high) == (0.0, 1.0)
        assert sel.max_degree == 13


class TestAdvisory:
    def test_degraded_threshold(self, table):
        assert not is_extrapolation_degraded(table, 2025.0)
        assert is_extrapolation_degraded(table, 2025.01)
        assert not is_extrapolation_degraded(table, 2010.0)

    def test_warning_logged(self, table, caplog):
        with caplog.at_level(logging.WARNING, logger="geomagjax"):
            assert warn_if_degraded(table, 2027.0)
        records = _geomag_records(caplog)
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "2027" in records[0].getMessage()

    def test_no_warning_in_reliable_window(self, table, caplog):
        with caplog.at_level(logging.WARNING, logger="geomagjax"):
            assert not warn_if_degraded(table, 2024.0)
        assert not _geomag_records(caplog)

    def test_selection_does_not_log(self, table, caplog):
        with caplog.at_level(logging.WARNING, logger="geomagjax"):
            select_epoch(table, 2027.0)
        assert not _geomag_records(caplog)


class TestCustomTable:
    def test_uneven_epoch_spacing(self):
        table = coefficient_table_from_arrays(
            [2000.0, 2002.0, 2010.0],
            [[1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [3.0, 0.0, 0.0]],
            [0.1, 0.0, 0.0],
        )
        sel = select_epoch(table, 2006.0)
        assert (sel.index_low, sel.index_high) == (1, 2)
        assert sel.weight_high == pytest.approx(0.5)
        rate = select_epoch(table, 2006.0, SynthesisMode.RATE)
        assert rate.weight_high == pytest.approx(1.0 / 8.0)
        assert table.date_range == (2000.0, 2020.0)
