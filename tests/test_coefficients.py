"""Tests for coefficient tables: index scheme, parsing and loading."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from geomagjax.coefficients import (
    CoefficientSet,
    CoefficientTable,
    coefficient_count,
    coefficient_index,
    coefficient_table_from_arrays,
    effective_degree,
    legendre_count,
    load_coefficients_from_file,
    load_default_coefficients,
    parse_igrf_coefficients,
)

SMALL_FILE = """\
# degree-2 test model
c/s deg ord IGRF IGRF SV
g/h n m 2000.0 2005.0 2005-10
g 1 0 -29600 -29550 10.0
g 1 1 -1700 -1670 8.0
h 1 1 5100 5080 -20.0
g 2 0 -2200 -2270 -11.0
g 2 1 3000 3000 -7.0
h 2 1 -2500 -2520 -23.0
g 2 2 1700 1680 -2.0
h 2 2 -400 -460 -12.0
"""


# ---------------------------------------------------------------------------
# Index scheme
# ---------------------------------------------------------------------------


class TestIndexScheme:
    def test_counts(self):
        assert coefficient_count(13) == 195
        assert coefficient_count(10) == 120
        assert coefficient_count(1) == 3

    def test_legendre_counts(self):
        assert legendre_count(13) == 105
        assert legendre_count(10) == 66

    def test_first_degree(self):
        assert coefficient_index(1, 0) == 0
        assert coefficient_index(1, 1, "g") == 1
        assert coefficient_index(1, 1, "h") == 2

    def test_second_degree(self):
        assert coefficient_index(2, 0) == 3
        assert coefficient_index(2, 1, "g") == 4
        assert coefficient_index(2, 1, "h") == 5
        assert coefficient_index(2, 2, "g") == 6
        assert coefficient_index(2, 2, "h") == 7

    def test_last_coefficient(self):
        assert coefficient_index(13, 13, "h") == 194

    def test_indices_cover_range_once(self):
        n_max = 6
        indices = [coefficient_index(n, 0) for n in range(1, n_max + 1)]
        for n in range(1, n_max + 1):
            for m in range(1, n + 1):
                indices += [coefficient_index(n, m, "g"), coefficient_index(n, m, "h")]
        assert sorted(indices) == list(range(coefficient_count(n_max)))

    @pytest.mark.parametrize("n, m, kind", [(0, 0, "g"), (2, 3, "g"), (2, 0, "h"), (2, 1, "x")])
    def test_invalid_raises(self, n, m, kind):
        with pytest.raises(ValueError):
            coefficient_index(n, m, kind)

    def test_effective_degree(self):
        coef = np.zeros(coefficient_count(13))
        assert effective_degree(coef) == 0
        coef[coefficient_index(10, 10, "h")] = 0.1
        assert effective_degree(coef) == 10
        coef[coefficient_index(11, 0)] = 0.1
        assert effective_degree(coef) == 11


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParser:
    def test_parse_small_file(self):
        parsed = parse_igrf_coefficients(SMALL_FILE)
        assert parsed["epochs"] == [2000.0, 2005.0]
        assert parsed["max_degree"] == 2
        assert parsed["reliability_years"] == 5.0
        data = parsed["data"]
        assert data.shape == (3, 8)
        assert data[0, coefficient_index(1, 0)] == -29600.0
        assert data[1, coefficient_index(2, 2, "h")] == -460.0
        assert data[2, coefficient_index(2, 1, "h")] == -23.0

    def test_row_order_irrelevant(self):
        lines = SMALL_FILE.splitlines()
        shuffled = "\n".join(lines[:3] + list(reversed(lines[3:])))
        a = parse_igrf_coefficients(SMALL_FILE)["data"]
        b = parse_igrf_coefficients(shuffled)["data"]
        np.testing.assert_array_equal(a, b)

    def test_missing_header_raises(self):
        text = "\n".join(line for line in SMALL_FILE.splitlines() if not line.startswith("g/h"))
        with pytest.raises(ValueError, match="header"):
            parse_igrf_coefficients(text)

    def test_non_increasing_epochs_raise(self):
        text = SMALL_FILE.replace("2000.0 2005.0", "2005.0 2000.0")
        with pytest.raises(ValueError, match="strictly increasing"):
            parse_igrf_coefficients(text)

    def test_missing_sv_column_raises(self):
        text = SMALL_FILE.replace("2005-10", "2010.0")
        with pytest.raises(ValueError, match="secular-variation"):
            parse_igrf_coefficients(text)

    def test_wrong_width_raises(self):
        text = SMALL_FILE.replace("g 2 0 -2200 -2270 -11.0", "g 2 0 -2200 -11.0")
        with pytest.raises(ValueError, match="columns"):
            parse_igrf_coefficients(text)

    def test_duplicate_raises(self):
        text = SMALL_FILE + "g 1 0 -29600 -29550 10.0\n"
        with pytest.raises(ValueError, match="duplicate"):
            parse_igrf_coefficients(text)

    def test_incomplete_raises(self):
        text = "\n".join(line for line in SMALL_FILE.splitlines() if not line.startswith("h 2 2"))
        with pytest.raises(ValueError, match="incomplete"):
            parse_igrf_coefficients(text)

    def test_non_numeric_raises(self):
        text = SMALL_FILE.replace("-1700", "abc")
        with pytest.raises(ValueError, match="malformed"):
            parse_igrf_coefficients(text)


# ---------------------------------------------------------------------------
# Table construction
# ---------------------------------------------------------------------------


class TestTableFromArrays:
    def test_basic(self):
        table = coefficient_table_from_arrays(
            [2000.0, 2005.0],
            [[-29600.0, -1700.0, 5100.0], [-29550.0, -1670.0, 5080.0]],
            [10.0, 8.0, -20.0],
        )
        assert isinstance(table, CoefficientTable)
        assert table.max_degree == 1
        assert table.n_epochs == 2
        assert table.data.shape == (3, 3)
        assert table.date_range == (2000.0, 2015.0)

    def test_arrays_are_read_only(self):
        table = coefficient_table_from_arrays([2000.0], [[1.0, 2.0, 3.0]], [0.0, 0.0, 0.0])
        with pytest.raises(ValueError):
            table.data[0, 0] = 5.0
        with pytest.raises(ValueError):
            table.epochs[0] = 1990.0

    def test_input_not_aliased(self):
        coef = np.array([[1.0, 2.0, 3.0]])
        table = coefficient_table_from_arrays([2000.0], coef, [0.0, 0.0, 0.0])
        coef[0, 0] = 99.0
        assert table.data[0, 0] == 1.0

    def test_incomplete_expansion_raises(self):
        with pytest.raises(ValueError, match="complete expansion"):
            coefficient_table_from_arrays([2000.0], [[1.0, 2.0]], [0.0, 0.0])

    def test_sv_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="Secular variation"):
            coefficient_table_from_arrays([2000.0], [[1.0, 2.0, 3.0]], [0.0] * 8)

    def test_epoch_count_mismatch_raises(self):
        with pytest.raises(ValueError, match="shape"):
            coefficient_table_from_arrays([2000.0, 2005.0], [[1.0, 2.0, 3.0]], [0.0] * 3)

    def test_decreasing_epochs_raise(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            coefficient_table_from_arrays(
                [2005.0, 2000.0], [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]], [0.0] * 3
            )

    def test_non_finite_raises(self):
        with pytest.raises(ValueError, match="finite"):
            coefficient_table_from_arrays([2000.0], [[np.nan, 2.0, 3.0]], [0.0] * 3)

    def test_reliability_beyond_validity_raises(self):
        with pytest.raises(ValueError, match="reliability_years"):
            coefficient_table_from_arrays(
                [2000.0], [[1.0, 2.0, 3.0]], [0.0] * 3, validity_years=5.0, reliability_years=6.0
            )

    def test_coefficient_set_accessors(self):
        table = coefficient_table_from_arrays(
            [2000.0, 2005.0],
            [[-29600.0, 0.0, 0.0], [-29550.0, -1670.0, 5080.0]],
            [10.0, 8.0, -20.0],
        )
        first = table.coefficient_set(0)
        assert isinstance(first, CoefficientSet)
        assert first.epoch == 2000.0
        assert first.max_degree == 1
        sv = table.secular_variation
        assert np.isnan(sv.epoch)
        np.testing.assert_array_equal(sv.coefficients, [10.0, 8.0, -20.0])
        with pytest.raises(IndexError):
            table.coefficient_set(2)


class TestLoadFromFile:
    def test_load(self, tmp_path: Path):
        path = tmp_path / "model.txt"
        path.write_text(SMALL_FILE, encoding="utf-8")
        table = load_coefficients_from_file(path)
        assert table.model_name == "model"
        assert table.max_degree == 2
        assert table.reliability_years == 5.0
        assert table.validity_years == 10.0
        assert table.date_range == (2000.0, 2015.0)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_coefficients_from_file(tmp_path / "missing.txt")


# ---------------------------------------------------------------------------
# Bundled table
# ---------------------------------------------------------------------------


class TestDefaultTable:
    def test_shape(self):
        table = load_default_coefficients()
        assert table.n_epochs == 25
        assert table.max_degree == 13
        assert table.data.shape == (26, 195)

    def test_epochs(self):
        table = load_default_coefficients()
        np.testing.assert_array_equal(table.epochs, np.arange(1900.0, 2021.0, 5.0))

    def test_windows(self):
        table = load_default_coefficients()
        assert table.date_range == (1900.0, 2030.0)
        assert table.reliability_years == 5.0
        assert table.reference_radius == 6371.2

    def test_epoch_degrees(self):
        table = load_default_coefficients()
        # degree 10 through 1995, degree 13 from 2000
        assert all(int(d) == 10 for d in table.max_degrees[:20])
        assert all(int(d) == 13 for d in table.max_degrees[20:])

    def test_known_values(self):
        table = load_default_coefficients()
        assert table.data[0, coefficient_index(1, 0)] == -31543.0
        assert table.data[24, coefficient_index(1, 0)] == -29404.8
        assert table.data[24, coefficient_index(1, 1, "h")] == 4652.5
        assert table.data[23, coefficient_index(1, 0)] == -29441.46
        assert table.data[20, coefficient_index(11, 0)] == 2.7
        assert table.data[19, coefficient_index(11, 0)] == 0.0
        assert table.data[25, coefficient_index(1, 0)] == 5.7
        assert table.data[25, coefficient_index(1, 1, "h")] == -25.9

    def test_sv_set_has_table_degree(self):
        table = load_default_coefficients()
        assert table.secular_variation.max_degree == 13
        assert effective_degree(table.data[25]) == 8

    def test_cached_instance(self):
        assert load_default_coefficients() is load_default_coefficients()
