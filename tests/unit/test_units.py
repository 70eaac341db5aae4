#  Copyright (c) 2025 Tom Villani, Ph.D.
# tests/unit/test_units.py
"""Unit tests for CSS length conversion."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from html2pdfmake.utils.units import convert_to_unit, normalize_number, round_half_up


@pytest.mark.unit
class TestConvertToUnit:
    """Tests for convert_to_unit."""

    def test_pixels_use_editor_ratio(self):
        """14px maps to the editor's 11.25pt body size."""
        assert convert_to_unit("14px") == 11.25
        assert convert_to_unit("10px") == 8.04

    def test_points_pass_through(self):
        assert convert_to_unit("12pt") == 12
        assert convert_to_unit("-5pt") == -5

    def test_em_and_rem_are_twelve_points(self):
        assert convert_to_unit("1.5em") == 18
        assert convert_to_unit("2rem") == 24

    def test_centimetres_round_half_up(self):
        assert convert_to_unit("1cm") == 28
        assert convert_to_unit("2.5cm") == 71

    def test_inches(self):
        assert convert_to_unit("1in") == 72

    def test_plain_numbers(self):
        """Unitless values, numeric or string, are returned unchanged."""
        assert convert_to_unit(12) == 12
        assert convert_to_unit(1.5) == 1.5
        assert convert_to_unit("3") == 3
        assert convert_to_unit("80.36") == 80.36

    def test_integral_results_are_ints(self):
        result = convert_to_unit("1in")
        assert isinstance(result, int)

    @pytest.mark.parametrize("value", ["50%", "auto", "abc", "", "px", "12vw", True])
    def test_unknown_values_return_none(self, value):
        assert convert_to_unit(value) is None

    def test_surrounding_whitespace_ignored(self):
        assert convert_to_unit(" 12pt ") == 12


@pytest.mark.unit
class TestNumberHelpers:
    """Tests for normalize_number and round_half_up."""

    def test_normalize_integral_float(self):
        assert normalize_number(72.0) == 72
        assert isinstance(normalize_number(72.0), int)

    def test_normalize_keeps_fraction(self):
        assert normalize_number(8.04) == 8.04

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(28.34646) == 28


@pytest.mark.unit
class TestUnitProperties:
    """Property-based tests for unit conversion."""

    @given(st.integers(min_value=0, max_value=10_000))
    def test_px_matches_ratio(self, n):
        """Pixel lengths are scaled by the editor ratio and rounded to 2 places."""
        assert convert_to_unit(f"{n}px") == normalize_number(round(n * 0.803571, 2))

    @given(st.integers(min_value=-1000, max_value=1000))
    def test_em_is_linear(self, n):
        assert convert_to_unit(f"{n}em") == n * 12

    @given(st.integers(min_value=-1000, max_value=1000))
    def test_pt_is_identity(self, n):
        assert convert_to_unit(f"{n}pt") == n
