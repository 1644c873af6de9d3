# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for Input Validation

Tests the shared validators used by charts, surfaces and build data.
"""

import array

import numpy as np
import pytest

from colortraj.errors import (
    DataLengthMismatchError,
    InvalidColormapError,
    InvalidLimitsError,
    InvalidModeError,
)
from colortraj.validation import (
    as_vector,
    check_lengths,
    is_numeric,
    validate_colormap,
    validate_flag,
    validate_limits,
    validate_line_width,
    validate_mode,
    validate_text,
)


class TestVectors:
    """Test as_vector, is_numeric and check_lengths."""

    def test_as_vector_flattens(self):
        """Test column vectors become 1-D."""
        np.testing.assert_array_equal(as_vector(np.ones((3, 1))), [1.0, 1.0, 1.0])

    def test_as_vector_none(self):
        """Test None becomes an empty vector."""
        assert as_vector(None).size == 0

    def test_as_vector_rejects_strings(self):
        """Test non-numeric input raises TypeError naming the field."""
        with pytest.raises(TypeError, match="x_data"):
            as_vector(["a"], "x_data")

    @pytest.mark.parametrize(
        "value, expected",
        [
            ([1, 2], True),
            (np.arange(3), True),
            (2.5, True),
            ([], True),
            (range(3), True),
            (array.array("d", [0.5, 1.5]), True),
            (np.float64(1.0), True),
            (b"\x01\x02", False),
            (np.array(2.0), True),
            (True, False),
            ("abc", False),
            (["a"], False),
            (None, False),
        ],
    )
    def test_is_numeric(self, value, expected):
        """Test numeric detection."""
        assert is_numeric(value) is expected

    def test_check_lengths(self):
        """Test matching lengths pass and mismatches raise."""
        check_lengths(np.zeros(2), np.zeros(2), np.zeros(2))
        with pytest.raises(DataLengthMismatchError):
            check_lengths(np.zeros(2), np.zeros(3))


class TestDisplayOptions:
    """Test text, line width and flag validators."""

    def test_text(self):
        """Test strings, line sequences and None."""
        assert validate_text("a") == "a"
        assert validate_text(("a", "b")) == "a\nb"
        assert validate_text(None) == ""

    def test_text_rejects_numbers(self):
        """Test non-text input raises TypeError."""
        with pytest.raises(TypeError):
            validate_text(3)

    @pytest.mark.parametrize("value", [0, -1, float("inf"), float("nan")])
    def test_line_width_invalid_values(self, value):
        """Test non-positive or non-finite widths raise ValueError."""
        with pytest.raises(ValueError):
            validate_line_width(value)

    def test_line_width_type(self):
        """Test non-numeric widths raise TypeError."""
        with pytest.raises(TypeError):
            validate_line_width("2")
        with pytest.raises(TypeError):
            validate_line_width(True)

    def test_flag(self):
        """Test bools and on/off strings."""
        assert validate_flag(True) is True
        assert validate_flag("OFF") is False
        with pytest.raises(TypeError):
            validate_flag(1)


class TestColorAxisValidators:
    """Test colormap, limits and mode validators."""

    def test_colormap_single_row(self):
        """Test a single RGB triple becomes a one-row colormap."""
        assert validate_colormap([0.2, 0.4, 0.6]).shape == (1, 3)

    @pytest.mark.parametrize("value", [[], [[0.1, 0.2]], [[0.0, 0.0, 2.0]], "viridis"])
    def test_colormap_invalid(self, value):
        """Test invalid colormaps raise InvalidColormapError."""
        with pytest.raises(InvalidColormapError):
            validate_colormap(value)

    def test_limits(self):
        """Test limits normalize to a float pair."""
        assert validate_limits(np.array([0, 1])) == (0.0, 1.0)

    @pytest.mark.parametrize(
        "value",
        [
            (1, 0),
            (1, 1),
            (0,),
            (0, 1, 2),
            (0, float("nan")),
            (float("-inf"), float("inf")),
            (0, float("inf")),
            "ab",
        ],
    )
    def test_limits_invalid(self, value):
        """Test invalid limits raise InvalidLimitsError."""
        with pytest.raises(InvalidLimitsError, match="two increasing values"):
            validate_limits(value)

    def test_mode(self):
        """Test auto/manual pass and anything else fails."""
        assert validate_mode("manual") == "manual"
        with pytest.raises(InvalidModeError):
            validate_mode("MANUAL")
        with pytest.raises(InvalidModeError):
            validate_mode(None)
