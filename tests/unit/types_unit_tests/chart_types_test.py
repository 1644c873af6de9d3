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
Unit Tests for Chart Types

Tests build data validation, the axis-state snapshot, the snapshot state
values and ChartDefaults.
"""

import dataclasses

import numpy as np
import pytest

from colortraj.errors import ChartValidationError, DataLengthMismatchError
from colortraj.types.chart import (
    CONSUMED,
    AxisStateSnapshot,
    ChartDefaults,
    Consumed,
    NoData,
    Pending,
    XYCData,
    XYData,
    build_data_fields,
)

# ============================================================================
# Build Data Tests
# ============================================================================


class TestBuildData:
    """Test XYData, XYCData and NoData."""

    def test_xy_coerces_to_float_vectors(self):
        """Test inputs become flat float arrays."""
        data = XYData([[1, 2, 3]], (4, 5, 6))
        assert data.x.dtype == float
        assert data.x.shape == (3,)
        np.testing.assert_array_equal(data.y, [4.0, 5.0, 6.0])

    def test_xy_copies_input(self):
        """Test the stored vectors do not alias the input."""
        x = np.array([1.0, 2.0])
        data = XYData(x, [3, 4])
        x[0] = 100.0
        assert data.x[0] == 1.0

    def test_xy_mismatch(self):
        """Test XYData rejects different lengths."""
        with pytest.raises(DataLengthMismatchError):
            XYData([1, 2], [1])

    def test_xyc_mismatch(self):
        """Test XYCData rejects a short color vector."""
        with pytest.raises(DataLengthMismatchError):
            XYCData([1, 2], [1, 2], [1])

    def test_mismatch_is_validation_error(self):
        """Test the error hierarchy."""
        with pytest.raises(ChartValidationError):
            XYData([1], [])
        with pytest.raises(ValueError):
            XYData([1], [])

    def test_non_numeric(self):
        """Test string data is rejected."""
        with pytest.raises(TypeError):
            XYData(["a", "b"], [1, 2])

    def test_frozen(self):
        """Test build data cannot be reassigned."""
        data = XYData([1], [2])
        with pytest.raises(dataclasses.FrozenInstanceError):
            data.x = np.array([3.0])

    def test_build_data_fields(self):
        """Test mapping onto chart field names."""
        assert set(build_data_fields(XYData([1], [2]))) == {"x_data", "y_data"}
        assert set(build_data_fields(XYCData([1], [2], [3]))) == {
            "x_data",
            "y_data",
            "color_data",
        }
        assert build_data_fields(NoData()) == {}

    def test_build_data_fields_rejects_other(self):
        """Test unsupported build data raises TypeError."""
        with pytest.raises(TypeError):
            build_data_fields(([1], [2]))


# ============================================================================
# Snapshot Tests
# ============================================================================


class TestAxisStateSnapshot:
    """Test AxisStateSnapshot capture and conversion."""

    def test_empty_snapshot(self):
        """Test an empty snapshot holds nothing."""
        snapshot = AxisStateSnapshot()
        assert snapshot.colormap is None
        assert snapshot.color_limits is None
        assert snapshot.colorbar_visible is None
        assert snapshot.colormap_array() is None

    def test_capture_freezes_colormap(self):
        """Test the colormap is stored as tuples and restored as an array."""
        cmap = np.array([[0.0, 0.5, 1.0], [1.0, 0.5, 0.0]])
        snapshot = AxisStateSnapshot.capture(colormap=cmap)
        assert snapshot.colormap == ((0.0, 0.5, 1.0), (1.0, 0.5, 0.0))
        cmap[0, 0] = 0.9
        np.testing.assert_array_equal(snapshot.colormap_array()[0], [0.0, 0.5, 1.0])

    def test_capture_limits(self):
        """Test limits are stored as floats."""
        snapshot = AxisStateSnapshot.capture(color_limits=(1, 2), colorbar_visible=True)
        assert snapshot.color_limits == (1.0, 2.0)
        assert snapshot.colorbar_visible is True

    def test_snapshots_compare_by_value(self):
        """Test equal captures compare equal."""
        a = AxisStateSnapshot.capture(colormap=np.eye(3), color_limits=(0, 1))
        b = AxisStateSnapshot.capture(colormap=np.eye(3), color_limits=(0, 1))
        assert a == b


class TestSnapshotState:
    """Test Pending and Consumed values."""

    def test_pending_holds_snapshot(self):
        """Test Pending wraps a snapshot."""
        snapshot = AxisStateSnapshot(color_limits=(0.0, 1.0))
        assert Pending(snapshot).snapshot is snapshot

    def test_consumed_singleton_equality(self):
        """Test Consumed values are interchangeable."""
        assert Consumed() == CONSUMED


# ============================================================================
# ChartDefaults Tests
# ============================================================================


class TestChartDefaults:
    """Test ChartDefaults values."""

    def test_defaults(self):
        """Test default configuration."""
        defaults = ChartDefaults()
        assert defaults.colormap == "viridis"
        assert defaults.colormap_size == 256
        assert defaults.colorbar_visible is False
        assert defaults.theme == "default"
        assert defaults.width is None

    def test_replace(self):
        """Test derived configurations via dataclasses.replace."""
        dark = dataclasses.replace(ChartDefaults(), theme="dark")
        assert dark.theme == "dark"
        assert dark.colormap == "viridis"
