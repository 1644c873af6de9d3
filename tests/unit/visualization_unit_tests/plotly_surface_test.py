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
Unit Tests for Plotly Drawing Surface

Tests path primitives, the color axis (auto/manual colormap and limits),
the title region and the figure produced by draw().
"""

from typing import get_args

import numpy as np
import plotly.graph_objects as go
import pytest

from colortraj.errors import InvalidColormapError, InvalidLimitsError, InvalidModeError
from colortraj.types.chart import ChartDefaults, EdgeColorMode
from colortraj.visualization.surface import (
    DEFAULT_COLOR_LIMITS,
    EDGE_COLOR_MODES,
    PathPrimitive,
    PlotlySurface,
)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def surface():
    """Create default surface."""
    return PlotlySurface()


@pytest.fixture
def open_path(surface):
    """Create a three-point open path with a NaN terminator."""
    path = surface.create_path(face_color="none", edge_color="interp")
    path.vertices = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [np.nan, np.nan]])
    path.faces = np.arange(4)
    path.face_vertex_cdata = np.array([1.0, 2.0, 3.0, np.nan])
    return path


# ============================================================================
# PathPrimitive Tests
# ============================================================================


class TestPathPrimitive:
    """Test PathPrimitive properties and segment extraction."""

    def test_defaults(self):
        """Test default property values."""
        path = PathPrimitive()
        assert path.vertices.shape == (0, 2)
        assert path.line_width == 0.5
        assert path.face_color == "none"
        assert path.edge_color == "interp"
        assert path.visible is True

    def test_unknown_property(self):
        """Test unknown property names are rejected."""
        with pytest.raises(TypeError, match="Unknown path property"):
            PathPrimitive(edge_alpha=0.5)

    def test_invalid_edge_color(self):
        """Test edge_color accepts only interp and flat."""
        with pytest.raises(ValueError):
            PathPrimitive(edge_color="red")

    def test_edge_color_modes_follow_alias(self):
        """Test the accepted edge modes are exactly the EdgeColorMode values."""
        assert EDGE_COLOR_MODES == get_args(EdgeColorMode)

    @pytest.mark.parametrize("mode", get_args(EdgeColorMode))
    def test_every_edge_color_mode_accepted(self, mode):
        """Test each EdgeColorMode value is a valid edge color."""
        assert PathPrimitive(edge_color=mode).edge_color == mode

    def test_invalid_line_width(self):
        """Test line width must be positive."""
        path = PathPrimitive()
        with pytest.raises(ValueError):
            path.line_width = -1

    def test_interp_segments(self, open_path):
        """Test interpolated segments use endpoint means and skip NaN."""
        starts, ends, values = open_path.segments()
        np.testing.assert_array_equal(starts, [[0.0, 0.0], [1.0, 0.0]])
        np.testing.assert_array_equal(ends, [[1.0, 0.0], [1.0, 1.0]])
        np.testing.assert_array_equal(values, [1.5, 2.5])

    def test_flat_segments(self, open_path):
        """Test flat segments use the starting vertex value."""
        open_path.edge_color = "flat"
        _, _, values = open_path.segments()
        np.testing.assert_array_equal(values, [1.0, 2.0])

    def test_closed_outline(self):
        """Test a path without NaN closes back to its first vertex."""
        path = PathPrimitive(
            vertices=np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]),
            faces=np.arange(3),
            face_vertex_cdata=np.zeros(3),
        )
        starts, ends, _ = path.segments()
        assert len(starts) == 3
        np.testing.assert_array_equal(ends[-1], [0.0, 0.0])

    def test_no_segments_without_faces(self):
        """Test an empty path has no segments."""
        starts, ends, values = PathPrimitive().segments()
        assert starts.shape == (0, 2)
        assert values.size == 0


# ============================================================================
# Primitive Management Tests
# ============================================================================


class TestPrimitives:
    """Test create_path, next_plot and clear."""

    def test_add_keeps_existing(self, surface):
        """Test next_plot='add' accumulates primitives."""
        surface.create_path()
        surface.create_path()
        assert len(surface.primitives) == 2

    def test_replacechildren(self, surface):
        """Test next_plot='replacechildren' replaces primitives."""
        surface.create_path()
        surface.next_plot = "replacechildren"
        path = surface.create_path()
        assert surface.primitives == (path,)

    def test_invalid_next_plot(self, surface):
        """Test unknown next_plot values are rejected."""
        with pytest.raises(ValueError):
            surface.next_plot = "replace"

    def test_clear(self, surface, open_path):
        """Test clear removes all primitives."""
        surface.clear()
        assert surface.primitives == ()


# ============================================================================
# Color Axis Tests
# ============================================================================


class TestColorAxis:
    """Test colormap and color limits behavior."""

    def test_default_colormap(self, surface):
        """Test the default colormap comes from ChartDefaults."""
        assert surface.colormap.shape == (256, 3)
        assert surface.colormap_mode == "auto"

    def test_colormap_manual(self, surface):
        """Test assigning a colormap switches to manual."""
        surface.colormap = [[1.0, 0.0, 0.0]]
        assert surface.colormap_mode == "manual"
        assert surface.colormap.shape == (1, 3)

    def test_colormap_auto_restores_default(self, surface):
        """Test returning to auto restores the default colormap."""
        default = surface.colormap
        surface.colormap = [[1.0, 0.0, 0.0]]
        surface.colormap_mode = "auto"
        np.testing.assert_array_equal(surface.colormap, default)

    def test_colormap_is_copied(self, surface):
        """Test the returned colormap cannot mutate the surface."""
        cmap = surface.colormap
        cmap[:] = 0.0
        assert surface.colormap.max() > 0.0

    def test_invalid_colormap_shape(self, surface):
        """Test colormaps must be (N, 3)."""
        with pytest.raises(InvalidColormapError):
            surface.colormap = np.zeros((4, 4))

    def test_empty_limits(self, surface):
        """Test auto limits without data."""
        assert surface.color_limits == DEFAULT_COLOR_LIMITS

    def test_auto_limits_from_data(self, surface, open_path):
        """Test auto limits follow finite color data."""
        assert surface.color_limits == (1.0, 3.0)

    def test_constant_data_limits(self, surface, open_path):
        """Test constant data widens the limits around the value."""
        open_path.face_vertex_cdata = np.array([2.0, 2.0, 2.0, np.nan])
        assert surface.color_limits == (1.5, 2.5)

    def test_hidden_primitives_ignored(self, surface, open_path):
        """Test invisible primitives do not drive auto limits."""
        open_path.visible = False
        assert surface.color_limits == DEFAULT_COLOR_LIMITS

    def test_manual_limits(self, surface, open_path):
        """Test assigned limits stick regardless of data."""
        surface.color_limits = (0, 10)
        assert surface.color_limits_mode == "manual"
        open_path.face_vertex_cdata = np.array([5.0, 6.0, 7.0, np.nan])
        assert surface.color_limits == (0.0, 10.0)

    def test_manual_mode_freezes_auto_limits(self, surface, open_path):
        """Test switching to manual keeps the limits in effect."""
        surface.color_limits_mode = "manual"
        open_path.face_vertex_cdata = np.array([5.0, 6.0, 7.0, np.nan])
        assert surface.color_limits == (1.0, 3.0)

    def test_invalid_limits(self, surface):
        """Test equal limits are rejected."""
        with pytest.raises(InvalidLimitsError):
            surface.color_limits = (1, 1)

    def test_invalid_mode(self, surface):
        """Test unknown limits modes are rejected."""
        with pytest.raises(InvalidModeError):
            surface.color_limits_mode = "Auto"


# ============================================================================
# Title Tests
# ============================================================================


class TestTitleRegion:
    """Test title and subtitle handling."""

    def test_set_title_returns_displayed(self, surface):
        """Test set_title returns title and subtitle."""
        assert surface.set_title("T", "S") == ("T", "S")

    def test_set_title_without_subtitle(self, surface):
        """Test a missing subtitle leaves the current one."""
        surface.set_subtitle("S")
        assert surface.set_title("T") == ("T", "S")

    def test_subtitle_markup(self, surface):
        """Test the subtitle is rendered below the title."""
        surface.set_title("T", "S")
        assert surface.draw().layout.title.text == "T<br><sup>S</sup>"

    def test_styled_subtitle(self, surface):
        """Test subtitle style becomes inline CSS."""
        surface.set_title("T")
        surface.set_subtitle("S", color="red")
        assert "color:red" in surface.draw().layout.title.text


# ============================================================================
# Draw Tests
# ============================================================================


class TestDraw:
    """Test figure generation."""

    def test_returns_same_figure(self, surface):
        """Test draw returns the surface figure."""
        assert surface.draw() is surface.figure

    def test_wraps_given_figure(self):
        """Test an existing figure is drawn into."""
        figure = go.Figure()
        assert PlotlySurface(figure=figure).draw() is figure

    def test_traces_binned_by_color(self, surface, open_path):
        """Test segments are grouped into one line trace per colormap row."""
        surface.colormap = [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]]
        fig = surface.draw()
        lines = [trace for trace in fig.data if trace.mode == "lines"]
        assert len(lines) == 2
        assert {trace.line.color for trace in lines} == {"rgb(0,0,0)", "rgb(255,255,255)"}

    def test_redraw_replaces_traces(self, surface, open_path):
        """Test drawing twice does not duplicate traces."""
        first = len(surface.draw().data)
        assert len(surface.draw().data) == first

    def test_colorbar_carrier(self, surface, open_path):
        """Test the marker trace carries finite color values."""
        carrier = surface.draw().data[-1]
        assert carrier.mode == "markers"
        np.testing.assert_array_equal(carrier.marker.color, [1.0, 2.0, 3.0])

    def test_coloraxis(self, surface, open_path):
        """Test the color axis reflects limits and colorbar settings."""
        surface.colorbar_visible = True
        surface.colorbar_label = "Speed"
        layout = surface.draw().layout
        assert layout.coloraxis.cmin == 1.0
        assert layout.coloraxis.cmax == 3.0
        assert layout.coloraxis.showscale is True
        assert layout.coloraxis.colorbar.title.text == "Speed"

    def test_fill(self, surface):
        """Test a face color adds a filled outline trace."""
        surface.create_path(
            vertices=np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]),
            faces=np.arange(3),
            face_color="lightgray",
        )
        assert surface.draw().data[0].fill == "toself"

    def test_tight_limits(self, surface, open_path):
        """Test tight limits fit the axes to the data."""
        surface.tight_limits = True
        layout = surface.draw().layout
        assert tuple(layout.xaxis.range) == (0.0, 1.0)
        assert tuple(layout.yaxis.range) == (0.0, 1.0)

    def test_loose_limits(self, surface, open_path):
        """Test Plotly autoranges without tight limits."""
        assert surface.draw().layout.xaxis.range is None

    def test_aspect_lock(self, surface):
        """Test the aspect lock is applied and removed."""
        surface.aspect_ratio_locked = True
        assert surface.draw().layout.yaxis.scaleanchor == "x"
        surface.aspect_ratio_locked = False
        assert surface.draw().layout.yaxis.scaleanchor is None

    def test_size_from_defaults(self):
        """Test width and height come from ChartDefaults."""
        layout = PlotlySurface(defaults=ChartDefaults(width=640, height=480)).draw().layout
        assert layout.width == 640
        assert layout.height == 480

    def test_theme_from_defaults(self):
        """Test the configured theme is applied."""
        layout = PlotlySurface(defaults=ChartDefaults(theme="publication")).draw().layout
        assert layout.font.size == 14
