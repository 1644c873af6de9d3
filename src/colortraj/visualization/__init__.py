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
Visualization Tools
===================

Multi-color trajectory charts and the Plotly drawing surface they render on.

Charts
------
>>> from colortraj.visualization import TrajectoryChart, color_trajectory_plot
>>>
>>> chart = TrajectoryChart.from_xyc(x, y, c, colorbar_visible=True)
>>> chart.line_width = 2
>>>
>>> # Positional form
>>> chart = color_trajectory_plot(x, y)

Surfaces
--------
>>> from colortraj.visualization import PlotlySurface
>>>
>>> surface = PlotlySurface()
>>> chart = TrajectoryChart.from_xy(x, y, parent=surface)
>>> fig = surface.draw()

Themes and Styling
------------------
>>> from colortraj.visualization import ColorSchemes, PlotThemes
>>>
>>> cmap = ColorSchemes.get_colormap("plasma", n_colors=64)
>>> PlotThemes.apply_theme(fig, "publication")

Authors
-------
Gil Benezer

License
-------
GNU Affero General Public License v3.0
"""

# Charts
from .chart_container import ChartContainer, ColorbarMixin
from .trajectory_chart import TrajectoryChart, color_trajectory_plot, resolve_build_args

# Surfaces
from .surface import PathPrimitive, PlotlySurface

# Themes and styling
from .themes import (
    ColorSchemes,
    PlotThemes,
    colormap_to_colorscale,
    parse_color,
)

# Export public API
__all__ = [
    # Charts
    "ChartContainer",
    "ColorbarMixin",
    "TrajectoryChart",
    "color_trajectory_plot",
    "resolve_build_args",
    # Surfaces
    "PathPrimitive",
    "PlotlySurface",
    # Themes and styling
    "ColorSchemes",
    "PlotThemes",
    "colormap_to_colorscale",
    "parse_color",
]
