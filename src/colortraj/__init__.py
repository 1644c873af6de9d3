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
colortraj
=========

Multi-color 2D trajectory charts on Plotly, with a damped random-walk
generator for demo data.

>>> from colortraj import TrajectoryChart, random_walk
>>>
>>> x, y, c = random_walk(seed=42)
>>> chart = TrajectoryChart.from_xyc(x, y, c, colorbar_visible=True)
>>> chart.write_html("walk.html")
"""

__version__ = "0.1.0"

from colortraj.errors import (
    ChartValidationError,
    DataLengthMismatchError,
    DataLengthMismatchWarning,
    InvalidColormapError,
    InvalidLimitsError,
    InvalidModeError,
    InvalidSyntaxError,
)
from colortraj.systems import (
    hot_spot_heat,
    random_walk,
    simulate_from_config,
    simulate_random_walk,
)
from colortraj.types import ChartDefaults, NoData, RandomWalkConfig, XYCData, XYData
from colortraj.visualization import (
    ColorSchemes,
    PlotlySurface,
    PlotThemes,
    TrajectoryChart,
    color_trajectory_plot,
)

__all__ = [
    "__version__",
    # Charts
    "TrajectoryChart",
    "color_trajectory_plot",
    "PlotlySurface",
    "XYData",
    "XYCData",
    "NoData",
    "ChartDefaults",
    # Data
    "random_walk",
    "simulate_random_walk",
    "simulate_from_config",
    "hot_spot_heat",
    "RandomWalkConfig",
    # Styling
    "ColorSchemes",
    "PlotThemes",
    # Errors
    "ChartValidationError",
    "DataLengthMismatchError",
    "InvalidSyntaxError",
    "InvalidLimitsError",
    "InvalidModeError",
    "InvalidColormapError",
    "DataLengthMismatchWarning",
]
