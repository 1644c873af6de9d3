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
Chart Types

Type definitions for the trajectory chart:

- Color-axis aliases (limits, limits mode, colormap)
- Build data: an explicit tagged union for the (x, y), (x, y, c) and
  options-only construction shapes
- Axis-state snapshot and its Pending -> Consumed state transition
- ChartDefaults: explicit default configuration for surfaces and charts

Usage
-----
>>> from colortraj.types.chart import XYData, AxisStateSnapshot, Pending
>>>
>>> data = XYData([0, 1, 2], [0, 1, 4])
>>> snapshot = AxisStateSnapshot(color_limits=(0.0, 5.0), colorbar_visible=True)
>>> state = Pending(snapshot)
"""

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple, Union

import numpy as np

from colortraj.validation import as_vector, check_lengths

# ============================================================================
# Color Axis Types
# ============================================================================

ColorLimitsMode = Literal["auto", "manual"]
"""
How the surface chooses its color limits.

- 'auto': limits follow the finite range of the plotted color data
- 'manual': limits stay at the last value assigned
"""

ColorLimits = Tuple[float, float]
"""Color limits (lo, hi) with hi > lo."""

RGBTriple = Tuple[float, float, float]
"""One colormap row, each channel in [0, 1]."""

Colormap = np.ndarray
"""Colormap of shape (N, 3), N >= 1, values in [0, 1]."""

NextPlot = Literal["add", "replacechildren"]
"""Whether creating a primitive keeps or replaces existing ones."""

EdgeColorMode = Literal["interp", "flat"]
"""
How a path colors each segment from its per-vertex values.

- 'interp': mean of the two endpoint values
- 'flat': value of the starting vertex
"""


# ============================================================================
# Build Data (construction shapes)
# ============================================================================


@dataclass(frozen=True)
class XYData:
    """
    Trajectory coordinates colored by point index.

    Raises
    ------
    DataLengthMismatchError
        If ``len(y) != len(x)``
    """

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        x = as_vector(self.x, "x")
        y = as_vector(self.y, "y")
        check_lengths(x, y)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)


@dataclass(frozen=True)
class XYCData:
    """
    Trajectory coordinates with an explicit color series.

    Raises
    ------
    DataLengthMismatchError
        If ``len(y)`` or ``len(c)`` differs from ``len(x)``
    """

    x: np.ndarray
    y: np.ndarray
    c: np.ndarray

    def __post_init__(self):
        x = as_vector(self.x, "x")
        y = as_vector(self.y, "y")
        c = as_vector(self.c, "c")
        check_lengths(x, y, c)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "c", c)


@dataclass(frozen=True)
class NoData:
    """Chart built from named options only."""

    pass


BuildData = Union[XYData, XYCData, NoData]
"""Positional data accepted when building a chart."""


def build_data_fields(data: BuildData) -> Dict[str, np.ndarray]:
    """
    Map build data onto chart field names.

    Examples
    --------
    >>> sorted(build_data_fields(XYCData([1], [2], [3])))
    ['color_data', 'x_data', 'y_data']
    """
    if isinstance(data, XYCData):
        return {"x_data": data.x, "y_data": data.y, "color_data": data.c}
    if isinstance(data, XYData):
        return {"x_data": data.x, "y_data": data.y}
    if isinstance(data, NoData):
        return {}
    raise TypeError(f"Unsupported build data: {type(data).__name__}")


# ============================================================================
# Axis State Snapshot
# ============================================================================


@dataclass(frozen=True)
class AxisStateSnapshot:
    """
    Color-axis state carried from a torn-down surface to its replacement.

    Every field is optional; only fields that are set get reapplied.

    Attributes
    ----------
    colormap : Optional[Tuple[RGBTriple, ...]]
        Colormap rows, captured only when the colormap was set manually
    color_limits : Optional[ColorLimits]
        Color limits, captured only when the limits mode was 'manual'
    colorbar_visible : Optional[bool]
        Colorbar visibility, always captured
    """

    colormap: Optional[Tuple[RGBTriple, ...]] = None
    color_limits: Optional[ColorLimits] = None
    colorbar_visible: Optional[bool] = None

    @classmethod
    def capture(
        cls,
        colormap: Optional[np.ndarray] = None,
        color_limits: Optional[ColorLimits] = None,
        colorbar_visible: Optional[bool] = None,
    ) -> "AxisStateSnapshot":
        """Build a snapshot, freezing the colormap array into tuples."""
        rows = None
        if colormap is not None:
            rows = tuple(tuple(float(v) for v in row) for row in np.asarray(colormap))
        limits = None
        if color_limits is not None:
            limits = (float(color_limits[0]), float(color_limits[1]))
        return cls(colormap=rows, color_limits=limits, colorbar_visible=colorbar_visible)

    def colormap_array(self) -> Optional[np.ndarray]:
        """Colormap as an (N, 3) array, or None when not captured."""
        if self.colormap is None:
            return None
        return np.array(self.colormap, dtype=float)


@dataclass(frozen=True)
class Pending:
    """A snapshot waiting to be applied to the next surface."""

    snapshot: AxisStateSnapshot


@dataclass(frozen=True)
class Consumed:
    """No snapshot waiting: the last one was applied, or none was taken."""

    pass


CONSUMED = Consumed()

SnapshotState = Union[Pending, Consumed]


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class ChartDefaults:
    """
    Default configuration for drawing surfaces and the charts on them.

    Passed explicitly when a surface or chart is built; nothing is read
    from process-wide state.

    Attributes
    ----------
    colormap : str
        Colormap name resolved through ``ColorSchemes.get_colormap``
    colormap_size : int
        Number of colormap rows
    colorbar_visible : bool
        Whether a fresh surface shows its colorbar
    theme : str
        Plot theme applied on every draw (see ``PlotThemes``)
    width, height : Optional[int]
        Figure size in pixels (Plotly decides when None)

    Examples
    --------
    >>> defaults = ChartDefaults(colormap="plasma", colorbar_visible=True)
    >>> surface = PlotlySurface(defaults=defaults)
    """

    colormap: str = "viridis"
    colormap_size: int = 256
    colorbar_visible: bool = False
    theme: str = "default"
    width: Optional[int] = None
    height: Optional[int] = None


__all__ = [
    "ColorLimitsMode",
    "ColorLimits",
    "RGBTriple",
    "Colormap",
    "NextPlot",
    "EdgeColorMode",
    "XYData",
    "XYCData",
    "NoData",
    "BuildData",
    "build_data_fields",
    "AxisStateSnapshot",
    "Pending",
    "Consumed",
    "CONSUMED",
    "SnapshotState",
    "ChartDefaults",
]
