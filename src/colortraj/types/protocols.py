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
Structural Subtyping Protocols for Drawing Surfaces
===================================================

The trajectory chart never depends on a concrete graphics backend. It talks to
a drawing surface through the protocols below, so any object with the same
shape (the Plotly-backed ``PlotlySurface``, or a fake in tests) can host it.

Protocol Overview
-----------------
```
PathPrimitiveProtocol
    One renderable path: vertices, faces, per-vertex color data, styling

DrawingSurfaceProtocol
    Axes-like host: creates path primitives, owns the color axis
    (colormap, color limits, modes), title region and colorbar
```

Usage Examples
--------------
>>> from colortraj.types.protocols import DrawingSurfaceProtocol
>>>
>>> def lock_aspect(surface: DrawingSurfaceProtocol) -> None:
...     surface.aspect_ratio_locked = True
...     surface.tight_limits = True
>>>
>>> lock_aspect(PlotlySurface())  # ✓

Notes
-----
Reads and writes of color-axis properties are expected to be live: a surface
must not hand back stale copies, because the chart forwards its own
``colormap``/``color_limits`` accessors straight to these properties.
"""

from typing import Any, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from colortraj.types.chart import ColorLimits, ColorLimitsMode, EdgeColorMode, NextPlot


@runtime_checkable
class PathPrimitiveProtocol(Protocol):
    """
    A path-like renderable owned by a drawing surface.

    Required Attributes
    -------------------
    vertices : np.ndarray
        Vertex coordinates, shape (M, 2); NaN rows break the path
    faces : np.ndarray
        Vertex indices visited in order, shape (K,)
    face_vertex_cdata : np.ndarray
        One scalar per vertex, mapped to color through the color axis
    line_width : float
        Edge width in pixels
    face_color : str
        Fill color, or 'none' for an unfilled path
    edge_color : str
        'interp' or 'flat' per-vertex edge coloring
    visible : bool
        Whether the primitive is drawn at all
    """

    vertices: np.ndarray
    faces: np.ndarray
    face_vertex_cdata: np.ndarray
    line_width: float
    face_color: str
    edge_color: EdgeColorMode
    visible: bool


@runtime_checkable
class DrawingSurfaceProtocol(Protocol):
    """
    Axes-like host a chart draws on.

    A surface is borrowed by exactly one chart at a time. It may be torn
    down and replaced by its host; the chart then rebuilds its primitive on
    the replacement.

    Required Methods
    ----------------
    create_path(**props) -> PathPrimitiveProtocol
        Create (or, under 'replacechildren', replace) a path primitive
    clear()
        Remove all primitives
    set_title(text, subtitle=None, **style) -> (title, subtitle)
        Set title region text, returning what is displayed
    set_subtitle(text, **style) -> subtitle
        Set subtitle text only
    draw()
        Flush primitives and axes state to the host output
    """

    # Color axis (live, writable) -------------------------------------------

    colormap: np.ndarray
    colormap_mode: ColorLimitsMode
    color_limits: ColorLimits
    color_limits_mode: ColorLimitsMode

    # Axes layout ------------------------------------------------------------

    next_plot: NextPlot
    aspect_ratio_locked: bool
    ticks_visible: bool
    box: bool
    tight_limits: bool

    # Colorbar ---------------------------------------------------------------

    colorbar_visible: bool
    colorbar_label: str

    # Primitives and text ----------------------------------------------------

    def create_path(self, **props: Any) -> PathPrimitiveProtocol:
        """Create a path primitive with the given properties."""
        ...

    def clear(self) -> None:
        """Remove every primitive from the surface."""
        ...

    def set_title(
        self, text: str, subtitle: Optional[str] = None, **style: Any
    ) -> Tuple[str, str]:
        """Set the title (and optionally subtitle); return both strings."""
        ...

    def set_subtitle(self, text: str, **style: Any) -> str:
        """Set the subtitle; return it."""
        ...

    def draw(self) -> Any:
        """Flush primitives and axes state to the host output."""
        ...


__all__ = [
    "PathPrimitiveProtocol",
    "DrawingSurfaceProtocol",
]
