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
Trajectory Chart - Multi-Color 2D Path Visualization

A chart that draws a 2D trajectory as one poly-line whose color varies
along its length, either by point index or by a supplied color series.

Key Features
------------
- Index coloring (x, y) or data coloring (x, y, c)
- Immediate re-render on every property change, batched on request
- Non-fatal render: inconsistent data hides the line and warns
- Color axis (colormap, limits, limits mode) forwarded to the surface
- Colormap/limits/colorbar carried across surface rebuilds

Main Class
----------
TrajectoryChart : Multi-color trajectory chart
    from_xy() : Build from coordinates, colored by index
    from_xyc() : Build from coordinates and color data
    from_options() : Build from named options only
    title(), subtitle() : Set title region text

color_trajectory_plot : Positional-argument convenience constructor

Usage
-----
>>> from colortraj import TrajectoryChart, random_walk
>>>
>>> x, y, c = random_walk(seed=1)
>>> chart = TrajectoryChart.from_xyc(
...     x, y, c,
...     title_text="Random Walk",
...     colorbar_visible=True,
...     colorbar_label="Proximity",
... )
>>> chart.color_limits = (0, 1)
>>> chart.show()
>>>
>>> # Positional form
>>> chart = color_trajectory_plot(x, y, line_width=1.5)
"""

import warnings
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import plotly.graph_objects as go

from colortraj.errors import DataLengthMismatchWarning, InvalidSyntaxError
from colortraj.types.chart import (
    AxisStateSnapshot,
    BuildData,
    ChartDefaults,
    ColorLimits,
    ColorLimitsMode,
    NoData,
    XYCData,
    XYData,
    build_data_fields,
)
from colortraj.types.protocols import DrawingSurfaceProtocol, PathPrimitiveProtocol
from colortraj.validation import (
    as_vector,
    is_numeric,
    validate_colormap,
    validate_flag,
    validate_limits,
    validate_line_width,
    validate_mode,
    validate_text,
)
from colortraj.visualization.chart_container import ChartContainer, ColorbarMixin
from colortraj.visualization.surface import PlotlySurface

DEFAULT_LINE_WIDTH = 0.5

# Named options, in the order they are documented; each maps to its validator
CHART_OPTIONS: Dict[str, Callable[[Any], Any]] = {
    "x_data": partial(as_vector, name="x_data"),
    "y_data": partial(as_vector, name="y_data"),
    "color_data": partial(as_vector, name="color_data"),
    "title_text": partial(validate_text, name="title_text"),
    "subtitle_text": partial(validate_text, name="subtitle_text"),
    "line_width": validate_line_width,
    "colorbar_label": partial(validate_text, name="colorbar_label"),
    "colormap": validate_colormap,
    "color_limits": validate_limits,
    "color_limits_mode": partial(validate_mode, name="color_limits_mode"),
    "colorbar_visible": partial(validate_flag, name="colorbar_visible"),
}


def validate_options(options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate named chart options without touching any chart.

    Returns
    -------
    Dict[str, Any]
        Normalized values, in the order given

    Raises
    ------
    TypeError
        If an option name is unknown
    ChartValidationError, ValueError
        If a value is invalid
    """
    unknown = [name for name in options if name not in CHART_OPTIONS]
    if unknown:
        raise TypeError(
            f"Unknown option(s): {', '.join(unknown)}. "
            f"Available: {', '.join(CHART_OPTIONS)}"
        )
    return {name: CHART_OPTIONS[name](value) for name, value in options.items()}


class TrajectoryChart(ColorbarMixin, ChartContainer):
    """
    Multi-color trajectory chart.

    Parameters
    ----------
    data : Optional[BuildData]
        ``XYData``, ``XYCData`` or ``NoData`` (default)
    parent : Optional[DrawingSurfaceProtocol or go.Figure]
        Surface to draw on; a bare Plotly figure is wrapped in a
        PlotlySurface. A new surface is created when None.
    defaults : Optional[ChartDefaults]
        Configuration for surfaces the chart creates
    **options
        Any chart field by name (x_data, y_data, color_data, title_text,
        subtitle_text, line_width, colorbar_label, colormap, color_limits,
        color_limits_mode, colorbar_visible); applied after ``data``

    Raises
    ------
    DataLengthMismatchError
        If the build data lengths disagree (raised by XYData/XYCData)
    TypeError
        If an option name is unknown
    ChartValidationError, ValueError
        If an option value is invalid

    Notes
    -----
    A render whose data lengths disagree hides the trajectory and emits a
    ``DataLengthMismatchWarning`` instead of raising. Every such warning is
    issued from inside the render machinery, so under Python's default
    warning filter a given message (which names both lengths) is shown once
    per process. Use ``warnings.simplefilter("always",
    DataLengthMismatchWarning)`` to see every occurrence, or
    ``batch_update()`` / ``set_data()`` to change lengths without an
    intermediate render.

    Examples
    --------
    >>> t = np.linspace(0, 4 * np.pi, 500)
    >>> chart = TrajectoryChart(XYData(t * np.cos(t), t * np.sin(t)), line_width=2)
    >>> chart.figure.write_html("spiral.html")
    """

    def __init__(
        self,
        data: Optional[BuildData] = None,
        parent: Any = None,
        defaults: Optional[ChartDefaults] = None,
        **options: Any,
    ):
        fields = build_data_fields(data if data is not None else NoData())
        fields.update(validate_options(options))
        surface = as_surface(parent, defaults)

        super().__init__(parent=surface, defaults=defaults)

        self._x_data = np.empty(0)
        self._y_data = np.empty(0)
        self._color_data = np.empty(0)
        self._title_text = ""
        self._subtitle_text = ""
        self._line_width = DEFAULT_LINE_WIDTH
        self._colorbar_label = ""
        self._trajectory_line: Optional[PathPrimitiveProtocol] = None

        with self.batch_update():
            for name, value in fields.items():
                setattr(self, name, value)
        if not self.is_attached:
            self.render()

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def from_xy(cls, x, y, parent: Any = None, defaults: Optional[ChartDefaults] = None, **options):
        """Chart of (x, y) colored by point index."""
        return cls(XYData(x, y), parent=parent, defaults=defaults, **options)

    @classmethod
    def from_xyc(cls, x, y, c, parent: Any = None, defaults: Optional[ChartDefaults] = None, **options):
        """Chart of (x, y) colored by c."""
        return cls(XYCData(x, y, c), parent=parent, defaults=defaults, **options)

    @classmethod
    def from_options(cls, parent: Any = None, defaults: Optional[ChartDefaults] = None, **options):
        """Chart built from named options only."""
        return cls(NoData(), parent=parent, defaults=defaults, **options)

    # =========================================================================
    # Data Properties
    # =========================================================================

    @property
    def x_data(self) -> np.ndarray:
        """x-coordinates of the trajectory."""
        return self._x_data

    @x_data.setter
    def x_data(self, value):
        self._x_data = as_vector(value, "x_data")
        self.render()

    @property
    def y_data(self) -> np.ndarray:
        """y-coordinates of the trajectory."""
        return self._y_data

    @y_data.setter
    def y_data(self, value):
        self._y_data = as_vector(value, "y_data")
        self.render()

    @property
    def color_data(self) -> np.ndarray:
        """Values that color the line; empty means color by index."""
        return self._color_data

    @color_data.setter
    def color_data(self, value):
        self._color_data = as_vector(value, "color_data")
        self.render()

    def set_data(self, x, y, c=None) -> None:
        """Replace x, y and color data with a single render."""
        with self.batch_update():
            self.x_data = x
            self.y_data = y
            self.color_data = c

    # =========================================================================
    # Display Properties
    # =========================================================================

    @property
    def title_text(self) -> str:
        return self._title_text

    @title_text.setter
    def title_text(self, value):
        self._title_text = validate_text(value, "title_text")
        self.render()

    @property
    def subtitle_text(self) -> str:
        return self._subtitle_text

    @subtitle_text.setter
    def subtitle_text(self, value):
        self._subtitle_text = validate_text(value, "subtitle_text")
        self.render()

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value):
        self._line_width = validate_line_width(value)
        self.render()

    @property
    def colorbar_label(self) -> str:
        return self._colorbar_label

    @colorbar_label.setter
    def colorbar_label(self, value):
        self._colorbar_label = validate_text(value, "colorbar_label")
        self.render()

    # =========================================================================
    # Color Axis (forwarded to the surface, never cached)
    # =========================================================================

    @property
    def colormap(self) -> np.ndarray:
        """Colormap of the attached surface, shape (N, 3)."""
        return self.surface.colormap

    @colormap.setter
    def colormap(self, value):
        self.surface.colormap = validate_colormap(value)
        self.render()

    @property
    def color_limits(self) -> ColorLimits:
        """Color limits of the attached surface."""
        return validate_limits(self.surface.color_limits)

    @color_limits.setter
    def color_limits(self, value):
        self.surface.color_limits = validate_limits(value)
        self.render()

    @property
    def color_limits_mode(self) -> ColorLimitsMode:
        """Color limits mode of the attached surface, 'auto' or 'manual'."""
        return validate_mode(self.surface.color_limits_mode, "color_limits_mode")

    @color_limits_mode.setter
    def color_limits_mode(self, value):
        self.surface.color_limits_mode = validate_mode(value, "color_limits_mode")
        self.render()

    # =========================================================================
    # Surface Hooks
    # =========================================================================

    def setup(self) -> None:
        """Configure the axes and create the trajectory path."""
        surface = self.surface
        surface.next_plot = "replacechildren"
        surface.aspect_ratio_locked = True
        surface.box = True
        surface.ticks_visible = False
        surface.tight_limits = True

        self._trajectory_line = surface.create_path(face_color="none", edge_color="interp")

        # Restore any saved axes state
        self.consume_snapshot()

    def update(self) -> None:
        """Push data and display settings into the trajectory path."""
        line = self._trajectory_line

        show_chart = self._verify_data_properties()
        line.visible = show_chart
        if not show_chart:
            return

        # NaN terminator ends the path without closing it
        n = self._x_data.size
        line.vertices = np.vstack(
            [np.column_stack([self._x_data, self._y_data]), [np.nan, np.nan]]
        )
        line.faces = np.arange(n + 1)

        color_data = self._color_data
        if color_data.size == 0:
            color_data = np.arange(1, n + 1, dtype=float)
        line.face_vertex_cdata = np.append(color_data, np.nan)

        line.line_width = self._line_width

        self.surface.set_title(self._title_text, self._subtitle_text)
        if self.surface.colorbar_visible:
            self.surface.colorbar_label = self._colorbar_label

    def _verify_data_properties(self) -> bool:
        n = self._x_data.size
        if self._y_data.size != n:
            warnings.warn(
                f"y_data must be the same length as x_data "
                f"(got {self._y_data.size} and {n}); trajectory hidden.",
                DataLengthMismatchWarning,
                stacklevel=2,
            )
            return False

        if self._color_data.size not in (0, n):
            warnings.warn(
                f"color_data must be empty or the same length as x_data "
                f"(got {self._color_data.size} and {n}); trajectory hidden.",
                DataLengthMismatchWarning,
                stacklevel=2,
            )
            return False

        return True

    def capture_axis_state(self) -> AxisStateSnapshot:
        """
        Capture color-axis state from the attached surface.

        Colormap and limits are captured only when set manually, so a
        rebuilt surface keeps its own automatic defaults; colorbar
        visibility is always captured.
        """
        surface = self.surface
        colormap = surface.colormap if surface.colormap_mode == "manual" else None
        limits = surface.color_limits if surface.color_limits_mode == "manual" else None
        return AxisStateSnapshot.capture(
            colormap=colormap,
            color_limits=limits,
            colorbar_visible=bool(surface.colorbar_visible),
        )

    def load_axis_state(self, snapshot: AxisStateSnapshot) -> None:
        """Reapply captured colormap, limits and colorbar to the surface."""
        surface = self.surface

        colormap = snapshot.colormap_array()
        if colormap is not None:
            surface.colormap = colormap

        if snapshot.color_limits is not None:
            surface.color_limits = snapshot.color_limits

        if snapshot.colorbar_visible:
            surface.colorbar_visible = True

    # =========================================================================
    # Title Region
    # =========================================================================

    def title(self, text, subtitle: Optional[str] = None, **style: Any) -> None:
        """
        Set the title (and optionally subtitle) through the surface.

        The displayed strings are mirrored into ``title_text`` and
        ``subtitle_text``.

        Parameters
        ----------
        text : str or Sequence[str]
            Title text
        subtitle : Optional[str]
            Subtitle text; None keeps the current subtitle
        **style
            Title font properties passed to the surface (size, color, family)
        """
        title_text, subtitle_text = self.surface.set_title(
            validate_text(text, "title"),
            None if subtitle is None else validate_text(subtitle, "subtitle"),
            **style,
        )
        with self.batch_update():
            self.title_text = title_text
            self.subtitle_text = subtitle_text

    def subtitle(self, text, **style: Any) -> None:
        """Set the subtitle through the surface and mirror it into ``subtitle_text``."""
        self.subtitle_text = self.surface.set_subtitle(validate_text(text, "subtitle"), **style)

    # =========================================================================
    # Output
    # =========================================================================

    @property
    def figure(self) -> go.Figure:
        """Draw the surface and return its Plotly figure."""
        return self.surface.draw()

    def show(self, **kwargs: Any) -> None:
        """Display the chart (``plotly.graph_objects.Figure.show``)."""
        self.figure.show(**kwargs)

    def write_html(self, path, **kwargs: Any) -> None:
        """Write the chart to an HTML file."""
        self.figure.write_html(path, **kwargs)

    # =========================================================================
    # Display
    # =========================================================================

    def property_groups(self) -> List[str]:
        """
        Names of the fields shown in the chart summary.

        Non-empty title and subtitle first, then either the coordinate data
        or, when color data is present, the color fields.
        """
        names: List[str] = []
        if self._title_text:
            names.append("title_text")
        if self._subtitle_text:
            names.append("subtitle_text")

        if self._color_data.size == 0:
            names.extend(["x_data", "y_data"])
        else:
            names.extend(["color_data", "color_limits", "colorbar_label"])
        return names

    def __repr__(self) -> str:
        names = self.property_groups()
        width = max(len(name) for name in names)
        lines = [f"{type(self).__name__} with properties:", ""]
        for name in names:
            lines.append(f"    {name:>{width}}: {_format_value(getattr(self, name))}")
        return "\n".join(lines)


# ============================================================================
# Positional Construction
# ============================================================================


def resolve_build_args(args: Sequence[Any]) -> Tuple[Any, BuildData]:
    """
    Resolve positional arguments into (parent, build data).

    Accepted shapes: ``()``, ``(x, y)``, ``(x, y, c)``, each optionally
    preceded by a parent surface or Plotly figure.

    Raises
    ------
    InvalidSyntaxError
        If the remaining arguments are not exactly x, y or x, y, c
    DataLengthMismatchError
        If the data lengths disagree

    Examples
    --------
    >>> parent, data = resolve_build_args(([0, 1], [1, 0]))
    >>> type(data).__name__
    'XYData'
    """
    args = list(args)
    parent = None
    if args and _is_surface(args[0]):
        parent = args.pop(0)

    if not args:
        return parent, NoData()

    if not all(is_numeric(arg) for arg in args):
        raise InvalidSyntaxError(
            "Positional arguments must be numeric x, y or x, y, c; "
            "pass everything else by name."
        )
    if len(args) == 2:
        return parent, XYData(*args)
    if len(args) == 3:
        return parent, XYCData(*args)
    raise InvalidSyntaxError("Specify both x and y coordinates.")


def color_trajectory_plot(*args: Any, **options: Any) -> TrajectoryChart:
    """
    Create a multi-color trajectory chart from positional arguments.

    Call forms::

        color_trajectory_plot(x, y)            # colored by index
        color_trajectory_plot(x, y, c)         # colored by c
        color_trajectory_plot(**options)       # named options only
        color_trajectory_plot(parent, ...)     # draw on an existing surface

    Named options (see ``TrajectoryChart``) are applied after positional data.

    Returns
    -------
    TrajectoryChart
        The live chart; assign its fields to update it
    """
    parent, data = resolve_build_args(args)
    if parent is not None and "parent" in options:
        raise InvalidSyntaxError("Parent given both positionally and by name.")
    if parent is not None:
        options["parent"] = parent
    return TrajectoryChart(data, **options)


def as_surface(parent: Any, defaults: Optional[ChartDefaults] = None) -> Optional[DrawingSurfaceProtocol]:
    """Normalize a parent: wrap Plotly figures, pass surfaces through."""
    if parent is None:
        return None
    if isinstance(parent, go.Figure):
        return PlotlySurface(figure=parent, defaults=defaults)
    if isinstance(parent, DrawingSurfaceProtocol):
        return parent
    raise TypeError(
        f"parent must be a drawing surface or plotly Figure, got {type(parent).__name__}"
    )


def _is_surface(value: Any) -> bool:
    return isinstance(value, go.Figure) or isinstance(value, DrawingSurfaceProtocol)


def _format_value(value: Any) -> str:
    if isinstance(value, np.ndarray):
        return np.array2string(value, threshold=8, edgeitems=3, precision=4)
    if isinstance(value, tuple):
        return "(" + ", ".join(f"{v:g}" for v in value) + ")"
    return repr(value)


__all__ = [
    "CHART_OPTIONS",
    "DEFAULT_LINE_WIDTH",
    "TrajectoryChart",
    "validate_options",
    "resolve_build_args",
    "color_trajectory_plot",
    "as_surface",
]
