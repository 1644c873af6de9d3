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
Plotly Drawing Surface

An axes-like drawing surface on top of a ``plotly.graph_objects.Figure``.
The trajectory chart borrows one of these and drives it through
``DrawingSurfaceProtocol``; the surface owns the color axis, the title
region, the colorbar and the path primitives, and turns them into Plotly
traces and layout on ``draw()``.

Key Features
------------
- Path primitives with per-vertex color data and interpolated edge color
- Color axis with auto/manual colormap and color limits
- 1:1 aspect lock, hidden ticks, box border and tight axis limits
- Title and subtitle region, optional colorbar with a label

Rendering
---------
Plotly lines carry a single color, so an interpolated edge is drawn by
coloring every segment with the colormap row of its mean vertex value and
grouping all segments that share a row into one NaN-separated line trace.
A transparent marker trace bound to ``layout.coloraxis`` carries the
colorbar and the hover values.

Usage
-----
>>> surface = PlotlySurface()
>>> path = surface.create_path(face_color="none", edge_color="interp")
>>> path.vertices = np.array([[0, 0], [1, 1], [2, 0], [np.nan, np.nan]])
>>> path.faces = np.arange(4)
>>> path.face_vertex_cdata = np.array([1.0, 2.0, 3.0, np.nan])
>>> fig = surface.draw()
>>> fig.show()
"""

from typing import Any, Dict, List, Optional, Tuple, get_args

import numpy as np
import plotly.graph_objects as go

from colortraj.types.chart import (
    ChartDefaults,
    ColorLimits,
    ColorLimitsMode,
    EdgeColorMode,
    NextPlot,
)
from colortraj.validation import (
    validate_colormap,
    validate_flag,
    validate_limits,
    validate_line_width,
    validate_mode,
    validate_text,
)
from colortraj.visualization.themes import (
    ColorSchemes,
    PlotThemes,
    colormap_rows,
    colormap_to_colorscale,
    rgb_string,
)

DEFAULT_COLOR_LIMITS = (0.0, 1.0)
EDGE_COLOR_MODES = get_args(EdgeColorMode)
NEXT_PLOT_MODES = get_args(NextPlot)


# ============================================================================
# Path Primitive
# ============================================================================


class PathPrimitive:
    """
    A patch-like path drawn by a PlotlySurface.

    Vertices are visited in ``faces`` order and the path closes back to the
    first visited vertex, like a polygon outline. A NaN vertex breaks the
    path: every segment touching it is skipped, so a trailing NaN vertex
    ends an open poly-line without closing it.

    Attributes
    ----------
    vertices : np.ndarray
        Shape (M, 2)
    faces : np.ndarray
        Vertex indices, shape (K,)
    face_vertex_cdata : np.ndarray
        Per-vertex color values, shape (M,)
    line_width : float
        Edge width in pixels
    face_color : str
        'none' or a Plotly color used to fill the outline
    edge_color : EdgeColorMode
        'interp' or 'flat'
    visible : bool
        Drawn only when True
    """

    def __init__(self, **props: Any):
        self.vertices = np.empty((0, 2))
        self.faces = np.empty(0, dtype=int)
        self.face_vertex_cdata = np.empty(0)
        self.line_width = 0.5
        self.face_color = "none"
        self.edge_color = "interp"
        self.visible = True
        self.set(**props)

    def set(self, **props: Any) -> "PathPrimitive":
        """Assign several properties at once, rejecting unknown names."""
        for name, value in props.items():
            if name not in _PATH_PROPERTIES:
                raise TypeError(f"Unknown path property '{name}'")
            setattr(self, name, value)
        return self

    @property
    def edge_color(self) -> EdgeColorMode:
        return self._edge_color

    @edge_color.setter
    def edge_color(self, value: EdgeColorMode):
        if value not in EDGE_COLOR_MODES:
            raise ValueError(f"edge_color must be one of {EDGE_COLOR_MODES}, got {value!r}")
        self._edge_color = value

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value: float):
        self._line_width = validate_line_width(value)

    def segments(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Drawable segments of the path.

        Returns
        -------
        starts, ends : np.ndarray
            Segment endpoints, shape (S, 2)
        values : np.ndarray
            Color value of each segment, shape (S,)
        """
        vertices = np.asarray(self.vertices, dtype=float).reshape(-1, 2)
        faces = np.asarray(self.faces, dtype=int).ravel()
        cdata = np.asarray(self.face_vertex_cdata, dtype=float).ravel()

        if faces.size < 2 or vertices.size == 0:
            empty = np.empty((0, 2))
            return empty, empty, np.empty(0)

        if cdata.size != len(vertices):
            cdata = np.full(len(vertices), np.nan)

        # Close the outline; NaN vertices drop the closing segment
        order = np.append(faces, faces[0])
        points = vertices[order]
        point_values = cdata[order]

        starts, ends = points[:-1], points[1:]
        if self.edge_color == "interp":
            values = 0.5 * (point_values[:-1] + point_values[1:])
        else:
            values = point_values[:-1]

        keep = np.isfinite(starts).all(axis=1) & np.isfinite(ends).all(axis=1) & np.isfinite(values)
        return starts[keep], ends[keep], values[keep]


_PATH_PROPERTIES = frozenset(
    [
        "vertices",
        "faces",
        "face_vertex_cdata",
        "line_width",
        "face_color",
        "edge_color",
        "visible",
    ]
)


# ============================================================================
# Plotly Surface
# ============================================================================


class PlotlySurface:
    """
    Drawing surface backed by a Plotly figure.

    Parameters
    ----------
    figure : Optional[go.Figure]
        Figure to draw into; a new one is created when None
    defaults : Optional[ChartDefaults]
        Default colormap, colorbar visibility, theme and size

    Examples
    --------
    >>> surface = PlotlySurface(defaults=ChartDefaults(colormap="plasma"))
    >>> surface.color_limits_mode
    'auto'
    >>> surface.color_limits = (0, 10)
    >>> surface.color_limits_mode
    'manual'
    """

    def __init__(
        self,
        figure: Optional[go.Figure] = None,
        defaults: Optional[ChartDefaults] = None,
    ):
        self.figure = figure if figure is not None else go.Figure()
        self.defaults = defaults if defaults is not None else ChartDefaults()

        self._default_colormap = ColorSchemes.get_colormap(
            self.defaults.colormap, n_colors=self.defaults.colormap_size
        )
        self._colormap = self._default_colormap.copy()
        self._colormap_mode = "auto"
        self._color_limits = DEFAULT_COLOR_LIMITS
        self._color_limits_mode = "auto"

        self._colorbar_visible = bool(self.defaults.colorbar_visible)
        self._colorbar_label = ""
        self._title = ""
        self._subtitle = ""
        self._title_style: Dict[str, Any] = {}
        self._subtitle_style: Dict[str, Any] = {}

        self._next_plot = "add"
        self.aspect_ratio_locked = False
        self.ticks_visible = True
        self.box = False
        self.tight_limits = False

        self._primitives: List[PathPrimitive] = []

    # =========================================================================
    # Primitives
    # =========================================================================

    @property
    def primitives(self) -> Tuple[PathPrimitive, ...]:
        """Primitives currently on the surface."""
        return tuple(self._primitives)

    def create_path(self, **props: Any) -> PathPrimitive:
        """
        Create a path primitive.

        Under ``next_plot='replacechildren'`` existing primitives are removed
        first.
        """
        path = PathPrimitive(**props)
        if self._next_plot == "replacechildren":
            self._primitives.clear()
        self._primitives.append(path)
        return path

    def clear(self) -> None:
        """Remove all primitives."""
        self._primitives.clear()

    # =========================================================================
    # Axes Layout
    # =========================================================================

    @property
    def next_plot(self) -> NextPlot:
        return self._next_plot

    @next_plot.setter
    def next_plot(self, value: NextPlot):
        if value not in NEXT_PLOT_MODES:
            raise ValueError(f"next_plot must be one of {NEXT_PLOT_MODES}, got {value!r}")
        self._next_plot = value

    # =========================================================================
    # Color Axis
    # =========================================================================

    @property
    def colormap(self) -> np.ndarray:
        """Colormap rows, shape (N, 3). Assigning switches colormap_mode to 'manual'."""
        return self._colormap.copy()

    @colormap.setter
    def colormap(self, value):
        self._colormap = validate_colormap(value)
        self._colormap_mode = "manual"

    @property
    def colormap_mode(self) -> ColorLimitsMode:
        """'auto' restores the default colormap."""
        return self._colormap_mode

    @colormap_mode.setter
    def colormap_mode(self, value: ColorLimitsMode):
        self._colormap_mode = validate_mode(value, "colormap_mode")
        if self._colormap_mode == "auto":
            self._colormap = self._default_colormap.copy()

    @property
    def color_limits(self) -> ColorLimits:
        """
        Color limits (lo, hi).

        In 'auto' mode these follow the finite range of the visible color
        data. Assigning switches color_limits_mode to 'manual'.
        """
        if self._color_limits_mode == "auto":
            return self._auto_color_limits()
        return self._color_limits

    @color_limits.setter
    def color_limits(self, value):
        self._color_limits = validate_limits(value)
        self._color_limits_mode = "manual"

    @property
    def color_limits_mode(self) -> ColorLimitsMode:
        return self._color_limits_mode

    @color_limits_mode.setter
    def color_limits_mode(self, value: ColorLimitsMode):
        mode = validate_mode(value, "color_limits_mode")
        if mode == "manual" and self._color_limits_mode == "auto":
            # Freeze the limits currently in effect
            self._color_limits = self._auto_color_limits()
        self._color_limits_mode = mode

    def _auto_color_limits(self) -> ColorLimits:
        values = [
            np.asarray(p.face_vertex_cdata, dtype=float).ravel()
            for p in self._primitives
            if p.visible
        ]
        values = np.concatenate(values) if values else np.empty(0)
        values = values[np.isfinite(values)]

        if values.size == 0:
            return DEFAULT_COLOR_LIMITS
        lo, hi = float(values.min()), float(values.max())
        if hi <= lo:
            return (lo - 0.5, lo + 0.5)
        return (lo, hi)

    # =========================================================================
    # Colorbar
    # =========================================================================

    @property
    def colorbar_visible(self) -> bool:
        return self._colorbar_visible

    @colorbar_visible.setter
    def colorbar_visible(self, value: bool):
        self._colorbar_visible = validate_flag(value, "colorbar_visible")

    @property
    def colorbar_label(self) -> str:
        return self._colorbar_label

    @colorbar_label.setter
    def colorbar_label(self, value: str):
        self._colorbar_label = validate_text(value, "colorbar_label")

    # =========================================================================
    # Title Region
    # =========================================================================

    @property
    def title_text(self) -> str:
        return self._title

    @property
    def subtitle_text(self) -> str:
        return self._subtitle

    def set_title(
        self, text: str, subtitle: Optional[str] = None, **style: Any
    ) -> Tuple[str, str]:
        """
        Set the title, and the subtitle when given.

        Parameters
        ----------
        text : str
            Title text ('\\n' separates lines)
        subtitle : Optional[str]
            Subtitle text; None leaves the subtitle unchanged
        **style
            Plotly title font properties (size, color, family)

        Returns
        -------
        Tuple[str, str]
            (title, subtitle) now displayed
        """
        self._title = validate_text(text, "title")
        if subtitle is not None:
            self._subtitle = validate_text(subtitle, "subtitle")
        self._title_style.update(style)
        return self._title, self._subtitle

    def set_subtitle(self, text: str, **style: Any) -> str:
        """Set the subtitle; returns the subtitle now displayed."""
        self._subtitle = validate_text(text, "subtitle")
        self._subtitle_style.update(style)
        return self._subtitle

    # =========================================================================
    # Rendering
    # =========================================================================

    def draw(self) -> go.Figure:
        """
        Write the current primitives and axes state into the figure.

        Returns
        -------
        go.Figure
            The surface figure (same object on every call)
        """
        fig = self.figure
        limits = self.color_limits

        traces: List[go.Scatter] = []
        for primitive in self._primitives:
            if primitive.visible:
                traces.extend(self._path_traces(primitive, limits))

        fig.data = []
        if traces:
            fig.add_traces(traces)

        PlotThemes.apply_theme(fig, theme=self.defaults.theme)
        fig.update_layout(
            title=dict(text=self._title_markup(), font=self._title_style or None),
            coloraxis=dict(
                colorscale=colormap_to_colorscale(self._colormap),
                cmin=limits[0],
                cmax=limits[1],
                showscale=self._colorbar_visible,
                colorbar=dict(title=dict(text=_markup(self._colorbar_label))),
            ),
            showlegend=False,
        )
        if self.defaults.width is not None:
            fig.update_layout(width=self.defaults.width)
        if self.defaults.height is not None:
            fig.update_layout(height=self.defaults.height)

        self._layout_axes(fig)
        return fig

    def _path_traces(self, primitive: PathPrimitive, limits: ColorLimits) -> List[go.Scatter]:
        traces: List[go.Scatter] = []
        vertices = np.asarray(primitive.vertices, dtype=float).reshape(-1, 2)

        if primitive.face_color != "none" and vertices.size:
            outline = vertices[np.asarray(primitive.faces, dtype=int).ravel()]
            traces.append(
                go.Scatter(
                    x=outline[:, 0],
                    y=outline[:, 1],
                    mode="lines",
                    fill="toself",
                    fillcolor=primitive.face_color,
                    line=dict(width=0),
                    hoverinfo="skip",
                )
            )

        starts, ends, values = primitive.segments()
        if values.size == 0:
            return traces

        rows = colormap_rows(values, limits, len(self._colormap))
        for row in np.unique(rows):
            selected = rows == row
            gaps = np.full(selected.sum(), np.nan)
            xs = np.column_stack([starts[selected, 0], ends[selected, 0], gaps]).ravel()
            ys = np.column_stack([starts[selected, 1], ends[selected, 1], gaps]).ravel()
            traces.append(
                go.Scatter(
                    x=xs,
                    y=ys,
                    mode="lines",
                    line=dict(color=rgb_string(self._colormap[row]), width=primitive.line_width),
                    connectgaps=False,
                    hoverinfo="skip",
                )
            )

        # Colorbar carrier and hover values
        cdata = np.asarray(primitive.face_vertex_cdata, dtype=float).ravel()
        if cdata.size == len(vertices):
            finite = np.isfinite(vertices).all(axis=1) & np.isfinite(cdata)
            traces.append(
                go.Scatter(
                    x=vertices[finite, 0],
                    y=vertices[finite, 1],
                    mode="markers",
                    marker=dict(
                        color=cdata[finite],
                        coloraxis="coloraxis",
                        size=max(2.0, 2 * primitive.line_width),
                        opacity=0,
                    ),
                    hovertemplate="x=%{x}<br>y=%{y}<br>c=%{marker.color}<extra></extra>",
                )
            )
        return traces

    def _layout_axes(self, fig: go.Figure) -> None:
        axis_style = dict(
            showticklabels=self.ticks_visible,
            ticks="outside" if self.ticks_visible else "",
            showgrid=self.ticks_visible,
            zeroline=False,
            showline=self.box,
            mirror=self.box,
            linecolor=PlotThemes.get_theme(self.defaults.theme).get("box_color", "#444444"),
        )
        fig.update_xaxes(**axis_style)
        fig.update_yaxes(**axis_style)

        if self.aspect_ratio_locked:
            # Equal aspect ratio
            fig.update_yaxes(scaleanchor="x", scaleratio=1)
        else:
            fig.layout.yaxis.scaleanchor = None

        x_range, y_range = self._data_ranges() if self.tight_limits else (None, None)
        for axis, axis_range in ((fig.layout.xaxis, x_range), (fig.layout.yaxis, y_range)):
            if axis_range is None:
                axis.range = None
                axis.constrain = None
            else:
                axis.range = axis_range
                axis.constrain = "domain"

    def _data_ranges(self) -> Tuple[Optional[List[float]], Optional[List[float]]]:
        points = [
            np.asarray(p.vertices, dtype=float).reshape(-1, 2)
            for p in self._primitives
            if p.visible
        ]
        points = np.concatenate(points) if points else np.empty((0, 2))
        points = points[np.isfinite(points).all(axis=1)]
        if points.size == 0:
            return None, None
        return _tight_range(points[:, 0]), _tight_range(points[:, 1])

    def _title_markup(self) -> str:
        text = _markup(self._title)
        if self._subtitle:
            text = f"{text}<br>{_styled(_markup(self._subtitle), self._subtitle_style)}"
        return text


def _markup(text: str) -> str:
    """Plotly text with '\\n' line breaks converted to '<br>'."""
    return text.replace("\n", "<br>")


def _styled(text: str, style: Dict[str, Any]) -> str:
    """Wrap subtitle text in <sup>, or in a styled <span> when style is given."""
    if not style:
        return f"<sup>{text}</sup>"
    css = []
    if "size" in style:
        css.append(f"font-size:{style['size']}px")
    if "color" in style:
        css.append(f"color:{style['color']}")
    if "family" in style:
        css.append(f"font-family:{style['family']}")
    return f"<span style='{';'.join(css)}'>{text}</span>"


def _tight_range(values: np.ndarray) -> List[float]:
    lo, hi = float(values.min()), float(values.max())
    if hi <= lo:
        return [lo - 0.5, lo + 0.5]
    return [lo, hi]


__all__ = [
    "PathPrimitive",
    "PlotlySurface",
    "DEFAULT_COLOR_LIMITS",
]
