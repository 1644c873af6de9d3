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
Plotting Themes and Colormaps

Centralized colormaps and styling configuration for trajectory charts.

Key Features
------------
- Continuous colormaps as (N, 3) RGB arrays in [0, 1], built from the
  project palettes or any Plotly named colorscale
- Conversion of colormaps to stepped Plotly colorscales
- Mapping of scalar data onto colormap rows through color limits
- Complete plot themes: Default, Publication, Dark, Presentation

Main Classes
------------
ColorSchemes : Palette definitions and colormap construction
    SEQUENTIAL_BLUE, SEQUENTIAL_GREEN, SEQUENTIAL_ORANGE : sequential anchors
    DIVERGING_RED_BLUE, DIVERGING_PURPLE_GREEN : diverging anchors
    get_colormap() : Resolve a name to an (N, 3) colormap

PlotThemes : Complete theme configurations
    DEFAULT, PUBLICATION, DARK, PRESENTATION

Usage
-----
>>> from colortraj.visualization.themes import ColorSchemes, PlotThemes
>>>
>>> cmap = ColorSchemes.get_colormap('viridis', n_colors=64)
>>> cmap.shape
(64, 3)
>>> colorscale = colormap_to_colorscale(cmap)
>>>
>>> fig = PlotThemes.apply_theme(fig, theme='publication')
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
import plotly.colors
import plotly.graph_objects as go


class ColorSchemes:
    """
    Palettes and colormap construction.

    The palettes below are colormap anchors: ``get_colormap`` spaces them
    evenly on [0, 1] and interpolates as many rows as requested. Any other
    name is looked up among Plotly's named colorscales (sequential,
    diverging, cyclical; append '_r' to reverse).

    Examples
    --------
    >>> cmap = ColorSchemes.get_colormap('sequential_blue', n_colors=9)
    >>> rgb_string(cmap[0])
    'rgb(247,251,255)'
    >>>
    >>> cmap = ColorSchemes.get_colormap('Plasma')
    >>> cmap.shape
    (256, 3)
    """

    # Sequential color schemes (for continuous/ordered data)
    SEQUENTIAL_BLUE = [
        "#f7fbff",  # Lightest
        "#deebf7",
        "#c6dbef",
        "#9ecae1",
        "#6baed6",
        "#4292c6",
        "#2171b5",
        "#08519c",
        "#08306b",  # Darkest
    ]

    SEQUENTIAL_GREEN = [
        "#f7fcf5",
        "#e5f5e0",
        "#c7e9c0",
        "#a1d99b",
        "#74c476",
        "#41ab5d",
        "#238b45",
        "#006d2c",
        "#00441b",
    ]

    SEQUENTIAL_ORANGE = [
        "#fff5eb",
        "#fee6ce",
        "#fdd0a2",
        "#fdae6b",
        "#fd8d3c",
        "#f16913",
        "#d94801",
        "#a63603",
        "#7f2704",
    ]

    # Diverging color schemes (for data with meaningful center)
    DIVERGING_RED_BLUE = [
        "#b2182b",  # Dark red
        "#d6604d",
        "#f4a582",
        "#fddbc7",
        "#f7f7f7",  # White center
        "#d1e5f0",
        "#92c5de",
        "#4393c3",
        "#2166ac",  # Dark blue
    ]

    DIVERGING_PURPLE_GREEN = [
        "#762a83",  # Dark purple
        "#9970ab",
        "#c2a5cf",
        "#e7d4e8",
        "#f7f7f7",  # White center
        "#d9f0d3",
        "#a6dba0",
        "#5aae61",
        "#1b7837",  # Dark green
    ]

    @staticmethod
    def get_colors(scheme: str) -> List[str]:
        """
        Get the anchor colors of a palette or Plotly colorscale.

        Parameters
        ----------
        scheme : str
            Palette name. Project palettes ('sequential_blue',
            'diverging_red_blue', ...) are matched first, ignoring case,
            hyphens and spaces; otherwise a Plotly colorscale name
            ('viridis', 'RdBu_r', ...).

        Returns
        -------
        List[str]
            Color strings ('#rrggbb' or 'rgb(r, g, b)')

        Raises
        ------
        ValueError
            If the name is not recognized
        """
        scheme_lower = scheme.lower().replace("-", "_").replace(" ", "_")

        if scheme_lower == "sequential_blue":
            return ColorSchemes.SEQUENTIAL_BLUE.copy()
        elif scheme_lower == "sequential_green":
            return ColorSchemes.SEQUENTIAL_GREEN.copy()
        elif scheme_lower == "sequential_orange":
            return ColorSchemes.SEQUENTIAL_ORANGE.copy()
        elif scheme_lower == "diverging_red_blue":
            return ColorSchemes.DIVERGING_RED_BLUE.copy()
        elif scheme_lower == "diverging_purple_green":
            return ColorSchemes.DIVERGING_PURPLE_GREEN.copy()

        swatch = _plotly_swatch(scheme_lower)
        if swatch is None:
            raise ValueError(
                f"Unknown color scheme '{scheme}'. "
                f"Available: sequential_blue, sequential_green, sequential_orange, "
                f"diverging_red_blue, diverging_purple_green, "
                f"or any Plotly colorscale ({', '.join(plotly.colors.named_colorscales()[:5])}, ...)"
            )
        return swatch

    @staticmethod
    def get_colormap(scheme: str = "viridis", n_colors: int = 256) -> np.ndarray:
        """
        Build an (N, 3) colormap by interpolating a palette.

        Parameters
        ----------
        scheme : str
            Palette or Plotly colorscale name (see ``get_colors``)
        n_colors : int
            Number of rows

        Returns
        -------
        np.ndarray
            Colormap, shape (n_colors, 3), values in [0, 1]

        Raises
        ------
        ValueError
            If the scheme is unknown or n_colors < 1
        """
        if n_colors < 1:
            raise ValueError(f"n_colors must be >= 1, got {n_colors}")

        anchors = np.array([parse_color(c) for c in ColorSchemes.get_colors(scheme)]) / 255.0
        if len(anchors) == 1:
            return np.repeat(anchors, n_colors, axis=0)

        positions = np.linspace(0.0, 1.0, len(anchors))
        samples = np.linspace(0.0, 1.0, n_colors)
        cmap = np.column_stack(
            [np.interp(samples, positions, anchors[:, channel]) for channel in range(3)]
        )
        return np.clip(cmap, 0.0, 1.0)


class PlotThemes:
    """
    Complete plotting theme configurations.

    Provides preset themes that combine templates, fonts and axis-box
    styling for consistent chart output.

    Attributes
    ----------
    DEFAULT : dict
        Standard Plotly white theme
    PUBLICATION : dict
        Publication-ready styling (clean, high-contrast)
    DARK : dict
        Dark mode theme
    PRESENTATION : dict
        Large fonts for presentations

    Examples
    --------
    >>> fig = chart.figure
    >>> fig = PlotThemes.apply_theme(fig, theme='dark')
    >>>
    >>> # Custom theme
    >>> custom = PlotThemes.DEFAULT.copy()
    >>> custom['font_size'] = 16
    >>> fig = PlotThemes.apply_theme(fig, theme=custom)
    """

    DEFAULT = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "box_color": "#444444",
    }

    PUBLICATION = {
        "template": "simple_white",
        "font_family": "Times New Roman, serif",
        "font_size": 14,
        "box_color": "#000000",
    }

    DARK = {
        "template": "plotly_dark",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "box_color": "#d0d0d0",
    }

    PRESENTATION = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 18,
        "box_color": "#222222",
    }

    @staticmethod
    def get_theme(theme="default") -> dict:
        """
        Resolve a theme name or dictionary to a theme configuration.

        Raises
        ------
        ValueError
            If the theme name is not recognized
        TypeError
            If theme is neither str nor dict
        """
        if isinstance(theme, str):
            theme_lower = theme.lower()
            if theme_lower == "default":
                return PlotThemes.DEFAULT
            elif theme_lower == "publication":
                return PlotThemes.PUBLICATION
            elif theme_lower == "dark":
                return PlotThemes.DARK
            elif theme_lower == "presentation":
                return PlotThemes.PRESENTATION
            else:
                raise ValueError(
                    f"Unknown theme '{theme}'. "
                    f"Available: default, publication, dark, presentation"
                )
        elif isinstance(theme, dict):
            return theme
        else:
            raise TypeError("theme must be str or dict")

    @staticmethod
    def apply_theme(fig: go.Figure, theme="default") -> go.Figure:
        """
        Apply template and fonts to a Plotly figure.

        Parameters
        ----------
        fig : go.Figure
            Plotly figure to style
        theme : str or dict
            Theme name ('default', 'publication', 'dark', 'presentation')
            or custom theme dictionary

        Returns
        -------
        go.Figure
            Styled figure (the same object)
        """
        config = PlotThemes.get_theme(theme)

        # Apply template
        if "template" in config:
            fig.update_layout(template=config["template"])

        # Apply fonts
        if "font_family" in config or "font_size" in config:
            font = {}
            if "font_family" in config:
                font["family"] = config["font_family"]
            if "font_size" in config:
                font["size"] = config["font_size"]
            fig.update_layout(font=font)

        return fig


# ============================================================================
# Colormap Utilities
# ============================================================================


def colormap_to_colorscale(cmap: np.ndarray) -> List[Tuple[float, str]]:
    """
    Convert an (N, 3) colormap to a stepped Plotly colorscale.

    Each row owns an equal band of [0, 1], so the colorbar shows the same
    discrete steps used to color the trajectory.

    Examples
    --------
    >>> colormap_to_colorscale(np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]))
    [(0.0, 'rgb(255,0,0)'), (0.5, 'rgb(255,0,0)'), (0.5, 'rgb(0,0,255)'), (1.0, 'rgb(0,0,255)')]
    """
    cmap = np.asarray(cmap, dtype=float)
    n = len(cmap)
    scale = []
    for k, row in enumerate(cmap):
        color = rgb_string(row)
        scale.append((k / n, color))
        scale.append(((k + 1) / n, color))
    return scale


def colormap_rows(values: np.ndarray, limits: Sequence[float], n_rows: int) -> np.ndarray:
    """
    Map scalar values to colormap row indices through color limits.

    Values at or below ``lo`` use row 0, values at or above ``hi`` use the
    last row; the range in between is split into ``n_rows`` equal bands.

    Examples
    --------
    >>> colormap_rows(np.array([-1.0, 0.0, 0.49, 0.5, 1.0, 2.0]), (0.0, 1.0), 2)
    array([0, 0, 0, 1, 1, 1])
    """
    lo, hi = float(limits[0]), float(limits[1])
    scaled = (np.asarray(values, dtype=float) - lo) / (hi - lo)
    rows = np.floor(scaled * n_rows).astype(int)
    return np.clip(rows, 0, n_rows - 1)


def rgb_string(row: Sequence[float]) -> str:
    """Format an RGB row in [0, 1] as a Plotly 'rgb(r,g,b)' string."""
    r, g, b = (int(round(float(v) * 255)) for v in row[:3])
    return f"rgb({r},{g},{b})"


def parse_color(color: str) -> Tuple[float, float, float]:
    """
    Parse '#rrggbb', 'rgb(...)' or 'rgba(...)' into 0-255 channel values.

    Alpha is dropped.

    Raises
    ------
    ValueError
        If the color string is not recognized
    """
    color = color.strip()
    if color.startswith("#"):
        r, g, b = plotly.colors.hex_to_rgb(color)
    elif color.startswith("rgb"):
        r, g, b = plotly.colors.unlabel_rgb(color)[:3]
    else:
        raise ValueError(f"Cannot parse color '{color}'")
    return float(r), float(g), float(b)


def _plotly_swatch(name: str) -> Optional[List[str]]:
    """Look up a Plotly colorscale by case-insensitive attribute name."""
    for module in (plotly.colors.sequential, plotly.colors.diverging, plotly.colors.cyclical):
        for attr in dir(module):
            if attr.startswith("_") or attr.lower() != name:
                continue
            swatch = getattr(module, attr)
            if isinstance(swatch, list) and swatch and all(isinstance(c, str) for c in swatch):
                return list(swatch)
    return None


# ============================================================================
# Export
# ============================================================================

__all__ = [
    "ColorSchemes",
    "PlotThemes",
    "colormap_to_colorscale",
    "colormap_rows",
    "rgb_string",
    "parse_color",
]
