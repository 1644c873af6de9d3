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
Chart Input Validation

Pure validators shared by the trajectory chart and the drawing surface.
Each validator returns the normalized value or raises; none of them touch
chart state, so a chart can check every option before changing anything.
"""

from numbers import Number
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from colortraj.errors import (
    DataLengthMismatchError,
    InvalidColormapError,
    InvalidLimitsError,
    InvalidModeError,
)

VALID_MODES = ("auto", "manual")


# ============================================================================
# Data Vectors
# ============================================================================


def as_vector(value: Any, name: str = "data") -> np.ndarray:
    """
    Convert array-like input to a 1-D float array.

    Any shape is flattened, so row vectors, column vectors and plain lists
    are all accepted. ``None`` becomes an empty vector.

    Parameters
    ----------
    value : array-like or None
        Numeric values
    name : str
        Field name used in error messages

    Returns
    -------
    np.ndarray
        Flattened float64 array (a copy)

    Raises
    ------
    TypeError
        If the input is not numeric

    Examples
    --------
    >>> as_vector([[1, 2, 3]])
    array([1., 2., 3.])
    """
    if value is None:
        return np.empty(0, dtype=float)

    arr = np.asarray(value)
    if arr.dtype.kind not in "biuf":
        raise TypeError(f"{name} must be numeric, got dtype {arr.dtype}")

    return np.array(arr, dtype=float).ravel()


def is_numeric(value: Any) -> bool:
    """
    Return True for numbers and numeric array-likes (booleans excluded).

    Anything ``numpy.asarray`` turns into an integer or float array counts,
    so ranges, ``array.array`` and pandas Series are accepted the same way
    ``as_vector`` accepts them. Strings and bytes never count.

    Examples
    --------
    >>> is_numeric(range(3)), is_numeric("abc"), is_numeric(True)
    (True, False, False)
    """
    if isinstance(value, (bool, np.bool_, str, bytes)):
        return False
    if isinstance(value, Number):
        return True
    try:
        arr = np.asarray(value)
    except (TypeError, ValueError):
        return False
    return arr.size == 0 or arr.dtype.kind in "iuf"


def check_lengths(x: np.ndarray, y: np.ndarray, c: Optional[np.ndarray] = None) -> None:
    """
    Check that y (and c, when given) match the length of x.

    Raises
    ------
    DataLengthMismatchError
        If any length differs from ``len(x)``
    """
    if y.size != x.size:
        raise DataLengthMismatchError(
            f"y must be the same length as x (got {y.size} and {x.size})"
        )
    if c is not None and c.size != x.size:
        raise DataLengthMismatchError(
            f"c must be the same length as x (got {c.size} and {x.size})"
        )


# ============================================================================
# Display Options
# ============================================================================


def validate_text(value: Any, name: str = "text") -> str:
    """
    Normalize a label to a string.

    A sequence of strings is treated as multiple lines.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence) and all(isinstance(line, str) for line in value):
        return "\n".join(value)
    raise TypeError(f"{name} must be a string or a sequence of strings")


def validate_line_width(value: Any) -> float:
    """Return a positive float line width."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (Number, np.number)):
        raise TypeError(f"line_width must be numeric, got {type(value).__name__}")
    width = float(value)
    if not np.isfinite(width) or width <= 0:
        raise ValueError(f"line_width must be positive, got {value}")
    return width


def validate_flag(value: Any, name: str = "flag") -> bool:
    """Accept bools and the strings 'on'/'off'."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str) and value.lower() in ("on", "off"):
        return value.lower() == "on"
    raise TypeError(f"{name} must be a bool or 'on'/'off', got {value!r}")


# ============================================================================
# Color Axis
# ============================================================================


def validate_colormap(value: Any) -> np.ndarray:
    """
    Validate a colormap as an (N, 3) array of RGB values in [0, 1].

    Raises
    ------
    InvalidColormapError
        If the colormap is empty, has the wrong shape or is out of range
    """
    try:
        cmap = np.array(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidColormapError(f"Colormap must be numeric: {e}") from e

    if cmap.ndim == 1 and cmap.size == 3:
        cmap = cmap.reshape(1, 3)

    if cmap.ndim != 2 or cmap.shape[1] != 3:
        raise InvalidColormapError(f"Colormap must have shape (N, 3), got {cmap.shape}")
    if cmap.shape[0] == 0:
        raise InvalidColormapError("Colormap must not be empty")
    if not np.all(np.isfinite(cmap)) or cmap.min() < 0.0 or cmap.max() > 1.0:
        raise InvalidColormapError("Colormap values must be in the range [0, 1]")

    return cmap


def validate_limits(value: Any) -> Tuple[float, float]:
    """
    Validate color limits as two finite, increasing values.

    Raises
    ------
    InvalidLimitsError
        If there are not exactly two finite values or they are not increasing

    Examples
    --------
    >>> validate_limits([0, 1])
    (0.0, 1.0)
    >>> validate_limits((1, 1))
    Traceback (most recent call last):
    ...
    colortraj.errors.InvalidLimitsError: Specify limits as two increasing values.
    """
    try:
        limits = np.asarray(value, dtype=float).ravel()
    except (TypeError, ValueError) as e:
        raise InvalidLimitsError("Specify limits as two increasing values.") from e

    if limits.size != 2 or not np.all(np.isfinite(limits)) or not limits[1] > limits[0]:
        raise InvalidLimitsError("Specify limits as two increasing values.")

    return float(limits[0]), float(limits[1])


def validate_mode(value: Any, name: str = "mode") -> str:
    """Return 'auto' or 'manual', raising InvalidModeError for anything else."""
    if not isinstance(value, str) or value not in VALID_MODES:
        raise InvalidModeError(f"{name} must be 'auto' or 'manual', got {value!r}")
    return value


__all__ = [
    "VALID_MODES",
    "as_vector",
    "is_numeric",
    "check_lengths",
    "validate_text",
    "validate_line_width",
    "validate_flag",
    "validate_colormap",
    "validate_limits",
    "validate_mode",
]
