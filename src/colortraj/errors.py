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
Chart Errors and Warnings

Exceptions raised when a chart is built or configured with invalid input,
and the warning category emitted when a chart cannot render its current data.

Construction-time failures raise and leave no chart behind. Render-time
inconsistencies (for example ``y_data`` reassigned to a different length
than ``x_data``) only warn and hide the trajectory until the data agree again.
"""

# ============================================================================
# Exceptions
# ============================================================================


class ChartValidationError(ValueError):
    """Raised when chart input or configuration fails validation."""

    pass


class DataLengthMismatchError(ChartValidationError):
    """Raised when coordinate or color vectors have different lengths."""

    pass


class InvalidSyntaxError(ChartValidationError):
    """Raised when positional chart arguments do not form (x, y) or (x, y, c)."""

    pass


class InvalidLimitsError(ChartValidationError):
    """Raised when color limits are not two increasing values."""

    pass


class InvalidModeError(ChartValidationError):
    """Raised when a limits or colormap mode is not 'auto' or 'manual'."""

    pass


class InvalidColormapError(ChartValidationError):
    """Raised when a colormap is empty, not (N, 3), or outside [0, 1]."""

    pass


# ============================================================================
# Warnings
# ============================================================================


class DataLengthMismatchWarning(UserWarning):
    """Emitted when a render is skipped because data lengths disagree."""

    pass


__all__ = [
    "ChartValidationError",
    "DataLengthMismatchError",
    "InvalidSyntaxError",
    "InvalidLimitsError",
    "InvalidModeError",
    "InvalidColormapError",
    "DataLengthMismatchWarning",
]
