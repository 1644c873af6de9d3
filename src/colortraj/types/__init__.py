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
Chart Types Module

Central import point for the type definitions used across colortraj.

Module Organization
------------------
- chart: color-axis aliases, build data, axis-state snapshot, ChartDefaults
- protocols: drawing surface and path primitive protocols
- random_walk: random-walk configuration and result types
"""

# ============================================================================
# Chart Types
# ============================================================================

from colortraj.types.chart import (
    CONSUMED,
    AxisStateSnapshot,
    BuildData,
    ChartDefaults,
    ColorLimits,
    ColorLimitsMode,
    Colormap,
    Consumed,
    EdgeColorMode,
    NextPlot,
    NoData,
    Pending,
    RGBTriple,
    SnapshotState,
    XYCData,
    XYData,
    build_data_fields,
)

# ============================================================================
# Protocols
# ============================================================================

from colortraj.types.protocols import DrawingSurfaceProtocol, PathPrimitiveProtocol

# ============================================================================
# Random Walk Types
# ============================================================================

from colortraj.types.random_walk import RandomWalkConfig, RandomWalkResult, WalkState

__all__ = [
    # Chart
    "CONSUMED",
    "AxisStateSnapshot",
    "BuildData",
    "ChartDefaults",
    "ColorLimits",
    "ColorLimitsMode",
    "Colormap",
    "Consumed",
    "EdgeColorMode",
    "NextPlot",
    "NoData",
    "Pending",
    "RGBTriple",
    "SnapshotState",
    "XYCData",
    "XYData",
    "build_data_fields",
    # Protocols
    "DrawingSurfaceProtocol",
    "PathPrimitiveProtocol",
    # Random walk
    "RandomWalkConfig",
    "RandomWalkResult",
    "WalkState",
]
