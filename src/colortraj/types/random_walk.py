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
Random Walk Types

Configuration and result types for the bounded random-walk generator.

Follows the project convention: configuration and results are TypedDicts.

Usage
-----
>>> from colortraj.systems.random_walk import simulate_from_config
>>>
>>> config: RandomWalkConfig = {"n_points": 5000, "half_width": 50.0, "seed": 7}
>>> result = simulate_from_config(config)
>>> result["x"].shape
(5000,)
"""

from typing import Optional, Tuple

import numpy as np
from typing_extensions import TypedDict

WalkState = np.ndarray
"""
Random-walk state row [x, y, dx, dy, ddx, ddy].

Position, velocity and acceleration in the plane.
"""


class RandomWalkConfig(TypedDict, total=False):
    """
    Parameters for the bounded random walk.

    Attributes
    ----------
    n_points : int
        Number of positions to generate (default 20000)
    half_width : float
        Half-width of the square arena; |x|, |y| <= half_width (default 100)
    damping : float
        Velocity damping factor in [0, 1] (default 0.7)
    seed : Optional[int]
        Seed for ``numpy.random.default_rng``
    """

    n_points: int
    half_width: float
    damping: float
    seed: Optional[int]


class RandomWalkResult(TypedDict):
    """
    Output of a bounded random walk.

    Attributes
    ----------
    x, y : np.ndarray
        Positions, shape (n_points,)
    c : np.ndarray
        Hot-spot proximity in (0, 1], shape (n_points,)
    hot_spot : Tuple[float, float]
        Center of the Gaussian proximity score
    spread : Tuple[float, float]
        Per-axis standard deviation of the proximity score
    n_bounces : int
        Number of wall reflections applied
    """

    x: np.ndarray
    y: np.ndarray
    c: np.ndarray
    hot_spot: Tuple[float, float]
    spread: Tuple[float, float]
    n_bounces: int


__all__ = [
    "WalkState",
    "RandomWalkConfig",
    "RandomWalkResult",
]
