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
Bounded Random Walk - Demo Data for Trajectory Charts

Generates a damped, accelerating random walk inside a square arena, plus a
color signal scoring each position by its proximity to a random "hot spot".

Dynamics
--------
State s[k] = [x, y, dx, dy, ddx, ddy] evolves by a fixed linear update

    position[k+1] = position[k] + velocity[k] + acceleration[k] / 2
    velocity[k+1] = d * velocity[k] + acceleration[k]

after which a fresh standard-normal acceleration is drawn. A coordinate that
leaves [-w, w] is reflected back, sign(p) * (2w - |p|), and the matching
velocity component is negated (an elastic bounce, no speed lost).

Color Signal
------------
    c = exp(-(x - hx)² / (2 sx²)) * exp(-(y - hy)² / (2 sy²))

with hot spot (hx, hy) uniform in the arena and spreads sx, sy uniform in
[10, 20). Values lie in (0, 1] and peak at the hot spot.

Usage
-----
>>> from colortraj.systems.random_walk import random_walk
>>>
>>> x, y, c = random_walk(seed=42)
>>> x.shape, c.max() <= 1.0
((20000,), True)
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from colortraj.types.random_walk import RandomWalkConfig, RandomWalkResult, WalkState

DEFAULT_N_POINTS = 20000
DEFAULT_HALF_WIDTH = 100.0
DEFAULT_DAMPING = 0.7
SPREAD_RANGE = (10.0, 20.0)


# ============================================================================
# Public API
# ============================================================================


def random_walk(
    n_points: int = DEFAULT_N_POINTS,
    half_width: float = DEFAULT_HALF_WIDTH,
    damping: float = DEFAULT_DAMPING,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Generate a bounded 2D random walk and its hot-spot color signal.

    Parameters
    ----------
    n_points : int
        Number of positions (including the start at the origin)
    half_width : float
        Half-width w of the square arena [-w, w] x [-w, w]
    damping : float
        Velocity damping d in [0, 1]
    seed : Optional[int]
        Seed for a new ``numpy.random.default_rng``; ignored if ``rng`` is given
    rng : Optional[np.random.Generator]
        Random source to draw from

    Returns
    -------
    x, y : np.ndarray
        Positions, shape (n_points,), bounded by ``half_width``
    c : np.ndarray
        Proximity to the hot spot, shape (n_points,), in (0, 1]

    Examples
    --------
    >>> x, y, c = random_walk(n_points=1000, seed=0)
    >>> chart = TrajectoryChart.from_xyc(x, y, c, colorbar_visible=True)
    """
    result = simulate_random_walk(
        n_points=n_points,
        half_width=half_width,
        damping=damping,
        seed=seed,
        rng=rng,
    )
    return result["x"], result["y"], result["c"]


def simulate_random_walk(
    n_points: int = DEFAULT_N_POINTS,
    half_width: float = DEFAULT_HALF_WIDTH,
    damping: float = DEFAULT_DAMPING,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> RandomWalkResult:
    """
    Run the random walk and return positions, colors and hot-spot details.

    Same parameters as :func:`random_walk`.

    Returns
    -------
    RandomWalkResult
        x, y, c plus the hot spot, spreads and number of wall bounces

    Raises
    ------
    ValueError
        If n_points < 1, half_width is not positive and finite, or damping
        is outside [0, 1]
    """
    if isinstance(n_points, bool) or int(n_points) != n_points or n_points < 1:
        raise ValueError(f"n_points must be a positive integer, got {n_points}")
    if not (half_width > 0 and np.isfinite(half_width)):
        raise ValueError(f"half_width must be positive and finite, got {half_width}")
    if not 0.0 <= damping <= 1.0:
        raise ValueError(f"damping must be in [0, 1], got {damping}")

    n_points = int(n_points)
    half_width = float(half_width)
    rng = _initialize_rng(seed, rng)

    states = np.full((n_points, 6), np.nan)
    states[0] = np.concatenate([[0.0, 0.0], rng.standard_normal(4)])

    m = update_matrix(damping)
    accelerations = rng.standard_normal((n_points - 1, 2))
    n_bounces = 0

    for k in range(1, n_points):
        state = m @ states[k - 1]
        n_bounces += reflect(state, half_width)
        state[4:6] = accelerations[k - 1]
        states[k] = state

    x = states[:, 0].copy()
    y = states[:, 1].copy()

    hot_spot = rng.uniform(-half_width, half_width, size=2)
    spread = rng.uniform(SPREAD_RANGE[0], SPREAD_RANGE[1], size=2)
    c = hot_spot_heat(x, y, hot_spot, spread)

    return {
        "x": x,
        "y": y,
        "c": c,
        "hot_spot": (float(hot_spot[0]), float(hot_spot[1])),
        "spread": (float(spread[0]), float(spread[1])),
        "n_bounces": n_bounces,
    }


def simulate_from_config(
    config: RandomWalkConfig,
    rng: Optional[np.random.Generator] = None,
) -> RandomWalkResult:
    """
    Run the random walk from a configuration dictionary.

    Missing keys take the module defaults.

    Parameters
    ----------
    config : RandomWalkConfig
        Any of n_points, half_width, damping, seed
    rng : Optional[np.random.Generator]
        Random source; overrides ``config['seed']`` when given

    Returns
    -------
    RandomWalkResult

    Raises
    ------
    TypeError
        If the config has keys other than the RandomWalkConfig fields
    ValueError
        If a parameter is out of range

    Examples
    --------
    >>> config: RandomWalkConfig = {"n_points": 5000, "half_width": 50.0, "seed": 7}
    >>> result = simulate_from_config(config)
    >>> bool(np.abs(result["x"]).max() <= 50.0)
    True
    """
    unknown = sorted(set(config) - set(RandomWalkConfig.__annotations__))
    if unknown:
        raise TypeError(
            f"Unknown random walk option(s): {', '.join(unknown)}. "
            f"Available: {', '.join(RandomWalkConfig.__annotations__)}"
        )
    return simulate_random_walk(
        n_points=config.get("n_points", DEFAULT_N_POINTS),
        half_width=config.get("half_width", DEFAULT_HALF_WIDTH),
        damping=config.get("damping", DEFAULT_DAMPING),
        seed=config.get("seed"),
        rng=rng,
    )


def hot_spot_heat(
    x: np.ndarray,
    y: np.ndarray,
    center: Sequence[float],
    spread: Sequence[float],
) -> np.ndarray:
    """
    Gaussian proximity score of each (x, y) to a center point.

    Parameters
    ----------
    x, y : np.ndarray
        Positions
    center : Sequence[float]
        Hot spot (hx, hy)
    spread : Sequence[float]
        Per-axis standard deviations (sx, sy), both positive

    Returns
    -------
    np.ndarray
        Scores in (0, 1]; exactly 1 at the center

    Examples
    --------
    >>> hot_spot_heat(np.array([0.0]), np.array([0.0]), (0.0, 0.0), (10.0, 10.0))
    array([1.])
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    hx, hy = center
    sx, sy = spread

    exponent = (x - hx) ** 2 / (2 * sx**2) + (y - hy) ** 2 / (2 * sy**2)
    heat = np.exp(-exponent)

    # Far points underflow to 0.0 for large arenas
    return np.maximum(heat, np.finfo(float).tiny)


# ============================================================================
# Dynamics
# ============================================================================


def update_matrix(damping: float) -> np.ndarray:
    """
    Linear state update for [x, y, dx, dy, ddx, ddy].

    Examples
    --------
    >>> m = update_matrix(0.7)
    >>> m @ np.array([0.0, 0.0, 1.0, 0.0, 2.0, 0.0])
    array([2. , 0. , 2.7, 0. , 2. , 0. ])
    """
    d = float(damping)
    return np.array(
        [
            [1.0, 0.0, 1.0, 0.0, 0.5, 0.0],
            [0.0, 1.0, 0.0, 1.0, 0.0, 0.5],
            [0.0, 0.0, d, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, d, 0.0, 1.0],
            [0.0, 0.0, 0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 0.0, 0.0, 1.0],
        ]
    )


def reflect(state: WalkState, half_width: float) -> int:
    """
    Bounce the state off the arena walls in place.

    Repeats until each coordinate is inside [-w, w], so steps longer than
    the arena fold back correctly.

    Returns
    -------
    int
        Number of reflections applied
    """
    bounces = 0
    for axis in (0, 1):
        while abs(state[axis]) > half_width:
            state[axis] = np.sign(state[axis]) * (2 * half_width - abs(state[axis]))
            state[axis + 2] = -state[axis + 2]
            bounces += 1
    return bounces


def _initialize_rng(
    seed: Optional[int], rng: Optional[np.random.Generator]
) -> np.random.Generator:
    """Use the given generator, or seed a new one."""
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


__all__ = [
    "DEFAULT_N_POINTS",
    "DEFAULT_HALF_WIDTH",
    "DEFAULT_DAMPING",
    "random_walk",
    "simulate_random_walk",
    "simulate_from_config",
    "hot_spot_heat",
    "update_matrix",
    "reflect",
]
