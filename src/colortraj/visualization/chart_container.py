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
Chart Container - Surface Lifecycle for Custom Charts

Abstract base class for charts that draw on a borrowed drawing surface.
It owns the lifecycle every chart needs and leaves the drawing to
subclasses through two hooks:

- ``setup()``: called once per attached surface, to configure it and
  create the chart's primitives
- ``update()``: called on every render, to push chart state into the
  primitives

Lifecycle
---------
```
construct ──► render() ──► (first use) attach surface ──► setup()
                  │                                        │
                  └──────────────► update() ◄──────────────┘

host teardown:  on_surface_rebuilding() ──► Pending(snapshot)
host rebuild:   on_surface_ready(surface) ──► setup() consumes snapshot
                                              (Pending ──► Consumed)
```

Reads of ``axis_state`` capture lazily; the container never caches
surface state on its own, so forwarded properties always reflect the
live surface.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from colortraj.types.chart import (
    CONSUMED,
    AxisStateSnapshot,
    ChartDefaults,
    Pending,
    SnapshotState,
)
from colortraj.types.protocols import DrawingSurfaceProtocol
from colortraj.validation import validate_flag
from colortraj.visualization.surface import PlotlySurface

SurfaceFactory = Callable[[Optional[DrawingSurfaceProtocol]], DrawingSurfaceProtocol]
"""Builds a replacement surface, given the surface being torn down (or None)."""


class ChartContainer(ABC):
    """
    Base class managing a chart's drawing surface.

    Parameters
    ----------
    parent : Optional[DrawingSurfaceProtocol]
        Surface to borrow on first render; a PlotlySurface is created
        when None
    defaults : Optional[ChartDefaults]
        Configuration for surfaces the container creates itself
    surface_factory : Optional[SurfaceFactory]
        Builds surfaces on first use and on rebuild

    Notes
    -----
    Subclasses must implement ``setup`` and ``update``; they may override
    ``capture_axis_state`` and ``load_axis_state`` to carry state across
    surface rebuilds.
    """

    def __init__(
        self,
        parent: Optional[DrawingSurfaceProtocol] = None,
        defaults: Optional[ChartDefaults] = None,
        surface_factory: Optional[SurfaceFactory] = None,
    ):
        self.defaults = defaults if defaults is not None else ChartDefaults()
        self._surface_factory = surface_factory or self._default_surface
        self._parent = parent
        self._surface: Optional[DrawingSurfaceProtocol] = None
        self._snapshot_state: SnapshotState = CONSUMED
        self._batch_depth = 0
        self._render_requested = False

    # =========================================================================
    # Subclass Hooks
    # =========================================================================

    @abstractmethod
    def setup(self) -> None:
        """Configure a freshly attached surface and create primitives."""
        pass

    @abstractmethod
    def update(self) -> None:
        """Push chart state into the primitives."""
        pass

    def capture_axis_state(self) -> AxisStateSnapshot:
        """Read the surface state to carry across a rebuild."""
        return AxisStateSnapshot()

    def load_axis_state(self, snapshot: AxisStateSnapshot) -> None:
        """Reapply a snapshot taken from a torn-down surface."""
        pass

    # =========================================================================
    # Surface Access
    # =========================================================================

    @property
    def surface(self) -> DrawingSurfaceProtocol:
        """The attached surface, attaching one on first access."""
        return self._ensure_surface()

    @property
    def is_attached(self) -> bool:
        return self._surface is not None

    def _ensure_surface(self) -> DrawingSurfaceProtocol:
        if self._surface is None:
            parent, self._parent = self._parent, None
            self._attach(parent if parent is not None else self._surface_factory(None))
        return self._surface

    def _attach(self, surface: DrawingSurfaceProtocol) -> None:
        self._surface = surface
        self.setup()

    def _default_surface(self, previous: Optional[DrawingSurfaceProtocol]) -> DrawingSurfaceProtocol:
        # Rebuild inside the same Plotly figure when there is one
        figure = getattr(previous, "figure", None)
        return PlotlySurface(figure=figure, defaults=self.defaults)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self) -> None:
        """
        Render now, or at the end of the enclosing ``batch_update``.
        """
        if self._batch_depth > 0:
            self._render_requested = True
            return
        self._render_requested = False
        self._ensure_surface()
        self.update()

    @contextmanager
    def batch_update(self) -> Iterator["ChartContainer"]:
        """
        Defer rendering until the block exits, then render once.

        Examples
        --------
        >>> with chart.batch_update():
        ...     chart.x_data = x_new
        ...     chart.y_data = y_new
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0 and self._render_requested:
            self.render()

    # =========================================================================
    # Surface Rebuild Events
    # =========================================================================

    @property
    def axis_state(self) -> AxisStateSnapshot:
        """
        Axis state to restore after a rebuild.

        Returns the pending snapshot if one is waiting, otherwise captures
        the current surface state.
        """
        if isinstance(self._snapshot_state, Pending):
            return self._snapshot_state.snapshot
        if self._surface is None:
            return AxisStateSnapshot()
        return self.capture_axis_state()

    @property
    def pending_snapshot(self) -> Optional[AxisStateSnapshot]:
        """Snapshot waiting for the next surface, or None."""
        if isinstance(self._snapshot_state, Pending):
            return self._snapshot_state.snapshot
        return None

    def on_surface_rebuilding(self) -> AxisStateSnapshot:
        """
        Handle the host tearing down the current surface.

        Captures the axis state and marks it pending for the next surface.
        """
        snapshot = self.axis_state
        self._snapshot_state = Pending(snapshot)
        return snapshot

    def on_surface_ready(self, surface: DrawingSurfaceProtocol) -> None:
        """
        Handle the host providing a new surface.

        Attaches it, runs ``setup`` (which consumes any pending snapshot)
        and renders.
        """
        self._parent = None
        self._attach(surface)
        self.render()

    def consume_snapshot(self) -> None:
        """Apply the pending snapshot, if any, exactly once."""
        state = self._snapshot_state
        if isinstance(state, Pending):
            self._snapshot_state = CONSUMED
            self.load_axis_state(state.snapshot)

    def rebuild_surface(self, new_surface: Optional[DrawingSurfaceProtocol] = None) -> DrawingSurfaceProtocol:
        """
        Tear down the current surface and rebuild on a new one.

        Parameters
        ----------
        new_surface : Optional[DrawingSurfaceProtocol]
            Replacement surface; built by the surface factory when None

        Returns
        -------
        DrawingSurfaceProtocol
            The newly attached surface
        """
        previous = self._surface
        self.on_surface_rebuilding()
        if previous is not None:
            previous.clear()
        self._surface = None
        surface = new_surface if new_surface is not None else self._surface_factory(previous)
        self.on_surface_ready(surface)
        return surface

    def attach_surface(self, surface: DrawingSurfaceProtocol) -> None:
        """Move the chart onto another surface without a teardown event."""
        if self._surface is not None and self._surface is not surface:
            self._surface.clear()
        self.on_surface_ready(surface)


class ColorbarMixin:
    """
    Adds a forwarded ``colorbar_visible`` property to a ChartContainer.

    The flag lives on the surface; the chart only forwards and re-renders.
    """

    @property
    def colorbar_visible(self) -> bool:
        return self.surface.colorbar_visible

    @colorbar_visible.setter
    def colorbar_visible(self, value: bool):
        self.surface.colorbar_visible = validate_flag(value, "colorbar_visible")
        self.render()


__all__ = [
    "SurfaceFactory",
    "ChartContainer",
    "ColorbarMixin",
]
