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
Unit Tests for Chart Container

Tests lazy surface attachment, setup/update hooks, batched rendering and
the surface rebuild events using a minimal chart.
"""

import pytest

from colortraj.types.chart import CONSUMED, AxisStateSnapshot, Pending
from colortraj.visualization.chart_container import ChartContainer, ColorbarMixin
from colortraj.visualization.surface import PlotlySurface

# ============================================================================
# Fixtures
# ============================================================================


class CountingChart(ColorbarMixin, ChartContainer):
    """Chart that records hook calls."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.setup_calls = 0
        self.update_calls = 0
        self.loaded = []

    def setup(self):
        self.setup_calls += 1
        self.surface.create_path()
        self.consume_snapshot()

    def update(self):
        self.update_calls += 1

    def capture_axis_state(self):
        return AxisStateSnapshot.capture(color_limits=self.surface.color_limits)

    def load_axis_state(self, snapshot):
        self.loaded.append(snapshot)


@pytest.fixture
def chart():
    """Create unattached counting chart."""
    return CountingChart()


# ============================================================================
# Attachment Tests
# ============================================================================


class TestAttachment:
    """Test lazy surface attachment."""

    def test_not_attached_until_used(self, chart):
        """Test construction does not create a surface."""
        assert chart.is_attached is False
        assert chart.setup_calls == 0

    def test_render_attaches_and_sets_up(self, chart):
        """Test the first render attaches, sets up and updates."""
        chart.render()
        assert chart.is_attached
        assert chart.setup_calls == 1
        assert chart.update_calls == 1

    def test_setup_runs_once(self, chart):
        """Test later renders only update."""
        chart.render()
        chart.render()
        assert chart.setup_calls == 1
        assert chart.update_calls == 2

    def test_parent_surface_used(self):
        """Test a parent surface is borrowed on first use."""
        parent = PlotlySurface()
        chart = CountingChart(parent=parent)
        assert chart.surface is parent

    def test_surface_factory(self):
        """Test a custom factory builds the surface."""
        built = []

        def factory(previous):
            surface = PlotlySurface()
            built.append((previous, surface))
            return surface

        chart = CountingChart(surface_factory=factory)
        chart.render()
        assert built == [(None, chart.surface)]

    def test_axis_state_without_surface(self, chart):
        """Test axis_state does not attach a surface."""
        assert chart.axis_state == AxisStateSnapshot()
        assert chart.is_attached is False


# ============================================================================
# Batch Tests
# ============================================================================


class TestBatchUpdate:
    """Test deferred rendering."""

    def test_batch_defers_render(self, chart):
        """Test renders inside a batch run once at exit."""
        with chart.batch_update():
            chart.render()
            chart.render()
            assert chart.update_calls == 0
        assert chart.update_calls == 1

    def test_nested_batches(self, chart):
        """Test only the outermost batch renders."""
        with chart.batch_update():
            with chart.batch_update():
                chart.render()
            assert chart.update_calls == 0
        assert chart.update_calls == 1

    def test_batch_without_changes(self, chart):
        """Test an empty batch does not render."""
        with chart.batch_update():
            pass
        assert chart.update_calls == 0

    def test_batch_exception_skips_render(self, chart):
        """Test an exception inside a batch propagates without rendering."""
        with pytest.raises(RuntimeError):
            with chart.batch_update():
                chart.render()
                raise RuntimeError("boom")
        assert chart.update_calls == 0
        chart.render()
        assert chart.update_calls == 1


# ============================================================================
# Rebuild Event Tests
# ============================================================================


class TestRebuildEvents:
    """Test snapshot capture and the Pending -> Consumed transition."""

    def test_rebuilding_stores_pending(self, chart):
        """Test on_surface_rebuilding stores the capture as pending."""
        chart.render()
        chart.surface.color_limits = (0, 4)
        snapshot = chart.on_surface_rebuilding()
        assert chart._snapshot_state == Pending(snapshot)
        assert chart.pending_snapshot.color_limits == (0.0, 4.0)

    def test_ready_consumes_snapshot(self, chart):
        """Test on_surface_ready loads the snapshot exactly once."""
        chart.render()
        snapshot = chart.on_surface_rebuilding()
        chart.on_surface_ready(PlotlySurface())
        assert chart.loaded == [snapshot]
        assert chart._snapshot_state == CONSUMED

        chart.on_surface_ready(PlotlySurface())
        assert chart.loaded == [snapshot]

    def test_ready_renders(self, chart):
        """Test on_surface_ready runs setup and update."""
        chart.render()
        chart.on_surface_ready(PlotlySurface())
        assert chart.setup_calls == 2
        assert chart.update_calls == 2

    def test_rebuild_reuses_figure(self, chart):
        """Test the default rebuild draws into the same figure."""
        chart.render()
        old = chart.surface
        new = chart.rebuild_surface()
        assert new is not old
        assert new.figure is old.figure
        assert old.primitives == ()

    def test_rebuild_with_given_surface(self, chart):
        """Test rebuild attaches a given surface."""
        chart.render()
        replacement = PlotlySurface()
        assert chart.rebuild_surface(replacement) is replacement
        assert chart.surface is replacement
        assert len(chart.loaded) == 1

    def test_attach_surface_skips_snapshot(self, chart):
        """Test attach_surface loads nothing."""
        chart.render()
        chart.attach_surface(PlotlySurface())
        assert chart.loaded == []


# ============================================================================
# Colorbar Mixin Tests
# ============================================================================


class TestColorbarMixin:
    """Test forwarded colorbar visibility."""

    def test_forwards_and_renders(self, chart):
        """Test setting visibility writes the surface and renders."""
        chart.colorbar_visible = True
        assert chart.surface.colorbar_visible is True
        assert chart.update_calls == 1

    def test_accepts_on_off(self, chart):
        """Test 'on'/'off' strings."""
        chart.colorbar_visible = "on"
        assert chart.colorbar_visible is True
        chart.colorbar_visible = "off"
        assert chart.colorbar_visible is False

    def test_rejects_other_values(self, chart):
        """Test invalid values raise TypeError."""
        with pytest.raises(TypeError):
            chart.colorbar_visible = "yes"
