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
Visual Test Suite for Trajectory Chart

Generates HTML files for visual inspection of multi-color trajectory charts.
Run this script to create a gallery of test plots.

Usage:
    python visual_test_trajectory_chart.py

Output:
    Creates HTML files in ./visual_tests/trajectory_chart/
"""

import numpy as np
from pathlib import Path

import plotly.graph_objects as go

from colortraj import (
    ChartDefaults,
    ColorSchemes,
    PlotlySurface,
    RandomWalkConfig,
    TrajectoryChart,
    color_trajectory_plot,
    random_walk,
    simulate_from_config,
)


def setup_output_directory():
    """Create output directory for visual tests."""
    output_dir = Path("visual_tests/trajectory_chart")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def test_1_index_colored_spiral(output_dir):
    """Test 1: Spiral colored by point index."""
    print("Generating Test 1: Index-colored spiral...")

    t = np.linspace(0, 6 * np.pi, 600)
    chart = color_trajectory_plot(
        t * np.cos(t), t * np.sin(t),
        title_text="Test 1: Index-Colored Spiral",
        line_width=2,
    )

    chart.write_html(output_dir / "01_index_colored_spiral.html")
    print("  ✓ Saved: 01_index_colored_spiral.html")


def test_2_random_walk_heat(output_dir):
    """Test 2: Random walk colored by hot-spot proximity."""
    print("Generating Test 2: Random walk heat...")

    x, y, c = random_walk(seed=42)
    chart = TrajectoryChart.from_xyc(
        x, y, c,
        colorbar_visible=True,
        colorbar_label="Proximity",
    )
    chart.title("Test 2: Random Walk", "colored by proximity to a hot spot")
    chart.color_limits = (0, 1)

    chart.write_html(output_dir / "02_random_walk_heat.html")
    print("  ✓ Saved: 02_random_walk_heat.html")


def test_3_custom_colormap(output_dir):
    """Test 3: Manual colormap and limits."""
    print("Generating Test 3: Custom colormap...")

    x, y, c = random_walk(n_points=5000, half_width=50.0, seed=3)
    chart = TrajectoryChart.from_xyc(x, y, c, line_width=1.5, colorbar_visible=True)
    chart.colormap = ColorSchemes.get_colormap("diverging_red_blue", n_colors=32)
    chart.color_limits = (0.0, 0.5)
    chart.title_text = "Test 3: Diverging Colormap, Limits (0, 0.5)"

    chart.write_html(output_dir / "03_custom_colormap.html")
    print("  ✓ Saved: 03_custom_colormap.html")


def test_4_lissajous_speed(output_dir):
    """Test 4: Lissajous curve colored by speed."""
    print("Generating Test 4: Lissajous speed...")

    t = np.linspace(0, 2 * np.pi, 1000)
    x = np.sin(3 * t)
    y = np.sin(4 * t + np.pi / 4)
    speed = np.hypot(3 * np.cos(3 * t), 4 * np.cos(4 * t + np.pi / 4))

    chart = TrajectoryChart.from_xyc(
        x, y, speed,
        title_text=["Test 4: Lissajous Curve", "color = speed"],
        colorbar_visible="on",
        colorbar_label="|v|",
        line_width=3,
    )

    chart.write_html(output_dir / "04_lissajous_speed.html")
    print("  ✓ Saved: 04_lissajous_speed.html")


def test_5_themes(output_dir):
    """Test 5: Each plot theme."""
    print("Generating Test 5: Themes...")

    config: RandomWalkConfig = {"n_points": 3000, "half_width": 80.0, "seed": 5}
    walk = simulate_from_config(config)
    x, y, c = walk["x"], walk["y"], walk["c"]
    for theme in ["default", "publication", "dark", "presentation"]:
        chart = TrajectoryChart.from_xyc(
            x, y, c,
            defaults=ChartDefaults(theme=theme, colorbar_visible=True, width=700, height=700),
            title_text=f"Test 5: Theme '{theme}'",
        )
        chart.write_html(output_dir / f"05_theme_{theme}.html")
        print(f"  ✓ Saved: 05_theme_{theme}.html")


def test_6_existing_figure(output_dir):
    """Test 6: Drawing into an existing Plotly figure."""
    print("Generating Test 6: Existing figure...")

    fig = go.Figure()
    fig.update_layout(paper_bgcolor="#fafafa")

    t = np.linspace(0, 4 * np.pi, 400)
    chart = color_trajectory_plot(fig, np.cos(t) * (1 + t / 10), np.sin(t) * (1 + t / 10))
    chart.title("Test 6: Existing Figure", "paper background kept")

    chart.write_html(output_dir / "06_existing_figure.html")
    print("  ✓ Saved: 06_existing_figure.html")


def test_7_rebuild_keeps_color_axis(output_dir):
    """Test 7: Colormap and limits survive a surface rebuild."""
    print("Generating Test 7: Surface rebuild...")

    x, y, c = random_walk(n_points=4000, seed=7)
    chart = TrajectoryChart.from_xyc(x, y, c, colorbar_visible=True)
    chart.colormap = ColorSchemes.get_colormap("sequential_orange", n_colors=16)
    chart.color_limits = (0.0, 0.25)

    chart.rebuild_surface(PlotlySurface(defaults=ChartDefaults(colormap="plasma")))
    chart.title_text = "Test 7: After Rebuild (orange, limits 0 to 0.25)"

    chart.write_html(output_dir / "07_rebuild_keeps_color_axis.html")
    print("  ✓ Saved: 07_rebuild_keeps_color_axis.html")


def generate_index_html(output_dir):
    """Generate index.html for easy navigation."""
    print("\nGenerating index.html...")

    html_files = sorted(f for f in output_dir.glob("*.html") if f.name != "index.html")

    links = "\n".join(
        f'        <li><a href="{f.name}">{f.stem.replace("_", " ")}</a></li>' for f in html_files
    )
    html_content = f"""<!DOCTYPE html>
<html>
<head>
    <title>Trajectory Chart Visual Tests</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            max-width: 900px;
            margin: 0 auto;
            padding: 20px;
            background-color: #f5f5f5;
        }}
        h1 {{
            color: #333;
            border-bottom: 3px solid #636EFA;
            padding-bottom: 10px;
        }}
        li {{
            margin: 8px 0;
        }}
    </style>
</head>
<body>
    <h1>Trajectory Chart Visual Tests</h1>
    <ul>
{links}
    </ul>
</body>
</html>
"""

    index_path = output_dir / "index.html"
    index_path.write_text(html_content)
    print("  ✓ Saved: index.html")


def main():
    """Run all visual tests."""
    print("=" * 70)
    print("Trajectory Chart Visual Test Suite")
    print("=" * 70)
    print()

    output_dir = setup_output_directory()
    print(f"Output directory: {output_dir.absolute()}\n")

    # Run all tests
    test_1_index_colored_spiral(output_dir)
    test_2_random_walk_heat(output_dir)
    test_3_custom_colormap(output_dir)
    test_4_lissajous_speed(output_dir)
    test_5_themes(output_dir)
    test_6_existing_figure(output_dir)
    test_7_rebuild_keeps_color_axis(output_dir)

    # Generate index
    generate_index_html(output_dir)

    print("\n" + "=" * 70)
    print("✓ All visual tests generated successfully!")
    print("=" * 70)
    print("\nOpen this file in your browser:")
    print(f"  {(output_dir / 'index.html').absolute()}")
    print()


if __name__ == "__main__":
    main()
