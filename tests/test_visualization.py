"""
Tests for the matplotlib front end, run on the Agg backend.
"""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from flowsandbox.tools import create_default_tool_manager
from flowsandbox.ui.ui_controls import SIMULATION_SLIDERS, UIController
from flowsandbox.visualization import visualization_core
from flowsandbox.visualization.color_system import hex_to_rgb, hex_to_rgba, speed_alpha


@pytest.fixture
def figure():
    fig, ax = visualization_core.setup_figure_layout()
    yield fig, ax
    plt.close(fig)


def test_marker_sizes_follow_modifier():
    sizes = visualization_core.compute_marker_sizes([0.0, 0.5, 1.0], 2.0, 1.0)
    assert np.allclose(sizes, [1.0, 4.0, 9.0])


def test_marker_sizes_never_negative():
    sizes = visualization_core.compute_marker_sizes([0.0], 2.0, 4.0)
    assert sizes[0] == 0.0


def test_hex_conversion():
    assert hex_to_rgb("#FF0000") == (1.0, 0.0, 0.0)
    assert hex_to_rgba("#000000", 2.0)[3] == 1.0


def test_speed_alpha_brightens_fast_particles():
    alphas = speed_alpha(np.array([0.0, 1.0, 5.0]), 1.0, 2.0)
    assert alphas[0] < alphas[1] < alphas[2] == pytest.approx(1.0)
    assert len(speed_alpha(np.empty(0), 0.5, 2.0)) == 0


def test_scatter_tracks_world(figure, empty_world):
    fig, ax = figure
    scatter = visualization_core.prepare_particles(ax, empty_world)
    assert len(scatter.get_offsets()) == 0

    empty_world.add_particle(10, 20)
    empty_world.add_particle(30, 40)
    visualization_core.update_particle_visualization(scatter, empty_world)
    assert np.allclose(scatter.get_offsets(), [[10, 20], [30, 40]])
    assert len(scatter.get_sizes()) == 2


def test_indicator_patch_visibility(figure):
    fig, ax = figure
    patch = visualization_core.create_tool_indicator(ax)
    assert not patch.get_visible()

    visualization_core.update_tool_indicator(patch, {'x': 5, 'y': 6, 'radius': 50, 'alpha': 0.5})
    assert patch.get_visible()
    assert patch.center == (5, 6)
    assert patch.get_radius() == 50

    visualization_core.update_tool_indicator(patch, None)
    assert not patch.get_visible()


def test_field_overlay_and_status(figure, empty_world):
    fig, ax = figure
    quiver = visualization_core.draw_field_overlay(ax, empty_world.flow_field, 400, 300, resolution=5)
    assert visualization_core.update_field_overlay(quiver, empty_world.flow_field, 400, 300, 5) is quiver

    text = visualization_core.create_status_text(ax)
    visualization_core.update_status_text(text, empty_world, create_default_tool_manager())
    assert "Spawn Particles" in text.get_text()


def test_simulation_sliders_queue_config(figure, empty_world):
    fig, ax = figure
    ui = UIController(fig, empty_world, create_default_tool_manager())
    assert set(ui.sim_sliders) == {name for name, *_ in SIMULATION_SLIDERS}

    ui.sim_sliders['max_speed'].set_val(5.0)
    assert empty_world.pending_config_count() == 1
    assert empty_world.max_speed != 5.0

    empty_world.tick()
    assert empty_world.max_speed == 5.0


def test_tool_sliders_follow_active_tool(figure, empty_world):
    fig, ax = figure
    manager = create_default_tool_manager()
    ui = UIController(fig, empty_world, manager)
    assert set(ui.tool_sliders) == {'particles_per_frame'}

    ui.handle_key('a')
    assert manager.get_active_id() == 'attract'
    assert set(ui.tool_sliders) == {'strength', 'radius'}
    assert ui.tool_radio.value_selected == manager.get_active().label

    slider = ui.tool_sliders['radius']
    slider.set_val(120)
    assert manager.get_active().get_param('radius') == slider.val != 200


def test_clear_hotkey(figure, empty_world):
    fig, ax = figure
    ui = UIController(fig, empty_world, create_default_tool_manager())
    empty_world.add_particle(1, 1)
    ui.handle_key('c')
    assert empty_world.particle_count() == 0


def test_redraw_failure_is_reported(figure, empty_world, monkeypatch, capsys):
    fig, ax = figure
    ui = UIController(fig, empty_world, create_default_tool_manager())

    def broken_draw():
        raise RuntimeError("canvas gone")

    monkeypatch.setattr(fig.canvas, 'draw_idle', broken_draw)
    ui.rebuild_tool_sliders()
    assert "Warning: Failed to redraw tool controls: canvas gone" in capsys.readouterr().out
    assert set(ui.tool_sliders) == {'particles_per_frame'}
