#!/usr/bin/env python3
"""
FlowSandbox main entry point.

Orchestrates the components: configuration, world, tools, event handling,
UI controls and the animation driver.

Usage:
    flowsandbox
    flowsandbox --particles 3000 --max-particles 8000
    flowsandbox --noise-scale -0.02 --noise-speed -1
    flowsandbox --headless --frames 500
"""

import argparse
import sys

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from . import config
from .core.frame_loop import FrameLoop
from .physics.world import World
from .tools.tool_manager import create_default_tool_manager
from .ui.event_manager import EventManager, PointerInbox
from .ui.ui_controls import UIController
from .visualization import visualization_core


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='FlowSandbox - Interactive particle flow field sandbox',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  left mouse            spawn particles / attract (depending on tool)
  right mouse           repulse (attract/repulse tool)
  s / a                 switch to spawn / attract-repulse tool
  c                     clear all particles
        """
    )

    parser.add_argument('--width', type=float, default=config.DEFAULT_WIDTH,
                        help=f'Canvas width (default: {config.DEFAULT_WIDTH})')
    parser.add_argument('--height', type=float, default=config.DEFAULT_HEIGHT,
                        help=f'Canvas height (default: {config.DEFAULT_HEIGHT})')
    parser.add_argument('--particles', '-n', type=int, default=config.DEFAULT_NUM_PARTICLES,
                        help=f'Initial particle count (default: {config.DEFAULT_NUM_PARTICLES})')
    parser.add_argument('--max-particles', '-m', type=int, default=config.MAX_PARTICLES,
                        help=f'Population cap (default: {config.MAX_PARTICLES})')
    parser.add_argument('--max-speed', type=float, default=config.MAX_SPEED,
                        help=f'Velocity cap (default: {config.MAX_SPEED})')
    parser.add_argument('--noise-scale', type=float, default=config.NOISE_SCALE,
                        help=f'Flow field spatial frequency, negative mirrors (default: {config.NOISE_SCALE})')
    parser.add_argument('--force-strength', type=float, default=config.FORCE_STRENGTH,
                        help=f'Flow field force magnitude (default: {config.FORCE_STRENGTH})')
    parser.add_argument('--noise-speed', type=float, default=config.NOISE_SPEED,
                        help=f'Flow field time multiplier, negative reverses (default: {config.NOISE_SPEED})')
    parser.add_argument('--no-size-noise', action='store_true',
                        help='Disable the size modulation channel')
    parser.add_argument('--seed', type=int, default=config.NOISE_SEED,
                        help=f'Noise seed (default: {config.NOISE_SEED})')
    parser.add_argument('--tool', choices=['spawn', 'attract'], default='spawn',
                        help='Initially active tool (default: spawn)')
    parser.add_argument('--show-field', action='store_true',
                        help='Overlay the sampled flow field vectors')
    parser.add_argument('--headless', action='store_true',
                        help='Run the simulation without a window and print a summary')
    parser.add_argument('--frames', type=int, default=300,
                        help='Frames to simulate in headless mode (default: 300)')

    return parser.parse_args(argv)


def build_config(args):
    """SimulationConfig from parsed arguments."""
    return config.SimulationConfig(
        width=float(args.width),
        height=float(args.height),
        initial_particles=max(0, args.particles),
        max_particles=max(0, args.max_particles),
        max_speed=args.max_speed,
        noise_scale=args.noise_scale,
        force_strength=args.force_strength,
        noise_speed=args.noise_speed,
        size_channel_enabled=not args.no_size_noise,
        seed=args.seed,
    )


def run_headless(loop, frames):
    """Advance the loop without rendering and report the final state."""
    loop.run(frames)
    speeds = loop.world.speeds()
    mean_speed = float(speeds.mean()) if len(speeds) else 0.0
    print(f"✓ Simulated {loop.frame} frames")
    print(f"  Particles: {loop.world.particle_count()} / {loop.world.max_particles}")
    print(f"  Mean speed: {mean_speed:.3f}")
    return loop


def _release_hotkeys():
    # Default matplotlib keymaps claim the sandbox hotkeys
    for key in (config.SPAWN_TOOL_HOTKEY, config.ATTRACT_TOOL_HOTKEY, config.CLEAR_PARTICLES_HOTKEY):
        for keymap in [k for k in plt.rcParams if k.startswith('keymap.')]:
            bound = list(plt.rcParams[keymap])
            if key in bound:
                bound.remove(key)
                plt.rcParams[keymap] = bound


def main(argv=None):
    """Main function orchestrating the FlowSandbox visualization."""
    args = parse_arguments(argv)
    sim_config = build_config(args)

    # Step 1: Simulation core
    world = World(sim_config)
    tool_manager = create_default_tool_manager(args.tool)
    inbox = PointerInbox()
    loop = FrameLoop(world, tool_manager, inbox)

    if args.headless:
        run_headless(loop, args.frames)
        return 0

    # Step 2: Figure
    _release_hotkeys()
    fig, ax = visualization_core.setup_figure_layout()
    fig.canvas.manager.set_window_title(config.WINDOW_TITLE)
    visualization_core.apply_professional_styling(fig, ax, world.width, world.height)

    scatter = visualization_core.prepare_particles(ax, world)
    indicator_patch = visualization_core.create_tool_indicator(ax)
    status_text = visualization_core.create_status_text(ax)
    quiver = None
    if args.show_field:
        quiver = visualization_core.draw_field_overlay(ax, world.flow_field, world.width, world.height)

    # Step 3: Interaction
    event_mgr = EventManager(fig, ax, inbox)
    event_mgr.connect_events()
    ui_controller = UIController(fig, world, tool_manager, event_mgr)

    # Step 4: Animation
    def update_frame(frame):
        """Advance one frame, then refresh every artist from the world."""
        loop.advance()

        artists = list(visualization_core.update_particle_visualization(scatter, world))
        artists.append(visualization_core.update_tool_indicator(indicator_patch, tool_manager.indicator()))
        artists.append(visualization_core.update_status_text(status_text, world, tool_manager))
        if quiver is not None:
            artists.append(visualization_core.update_field_overlay(
                quiver, world.flow_field, world.width, world.height))

        if loop.frame % config.PERFORMANCE_REPORT_EVERY == 0:
            event_mgr.get_performance_stats()

        return artists

    anim = FuncAnimation(fig, update_frame, interval=config.ANIMATION_INTERVAL,
                         blit=False, cache_frame_data=False)

    plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
