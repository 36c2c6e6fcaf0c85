"""
FlowSandbox: an interactive 2D particle sandbox driven by a noise flow field.

This package provides the simulation core (noise sampler, particles, flow
field, world), interactive tools, and a matplotlib front end.
"""

__version__ = "0.1.0"
__author__ = "FlowSandbox Team"

from .config import SimulationConfig
from .physics.world import World
from .physics.flow_field import FlowField
from .physics.particle import Particle
from .core.noise_field import NoiseSampler
from .core.frame_loop import FrameLoop

__all__ = ['SimulationConfig', 'World', 'FlowField', 'Particle', 'NoiseSampler', 'FrameLoop']
