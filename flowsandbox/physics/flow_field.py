"""
Flow field module for FlowSandbox.

The field steers particles with a unit vector at a noise-sampled angle,
scaled by the force strength. A second, independent noise channel drives
the particle size modifier on its own timeline.
"""

import numpy as np

from .. import config
from ..core.noise_field import NoiseSampler, angle_to_vector


class FlowField:
    """Noise-driven steering field with a movement and a size channel."""

    def __init__(self, sim_config=None, sampler=None):
        """
        Args:
            sim_config (SimulationConfig, optional): Source of field parameters
            sampler (NoiseSampler, optional): Noise primitive, built from the seed if omitted
        """
        cfg = sim_config or config.SimulationConfig()
        self.sampler = sampler or NoiseSampler(seed=cfg.seed)

        # Movement channel
        self.noise_scale = cfg.noise_scale
        self.force_strength = cfg.force_strength
        self.time = 0.0
        self.time_increment = cfg.time_increment
        self.noise_speed = cfg.noise_speed

        # Size channel
        self.size_channel_enabled = cfg.size_channel_enabled
        self.size_noise_scale = cfg.size_noise_scale
        self.size_time = 0.0
        self.size_time_increment = cfg.size_time_increment
        self.size_noise_speed = cfg.size_noise_speed
        self.size_time_offset = cfg.size_time_offset

    def apply_config(self, sim_config):
        """Pick up live field parameters; accumulated time is kept."""
        self.noise_scale = sim_config.noise_scale
        self.force_strength = sim_config.force_strength
        self.time_increment = sim_config.time_increment
        self.noise_speed = sim_config.noise_speed
        self.size_channel_enabled = sim_config.size_channel_enabled
        self.size_noise_scale = sim_config.size_noise_scale
        self.size_time_increment = sim_config.size_time_increment
        self.size_noise_speed = sim_config.size_noise_speed
        self.size_time_offset = sim_config.size_time_offset

    def update(self):
        """Advance both timelines by one tick (rates may be negative)."""
        self.time += self.time_increment * self.noise_speed
        self.size_time += self.size_time_increment * self.size_noise_speed

    def get_angle_at(self, x, y):
        return self.sampler.sample_angle_scaled(x, y, self.time, self.noise_scale)

    def get_force_at(self, x, y):
        """
        Steering force at a canvas position.

        Args:
            x, y (float): Canvas coordinates

        Returns:
            np.ndarray: Force vector, shape (2,)
        """
        if self.force_strength == 0:
            return np.zeros(2)
        return angle_to_vector(self.get_angle_at(x, y), self.force_strength)

    def get_size_modifier_at(self, x, y):
        """Size modifier in [0, 1) from the size channel, 1.0 when disabled."""
        if not self.size_channel_enabled:
            return 1.0
        return self.sampler.sample_scalar_scaled(
            x, y, self.size_time + self.size_time_offset, self.size_noise_scale)

    def sample_grid(self, width, height, resolution=20):
        """
        Sample force vectors on a regular grid, for field overlays.

        Returns:
            tuple: (grid_x, grid_y, grid_u, grid_v), each shape (resolution, resolution)
        """
        grid_x, grid_y = np.meshgrid(
            np.linspace(0, width, resolution, endpoint=False),
            np.linspace(0, height, resolution, endpoint=False),
        )
        grid_u = np.zeros_like(grid_x)
        grid_v = np.zeros_like(grid_y)
        for idx in np.ndindex(grid_x.shape):
            fx, fy = self.get_force_at(grid_x[idx], grid_y[idx])
            grid_u[idx] = fx
            grid_v[idx] = fy
        return grid_x, grid_y, grid_u, grid_v
