"""
World module for FlowSandbox.

The World owns the particle population and the flow field, drives the
per-frame update, enforces the population cap with FIFO eviction, and
exposes a generic force-by-rule hook that tools use for spatial forces.
Configuration changes are either applied directly between ticks or queued
and drained at the start of the next tick.
"""

from collections import deque
from itertools import islice

import numpy as np

from .. import config
from .flow_field import FlowField
from .particle import Particle, is_finite_vector


class World:
    """Particle population driven by a noise flow field."""

    def __init__(self, sim_config=None, flow_field=None, rng=None, populate=True):
        """
        Args:
            sim_config (SimulationConfig, optional): Explicit configuration struct
            flow_field (FlowField, optional): Field instance, built from the config if omitted
            rng (np.random.Generator, optional): Random source for spawn positions
            populate (bool): Seed the initial population from ``initial_particles``
        """
        self.config = sim_config or config.SimulationConfig()
        self.flow_field = flow_field or FlowField(self.config)
        self.rng = rng if rng is not None else np.random.default_rng()

        # Insertion order is age order: left is oldest
        self.particles = deque()
        self._pending_patches = deque()
        self.frame_count = 0

        if populate:
            self.populate(self.config.initial_particles)

    # ------------------------------------------------------------------
    # Live configuration
    # ------------------------------------------------------------------
    @property
    def width(self):
        return self.config.width

    @property
    def height(self):
        return self.config.height

    @property
    def max_particles(self):
        return self.config.max_particles

    @property
    def max_speed(self):
        return self.config.max_speed

    def apply_config(self, patch):
        """
        Apply a configuration patch immediately.

        Call between ticks only; widgets should use enqueue_config instead.

        Args:
            patch (dict): Named parameter updates

        Returns:
            list: Names of the parameters that changed
        """
        changed = self.config.apply_patch(patch)
        if changed:
            self.flow_field.apply_config(self.config)
        if 'max_particles' in changed:
            self._trim_to_capacity()
        return changed

    def enqueue_config(self, patch):
        """Queue a configuration patch for the start of the next tick."""
        self._pending_patches.append(dict(patch))

    def pending_config_count(self):
        return len(self._pending_patches)

    def _drain_config_queue(self):
        changed = []
        while self._pending_patches:
            for name in self.apply_config(self._pending_patches.popleft()):
                if name not in changed:
                    changed.append(name)
        return changed

    def resize(self, width, height):
        """Resize the canvas; particles outside wrap on the next tick."""
        return self.apply_config({'width': width, 'height': height})

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------
    def populate(self, count):
        """Add ``count`` particles at uniformly random canvas positions."""
        count = max(0, int(count))
        if count == 0:
            return
        xs = self.rng.uniform(0, self.width, size=count)
        ys = self.rng.uniform(0, self.height, size=count)
        for x, y in zip(xs, ys):
            self.particles.append(Particle(x, y))
        self._trim_to_capacity()

    def add_particle(self, x, y):
        """
        Append a particle at rest at (x, y), evicting the oldest on overflow.

        Returns:
            Particle: The new particle (it may already be evicted when the cap is zero)
        """
        particle = Particle(x, y)
        self.particles.append(particle)
        self._trim_to_capacity()
        return particle

    def _trim_to_capacity(self):
        """Drop the oldest excess particles in one batch; survivors keep their order."""
        excess = len(self.particles) - max(0, int(self.max_particles))
        if excess <= 0:
            return 0
        self.particles = deque(islice(self.particles, excess, None))
        return excess

    def clear(self):
        self.particles.clear()

    def particle_count(self):
        """Current population size."""
        return len(self.particles)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def tick(self):
        """
        Advance the simulation by one frame.

        Queued configuration is applied first, then the field time moves
        once, then every particle samples the field at its pre-integration
        position, integrates and wraps.
        """
        self._drain_config_queue()
        self.flow_field.update()

        field = self.flow_field
        width, height = self.width, self.height
        max_speed = self.max_speed
        for particle in self.particles:
            x, y = particle.position
            particle.apply_force(field.get_force_at(x, y))
            particle.size_modifier = field.get_size_modifier_at(x, y)
            particle.integrate(max_speed)
            particle.wrap_edges(width, height)

        self.frame_count += 1

    def apply_force_field(self, origin, rule_fn):
        """
        Apply a force computed per particle by ``rule_fn``.

        Args:
            origin (array-like): Reference point handed to the rule, e.g. the pointer
            rule_fn (callable): ``rule_fn(particle, origin) -> force or None``

        Returns:
            int: Number of particles that received a force
        """
        origin = np.asarray(origin, dtype=float)
        affected = 0
        for particle in self.particles:
            force = rule_fn(particle, origin)
            if force is None:
                continue
            force = np.asarray(force, dtype=float)
            if not is_finite_vector(force) or not np.any(force):
                continue
            if particle.apply_force(force):
                affected += 1
        return affected

    # ------------------------------------------------------------------
    # Read-only views for the renderer
    # ------------------------------------------------------------------
    def render_state(self):
        """Yield (x, y, size_modifier) for every particle, oldest first."""
        for particle in self.particles:
            yield particle.position[0], particle.position[1], particle.size_modifier

    def positions(self):
        """Particle positions as an array of shape (N, 2)."""
        if not self.particles:
            return np.empty((0, 2))
        return np.array([p.position for p in self.particles])

    def size_modifiers(self):
        """Particle size modifiers as an array of shape (N,)."""
        return np.fromiter((p.size_modifier for p in self.particles), dtype=float,
                           count=len(self.particles))

    def speeds(self):
        return np.fromiter((p.speed for p in self.particles), dtype=float,
                           count=len(self.particles))
