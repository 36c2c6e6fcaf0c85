"""
SpawnTool: spawns particles at the pointer while the primary button is held.
"""

import math

from .base import Tool, ToolParam


class SpawnTool(Tool):
    """Injects particles at the pointer on press, drag, and every held frame."""

    def __init__(self):
        super().__init__('spawn', 'Spawn Particles', 'plus')

        self.params = {
            'particles_per_frame': ToolParam(5, 1, 50, label='Particles Per Frame', step=1),
        }

        # Press state lets press-and-hold spawn without moving
        self.is_spawning = False
        self.last_x = 0.0
        self.last_y = 0.0

    def on_pointer_down(self, world, pointer):
        if pointer.is_primary:
            self.is_spawning = True
            self.last_x = pointer.x
            self.last_y = pointer.y
            self.spawn_particles(world, pointer.x, pointer.y)

    def on_pointer_drag(self, world, pointer):
        if pointer.is_primary:
            self.last_x = pointer.x
            self.last_y = pointer.y
            self.spawn_particles(world, pointer.x, pointer.y)

    def on_pointer_up(self, world, pointer):
        self.is_spawning = False

    def on_deselect(self):
        super().on_deselect()
        self.is_spawning = False

    def on_frame_update(self, world):
        if self.is_spawning:
            self.spawn_particles(world, self.last_x, self.last_y)

    def spawn_particles(self, world, x, y):
        """
        Add ``particles_per_frame`` particles at (x, y).

        Returns:
            int: Number of particles added
        """
        count = int(math.floor(self.get_param('particles_per_frame') or 0))
        for _ in range(count):
            world.add_particle(x, y)
        return max(count, 0)
