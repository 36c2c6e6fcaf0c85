"""
Configuration module for FlowSandbox.

This module contains default parameters and the explicit configuration
struct shared by the World and the FlowField. Defaults live at module level;
live changes go through SimulationConfig.apply_patch so nothing reads a
mutable global while a frame is being computed.
"""

# Canvas (data coordinates of the main axes)
DEFAULT_WIDTH = 960
DEFAULT_HEIGHT = 640

# Population
DEFAULT_NUM_PARTICLES = 1000  # initial population
MAX_PARTICLES = 5000          # hard cap, oldest particles are evicted first
MAX_SPEED = 2.0               # velocity magnitude cap (canvas units per frame)

# Movement channel of the flow field
NOISE_SCALE = 0.01      # spatial frequency, negative values mirror the pattern
FORCE_STRENGTH = 0.1    # magnitude of the steering force
TIME_INCREMENT = 0.01   # phase advance per frame
NOISE_SPEED = 1.0       # multiplier on TIME_INCREMENT, negative reverses time

# Size modulation channel (independent timeline)
SIZE_CHANNEL_ENABLED = True
SIZE_NOISE_SCALE = 0.005
SIZE_TIME_INCREMENT = 0.005
SIZE_NOISE_SPEED = 1.0
SIZE_TIME_OFFSET = 1000.0  # keeps size and movement decorrelated at t=0

# Noise primitive
NOISE_SEED = 0
NOISE_OCTAVES = 4
NOISE_PERSISTENCE = 0.5
NOISE_PERIOD = 1024  # lattice period, coordinates are folded into [0, period)

# Rendering
PARTICLE_SIZE = 2.0            # base marker size (points)
SIZE_MODIFIER_STRENGTH = 1.0   # how strongly size_modifier scales the marker
PARTICLE_COLOR = "#F2F2F2"
PARTICLE_ALPHA = 0.85

# Animation parameters
ANIMATION_INTERVAL = 16  # milliseconds between frames (~60 FPS)
PERFORMANCE_REPORT_EVERY = 300  # frames between performance reports

# Window title
WINDOW_TITLE = "FlowSandbox"

# UI hotkeys
SPAWN_TOOL_HOTKEY = 's'
ATTRACT_TOOL_HOTKEY = 'a'
CLEAR_PARTICLES_HOTKEY = 'c'

def parse_bool(value):
    """
    Coerce a flag from a widget or command-line value.

    Accepts bools, numbers and the strings true/false, yes/no, on/off, 1/0.

    Raises:
        ValueError: If the value is not a recognizable flag
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ('true', 'yes', 'on', '1'):
            return True
        if text in ('false', 'no', 'off', '0'):
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    return bool(value)


# Names accepted by SimulationConfig.apply_patch, with the type they are coerced to
CONFIG_FIELDS = {
    'width': float,
    'height': float,
    'max_particles': int,
    'max_speed': float,
    'noise_scale': float,
    'force_strength': float,
    'time_increment': float,
    'noise_speed': float,
    'size_channel_enabled': parse_bool,
    'size_noise_scale': float,
    'size_time_increment': float,
    'size_noise_speed': float,
    'size_time_offset': float,
    'particle_size': float,
    'size_modifier_strength': float,
}


class SimulationConfig:
    """Flat set of named numeric parameters consumed by World and FlowField."""

    def __init__(self, **overrides):
        self.width = float(DEFAULT_WIDTH)
        self.height = float(DEFAULT_HEIGHT)
        self.initial_particles = DEFAULT_NUM_PARTICLES
        self.max_particles = MAX_PARTICLES
        self.max_speed = MAX_SPEED
        self.noise_scale = NOISE_SCALE
        self.force_strength = FORCE_STRENGTH
        self.time_increment = TIME_INCREMENT
        self.noise_speed = NOISE_SPEED
        self.size_channel_enabled = SIZE_CHANNEL_ENABLED
        self.size_noise_scale = SIZE_NOISE_SCALE
        self.size_time_increment = SIZE_TIME_INCREMENT
        self.size_noise_speed = SIZE_NOISE_SPEED
        self.size_time_offset = SIZE_TIME_OFFSET
        self.seed = NOISE_SEED
        self.particle_size = PARTICLE_SIZE
        self.size_modifier_strength = SIZE_MODIFIER_STRENGTH

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise TypeError(f"Unknown configuration field: {name}")
            setattr(self, name, value)

    def apply_patch(self, patch):
        """
        Apply a partial update of named parameters.

        Values are coerced to the declared field type but not range checked;
        the UI is expected to clamp through its declared min/max.

        Args:
            patch (dict): Mapping of parameter name to new value

        Returns:
            list: Names of the fields whose value changed
        """
        changed = []
        for name, value in patch.items():
            caster = CONFIG_FIELDS.get(name)
            if caster is None:
                print(f"Warning: Ignoring unknown configuration parameter '{name}'")
                continue
            try:
                value = caster(value)
            except (TypeError, ValueError):
                print(f"Warning: Invalid value {value!r} for '{name}', keeping {getattr(self, name)!r}")
                continue
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)
        return changed

    def to_dict(self):
        """Snapshot of every live-updatable parameter."""
        return {name: getattr(self, name) for name in CONFIG_FIELDS}

    def copy(self):
        clone = SimulationConfig()
        clone.__dict__.update(self.__dict__)
        return clone

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"SimulationConfig({fields})"
