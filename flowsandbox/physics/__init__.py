"""
Physics components for FlowSandbox.

Particles, the noise-driven flow field, and the World that owns them.
"""

__all__ = ['particle', 'flow_field', 'world']
