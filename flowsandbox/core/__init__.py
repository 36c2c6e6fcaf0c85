"""
Core components for FlowSandbox.

This module contains the noise sampling primitive and the per-frame loop.
"""

__all__ = ['noise_field', 'frame_loop']
