"""
Visualization components for FlowSandbox.

This module contains all rendering, plotting, and visual display functionality.
"""

__all__ = ['visualization_core', 'color_system']
