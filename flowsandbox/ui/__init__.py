"""
User interface components for FlowSandbox.

Pointer input coalescing, matplotlib event wiring, and widget controls.
"""

__all__ = ['event_manager', 'ui_controls']
