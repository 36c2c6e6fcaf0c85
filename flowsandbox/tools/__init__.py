"""
Interactive tools for FlowSandbox.

This module contains the tool interface, the spawn and attract/repulse
tools, and the registry that keeps one of them active.
"""

from .base import (
    Tool, ToolParam, PointerEvent,
    BUTTON_PRIMARY, BUTTON_SECONDARY, PHASE_DOWN, PHASE_DRAG, PHASE_UP,
)
from .spawn_tool import SpawnTool
from .attract_repulse_tool import AttractRepulseTool, radial_force
from .tool_manager import ToolManager, create_default_tool_manager

__all__ = [
    'Tool', 'ToolParam', 'PointerEvent',
    'BUTTON_PRIMARY', 'BUTTON_SECONDARY', 'PHASE_DOWN', 'PHASE_DRAG', 'PHASE_UP',
    'SpawnTool', 'AttractRepulseTool', 'radial_force',
    'ToolManager', 'create_default_tool_manager',
]
