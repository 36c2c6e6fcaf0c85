"""
Tests for the tool registry.
"""

from flowsandbox.tools import (
    AttractRepulseTool, PointerEvent, SpawnTool, Tool, ToolManager,
    create_default_tool_manager, PHASE_DOWN,
)


def test_default_manager_registers_both_tools():
    manager = create_default_tool_manager()
    assert [tool.id for tool in manager.get_all_tools()] == ['spawn', 'attract']
    assert manager.get_active_id() == 'spawn'
    assert isinstance(manager.get_active(), SpawnTool)
    assert manager.get_active().active


def test_register_rejects_incomplete_tools(capsys):
    manager = ToolManager()
    assert manager.register(Tool('', 'No id', 'x')) is False
    assert manager.register(Tool('noicon', 'No icon', None)) is False
    assert manager.get_all_tools() == []
    assert "must have id" in capsys.readouterr().out


def test_switching_selects_and_deselects():
    manager = create_default_tool_manager()
    spawn = manager.tools['spawn']
    attract = manager.tools['attract']

    assert manager.set_active('attract') is True
    assert manager.get_active() is attract
    assert attract.active
    assert not spawn.active


def test_unknown_tool_keeps_current(capsys):
    manager = create_default_tool_manager()
    assert manager.set_active('laser') is False
    assert manager.get_active_id() == 'spawn'
    assert 'laser' in capsys.readouterr().out


def test_listeners_are_notified_on_change():
    manager = create_default_tool_manager()
    seen = []
    manager.add_listener(lambda tool: seen.append(tool.id))
    manager.set_active('attract')
    manager.set_active('attract')
    manager.set_active('spawn')
    assert seen == ['attract', 'spawn']


def test_events_reach_only_the_active_tool(empty_world):
    manager = ToolManager()
    manager.register(SpawnTool())
    manager.register(AttractRepulseTool())

    # Nothing active yet
    manager.handle_pointer(empty_world, PointerEvent(10, 10, phase=PHASE_DOWN))
    manager.update(empty_world)
    assert empty_world.particle_count() == 0
    assert manager.indicator() is None

    manager.set_active('attract')
    manager.handle_pointer(empty_world, PointerEvent(10, 10, phase=PHASE_DOWN))
    assert empty_world.particle_count() == 0
    assert manager.indicator() is not None


def test_key_presses_go_to_active_tool():
    keys = []

    class KeyTool(Tool):
        def on_key_pressed(self, key):
            keys.append(key)

    manager = ToolManager()
    manager.register(KeyTool('keys', 'Keys', 'k'))
    manager.handle_key_pressed('x')
    manager.set_active('keys')
    manager.handle_key_pressed('y')
    assert keys == ['y']
