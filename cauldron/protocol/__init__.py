"""
Protocol module - Text adapters around the engine.

Provides:
- parse_turn / read_turn / TurnReader: turn text -> TurnSnapshot
- render_command: chosen action id -> command text
"""

from .parser import TurnSnapshot, TurnReader, Inventory, parse_turn, read_turn, parse_action_line, parse_inventory_line
from .commands import render_command, WAIT

__all__ = [
    "TurnSnapshot",
    "TurnReader",
    "Inventory",
    "parse_turn",
    "read_turn",
    "parse_action_line",
    "parse_inventory_line",
    "render_command",
    "WAIT",
]
