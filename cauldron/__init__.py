"""
Cauldron - Decision Engine for the Potion Brewing Puzzle

A time-boxed, deterministic search engine that picks one action per turn.
The engine loads the turn's actions and inventory and provides:
- An immutable action model and repository
- Pure state transitions with affordability checks
- Heuristic scoring of positions
- Breadth-first or best-first search under a wall-clock deadline
"""

__version__ = "0.1.0"
