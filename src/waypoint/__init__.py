"""
Waypoint - transition loading for finite-state machines

Waypoint turns an unordered collection of transition definitions into a
deduplicated, deterministically ordered set and registers each one with a
state machine engine.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
