"""
Environments that drive agents tick by tick.
"""

from .grid_world import GridWorld

__all__ = ["GridWorld"]
