"""
Search algorithms used by deliberative agents.
"""

from .astar import PlanStatus, classify_path, find_path

__all__ = ["PlanStatus", "classify_path", "find_path"]
