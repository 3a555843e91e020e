"""
Agent strategies.

- base: The capability interface and the shared noisy, forgetful mind
- search: Bounded A* planner agent
- fsm: Finite-state controller agent
- behavior_tree: Behavior tree evaluator and agent
"""

from .base import Agent, CognitionConfig, CognitiveAgent, TickOutcome
from .search import SearchAgent
from .fsm import FSMAgent, FSMState
from .behavior_tree import BehaviorTreeAgent, Status

__all__ = [
    "Agent",
    "CognitionConfig",
    "CognitiveAgent",
    "TickOutcome",
    "SearchAgent",
    "FSMAgent",
    "FSMState",
    "BehaviorTreeAgent",
    "Status",
]
