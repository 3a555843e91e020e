"""
Cognitive Grid: Bounded Minds on a Discrete Grid

A small laboratory for comparing how cognitively-limited agents find
their way to a goal cell: a budgeted A* searcher, a finite-state
controller, and a behavior tree, all sharing the same model of noise,
fading curiosity and short spatial memory.
"""

__version__ = "0.1.0"
