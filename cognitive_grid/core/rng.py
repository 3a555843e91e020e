"""
core/rng.py

One dice cup for the whole process.

Every random draw in the simulation (neighbor choice, noise trigger,
wander direction, obstacle scatter) comes from here unless the caller
hands in its own generator. Seed it once and a run becomes repeatable.
"""

from __future__ import annotations
from typing import Optional
import numpy as np

_rng: np.random.Generator = np.random.default_rng()


def get_rng() -> np.random.Generator:
    """The current process-wide generator."""
    return _rng


def set_rng(generator: np.random.Generator) -> None:
    """Substitute the process-wide generator (e.g. a test double)."""
    global _rng
    _rng = generator


def seed(value: Optional[int]) -> np.random.Generator:
    """Reseed the process-wide generator and return it."""
    global _rng
    _rng = np.random.default_rng(value)
    return _rng


def resolve(rng: Optional[np.random.Generator]) -> np.random.Generator:
    """Use the given generator if any, else the shared one."""
    return rng if rng is not None else _rng
