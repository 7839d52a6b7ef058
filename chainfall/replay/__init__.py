"""
Replay - deterministic re-execution of recorded games, plus invariant checks.
"""

from .invariants import InvariantViolation, assert_core_invariants
from .runner import ReplayError, ReplayResult, run_replay

__all__ = [
    "InvariantViolation",
    "assert_core_invariants",
    "ReplayError",
    "ReplayResult",
    "run_replay",
]
