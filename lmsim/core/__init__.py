"""Core components for the LMSim framework.

Re-exports the foundational building blocks:

- ``simulate_lm``, ``make_generator``, ``draw_sample`` and the default
  configuration constants for regression simulation.
- ``SimulationResult`` and ``build_sweep_table`` for result handling.
"""

from .results import SUMMARY_COLUMNS, SimulationResult, build_sweep_table
from .simulation import (
    DEFAULT_PERFECT_FIT_POLICY,
    DEFAULT_TOLERANCE,
    DEFAULT_X_RANGE,
    draw_sample,
    make_generator,
    simulate_lm,
)

__all__ = [
    # Simulation
    "simulate_lm",
    "make_generator",
    "draw_sample",
    "DEFAULT_X_RANGE",
    "DEFAULT_TOLERANCE",
    "DEFAULT_PERFECT_FIT_POLICY",
    # Results
    "SimulationResult",
    "build_sweep_table",
    "SUMMARY_COLUMNS",
]
