"""Central project configuration constants.

This module gathers default numeric parameters and tunable iteration budgets
used across the curve evaluation library so they live in one place.
Import these values instead of hard-coding magic numbers inside
algorithms.
"""
from __future__ import annotations

# B-spline settings
DEFAULT_DEGREE: int = 3
DEFAULT_NUM_OUTPUT_POINTS: int = 100
DEFAULT_HIT_ENDPOINTS: bool = True
# Pull-back applied to parameters at the right end of the domain
EVALUATION_EPSILON: float = 1e-4

# ---- Closest point search ------------------------------------------------
NEWTON_ITERATIONS: int = 10  # Fixed budget, no convergence check
SUBDIVISION_ITERATIONS: int = 10
SUBDIVISION_TOLERANCE: float = 1e-4  # |tangent . (query - position)| below this stops the subdivision

# ---- Output arrays -------------------------------------------------------
PARAMETER_ARRAY_NAME: str = "Parametric Position"
TANGENT_ARRAY_NAME: str = "Tangent"
BINORMAL_ARRAY_NAME: str = "Binormal"
NORMAL_ARRAY_NAME: str = "Normal"

# Debug and logging settings
DEBUG_WORKER_LOGGING: bool = False  # Enable per-segment logging of the closest point search
