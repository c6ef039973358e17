from __future__ import annotations

import numpy as np

from bspline_curve.utils import bspline_helper


def compute_frame(
    first_derivative_points: np.ndarray,
    second_derivative_points: np.ndarray,
    knot_vector: np.ndarray,
    degree: int,
    u: float,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Tangent, binormal and normal at u from the 1st and 2nd derivative curves.

    Only meaningful for degree > 2. A vanishing second derivative (straight
    pieces) leaves binormal and normal at zero.
    """
    d1 = bspline_helper.compute_point(
        first_derivative_points,
        bspline_helper.derivative_knot_view(knot_vector, 1),
        degree - 1,
        u,
    )
    d2 = bspline_helper.compute_point(
        second_derivative_points,
        bspline_helper.derivative_knot_view(knot_vector, 2),
        degree - 2,
        u,
    )

    tangent = bspline_helper.normalize_vector(d1)
    binormal = bspline_helper.normalize_vector(np.cross(tangent, d2))
    normal = np.cross(tangent, binormal)
    return tangent, binormal, normal
