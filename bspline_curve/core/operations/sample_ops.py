from __future__ import annotations

import numpy as np

from bspline_curve.core.operations.frame_ops import compute_frame
from bspline_curve.core.results import SampleSet
from bspline_curve.utils import bspline_helper


def build_derivatives(proc) -> None:
    """Derive the 1st derivative polygon and, for degree > 2, the 2nd."""
    proc.first_derivative_points = bspline_helper.derive(
        proc.control_points, proc.knot_vector, proc.degree
    )
    proc.second_derivative_points = None
    if proc.degree > 2:
        proc.second_derivative_points = bspline_helper.derive(
            proc.first_derivative_points,
            bspline_helper.derivative_knot_view(proc.knot_vector, 1),
            proc.degree - 1,
        )


def sample_curve(proc) -> SampleSet:
    """Evaluate num_output_points evenly spaced parameters over the valid domain."""
    degree = proc.degree
    num_output_points = proc.num_output_points
    u_begin, u_end = bspline_helper.parameter_range(proc.knot_vector, degree, len(proc.control_points))
    u_step = (u_end - u_begin) / (num_output_points - 1)

    points = np.zeros((num_output_points, 3), dtype=float)
    parameters = np.zeros(num_output_points, dtype=float)
    with_frames = degree > 2
    if with_frames:
        tangents = np.zeros((num_output_points, 3), dtype=float)
        binormals = np.zeros((num_output_points, 3), dtype=float)
        normals = np.zeros((num_output_points, 3), dtype=float)

    for i in range(num_output_points):
        u = u_begin + i * u_step
        points[i] = bspline_helper.compute_point(proc.control_points, proc.knot_vector, degree, u)
        parameters[i] = u

        if with_frames:
            tangents[i], binormals[i], normals[i] = compute_frame(
                proc.first_derivative_points,
                proc.second_derivative_points,
                proc.knot_vector,
                degree,
                u,
            )

    if not with_frames:
        return SampleSet(points=points, parameters=parameters)
    return SampleSet(
        points=points,
        parameters=parameters,
        tangents=tangents,
        binormals=binormals,
        normals=normals,
    )
