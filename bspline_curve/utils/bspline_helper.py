"""
B-spline helper functions for curve evaluation.

This module contains utility functions for B-spline operations including:
- Knot vector generation (clamped and uniform)
- Basis function evaluation (Cox-de Boor recursion)
- Curve point evaluation and derivative control polygons
- Vector normalization and input validation
"""

from __future__ import annotations

import numpy as np
from scipy import interpolate

from bspline_curve.core import config


def normalize_vector(vec: np.ndarray) -> np.ndarray:
    """
    Normalize a 3D vector.

    Args:
        vec: Input vector to normalize

    Returns:
        Unit vector, or the input unchanged when its length is zero
    """
    v = np.asarray(vec, dtype=float)
    n = float(np.linalg.norm(v))
    if n == 0.0:
        return v
    return v / n


def as_control_polygon(points) -> np.ndarray:
    """
    Convert de Boor points into an (N, 3) float array.

    Args:
        points: Array-like of 3D points (2D points are lifted to z = 0)

    Returns:
        Control polygon as a new array
    """
    pts = np.array(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] not in (2, 3):
        raise ValueError("de Boor points must be given as an (N, 3) or (N, 2) array")
    if pts.shape[1] == 2:
        pts = np.hstack([pts, np.zeros((len(pts), 1))])
    return pts


def as_query_point(point) -> np.ndarray:
    """Convert a single query point into a (3,) float array."""
    p = np.array(point, dtype=float).reshape(-1)
    if p.shape[0] == 2:
        p = np.append(p, 0.0)
    if p.shape[0] != 3:
        raise ValueError("The query point must have 2 or 3 coordinates")
    return p


def validate_parameters(degree: int, num_output_points: int, num_control_points: int) -> None:
    """
    Check the preconditions of a curve evaluation.

    Raises:
        ValueError: with the message reported to the caller
    """
    if degree < 1:
        raise ValueError("The B-spline degree must be at least 1")
    if num_output_points < degree + 1:
        raise ValueError("The number of output points must be larger than the B-spline degree")
    if num_control_points < degree + 1:
        raise ValueError("Number of de Boor points must be larger than the B-spline degree")


def create_knot_vector(num_control_points: int, degree: int, hit_endpoints: bool = True) -> np.ndarray:
    """
    Create knot vector with integer spacing.

    With hit_endpoints the first and last ``degree`` knots are repeated so the
    curve interpolates its first and last control point. Otherwise the knots
    are 0, 1, 2, ... without repetition.

    Args:
        num_control_points: Number of control points
        degree: B-spline degree
        hit_endpoints: Clamp the curve to the end points

    Returns:
        Knot vector of length num_control_points + degree + 1
    """
    n = num_control_points
    p = degree

    if not hit_endpoints:
        return np.arange(n + p + 1, dtype=float)

    interior = np.arange(n - p + 1, dtype=float)
    return np.concatenate([
        np.zeros(p),
        interior,
        np.full(p, float(n - p))
    ])


def derivative_knot_view(knot_vector: np.ndarray, order: int) -> np.ndarray:
    """
    Knot range of the derivative curve of the given order.

    The hodograph of order r uses the original knots shifted inward by r
    entries at each end. The result is a view, not a copy.
    """
    if order == 0:
        return knot_vector
    return knot_vector[order:len(knot_vector) - order]


def evaluate_basis_function(i: int, degree: int, t: float, knots: np.ndarray) -> float:
    """
    Evaluate B-spline basis function N_{i,degree}(t).

    Weights whose denominator is exactly zero (repeated knots) are zero.

    Args:
        i: Basis function index
        degree: B-spline degree
        t: Parameter value
        knots: Knot vector (or knot view)

    Returns:
        Basis function value
    """
    if degree == 0:
        return 1.0 if knots[i] <= t < knots[i + 1] else 0.0

    left_basis = evaluate_basis_function(i, degree - 1, t, knots)
    right_basis = evaluate_basis_function(i + 1, degree - 1, t, knots)

    left_span = knots[i + degree] - knots[i]
    right_span = knots[i + degree + 1] - knots[i + 1]

    alpha1 = 0.0 if left_span == 0.0 else (t - knots[i]) / left_span
    alpha2 = 0.0 if right_span == 0.0 else (knots[i + degree + 1] - t) / right_span

    return float(alpha1 * left_basis + alpha2 * right_basis)


def evaluate_basis_functions(count: int, degree: int, t: float, knots: np.ndarray) -> np.ndarray:
    """Return the values of the first ``count`` basis functions at t."""
    return np.array([evaluate_basis_function(j, degree, t, knots) for j in range(count)], dtype=float)


def compute_point(control_points: np.ndarray, knots: np.ndarray, degree: int, t: float) -> np.ndarray:
    """
    Evaluate the curve defined by control_points at parameter t.

    The half-open degree 0 intervals exclude the right end of the domain, so
    parameters at or beyond knots[len(control_points)] are pulled back by
    config.EVALUATION_EPSILON.

    Args:
        control_points: De Boor points (N, 3)
        knots: Knot vector (or knot view for derivative curves)
        degree: B-spline degree
        t: Parameter value

    Returns:
        Point on the curve
    """
    num_points = len(control_points)
    t_max = knots[num_points]
    if t >= t_max:
        t = t_max - config.EVALUATION_EPSILON

    point = np.zeros(3)
    for j in range(num_points):
        point += evaluate_basis_function(j, degree, t, knots) * control_points[j]
    return point


def derive(control_points: np.ndarray, knots: np.ndarray, degree: int) -> np.ndarray:
    """
    Control points of the derivative curve (hodograph).

    Q_k = degree / (t_{k+degree+1} - t_{k+1}) * (P_{k+1} - P_k)

    The derivative curve has degree - 1 and is evaluated with
    derivative_knot_view of the knots passed in here.

    Args:
        control_points: De Boor points (N, 3)
        knots: Knot vector (or knot view) of the curve being derived
        degree: Degree of the curve being derived

    Returns:
        Derived control points (N - 1, 3)
    """
    cp = np.asarray(control_points, dtype=float)
    derived = np.zeros((len(cp) - 1, cp.shape[1]), dtype=float)
    for k in range(len(derived)):
        denom = knots[k + degree + 1] - knots[k + 1]
        if denom == 0.0:
            continue
        derived[k] = degree / denom * (cp[k + 1] - cp[k])
    return derived


def parameter_range(knot_vector: np.ndarray, degree: int, num_control_points: int) -> tuple[float, float]:
    """Valid parameter interval [knots[degree], knots[N]]."""
    return float(knot_vector[degree]), float(knot_vector[num_control_points])


def to_scipy_bspline(control_points: np.ndarray, knot_vector: np.ndarray, degree: int) -> interpolate.BSpline:
    """Wrap the curve as a scipy BSpline for downstream consumers."""
    return interpolate.BSpline(np.asarray(knot_vector, dtype=float), np.asarray(control_points, dtype=float), degree)
