from __future__ import annotations

from typing import Callable

import numpy as np

from bspline_curve.core import config
from bspline_curve.core.results import ClosestPointResult
from bspline_curve.utils import bspline_helper


def find_closest_point(
    query: np.ndarray,
    control_points: np.ndarray,
    knot_vector: np.ndarray,
    degree: int,
    first_derivative_points: np.ndarray | None = None,
    logger_func: Callable[[str], None] | None = None,
) -> ClosestPointResult:
    """Find the point on the curve nearest to query.

    Every spline segment is seeded at its midpoint and refined with a
    degree-specific strategy; the best segment result wins.
    """
    query = np.asarray(query, dtype=float)
    candidates, delta = initial_guesses(query, control_points, knot_vector, degree)
    u_begin = float(knot_vector[degree])

    if logger_func is not None:
        logger_func(f"Initial guess: {_format_candidates(candidates)}")

    if degree > 2 and first_derivative_points is None:
        first_derivative_points = bspline_helper.derive(control_points, knot_vector, degree)

    for j, (seed, _) in enumerate(candidates):
        index = degree + int(np.floor((seed - u_begin) / delta))
        if degree == 1:
            candidates[j] = _project_on_chord(query, control_points, knot_vector, index)
        elif degree == 2:
            candidates[j] = _solve_quadratic_segment(query, control_points, knot_vector, index, seed, delta)
        else:
            candidates[j] = _subdivide_segment(
                query, control_points, knot_vector, degree, first_derivative_points, seed, delta
            )

    if logger_func is not None:
        logger_func(f"Resulting distances: {_format_candidates(candidates)}")

    nearest_arc, nearest_distance = min(candidates, key=lambda candidate: candidate[1])
    position = bspline_helper.compute_point(control_points, knot_vector, degree, nearest_arc)
    return ClosestPointResult(parameter=float(nearest_arc), distance=float(nearest_distance), position=position)


def initial_guesses(
    query: np.ndarray,
    control_points: np.ndarray,
    knot_vector: np.ndarray,
    degree: int,
) -> tuple[list[tuple[float, float]], float]:
    """Midpoint parameter and distance of every segment, plus the segment width."""
    num_points = len(control_points)
    delta = float(knot_vector[degree + 1] - knot_vector[degree])
    candidates = []
    for u in knot_vector[degree:num_points]:
        seed = float(u) + 0.5 * delta
        position = bspline_helper.compute_point(control_points, knot_vector, degree, seed)
        candidates.append((seed, float(np.linalg.norm(query - position))))
    return candidates, delta


def quadratic_segment_coefficients(
    control_points: np.ndarray,
    knot_vector: np.ndarray,
    index: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Write a degree 2 curve on [knots[index], knots[index + 1]) as a u^2 + b u + c.

    Args:
        control_points: De Boor points (N, 3)
        knot_vector: Knot vector
        index: Knot index of the segment start (degree <= index < N)

    Returns:
        Point-valued coefficients (a, b, c)
    """
    k_m1 = knot_vector[index - 1]
    k0 = knot_vector[index]
    k1 = knot_vector[index + 1]
    k2 = knot_vector[index + 2]
    p0 = control_points[index - 2]
    p1 = control_points[index - 1]
    p2 = control_points[index]

    alpha = k2 * k1 - k2 * k0 - k1 * k0 + k0 * k0
    gamma = k1 * k1 - k1 * k0 - k1 * k_m1 + k0 * k_m1
    denom = alpha * gamma

    a = (alpha * p0 - alpha * p1 - gamma * p1 + gamma * p2) / denom
    b = (
        -2.0 * alpha * k1 * p0
        + alpha * k1 * p1
        + alpha * k_m1 * p1
        + gamma * k2 * p1
        + gamma * k0 * p1
        - 2.0 * gamma * k0 * p2
    ) / denom
    c = (
        alpha * k1 * k1 * p0
        - alpha * k1 * k_m1 * p1
        - gamma * k2 * k0 * p1
        + gamma * k0 * k0 * p2
    ) / denom
    return a, b, c


def deflated_quadratic_roots(
    v_dash: float,
    w_dash: float,
    x_dash: float,
    root: float,
    threshold: float,
) -> tuple[float, float]:
    """Remaining roots of v'u^3 + w'u^2 + x'u + y' after dividing out a known root.

    The quadratic factor is only solved when its leading coefficient exceeds
    threshold (the segment width) and the discriminant is positive; otherwise
    the known root is returned twice.
    """
    a_reduced = v_dash
    b_reduced = w_dash + root * a_reduced
    c_reduced = x_dash + root * b_reduced

    discriminant = b_reduced * b_reduced - 4.0 * a_reduced * c_reduced
    if abs(a_reduced) > threshold and discriminant > 0.0:
        sqrt_disc = np.sqrt(discriminant)
        return (
            float((-b_reduced + sqrt_disc) / (2.0 * a_reduced)),
            float((-b_reduced - sqrt_disc) / (2.0 * a_reduced)),
        )
    return root, root


def _solve_quadratic_segment(
    query: np.ndarray,
    control_points: np.ndarray,
    knot_vector: np.ndarray,
    index: int,
    seed: float,
    delta: float,
) -> tuple[float, float]:
    a, b, c = quadratic_segment_coefficients(control_points, knot_vector, index)
    c_dist = c - query

    # |s(u) - p|^2 = v u^4 + w u^3 + x u^2 + y u + z
    v = a.dot(a)
    w = 2.0 * a.dot(b)
    x = 2.0 * a.dot(c_dist) + b.dot(b)
    y = 2.0 * b.dot(c_dist)

    v_dash, w_dash, x_dash, y_dash = 4.0 * v, 3.0 * w, 2.0 * x, y
    v_dash_dash, w_dash_dash, x_dash_dash = 12.0 * v, 6.0 * w, 2.0 * x

    u = np.float64(seed)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for _ in range(config.NEWTON_ITERATIONS):
            first_derivative = v_dash * u ** 3 + w_dash * u ** 2 + x_dash * u + y_dash
            second_derivative = v_dash_dash * u ** 2 + w_dash_dash * u + x_dash_dash
            u = u - first_derivative / second_derivative

        u_2, u_3 = deflated_quadratic_roots(v_dash, w_dash, x_dash, float(u), delta)

    u_left = seed - 0.5 * delta
    u_right = seed + 0.5 * delta
    us = [
        _clamp_to_segment(float(u), u_left, u_right),
        _clamp_to_segment(u_2, u_left, u_right),
        _clamp_to_segment(u_3, u_left, u_right),
        u_left,
        u_right,
    ]

    best_u = us[0]
    best_distance = float(np.linalg.norm(query - (best_u * best_u * a + best_u * b + c)))
    for candidate in us[1:]:
        distance = float(np.linalg.norm(query - (candidate * candidate * a + candidate * b + c)))
        if distance < best_distance:
            best_u = candidate
            best_distance = distance
    return best_u, best_distance


def _subdivide_segment(
    query: np.ndarray,
    control_points: np.ndarray,
    knot_vector: np.ndarray,
    degree: int,
    first_derivative_points: np.ndarray,
    seed: float,
    delta: float,
) -> tuple[float, float]:
    # The plane through C(u) normal to C'(u) tells on which side the query lies
    derivative_knots = bspline_helper.derivative_knot_view(knot_vector, 1)
    u = seed
    u_left = u - 0.5 * delta
    u_right = u + 0.5 * delta

    for _ in range(config.SUBDIVISION_ITERATIONS):
        position = bspline_helper.compute_point(control_points, knot_vector, degree, u)
        tangent = bspline_helper.compute_point(first_derivative_points, derivative_knots, degree - 1, u)
        direction = float(np.dot(tangent, query - position))

        if abs(direction) < config.SUBDIVISION_TOLERANCE:
            break
        if direction > 0.0:
            u_left = u
        else:
            u_right = u
        u = 0.5 * (u_left + u_right)

    position = bspline_helper.compute_point(control_points, knot_vector, degree, u)
    return u, float(np.linalg.norm(query - position))


def _project_on_chord(
    query: np.ndarray,
    control_points: np.ndarray,
    knot_vector: np.ndarray,
    index: int,
) -> tuple[float, float]:
    k0 = float(knot_vector[index])
    k1 = float(knot_vector[index + 1])
    start = control_points[index - 1]
    chord = control_points[index] - start

    length_sq = float(chord.dot(chord))
    t = 0.0 if length_sq == 0.0 else float(np.clip((query - start).dot(chord) / length_sq, 0.0, 1.0))
    return k0 + t * (k1 - k0), float(np.linalg.norm(query - (start + t * chord)))


def _clamp_to_segment(u: float, u_left: float, u_right: float) -> float:
    # NaN from a degenerate Newton step fails the comparison as well
    if u_left <= u <= u_right:
        return u
    return u_left


def _format_candidates(candidates: list[tuple[float, float]]) -> str:
    return ", ".join(f"({u:.6g}, {d:.6g})" for u, d in candidates)
