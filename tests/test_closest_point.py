import numpy as np
import pytest

from bspline_curve import sample_bspline
from bspline_curve.core.operations import (
    deflated_quadratic_roots,
    find_closest_point,
    initial_guesses,
    quadratic_segment_coefficients,
)
from bspline_curve.utils.bspline_helper import compute_point, create_knot_vector


def _zigzag() -> np.ndarray:
    return np.array(
        [[0.0, 0.0, 0.0], [1.0, 2.0, 0.0], [2.0, 2.0, 0.0], [3.0, 0.0, 0.0], [4.0, 1.0, 0.0]]
    )


def _collinear() -> np.ndarray:
    return np.array([[float(i), 0.0, 0.0] for i in range(5)])


def test_one_initial_guess_per_segment_at_its_midpoint() -> None:
    cp = _zigzag()
    knots = create_knot_vector(len(cp), 2)

    guesses, delta = initial_guesses(np.zeros(3), cp, knots, 2)

    assert delta == 1.0
    assert [u for u, _ in guesses] == [0.5, 1.5, 2.5]
    for u, distance in guesses:
        assert distance == pytest.approx(np.linalg.norm(compute_point(cp, knots, 2, u)))


@pytest.mark.parametrize("hit_endpoints", [True, False])
def test_quadratic_coefficients_reproduce_segment(hit_endpoints: bool) -> None:
    cp = _zigzag()
    degree = 2
    knots = create_knot_vector(len(cp), degree, hit_endpoints=hit_endpoints)

    for index in range(degree, len(cp)):
        a, b, c = quadratic_segment_coefficients(cp, knots, index)
        for u in np.linspace(knots[index], knots[index + 1], 5)[:-1]:
            np.testing.assert_allclose(u * u * a + u * b + c, compute_point(cp, knots, degree, float(u)), atol=1e-12)


def test_degree_two_collinear_projection_is_exact() -> None:
    cp = _collinear()
    knots = create_knot_vector(len(cp), 2)

    result = find_closest_point(np.array([2.3, 1.0, 0.0]), cp, knots, 2)

    assert result.parameter == pytest.approx(1.8, abs=1e-9)
    assert result.distance == pytest.approx(1.0, abs=1e-9)
    np.testing.assert_allclose(result.position, [2.3, 0.0, 0.0], atol=1e-9)


def test_degree_two_point_on_collinear_curve_has_zero_residual() -> None:
    cp = _collinear()
    knots = create_knot_vector(len(cp), 2)

    result = find_closest_point(np.array([2.3, 0.0, 0.0]), cp, knots, 2)

    assert result.distance == pytest.approx(0.0, abs=1e-9)
    assert result.parameter == pytest.approx(1.8, abs=1e-9)


def test_degree_two_point_on_curve_is_found() -> None:
    cp = _zigzag()
    knots = create_knot_vector(len(cp), 2)
    query = compute_point(cp, knots, 2, 1.5)

    result = find_closest_point(query, cp, knots, 2)

    assert result.parameter == pytest.approx(1.5, abs=1e-6)
    assert result.distance == pytest.approx(0.0, abs=1e-9)


def test_degree_two_query_beyond_start_clamps_to_segment_bound() -> None:
    cp = _collinear()
    knots = create_knot_vector(len(cp), 2)

    result = find_closest_point(np.array([-2.0, 0.0, 0.0]), cp, knots, 2)

    assert result.parameter == pytest.approx(0.0)
    assert result.distance == pytest.approx(2.0)


def test_quadratic_factor_skipped_when_leading_coefficient_below_segment_width() -> None:
    # 0.5 (u - 1)(u - 2)(u - 3): the guard compares |0.5| against the knot spacing,
    # so the real roots 2 and 3 are only reported for a spacing below 0.5.
    v_dash, w_dash, x_dash = 0.5, -3.0, 5.5

    assert deflated_quadratic_roots(v_dash, w_dash, x_dash, 1.0, threshold=1.0) == (1.0, 1.0)
    assert deflated_quadratic_roots(v_dash, w_dash, x_dash, 1.0, threshold=0.1) == pytest.approx((3.0, 2.0))


def test_quadratic_factor_skipped_for_negative_discriminant() -> None:
    # 2 (u - 1)(u^2 + 1)
    assert deflated_quadratic_roots(2.0, -2.0, 2.0, 1.0, threshold=1.0) == (1.0, 1.0)


def test_degree_three_result_not_worse_than_uniform_samples() -> None:
    query = np.array([1.5, 2.0, 0.0])
    samples, result = sample_bspline(_zigzag(), degree=3, num_output_points=21, query_point=query)

    sample_distances = np.linalg.norm(samples.points - query, axis=1)
    assert result is not None
    assert result.distance <= sample_distances.min() + 1e-5
    assert result.distance == pytest.approx(np.linalg.norm(query - result.position), abs=1e-12)


def test_degree_three_computes_derivative_when_not_given() -> None:
    cp = _zigzag()
    knots = create_knot_vector(len(cp), 3)
    query = compute_point(cp, knots, 3, 0.5)

    result = find_closest_point(query, cp, knots, 3)

    assert result.distance == pytest.approx(0.0, abs=1e-6)
    assert result.parameter == pytest.approx(0.5, abs=1e-3)


def test_degree_one_projects_onto_chords() -> None:
    cp = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0]])
    knots = create_knot_vector(len(cp), 1)

    result = find_closest_point(np.array([0.5, 0.3, 0.0]), cp, knots, 1)

    assert result.parameter == pytest.approx(0.5)
    assert result.distance == pytest.approx(0.3)
    np.testing.assert_allclose(result.position, [0.5, 0.0, 0.0], atol=1e-12)


def test_debug_logger_reports_segment_candidates() -> None:
    cp = _zigzag()
    knots = create_knot_vector(len(cp), 2)
    messages: list[str] = []

    find_closest_point(np.array([2.0, 3.0, 0.0]), cp, knots, 2, logger_func=messages.append)

    assert messages[0].startswith("Initial guess: ")
    assert messages[1].startswith("Resulting distances: ")
