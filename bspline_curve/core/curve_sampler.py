from __future__ import annotations

from typing import Callable

import numpy as np
from scipy import interpolate

from bspline_curve.core import config
from bspline_curve.core import operations
from bspline_curve.core.results import ClosestPointResult, SampleSet
from bspline_curve.utils import bspline_helper


class CurveSampler:
    """
    Evaluates a B-spline curve given by its de Boor points.
    Samples positions, parameters and (degree > 2) frames, and optionally
    finds the closest curve point to a query point.
    """

    def __init__(
        self,
        degree: int = config.DEFAULT_DEGREE,
        num_output_points: int = config.DEFAULT_NUM_OUTPUT_POINTS,
        hit_endpoints: bool = config.DEFAULT_HIT_ENDPOINTS,
        logger_func: Callable[[str], None] = print,
        debug: bool = config.DEBUG_WORKER_LOGGING,
    ):
        self.degree: int = int(degree)
        self.num_output_points: int = int(num_output_points)
        self.hit_endpoints: bool = bool(hit_endpoints)
        self.logger_func = logger_func
        self.debug: bool = debug
        self._reset_outputs()

    def _reset_outputs(self) -> None:
        self.control_points: np.ndarray | None = None
        self.knot_vector: np.ndarray | None = None
        self.first_derivative_points: np.ndarray | None = None
        self.second_derivative_points: np.ndarray | None = None
        self.samples: SampleSet | None = None
        self.closest_point: ClosestPointResult | None = None
        self.error_message: str | None = None
        self.evaluated: bool = False

    def evaluate(self, control_points, query_point=None) -> bool:
        """
        Sample the curve and, when query_point is given, locate its closest point.
        Returns False and leaves all outputs empty on invalid parameters.
        """
        self._reset_outputs()
        try:
            cp = bspline_helper.as_control_polygon(control_points)
            bspline_helper.validate_parameters(self.degree, self.num_output_points, len(cp))
            query = None if query_point is None else bspline_helper.as_query_point(query_point)
        except ValueError as e:
            self.error_message = str(e)
            self.logger_func(f"Error in evaluate: {self.error_message}")
            return False

        self.logger_func(f"Number of input points: {len(cp)}")

        knot_vector = bspline_helper.create_knot_vector(len(cp), self.degree, self.hit_endpoints)
        self.logger_func(f"Knot vector: {knot_vector.tolist()}")

        self.control_points = cp
        self.knot_vector = knot_vector
        operations.build_derivatives(self)
        self.samples = operations.sample_curve(self)

        if query is not None:
            self.closest_point = operations.find_closest_point(
                query,
                self.control_points,
                self.knot_vector,
                self.degree,
                self.first_derivative_points,
                logger_func=self.logger_func if self.debug else None,
            )
            position = self.closest_point.position
            self.logger_func(f"Closest point at arc: {self.closest_point.parameter}")
            self.logger_func(f"Closest point position: [{position[0]}, {position[1]}, {position[2]}]")
            self.logger_func(f"Distance: {self.closest_point.distance}")

        self.evaluated = True
        return True

    def is_evaluated(self) -> bool:
        """Check if the last evaluation produced output."""
        return self.evaluated

    def point_data(self) -> dict[str, np.ndarray] | None:
        if self.samples is None:
            return None
        return operations.build_point_data(self.samples)

    def line_cells(self) -> np.ndarray | None:
        if self.samples is None:
            return None
        return operations.build_line_cells(len(self.samples))

    def as_scipy_bspline(self) -> interpolate.BSpline | None:
        """The evaluated curve as a scipy BSpline over the same knots."""
        if self.control_points is None or self.knot_vector is None:
            return None
        return bspline_helper.to_scipy_bspline(self.control_points, self.knot_vector, self.degree)


def sample_bspline(
    control_points,
    degree: int,
    num_output_points: int,
    hit_endpoints: bool = True,
    query_point=None,
) -> tuple[SampleSet, ClosestPointResult | None]:
    """
    Evaluate a curve in one call.

    Args:
        control_points: De Boor points, (N, 3) or (N, 2)
        degree: B-spline degree
        num_output_points: Number of evenly spaced samples
        hit_endpoints: Clamp the curve to its first and last control point
        query_point: Optional point to project onto the curve

    Returns:
        Tuple of (samples, closest point result or None)

    Raises:
        ValueError: when degree, sample count or point count are invalid
    """
    sampler = CurveSampler(degree, num_output_points, hit_endpoints, logger_func=lambda message: None)
    if not sampler.evaluate(control_points, query_point):
        raise ValueError(sampler.error_message)
    return sampler.samples, sampler.closest_point
