"""B-spline curve sampling and closest point queries from de Boor points."""

from .core.curve_sampler import CurveSampler, sample_bspline
from .core.results import ClosestPointResult, SampleSet
from .utils.bspline_helper import (
    compute_point,
    create_knot_vector,
    derivative_knot_view,
    derive,
    evaluate_basis_function,
    evaluate_basis_functions,
)

__all__ = [
    "CurveSampler",
    "sample_bspline",
    "ClosestPointResult",
    "SampleSet",
    "compute_point",
    "create_knot_vector",
    "derivative_knot_view",
    "derive",
    "evaluate_basis_function",
    "evaluate_basis_functions",
]
