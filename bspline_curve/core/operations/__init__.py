from .closest_point_ops import (
    deflated_quadratic_roots,
    find_closest_point,
    initial_guesses,
    quadratic_segment_coefficients,
)
from .frame_ops import compute_frame
from .output_ops import build_line_cells, build_point_data
from .sample_ops import build_derivatives, sample_curve
