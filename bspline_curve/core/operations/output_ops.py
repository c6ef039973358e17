from __future__ import annotations

import numpy as np

from bspline_curve.core import config
from bspline_curve.core.results import SampleSet


def build_point_data(samples: SampleSet) -> dict[str, np.ndarray]:
    """Named per-point arrays in the order a polyline consumer attaches them."""
    point_data = {config.PARAMETER_ARRAY_NAME: samples.parameters.astype(np.float32)}
    if samples.has_frames:
        point_data[config.TANGENT_ARRAY_NAME] = samples.tangents.astype(np.float32)
        point_data[config.BINORMAL_ARRAY_NAME] = samples.binormals.astype(np.float32)
        point_data[config.NORMAL_ARRAY_NAME] = samples.normals.astype(np.float32)
    return point_data


def build_line_cells(num_points: int) -> np.ndarray:
    """Cell array of a single polyline through all points: [n, 0, 1, ..., n - 1]."""
    cells = np.empty(num_points + 1, dtype=np.int64)
    cells[0] = num_points
    cells[1:] = np.arange(num_points, dtype=np.int64)
    return cells
