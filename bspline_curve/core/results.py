"""Result containers produced by a curve evaluation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SampleSet:
    """Uniformly sampled curve points with their parameters and optional frames."""

    points: np.ndarray
    parameters: np.ndarray
    tangents: np.ndarray | None = None
    binormals: np.ndarray | None = None
    normals: np.ndarray | None = None

    def __len__(self) -> int:
        return len(self.parameters)

    @property
    def has_frames(self) -> bool:
        return self.tangents is not None


@dataclass(frozen=True)
class ClosestPointResult:
    """Curve parameter, distance and position nearest to a query point."""

    parameter: float
    distance: float
    position: np.ndarray


__all__ = ["SampleSet", "ClosestPointResult"]
