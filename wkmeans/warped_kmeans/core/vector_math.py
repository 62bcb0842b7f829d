"""
Vector arithmetic consumed by the clustering engine.

The engine never does its own distance or mean computations; it calls a
``VectorMath`` object passed in at construction. ``NumpyVectorMath`` is the
default implementation.
"""

from __future__ import annotations

from typing import NamedTuple, Protocol

import numpy as np


class PathLength(NamedTuple):
    """Running Euclidean arc length along an ordered sequence."""

    values: np.ndarray  # One entry per point, values[0] == 0, non-decreasing
    total: float  # Equals values[-1]


class VectorMath(Protocol):
    """Operations the clustering engine needs from its math collaborator."""

    def squared_distance(self, u: np.ndarray, v: np.ndarray) -> float:
        ...

    def mean(self, points: np.ndarray) -> np.ndarray:
        ...

    def cumulative_path_length(self, points: np.ndarray) -> PathLength:
        ...


class NumpyVectorMath:
    """Default ``VectorMath`` backed by numpy."""

    def squared_distance(self, u: np.ndarray, v: np.ndarray) -> float:
        diff = np.asarray(u, dtype=np.float64) - np.asarray(v, dtype=np.float64)
        return float(np.dot(diff, diff))

    def mean(self, points: np.ndarray) -> np.ndarray:
        points = np.asarray(points, dtype=np.float64)
        if len(points) == 0:
            raise ValueError("Cannot compute the mean of an empty point set")
        return points.mean(axis=0)

    def cumulative_path_length(self, points: np.ndarray) -> PathLength:
        points = np.asarray(points, dtype=np.float64)
        if len(points) == 0:
            return PathLength(values=np.zeros(0), total=0.0)
        steps = np.linalg.norm(np.diff(points, axis=0), axis=1)
        values = np.concatenate(([0.0], np.cumsum(steps)))
        return PathLength(values=values, total=float(values[-1]))


__all__ = ["PathLength", "VectorMath", "NumpyVectorMath"]
