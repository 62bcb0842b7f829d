"""
Boundary initialization strategies.

Produces the starting segmentation of an ordered sequence as a list of
segment start indices:
  - equal-count resampling spreads boundaries evenly by sample count
  - trace segmentation spreads them evenly by cumulative arc length
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import numpy as np

from wkmeans.config import MIN_SAMPLES_PER_SEGMENT_FOR_TS
from wkmeans.warped_kmeans.core.vector_math import NumpyVectorMath, VectorMath


class InitMethod(Enum):
    """Boundary initialization strategy."""

    DEFAULT = "default"
    TRACE_SEGMENTATION = "ts"
    EQUAL_RESAMPLE = "eq"

    @classmethod
    def parse(cls, method: Union["InitMethod", str, None]) -> "InitMethod":
        """
        Resolve a user-supplied method into an InitMethod.

        Accepts enum members, the short names "ts"/"eq"/"default" in any case,
        or None. Unknown strings fall back to DEFAULT.
        """
        if method is None:
            return cls.DEFAULT
        if isinstance(method, cls):
            return method
        key = str(method).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return cls.DEFAULT


def resample_boundaries(num_samples: int, num_clusters: int) -> list[int]:
    """
    Allocate N points into M segments linearly by sample count.

    Index i starts a new segment whenever floor((i+1)*M/(N+1)) exceeds the
    last recorded value.
    """
    boundaries: list[int] = []
    last = -1
    for i in range(num_samples):
        q = ((i + 1) * num_clusters) // (num_samples + 1)
        if q > last:
            last = q
            boundaries.append(i)
    return boundaries


def trace_segmentation_boundaries(
    samples: np.ndarray,
    num_clusters: int,
    vector_math: Optional[VectorMath] = None,
) -> list[int]:
    """
    Allocate boundaries evenly along the cumulative path length (trace segmentation).

    For each target fraction (j-1)/M of the total length, the first unused
    index whose cumulative length reaches the target becomes a boundary.

    Args:
        samples: Ordered samples, shape (N, D).
        num_clusters: Number of segments M.
        vector_math: Math collaborator providing cumulative_path_length.

    Returns:
        M boundary indices. An index equal to N means the trace ran out of
        samples; the partition step reports it as an empty segment.
    """
    vector_math = vector_math or NumpyVectorMath()
    path = vector_math.cumulative_path_length(samples)
    cumulative = path.values
    n = len(cumulative)
    increment = path.total / num_clusters

    boundaries: list[int] = []
    used: set[int] = set()
    i = 0
    for j in range(1, num_clusters + 1):
        target = (j - 1) * increment
        while i < n and (target > cumulative[i] or i in used):
            i += 1
        boundaries.append(i)
        used.add(i)
    return boundaries


def initialize_boundaries(
    samples: np.ndarray,
    num_clusters: int,
    method: Union[InitMethod, str, None] = None,
    vector_math: Optional[VectorMath] = None,
    trace_default: bool = False,
) -> list[int]:
    """
    Compute initial segment boundaries for a sequence.

    Args:
        samples: Ordered samples, shape (N, D).
        num_clusters: Number of segments M, already clamped to [1, N].
        method: Initialization strategy (InitMethod, "ts", "eq" or None).
        vector_math: Math collaborator used by trace segmentation.
        trace_default: When True, the DEFAULT strategy keeps the trace
            segmentation result for sequences with at least two samples per
            segment. When False, DEFAULT always ends with equal-count
            allocation.

    Returns:
        List of M strictly increasing start indices beginning with 0.
    """
    n = len(samples)
    m = num_clusters

    if m <= 1:
        return [0]
    if m >= n:
        return list(range(m))

    method = InitMethod.parse(method)

    if method is InitMethod.TRACE_SEGMENTATION:
        return trace_segmentation_boundaries(samples, m, vector_math)
    if method is InitMethod.EQUAL_RESAMPLE:
        return resample_boundaries(n, m)

    # Default heuristic
    if n / m < MIN_SAMPLES_PER_SEGMENT_FOR_TS:
        return resample_boundaries(n, m)
    boundaries = trace_segmentation_boundaries(samples, m, vector_math)
    if trace_default:
        return boundaries
    return resample_boundaries(n, m)


__all__ = [
    "InitMethod",
    "resample_boundaries",
    "trace_segmentation_boundaries",
    "initialize_boundaries",
]
