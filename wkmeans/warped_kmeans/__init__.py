"""
Warped K-Means Module.

Clusters sequentially-distributed data (trajectories, time series, gesture
traces) into a fixed number of contiguous segments that minimize the
within-segment squared distance to each segment mean.

Key design decisions:
  - Segments never interleave and samples are never reordered; only the
    boundary between two adjacent segments can move.
  - Moves are evaluated with the closed-form change in energy of a single
    point reassignment, and centroids are updated incrementally.
  - The search is greedy: each scan stops at the first rejected move, and
    the threshold limits how deep into a segment it goes.

Notes:
  - The number of segments is an input; it is not selected automatically.
  - Results are deterministic for a given input, segment count and threshold.
"""

from wkmeans.warped_kmeans.core.clustering import (
    WarpedKMeans,
    WarpedKMeansConfig,
    WarpedKMeansResult,
    compute_warped_kmeans,
)
from wkmeans.warped_kmeans.core.initializers import InitMethod
from wkmeans.warped_kmeans.core.partition import EmptyClusterError

__all__ = [
    "WarpedKMeans",
    "WarpedKMeansConfig",
    "WarpedKMeansResult",
    "compute_warped_kmeans",
    "InitMethod",
    "EmptyClusterError",
]
