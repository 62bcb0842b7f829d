"""Core clustering calculation modules."""

from wkmeans.warped_kmeans.core.clustering import (
    WarpedKMeans,
    WarpedKMeansConfig,
    WarpedKMeansResult,
    compute_warped_kmeans,
)
from wkmeans.warped_kmeans.core.energy import EnergyModel
from wkmeans.warped_kmeans.core.initializers import (
    InitMethod,
    initialize_boundaries,
    resample_boundaries,
    trace_segmentation_boundaries,
)
from wkmeans.warped_kmeans.core.partition import EmptyClusterError, SegmentPartition
from wkmeans.warped_kmeans.core.vector_math import NumpyVectorMath, PathLength, VectorMath

__all__ = [
    "WarpedKMeans",
    "WarpedKMeansConfig",
    "WarpedKMeansResult",
    "compute_warped_kmeans",
    "EnergyModel",
    "InitMethod",
    "initialize_boundaries",
    "resample_boundaries",
    "trace_segmentation_boundaries",
    "EmptyClusterError",
    "SegmentPartition",
    "NumpyVectorMath",
    "PathLength",
    "VectorMath",
]
