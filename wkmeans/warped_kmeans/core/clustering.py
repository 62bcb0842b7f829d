"""
Main clustering calculation for Warped K-Means.

Partitions an ordered sequence of vectors into contiguous segments that
minimize the within-segment squared distance to each segment mean. Starting
from an initial segmentation, boundary samples are greedily moved to the
adjacent segment while that lowers the total energy.

Reference: L. A. Leiva and E. Vidal, "Warped K-Means: An algorithm to cluster
sequentially-distributed data", Information Sciences, 2013.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from wkmeans.common.utils import log_debug, log_progress, log_warn
from wkmeans.config import (
    DEFAULT_LABEL_COLUMN,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_NUM_CLUSTERS,
    DEFAULT_THRESHOLD,
)
from wkmeans.warped_kmeans.core.energy import EnergyModel
from wkmeans.warped_kmeans.core.initializers import InitMethod, initialize_boundaries
from wkmeans.warped_kmeans.core.partition import SegmentPartition
from wkmeans.warped_kmeans.core.vector_math import NumpyVectorMath, VectorMath
from wkmeans.warped_kmeans.utils.validation import (
    as_sample_array,
    clamp_num_clusters,
    clamp_threshold,
)


@dataclass
class WarpedKMeansConfig:
    """Configuration for the optimization run."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS  # Cap on full sweeps
    init_method: Union[InitMethod, str, None] = None  # None/"default", "ts" or "eq"
    trace_default: bool = False  # Keep trace segmentation in the default initializer
    verbose: bool = False  # Log per-sweep progress

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        self.init_method = InitMethod.parse(self.init_method)


@dataclass
class WarpedKMeansResult:
    """Snapshot of a finished fit."""

    boundaries: list[int]  # Segment start indices
    segments: list[np.ndarray]  # Contiguous member arrays
    centroids: list[np.ndarray]  # Segment means
    local_energy: list[float]  # Per-segment sum of squared distances
    total_energy: float  # Sum of local energies
    initial_energy: float  # Total energy of the starting partition
    iterations: int  # Sweeps performed
    num_transfers: int  # Accepted boundary moves
    cost: int  # Candidate moves evaluated
    converged: bool  # Last sweep accepted no move

    @property
    def num_clusters(self) -> int:
        return len(self.boundaries)

    @property
    def labels(self) -> pd.Series:
        """Segment index of every sample, in sequence order."""
        n = sum(len(points) for points in self.segments)
        labels = np.zeros(n, dtype=np.int64)
        for j, start in enumerate(self.boundaries):
            labels[start:] = j
        return pd.Series(labels, name=DEFAULT_LABEL_COLUMN)

    def summary(self) -> pd.DataFrame:
        """One row per segment: start, end (exclusive), size, energy and centroid coordinates."""
        rows = []
        for j, (start, points) in enumerate(zip(self.boundaries, self.segments)):
            row = {
                "segment": j,
                "start": start,
                "end": start + len(points),
                "size": len(points),
                "local_energy": self.local_energy[j],
            }
            for d, value in enumerate(np.ravel(self.centroids[j])):
                row[f"centroid_{d}"] = float(value)
            rows.append(row)
        return pd.DataFrame(rows).set_index("segment")


class WarpedKMeans:
    """Sequential clustering with contiguous segments."""

    def __init__(
        self,
        samples,
        num_clusters: int = DEFAULT_NUM_CLUSTERS,
        threshold: float = DEFAULT_THRESHOLD,
        *,
        config: Optional[WarpedKMeansConfig] = None,
        vector_math: Optional[VectorMath] = None,
    ):
        """
        Initialize the clustering engine.

        Args:
            samples: Ordered equal-length numeric vectors (N >= 1).
            num_clusters: Number of segments, clamped to [1, N].
            threshold: Search depth limiter, clamped to [0, 1]. 0 scans up to
                half of each segment per direction, 1 scans a single sample.
            config: Optional run configuration.
            vector_math: Math collaborator; defaults to NumpyVectorMath.
        """
        self.config = config or WarpedKMeansConfig()
        self.vector_math = vector_math or NumpyVectorMath()

        self.samples = as_sample_array(samples)
        self.dimensions = self.samples.shape[1]
        self.num_clusters = clamp_num_clusters(num_clusters, len(self.samples))
        self.threshold = clamp_threshold(threshold)

        self._partition = SegmentPartition(self.samples)
        self._energy = EnergyModel(self.vector_math)
        self.reset()

    # -------------------------------------------------------------
    # State
    # -------------------------------------------------------------

    @property
    def boundaries(self) -> list[int]:
        return self._partition.boundaries

    @property
    def segments(self) -> list[np.ndarray]:
        return self._partition.segments

    @property
    def centroids(self) -> list[np.ndarray]:
        return self._energy.centroids

    @property
    def local_energy(self) -> list[float]:
        return self._energy.local_energy

    @property
    def total_energy(self) -> float:
        return self._energy.total_energy

    def reset(self) -> None:
        """Clear boundaries, energies and counters."""
        self.initialized = False
        self._partition.boundaries = [0] * self.num_clusters
        self._partition.segments = []
        self._energy.reset(self.num_clusters, self.dimensions)
        self.initial_energy = 0.0
        self.iterations = 0
        self.num_transfers = 0
        self.cost = 0
        self.converged = False

    def initialize(self, method: Union[InitMethod, str, None] = None) -> list[int]:
        """
        Reset state and compute initial boundaries.

        Args:
            method: InitMethod, "ts", "eq" or None for the configured default.

        Returns:
            The initial boundaries.
        """
        self.reset()
        if method is None:
            method = self.config.init_method
        boundaries = initialize_boundaries(
            self.samples,
            self.num_clusters,
            method=method,
            vector_math=self.vector_math,
            trace_default=self.config.trace_default,
        )
        self._partition.boundaries = boundaries
        self.initialized = True
        if self.config.verbose:
            log_debug(f"Initialized {len(boundaries)} boundaries ({InitMethod.parse(method).value})")
        return boundaries

    # -------------------------------------------------------------
    # Optimization
    # -------------------------------------------------------------

    def fit(self, partition: Optional[Sequence[Sequence]] = None) -> WarpedKMeansResult:
        """
        Run the boundary optimization to convergence or the sweep cap.

        Args:
            partition: Optional explicit segmentation (one non-empty member
                list per segment, covering the sequence in order) used
                instead of the current boundaries.

        Returns:
            WarpedKMeansResult snapshot.

        Raises:
            EmptyClusterError: If any segment is or becomes empty.
            ValueError: If the explicit partition does not match the sequence
                or the segment count.
        """
        if not self.initialized:
            self.initialize()

        if partition is not None:
            if len(partition) != self.num_clusters:
                raise ValueError(
                    f"Explicit partition has {len(partition)} segments, expected {self.num_clusters}"
                )
            self._partition.set_explicit_partition(partition)
        else:
            self._partition.derive_partition()

        self.iterations = 0
        self.num_transfers = 0
        self.cost = 0
        self.initial_energy = self._energy.recompute_all(self.segments)
        self.converged = True

        if self.num_clusters < 2:
            return self.result()

        max_iterations = self.config.max_iterations
        while True:
            transfers = 0
            for j in range(self.num_clusters):
                if j > 0:
                    transfers += self._scan_left(j)
                if j + 1 < self.num_clusters:
                    transfers += self._scan_right(j)
            self.iterations += 1

            if self.config.verbose:
                log_progress(
                    f"Sweep {self.iterations}: {transfers} transfers, "
                    f"energy={self.total_energy:.6g}"
                )
            if transfers == 0:
                self.converged = True
                break
            if self.iterations >= max_iterations:
                self.converged = False
                log_warn(f"Stopped after {max_iterations} sweeps without converging")
                break

        # Incremental updates accumulate rounding error
        self._energy.recompute_all(self.segments)
        return self.result()

    def _scan_depth(self, size: int) -> int:
        return int(size / 2 * (1 - self.threshold)) + 1

    def _scan_left(self, j: int) -> int:
        """Try moving the leading samples of segment j into segment j - 1."""
        accepted = 0
        for _ in range(self._scan_depth(len(self.segments[j]))):
            if len(self.segments[j]) < 2:
                break
            sample = self.segments[j][0]
            if not self._try_move(sample, j, j - 1):
                break
            self._partition.boundaries[j] += 1
            self._partition.derive_partition()
            accepted += 1
        return accepted

    def _scan_right(self, j: int) -> int:
        """Try moving the trailing samples of segment j into segment j + 1."""
        accepted = 0
        for _ in range(self._scan_depth(len(self.segments[j]))):
            if len(self.segments[j]) < 2:
                break
            sample = self.segments[j][-1]
            if not self._try_move(sample, j, j + 1):
                break
            self._partition.boundaries[j + 1] -= 1
            self._partition.derive_partition()
            accepted += 1
        return accepted

    def _try_move(self, sample: np.ndarray, source: int, dest: int) -> bool:
        """
        Evaluate moving ``sample`` from ``source`` to the adjacent ``dest``.

        Updates centroids and energies when the move lowers the total energy.
        The caller shifts the boundary.
        """
        n = len(self.segments[source])
        m = len(self.segments[dest])
        gain, loss = self._energy.move_cost(sample, source, dest, n, m)
        self.cost += 1
        if gain - loss >= 0 or n < 2:
            return False

        self.num_transfers += 1
        self._energy.apply_incremental_move(sample, source, dest, n, m)
        self._energy.apply_energy_delta(source, dest, gain, loss)
        return True

    def result(self) -> WarpedKMeansResult:
        """Snapshot of the current state."""
        return WarpedKMeansResult(
            boundaries=list(self.boundaries),
            segments=[np.array(points, copy=True) for points in self.segments],
            centroids=[np.array(c, copy=True) for c in self.centroids],
            local_energy=list(self.local_energy),
            total_energy=float(self.total_energy),
            initial_energy=float(self.initial_energy),
            iterations=self.iterations,
            num_transfers=self.num_transfers,
            cost=self.cost,
            converged=self.converged,
        )


def compute_warped_kmeans(
    samples,
    num_clusters: int = DEFAULT_NUM_CLUSTERS,
    threshold: float = DEFAULT_THRESHOLD,
    method: Union[InitMethod, str, None] = None,
    partition: Optional[Sequence[Sequence]] = None,
    config: Optional[WarpedKMeansConfig] = None,
) -> WarpedKMeansResult:
    """Convenience function to initialize and fit in one call."""
    clustering = WarpedKMeans(samples, num_clusters, threshold, config=config)
    clustering.initialize(method)
    return clustering.fit(partition)


__all__ = [
    "WarpedKMeansConfig",
    "WarpedKMeansResult",
    "WarpedKMeans",
    "compute_warped_kmeans",
]
