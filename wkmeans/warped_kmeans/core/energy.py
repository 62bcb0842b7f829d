"""
Centroids and within-segment energies.

Energies are computed from scratch once before optimization and once after
it; in between they are maintained through exact single-point updates.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from wkmeans.warped_kmeans.core.partition import EmptyClusterError
from wkmeans.warped_kmeans.core.vector_math import NumpyVectorMath, VectorMath


class EnergyModel:
    """Per-segment centroids, local energies and the total energy."""

    def __init__(self, vector_math: Optional[VectorMath] = None):
        self.vector_math = vector_math or NumpyVectorMath()
        self.centroids: list[np.ndarray] = []
        self.local_energy: list[float] = []
        self.total_energy: float = 0.0

    def reset(self, num_clusters: int = 0, dimensions: int = 0) -> None:
        self.centroids = [np.zeros(dimensions) for _ in range(num_clusters)]
        self.local_energy = [0.0] * num_clusters
        self.total_energy = 0.0

    def recompute_all(self, segments: Sequence[np.ndarray]) -> float:
        """
        Compute every centroid and energy from scratch.

        Args:
            segments: Member arrays, one per segment.

        Returns:
            The total energy.

        Raises:
            EmptyClusterError: If any segment has no members.
        """
        centroids = []
        local_energy = []
        total = 0.0
        for j, points in enumerate(segments):
            if len(points) == 0:
                raise EmptyClusterError(j)
            centroid = np.asarray(self.vector_math.mean(points), dtype=np.float64)
            energy = 0.0
            for point in points:
                energy += self.vector_math.squared_distance(point, centroid)
            centroids.append(centroid)
            local_energy.append(energy)
            total += energy

        self.centroids = centroids
        self.local_energy = local_energy
        self.total_energy = total
        return total

    def move_cost(
        self, sample: np.ndarray, source: int, dest: int, n: int, m: int
    ) -> tuple[float, float]:
        """
        Cost terms of moving one sample between segments.

        Args:
            sample: The sample being moved.
            source: Segment currently holding the sample (n members).
            dest: Adjacent segment receiving it (m members).

        Returns:
            (gain, loss): energy added to ``dest`` and removed from ``source``.
            The move lowers the total energy iff gain < loss.
        """
        gain = m / (m + 1) * self.vector_math.squared_distance(sample, self.centroids[dest])
        loss = n / (n - 1) * self.vector_math.squared_distance(sample, self.centroids[source])
        return gain, loss

    def apply_incremental_move(
        self, sample: np.ndarray, source: int, dest: int, n: int, m: int
    ) -> None:
        """
        Update both centroids after ``sample`` moved from ``source`` to ``dest``.

        ``n`` and ``m`` are the segment sizes before the move; exact for a
        single point as long as n >= 2.
        """
        sample = np.asarray(sample, dtype=np.float64)
        dest_centroid = self.centroids[dest]
        source_centroid = self.centroids[source]
        self.centroids[dest] = dest_centroid + (sample - dest_centroid) / (m + 1)
        self.centroids[source] = source_centroid - (sample - source_centroid) / (n - 1)

    def apply_energy_delta(self, source: int, dest: int, gain: float, loss: float) -> None:
        """Shift local and total energies by the terms from ``move_cost``."""
        self.local_energy[dest] += gain
        self.local_energy[source] -= loss
        self.total_energy += gain - loss


__all__ = ["EnergyModel"]
