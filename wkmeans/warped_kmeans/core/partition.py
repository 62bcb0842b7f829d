"""
Segment bookkeeping for sequential clustering.

Keeps the boundary list and the contiguous member slices it implies, and
enforces that no segment is ever empty.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


class EmptyClusterError(Exception):
    """Raised when a segment has, or would end up with, zero members."""

    def __init__(self, index: int):
        self.index = int(index)
        super().__init__(f"Empty cluster {self.index}")


class SegmentPartition:
    """Boundaries and member slices of an ordered sequence."""

    def __init__(self, samples: np.ndarray, boundaries: Sequence[int] | None = None):
        """
        Initialize partition bookkeeping.

        Args:
            samples: Ordered samples, shape (N, D). Never reordered.
            boundaries: Optional initial start indices.
        """
        self.samples = samples
        self.boundaries: list[int] = list(boundaries) if boundaries is not None else [0]
        self.segments: list[np.ndarray] = []

    @property
    def num_clusters(self) -> int:
        return len(self.boundaries)

    def segment_members(self, index: int) -> np.ndarray:
        """Samples in [boundaries[index], boundaries[index + 1]) or up to N for the last segment."""
        start = self.boundaries[index]
        if index + 1 < len(self.boundaries):
            end = self.boundaries[index + 1]
        else:
            end = len(self.samples)
        return self.samples[start:end]

    def derive_partition(self) -> list[np.ndarray]:
        """
        Slice every segment from the current boundaries.

        Raises:
            EmptyClusterError: On the first segment with no members.
        """
        segments = []
        for j in range(len(self.boundaries)):
            members = self.segment_members(j)
            if len(members) == 0:
                raise EmptyClusterError(j)
            segments.append(members)
        self.segments = segments
        return segments

    def set_explicit_partition(self, partition: Sequence[Sequence]) -> list[np.ndarray]:
        """
        Adopt a caller-supplied segmentation of this sequence.

        Boundaries are rebuilt from cumulative segment lengths, so segment j
        starts where segments 0..j-1 end. The supplied contents must be the
        sequence itself, split in order; stored segments are slices of the
        samples so later re-derivation agrees with them.

        Args:
            partition: Non-empty segments, in sequence order, that together
                cover the whole sequence.

        Raises:
            EmptyClusterError: If any supplied segment is empty.
            ValueError: If the segments have the wrong dimension, do not add up
                to the sequence length, or do not match the samples.
        """
        boundaries = [0]
        supplied = []
        offset = 0
        for j, points in enumerate(partition):
            points = np.asarray(points, dtype=np.float64)
            if len(points) == 0:
                raise EmptyClusterError(j)
            if points.ndim == 1:
                points = points.reshape(-1, self.samples.shape[1])
            if points.shape[1] != self.samples.shape[1]:
                raise ValueError(
                    f"Segment {j} has dimension {points.shape[1]}, expected {self.samples.shape[1]}"
                )
            supplied.append(points)
            if j > 0:
                boundaries.append(offset)
            offset += len(points)

        if not supplied:
            raise EmptyClusterError(0)
        if offset != len(self.samples):
            raise ValueError(
                f"Explicit partition covers {offset} samples, sequence has {len(self.samples)}"
            )
        if not np.array_equal(np.concatenate(supplied), self.samples):
            raise ValueError("Explicit partition contents do not match the sequence")

        self.boundaries = boundaries
        return self.derive_partition()

    def segment_sizes(self) -> list[int]:
        return [len(points) for points in self.segments]

    def labels(self) -> np.ndarray:
        """Per-sample segment index derived from the boundaries."""
        labels = np.zeros(len(self.samples), dtype=np.int64)
        for j, start in enumerate(self.boundaries):
            labels[start:] = j
        return labels


__all__ = ["EmptyClusterError", "SegmentPartition"]
