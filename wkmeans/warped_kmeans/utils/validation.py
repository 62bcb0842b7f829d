"""
Input sanitizing for Warped K-Means.

Segment count and threshold are clamped into range rather than rejected;
only structurally unusable samples raise.
"""

from __future__ import annotations

import numpy as np

from wkmeans.common.utils import log_warn


def as_sample_array(samples) -> np.ndarray:
    """
    Convert samples into a float64 array of shape (N, D).

    Accepts nested lists, numpy arrays and pandas objects. A flat sequence
    of scalars is treated as N one-dimensional samples.

    Raises:
        ValueError: If there are no samples, vectors have unequal length,
            or any coordinate is not finite.
    """
    try:
        arr = np.asarray(samples, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"samples must be equal-length numeric vectors: {exc}") from exc

    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"samples must be a 2D array-like, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise ValueError("samples cannot be empty")
    if arr.shape[1] == 0:
        raise ValueError("samples must have at least one dimension")
    if not np.all(np.isfinite(arr)):
        raise ValueError("samples contain NaN or infinite values")
    return arr


def clamp_num_clusters(num_clusters, num_samples: int) -> int:
    """Clamp the segment count into [1, num_samples], warning when it changes. NaN becomes 1."""
    if np.isnan(float(num_clusters)):
        log_warn("num_clusters is NaN, setting to 1")
        return 1
    value = int(num_clusters)
    if value < 1:
        log_warn(f"num_clusters {value} < 1, setting to 1")
        return 1
    if value > num_samples:
        log_warn(f"num_clusters {value} > number of samples, setting to {num_samples}")
        return num_samples
    return value


def clamp_threshold(threshold) -> float:
    """Clamp the search threshold into [0, 1]; None and NaN become 0."""
    if threshold is None:
        return 0.0
    value = float(threshold)
    if np.isnan(value):
        log_warn("threshold is NaN, setting to 0")
        return 0.0
    if value < 0.0:
        log_warn(f"threshold {value} < 0, setting to 0")
        return 0.0
    if value > 1.0:
        log_warn(f"threshold {value} > 1, setting to 1")
        return 1.0
    return value


__all__ = ["as_sample_array", "clamp_num_clusters", "clamp_threshold"]
