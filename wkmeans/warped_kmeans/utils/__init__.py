"""Helper utilities for Warped K-Means: input validation and CSV I/O."""

from wkmeans.warped_kmeans.utils.validation import (
    as_sample_array,
    clamp_num_clusters,
    clamp_threshold,
)
from wkmeans.warped_kmeans.utils.io import load_samples_csv, save_labels_csv

__all__ = [
    "as_sample_array",
    "clamp_num_clusters",
    "clamp_threshold",
    "load_samples_csv",
    "save_labels_csv",
]
