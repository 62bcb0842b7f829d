"""
Loading sample sequences from CSV and writing segment labels back out.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np
import pandas as pd

from wkmeans.common.utils import log_data, log_warn
from wkmeans.config import (
    DEFAULT_CSV_SEPARATOR,
    DEFAULT_INDEX_COLUMN,
    DEFAULT_LABEL_COLUMN,
)
from wkmeans.warped_kmeans.utils.validation import as_sample_array

if TYPE_CHECKING:
    from wkmeans.warped_kmeans.core.clustering import WarpedKMeansResult


def load_samples_csv(
    path,
    columns: Optional[Sequence[str]] = None,
    sep: str = DEFAULT_CSV_SEPARATOR,
) -> np.ndarray:
    """
    Load an ordered sample sequence from a CSV file.

    Rows are kept in file order. Only numeric columns are used, and rows
    with missing values are dropped.

    Args:
        path: CSV file path.
        columns: Columns to use as vector coordinates. Defaults to every
            numeric column.
        sep: Field separator.

    Returns:
        Array of shape (N, D).

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If a requested column is missing.
        ValueError: If no usable numeric data remains.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing samples file: {path}")

    df = pd.read_csv(path, sep=sep)
    if columns:
        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise KeyError(f"Columns not found in {path.name}: {missing}")
        df = df[list(columns)]
    else:
        df = df.select_dtypes(include=[np.number])
        if df.shape[1] == 0:
            raise ValueError(f"No numeric columns in {path.name}")

    n_before = len(df)
    df = df.dropna()
    if len(df) < n_before:
        log_warn(f"Dropped {n_before - len(df)} rows with missing values")

    log_data(f"Loaded {len(df)} samples with {df.shape[1]} dimensions from {path.name}")
    return as_sample_array(df.to_numpy())


def save_labels_csv(path, result: "WarpedKMeansResult") -> Path:
    """Write one ``index,segment`` row per sample."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    labels = result.labels
    df = pd.DataFrame({DEFAULT_INDEX_COLUMN: labels.index, DEFAULT_LABEL_COLUMN: labels.values})
    df.to_csv(path, index=False)
    return path


__all__ = ["load_samples_csv", "save_labels_csv"]
