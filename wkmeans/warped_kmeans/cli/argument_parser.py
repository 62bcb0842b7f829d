"""
Command-line argument parser for Warped K-Means.

Defines all command-line options and their default values.
"""

import argparse

from wkmeans.config import (
    DEFAULT_CSV_SEPARATOR,
    DEFAULT_INIT_METHOD,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_NUM_CLUSTERS,
    DEFAULT_THRESHOLD,
)
from wkmeans.warped_kmeans.core.initializers import InitMethod


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments for Warped K-Means clustering."""
    parser = argparse.ArgumentParser(
        description="Warped K-Means: contiguous clustering of sequential data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Input / output
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="CSV file with one sample per row, in sequence order",
    )
    parser.add_argument(
        "--columns",
        type=str,
        default=None,
        help="Comma-separated columns to use as coordinates (default: all numeric)",
    )
    parser.add_argument(
        "--sep",
        type=str,
        default=DEFAULT_CSV_SEPARATOR,
        help=f"CSV field separator (default: '{DEFAULT_CSV_SEPARATOR}')",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional CSV path for per-sample segment labels",
    )

    # Clustering parameters
    parser.add_argument(
        "--clusters",
        type=int,
        default=DEFAULT_NUM_CLUSTERS,
        dest="num_clusters",
        help=f"Number of segments (default: {DEFAULT_NUM_CLUSTERS})",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Search depth limiter in [0, 1] (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "--method",
        type=str,
        default=DEFAULT_INIT_METHOD,
        choices=[m.value for m in InitMethod],
        help=f"Boundary initialization (default: {DEFAULT_INIT_METHOD})",
    )
    parser.add_argument(
        "--max-iter",
        type=int,
        default=DEFAULT_MAX_ITERATIONS,
        dest="max_iterations",
        help=f"Maximum optimization sweeps (default: {DEFAULT_MAX_ITERATIONS})",
    )
    parser.add_argument(
        "--trace-default",
        action="store_true",
        dest="trace_default",
        help="Keep trace segmentation in the default initializer when N/M >= 2",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress of every sweep",
    )

    return parser.parse_args(argv)
