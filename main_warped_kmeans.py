"""
Warped K-Means Main Program

Segments an ordered sequence of vectors loaded from CSV:
- Loads samples in file order
- Initializes boundaries and runs the boundary optimization
- Displays the segmentation and optionally saves per-sample labels
"""

import sys
from typing import List, Optional

from wkmeans.common.utils import configure_windows_stdio

# Fix encoding issues on Windows for interactive CLI runs only
configure_windows_stdio()

from colorama import Fore, init as colorama_init

from wkmeans.common.utils import (
    color_text,
    extract_dict_from_namespace,
    log_error,
    log_progress,
    log_success,
)
from wkmeans.warped_kmeans.cli import display_fit_result, parse_args
from wkmeans.warped_kmeans.core.clustering import (
    WarpedKMeans,
    WarpedKMeansConfig,
    WarpedKMeansResult,
)
from wkmeans.warped_kmeans.core.partition import EmptyClusterError
from wkmeans.warped_kmeans.utils.io import load_samples_csv, save_labels_csv

colorama_init(autoreset=True)


def build_config(args) -> WarpedKMeansConfig:
    """Create the run configuration from parsed arguments."""
    params = extract_dict_from_namespace(
        args, ["max_iterations", "method", "trace_default", "verbose"]
    )
    return WarpedKMeansConfig(
        max_iterations=params["max_iterations"],
        init_method=params["method"],
        trace_default=bool(params["trace_default"]),
        verbose=bool(params["verbose"]),
    )


def run(args) -> WarpedKMeansResult:
    """
    Load samples, fit, display and optionally save labels.

    Raises:
        EmptyClusterError: If initialization produced an empty segment.
        ValueError: If the input cannot be used as a sample sequence.
    """
    columns = [c.strip() for c in args.columns.split(",") if c.strip()] if args.columns else None
    samples = load_samples_csv(args.input, columns=columns, sep=args.sep)

    config = build_config(args)
    log_progress(
        f"Fitting {args.num_clusters} segments (threshold={args.threshold}, "
        f"method={config.init_method.value})..."
    )
    clustering = WarpedKMeans(samples, args.num_clusters, args.threshold, config=config)
    clustering.initialize()
    result = clustering.fit()

    display_fit_result(result, source_label=args.input)

    if args.output:
        path = save_labels_csv(args.output, result)
        log_success(f"Saved labels to {path}")
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function for Warped K-Means clustering.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    try:
        run(args)
    except EmptyClusterError as e:
        log_error(f"Segmentation failed: {e}")
        return 1
    except (ValueError, KeyError, FileNotFoundError) as e:
        log_error(f"Invalid input: {e}")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print(color_text("\nExiting program by user request.", Fore.YELLOW))
        sys.exit(0)
