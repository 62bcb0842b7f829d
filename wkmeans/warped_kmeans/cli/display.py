"""
Display utilities for the Warped K-Means CLI.
"""

from colorama import Fore, Style

from wkmeans.common.utils import (
    color_text,
    format_number,
    format_vector,
    log_success,
    log_warn,
)
from wkmeans.warped_kmeans.core.clustering import WarpedKMeansResult


def display_fit_result(result: WarpedKMeansResult, source_label: str = "") -> None:
    """
    Display a fitted segmentation.

    Args:
        result: Finished fit
        source_label: Name of the input, shown in the header
    """
    title = "WARPED K-MEANS"
    if source_label:
        title = f"{title} - {source_label}"

    print("\n" + color_text("=" * 80, Fore.CYAN, Style.BRIGHT))
    print(color_text(title, Fore.CYAN, Style.BRIGHT))
    print(color_text("=" * 80, Fore.CYAN, Style.BRIGHT))

    n_samples = sum(len(points) for points in result.segments)
    print(f"Samples:      {n_samples}")
    print(f"Segments:     {result.num_clusters}")
    print(f"Sweeps:       {result.iterations}")
    print(f"Transfers:    {result.num_transfers}")
    print(f"Evaluations:  {result.cost}")
    print(f"Energy:       {format_number(result.initial_energy)} -> "
          f"{color_text(format_number(result.total_energy), Fore.GREEN, Style.BRIGHT)}")

    print("\n" + color_text("-" * 80, Fore.CYAN))
    print(color_text(f"{'#':>4}  {'start':>7}  {'end':>7}  {'size':>6}  {'energy':>14}  centroid", Fore.CYAN))
    print(color_text("-" * 80, Fore.CYAN))
    for j, (start, points) in enumerate(zip(result.boundaries, result.segments)):
        end = start + len(points)
        print(
            f"{j:>4}  {start:>7}  {end:>7}  {len(points):>6}  "
            f"{format_number(result.local_energy[j]):>14}  {format_vector(result.centroids[j])}"
        )
    print(color_text("-" * 80, Fore.CYAN))

    if result.converged:
        log_success(f"Converged after {result.iterations} sweeps")
    else:
        log_warn(f"Stopped at sweep cap ({result.iterations}) before converging")
