"""
Command-line interface components for Warped K-Means.

This package provides CLI utilities including argument parsing and
formatted display functions.
"""

from wkmeans.warped_kmeans.cli.argument_parser import parse_args
from wkmeans.warped_kmeans.cli.display import display_fit_result

__all__ = [
    'parse_args',
    'display_fit_result',
]
