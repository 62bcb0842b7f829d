"""
Common utility functions for all algorithms.

This module provides utilities organized into the following categories:
- System: Platform-specific configuration
- Data: Numeric formatting helpers
- CLI/UI: Text formatting and logging
"""

import io
import os
import sys

import numpy as np
from colorama import Fore, Style

# ============================================================================
# SYSTEM UTILITIES
# ============================================================================

def configure_windows_stdio() -> None:
    """
    Configure Windows stdio encoding for UTF-8 support.

    Only applies to interactive CLI runs, not during pytest.

    Note:
        - Only runs on Windows (win32 platform)
        - Skips configuration during pytest runs
        - Only configures if stdout/stderr have buffer attribute
    """
    if sys.platform != "win32":
        return
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return
    if not hasattr(sys.stdout, "buffer") or isinstance(sys.stdout, io.TextIOWrapper):
        return
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")


# ============================================================================
# DATA UTILITIES
# ============================================================================

def format_number(value: float) -> str:
    """
    Formats energies/coordinates with adaptive precision so tiny values remain readable.

    Args:
        value: Numeric value to format

    Returns:
        Formatted string with appropriate precision, or "N/A" if invalid
    """
    if value is None or not np.isfinite(value):
        return "N/A"

    abs_val = abs(value)
    if abs_val >= 1 or abs_val == 0:
        precision = 2
    elif abs_val >= 0.01:
        precision = 4
    elif abs_val >= 0.0001:
        precision = 6
    else:
        precision = 8

    return f"{value:.{precision}f}"


def format_vector(vector, max_items: int = 4) -> str:
    """
    Formats a centroid-like vector as a short bracketed list.

    Args:
        vector: Sequence of numbers
        max_items: Number of leading coordinates to show before eliding

    Returns:
        String like "[1.00, 2.50, ...]"
    """
    values = [format_number(float(v)) for v in np.ravel(vector)]
    if len(values) > max_items:
        values = values[:max_items] + ["..."]
    return "[" + ", ".join(values) + "]"


# ============================================================================
# CLI/UI UTILITIES
# ============================================================================

# --- Text Formatting ---

def color_text(text: str, color: str = Fore.WHITE, style: str = Style.NORMAL) -> str:
    """
    Applies color and style to text using colorama.

    Args:
        text: Text to format
        color: Colorama Fore color (default: Fore.WHITE)
        style: Colorama Style (default: Style.NORMAL)

    Returns:
        Formatted text string with color and style codes
    """
    return f"{style}{color}{text}{Style.RESET_ALL}"


def extract_dict_from_namespace(namespace, keys: list) -> dict:
    """
    Extract a dictionary from a namespace object using specified keys.

    Args:
        namespace: Namespace object (e.g., from argparse)
        keys: List of attribute names to extract

    Returns:
        Dictionary with extracted key-value pairs
    """
    return {key: getattr(namespace, key, None) for key in keys}


# --- Logging Functions ---
# Organized by severity level and purpose

# Standard severity levels
def log_success(message: str) -> None:
    """Print success message with green color."""
    print(color_text(message, Fore.GREEN))


def log_error(message: str) -> None:
    """Print error message with red color and bright style."""
    print(color_text(message, Fore.RED, Style.BRIGHT))


def log_warn(message: str) -> None:
    """Print warning message with yellow color."""
    print(color_text(message, Fore.YELLOW))


def log_debug(message: str) -> None:
    """Print debug message with white color."""
    print(color_text(message, Fore.WHITE))


# Domain-specific logging
def log_data(message: str) -> None:
    """Print data-related message with cyan color."""
    print(color_text(message, Fore.CYAN))


def log_progress(message: str) -> None:
    """Print progress update message with yellow color."""
    print(color_text(message, Fore.YELLOW))
