"""
Configuration constants for all components.

Organized by component:
1. Warped K-Means Configuration
2. CLI / Data Loading Configuration
"""

# ============================================================================
# WARPED K-MEANS CONFIGURATION
# ============================================================================

# Clustering Parameters
DEFAULT_NUM_CLUSTERS = 2  # Number of contiguous segments
DEFAULT_THRESHOLD = 0.0  # 0 explores half a segment per scan, 1 almost none
DEFAULT_MAX_ITERATIONS = 100  # Hard cap on optimization sweeps

# Initialization
DEFAULT_INIT_METHOD = "default"  # "default", "ts" (trace segmentation), "eq" (equal count)

# Default initializer falls back to equal-count allocation below this
# number of samples per segment
MIN_SAMPLES_PER_SEGMENT_FOR_TS = 2


# ============================================================================
# CLI / DATA LOADING CONFIGURATION
# ============================================================================

DEFAULT_CSV_SEPARATOR = ","
DEFAULT_LABEL_COLUMN = "segment"
DEFAULT_INDEX_COLUMN = "index"
