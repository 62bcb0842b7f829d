"""
Warped K-Means package for sequential clustering.
Exposes the shared configuration constants and the clustering subpackage.
"""

from . import config

__all__ = ["config"]
