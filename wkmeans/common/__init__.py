"""Shared helpers used across the package."""
