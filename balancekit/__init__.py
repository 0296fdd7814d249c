"""Reactive balance screen core: observable view state, event channel and fetch service."""

__version__ = "0.1.0"
