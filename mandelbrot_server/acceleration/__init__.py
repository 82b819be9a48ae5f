"""Parallel band rendering."""

from .bands import DEFAULT_WORKERS, Band, BandScheduler, partition_bands, rows_per_band

__all__ = ["DEFAULT_WORKERS", "Band", "BandScheduler", "partition_bands", "rows_per_band"]
