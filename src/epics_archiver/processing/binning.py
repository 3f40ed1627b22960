"""
Bin size selection.

The appliance can decimate server-side into windows of whole seconds. When
the requested range is too short for one-second windows, the data is fetched
raw and left for the renderer to coarsen.
"""

import math
from typing import Optional


def select_bin_size(
    duration_seconds: float,
    max_points: int,
    disable_binning: bool = False
) -> Optional[int]:
    """
    Choose the decimation window for a query.

    Args:
        duration_seconds: Length of the requested range in seconds
        max_points: Number of points the caller wants back at most
        disable_binning: Always fetch raw data when True

    Returns:
        Window length in seconds, or None for raw data

    Example:
        600 s at 100 points -> 6; 50 s at 100 points -> None
    """
    if disable_binning or max_points <= 0:
        return None

    bin_size = math.floor(duration_seconds / max_points)
    if bin_size < 1:
        return None

    return int(bin_size)
