"""
Series transform module.

Whole-series transforms applied after unit conversion: first derivative
(optionally rounded), delta, and truncation of fractional seconds.
"""

import logging
import math
from typing import Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..core.errors import UnknownEnumError
from ..models.query import Transform
from ..models.series import ResponseSeries

# Decimal digits kept by each rounded derivative variant
_DERIVATIVE_DIGITS = {
    Transform.FIRST_DERIVATIVE: None,
    Transform.FIRST_DERIVATIVE_1HZ: 0,
    Transform.FIRST_DERIVATIVE_10HZ: 1,
    Transform.FIRST_DERIVATIVE_100HZ: 2,
}


def round_half_away(value: float, digits: int = 0) -> float:
    """
    Round half away from zero to the given number of decimal digits.

    Example:
        2.5 -> 3.0, -2.5 -> -3.0 (round() would give 2 and -2)
    """
    if not math.isfinite(value):
        return value
    scale = 10 ** digits
    scaled = value * scale
    whole = math.trunc(scaled)
    if abs(scaled - whole) >= 0.5:
        whole += math.copysign(1, scaled)
    return whole / scale


def divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE results for a zero denominator."""
    if denominator != 0:
        return numerator / denominator
    if math.isnan(numerator) or numerator == 0:
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1, denominator)


class TransformEngine:
    """Apply a Transform to a numeric series."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize transform engine.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def apply(self, series: ResponseSeries, transform: Transform) -> ResponseSeries:
        """
        Transform a series.

        Args:
            series: Converted numeric series in archive order
            transform: Transform to apply

        Returns:
            New series; N-1 points for derivative and delta, N otherwise

        Raises:
            UnknownEnumError: If the transform is not a known code
        """
        try:
            transform = Transform(transform)
        except ValueError:
            raise UnknownEnumError("transform", transform) from None

        if transform is Transform.NONE:
            return series

        self.logger.debug(f"Applying {transform.name} to {len(series)} points")

        if transform in _DERIVATIVE_DIGITS:
            return self.first_derivative(series, _DERIVATIVE_DIGITS[transform])
        if transform is Transform.DELTA:
            return self.delta(series)
        if transform is Transform.TRUNCATE_FRAC_SECS:
            return self.truncate_fractional_seconds(series)

        raise UnknownEnumError("transform", transform)

    @staticmethod
    def first_derivative(series: ResponseSeries, digits: Optional[int] = None) -> ResponseSeries:
        """
        dv/dt between consecutive points, stamped at the right-hand point.

        Args:
            series: Input series
            digits: Round each slope to this many decimals; None keeps it exact
        """
        times, values = series.times, series.values
        slopes = []
        for i in range(1, len(times)):
            dt = (times[i] - times[i - 1]) / constants.NANOS_PER_SECOND
            dvdt = divide(values[i] - values[i - 1], dt)
            if digits is not None:
                dvdt = round_half_away(dvdt, digits)
            slopes.append(dvdt)

        return ResponseSeries(times=tuple(times[1:]), values=tuple(slopes))

    @staticmethod
    def delta(series: ResponseSeries) -> ResponseSeries:
        """First difference of the values, ignoring elapsed time."""
        values = series.values
        deltas = tuple(values[i] - values[i - 1] for i in range(1, len(values)))
        return ResponseSeries(times=tuple(series.times[1:]), values=deltas)

    @staticmethod
    def truncate_fractional_seconds(series: ResponseSeries) -> ResponseSeries:
        """Drop sub-second parts so independently sampled channels line up."""
        times = tuple(DateUtils.truncate_to_second(t) for t in series.times)
        return ResponseSeries(times=times, values=series.values)
