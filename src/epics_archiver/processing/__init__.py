"""
Data processing module for the archiver query pipeline.

Provides bin size selection, payload decoding, unit conversion and series
transforms.
"""

import logging
from typing import Optional

from ..models.query import Query, Transform
from ..models.series import DecodedSeries, ResponseSeries
from .binning import select_bin_size
from .decoder import PayloadDecoder
from .converter import UnitConverter
from .transforms import TransformEngine


class SeriesProcessor:
    """
    Unified processor combining decoding, conversion and transforms.

    This class provides a convenient interface to all processing operations.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize series processor.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = PayloadDecoder(logger)
        self.converter = UnitConverter(logger)
        self.transformer = TransformEngine(logger)

    def decode(self, body: bytes) -> DecodedSeries:
        """
        Decode a raw archiver reply.

        Args:
            body: Raw getData.json body

        Returns:
            Decoded series
        """
        return self.decoder.decode(body)

    def process(self, decoded: DecodedSeries, query: Query) -> ResponseSeries:
        """
        Convert and transform a decoded series for a query.

        String-valued series skip unit conversion. The only transform they
        take is fractional-second truncation, so enum channels can still be
        lined up with numeric ones.

        Args:
            decoded: Series from the decoder
            query: Query holding the conversion and transform codes

        Returns:
            Series ready for frame assembly
        """
        if not decoded.is_numeric:
            series = decoded.to_response()
            if query.transform == Transform.TRUNCATE_FRAC_SECS:
                return self.transformer.truncate_fractional_seconds(series)
            return series

        values = self.converter.convert_values(decoded.values, query.unit_conversion)
        converted = ResponseSeries(times=decoded.times, values=values)
        return self.transformer.apply(converted, query.transform)


__all__ = [
    "select_bin_size",
    "PayloadDecoder",
    "UnitConverter",
    "TransformEngine",
    "SeriesProcessor",
]
