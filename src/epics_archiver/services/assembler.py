"""
Frame assembly service.

Packages processed series into frames, and is the single place where a failed
query is turned into a placeholder frame spanning the requested range.
"""

import logging
from typing import Optional

from ..core import constants
from ..models.query import Query, TimeRange
from ..models.series import Frame, QueryResult, ResponseSeries


class FrameAssembler:
    """Build the outgoing frames for a query."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize frame assembler.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def assemble(self, query: Query, series: ResponseSeries) -> QueryResult:
        """
        Package a finished series.

        Args:
            query: Query the series answers
            series: Final index-aligned series

        Returns:
            Result with one frame named after the channel
        """
        frame = Frame(
            name=query.channel,
            ref_id=query.ref_id,
            times=tuple(series.times),
            values=tuple(series.values),
        )
        self.logger.debug(f"Returning {len(series)} points for {query.ref_id} ({query.channel})")
        return QueryResult(ref_id=query.ref_id, frames=[frame])

    @staticmethod
    def placeholder(time_range: TimeRange, ref_id: str) -> Frame:
        """Two-point frame covering the range boundaries, with no values."""
        return Frame(
            name=constants.PLACEHOLDER_FRAME_NAME,
            ref_id=ref_id,
            times=(time_range.start_nanos, time_range.end_nanos),
        )

    def empty(self, time_range: TimeRange, ref_id: str) -> QueryResult:
        """Result for a query with nothing to fetch; not an error."""
        return QueryResult(ref_id=ref_id, frames=[self.placeholder(time_range, ref_id)])

    def failure(self, time_range: TimeRange, ref_id: str, error: Exception) -> QueryResult:
        """
        Result for a failed query.

        Args:
            time_range: Requested range, bounds the placeholder
            ref_id: Query RefID
            error: Cause, reported on the result

        Returns:
            Result with a placeholder frame and the error message
        """
        self.logger.warning(f"Query {ref_id} failed: {error}")
        return QueryResult(
            ref_id=ref_id,
            frames=[self.placeholder(time_range, ref_id)],
            error=str(error),
        )
