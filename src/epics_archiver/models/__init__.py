"""
Data models for the archiver query pipeline.

Contains DTOs for queries, settings, decoded samples, frames and channel status.
"""

from .query import Query, TimeRange, UnitConversion, Transform
from .series import RawSample, DecodedSeries, ResponseSeries, Frame, QueryResult
from .channel import ChannelStatus
from .settings import ArchiverSettings

__all__ = [
    "Query",
    "TimeRange",
    "UnitConversion",
    "Transform",
    "RawSample",
    "DecodedSeries",
    "ResponseSeries",
    "Frame",
    "QueryResult",
    "ChannelStatus",
    "ArchiverSettings",
]
