"""
Business logic services for the archiver query pipeline.

Services orchestrate API operations and provide higher-level functionality.
"""

from .assembler import FrameAssembler
from .query_runner import QueryRunner, query_data
from .discovery import ChannelDiscovery
from .health import HealthChecker, HealthResult, HealthStatus, check_health
from .writer import ResultWriter

__all__ = [
    "FrameAssembler",
    "QueryRunner",
    "query_data",
    "ChannelDiscovery",
    "HealthChecker",
    "HealthResult",
    "HealthStatus",
    "check_health",
    "ResultWriter",
]
