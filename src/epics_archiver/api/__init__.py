"""
API layer for the EPICS Archiver Appliance.

Provides the low-level client for data retrieval and management operations.
"""

import logging
from typing import Optional

from ..core import constants
from ..models.settings import ArchiverSettings
from .client import APIClient
from .retrieval import RetrievalAPI
from .management import ManagementAPI


class ArchiverAPI(APIClient, RetrievalAPI, ManagementAPI):
    """
    Unified API client for the Archiver Appliance.

    Combines data retrieval (data port) and management (management port)
    operations over one shared session.
    """

    def __init__(
        self,
        settings: ArchiverSettings,
        data_timeout: int = constants.DATA_TIMEOUT,
        status_timeout: int = constants.STATUS_TIMEOUT,
        pool_size: int = constants.DEFAULT_MAX_WORKERS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            settings: Archiver host and ports
            data_timeout: Timeout for data retrieval calls in seconds
            status_timeout: Timeout for management calls in seconds
            pool_size: HTTP connections kept per host
            logger: Logger instance
        """
        super().__init__(
            settings=settings,
            data_timeout=data_timeout,
            status_timeout=status_timeout,
            pool_size=pool_size,
            logger=logger
        )


__all__ = [
    "APIClient",
    "RetrievalAPI",
    "ManagementAPI",
    "ArchiverAPI",
]
