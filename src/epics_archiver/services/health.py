"""
Connectivity health check.

Confirms the archiver's management API answers by listing its PVs.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..api import ArchiverAPI
from ..core.errors import ArchiverError, ConfigError
from ..models.settings import ArchiverSettings
from .discovery import ChannelDiscovery


class HealthStatus(Enum):
    """Outcome of a health check."""

    OK = "OK"
    ERROR = "ERROR"


@dataclass
class HealthResult:
    """Health check status with a user-facing message."""

    status: HealthStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status is HealthStatus.OK


class HealthChecker:
    """Check that the configured archiver is reachable."""

    def __init__(self, discovery: ChannelDiscovery, logger: Optional[logging.Logger] = None):
        """
        Initialize health checker.

        Args:
            discovery: Channel discovery service bound to the archiver
            logger: Logger instance
        """
        self.discovery = discovery
        self.logger = logger or logging.getLogger(__name__)

    def check(self) -> HealthResult:
        """
        Probe the archiver with a full channel listing.

        Returns:
            OK with the PV count, or ERROR with the failure reason
        """
        settings = self.discovery.api_client.settings
        try:
            channels = self.discovery.get_all_channels()
        except ArchiverError as e:
            self.logger.error(f"Health check failed: {e}")
            return HealthResult(HealthStatus.ERROR, f"Failure to get channels: {e}")

        return HealthResult(
            HealthStatus.OK,
            f"Connection confirmed to {settings.server}:{settings.manage_port}, "
            f"found {len(channels)} PVs"
        )


def check_health(json_data: Any, logger: Optional[logging.Logger] = None) -> HealthResult:
    """
    Run a health check from raw datasource settings.

    Args:
        json_data: Datasource settings ({server, managePort, dataPort})
        logger: Logger instance

    Returns:
        Health result; malformed settings give ERROR 'Invalid config'
    """
    try:
        settings = ArchiverSettings.from_dict(json_data)
    except ConfigError:
        return HealthResult(HealthStatus.ERROR, "Invalid config")

    with ArchiverAPI(settings, logger=logger) as api_client:
        return HealthChecker(ChannelDiscovery(api_client, logger), logger).check()
