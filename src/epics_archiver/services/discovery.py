"""
Channel discovery service.

Lists archived channels and groups them into systems for query editors.
"""

import logging
from typing import Dict, List, Optional, TYPE_CHECKING

from ..models.channel import ChannelStatus

if TYPE_CHECKING:
    from ..api import ArchiverAPI


class ChannelDiscovery:
    """Discover channels and systems known to the archiver."""

    def __init__(
        self,
        api_client: "ArchiverAPI",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize discovery service.

        Args:
            api_client: API client instance
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)

    def get_all_channels(self) -> List[str]:
        """
        Get the names of every PV the archiver knows about.

        Returns:
            Channel names in archiver order

        Raises:
            NetworkError: On transport failure
            DecodeError: If the status reply cannot be parsed
        """
        statuses = self.api_client.get_pv_status()
        channels = [status.pv_name for status in statuses]
        self.logger.info(f"Found {len(channels)} channels")
        return channels

    def get_channel_status(self, channel: str) -> Optional[ChannelStatus]:
        """
        Get the archiving status of a single channel.

        Args:
            channel: PV name

        Returns:
            Channel status, or None if the archiver returned no row
        """
        statuses = self.api_client.get_pv_status(channel)
        return statuses[0] if statuses else None

    def list_channels(self, system: str = "") -> Dict[str, str]:
        """
        List channels whose name contains the system string.

        Args:
            system: Substring to filter by; empty matches every channel

        Returns:
            Mapping of channel name to display label
        """
        channels = {
            channel: channel
            for channel in self.get_all_channels()
            if system in channel
        }
        self.logger.debug(f"{len(channels)} channels match system '{system}'")
        return channels

    def list_systems(self) -> Dict[str, str]:
        """
        Derive system prefixes from the channel list.

        Channels with three segments (k0:met:primtemp) group under the first
        two (k0:met:); four-segment channels (k1:dcs:axe:az) under the first
        three (k1:dcs:axe:). Other channels belong to no system.

        Returns:
            Mapping of system prefix to display label, including '' -> '(none)'
        """
        systems = {"": "(none)"}

        for channel in self.get_all_channels():
            segments = channel.split(":")
            if len(segments) in (3, 4):
                system = ":".join(segments[:-1]) + ":"
                systems[system] = system

        self.logger.debug(f"Derived {len(systems) - 1} systems")
        return systems
