"""
Management operations for the Archiver Appliance.

Handles retrieval of PV archiving status.
"""

import json
import logging
from typing import List, Optional, TYPE_CHECKING

from ..core import constants
from ..core.errors import DecodeError
from ..models.channel import ChannelStatus

if TYPE_CHECKING:
    from ..models import ArchiverSettings


class ManagementAPI:
    """Mixin for management API operations."""

    logger: logging.Logger
    settings: "ArchiverSettings"
    status_timeout: float

    def _make_request(self, method: str, url: str, timeout: float, params=None, cancel_event=None) -> bytes:
        """Method provided by APIClient base class."""
        ...

    def get_pv_status(self, pv: Optional[str] = None) -> List[ChannelStatus]:
        """
        Get archiving status for all PVs, or for a single PV.

        Args:
            pv: PV name; if None, every PV known to the appliance is returned

        Returns:
            List of channel status rows

        Raises:
            NetworkError: On transport failure
            DecodeError: If the reply is not a JSON list of objects
        """
        self.logger.info(f"Fetching PV status for {pv or 'all PVs'}")
        params = {"pv": pv} if pv else None

        body = self._make_request(
            "GET",
            self.settings.manage_url + constants.PV_STATUS_PATH,
            timeout=self.status_timeout,
            params=params
        )

        try:
            rows = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Failure to unmarshal PV list JSON: {e}") from e

        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise DecodeError("Failure to unmarshal PV list JSON: expected a list of objects")

        return [ChannelStatus.from_dict(row) for row in rows]
