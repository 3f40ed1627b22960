"""
Data retrieval operations for the Archiver Appliance.

Builds getData.json requests and fetches raw reply bodies.
"""

import logging
import threading
from typing import Dict, Optional, TYPE_CHECKING

import requests  # type: ignore

from ..core import constants
from ..core.date_utils import DateUtils

if TYPE_CHECKING:
    from ..models import Query, ArchiverSettings


class RetrievalAPI:
    """Mixin for data retrieval API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger
    settings: "ArchiverSettings"
    data_timeout: float

    def _make_request(self, method: str, url: str, timeout: float, params=None, cancel_event=None) -> bytes:
        """Method provided by APIClient base class."""
        ...

    @staticmethod
    def build_pv_spec(channel: str, bin_size: Optional[int]) -> str:
        """
        Build the 'pv' parameter.

        Args:
            channel: PV name
            bin_size: Decimation window in seconds, or None for raw data

        Returns:
            'channel' or 'lastSample_<N>(channel)'
        """
        if bin_size is None:
            return channel
        return f"{constants.BINNING_OPERATOR}_{bin_size}({channel})"

    def build_data_params(self, query: "Query", bin_size: Optional[int]) -> Dict[str, str]:
        """Request parameters for a query's getData.json call."""
        return {
            "pv": self.build_pv_spec(query.channel, bin_size),
            "from": DateUtils.format_rfc3339_nanos(query.time_range.start),
            "to": DateUtils.format_rfc3339_nanos(query.time_range.end),
        }

    def build_data_url(self, query: "Query", bin_size: Optional[int]) -> str:
        """Fully encoded retrieval URL, as sent on the wire."""
        request = requests.Request(
            "GET",
            self.settings.data_url + constants.DATA_RETRIEVAL_PATH,
            params=self.build_data_params(query, bin_size),
        )
        return request.prepare().url

    def fetch_data(
        self,
        query: "Query",
        bin_size: Optional[int],
        cancel_event: Optional[threading.Event] = None
    ) -> bytes:
        """
        Retrieve the raw getData.json body for a query.

        Args:
            query: Accepted query
            bin_size: Decimation window in seconds, or None for raw data
            cancel_event: Optional cancellation signal

        Returns:
            Raw response body

        Raises:
            NetworkError: On transport failure
        """
        params = self.build_data_params(query, bin_size)
        self.logger.debug(f"Fetching {params['pv']} from {params['from']} to {params['to']}")
        return self._make_request(
            "GET",
            self.settings.data_url + constants.DATA_RETRIEVAL_PATH,
            timeout=self.data_timeout,
            params=params,
            cancel_event=cancel_event
        )
