"""
Base API client for the EPICS Archiver Appliance.

Handles HTTP requests, session management, and error handling.
"""

import logging
import threading
import time
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore

from ..core import constants
from ..core.errors import NetworkError, QueryCancelledError
from ..models.settings import ArchiverSettings


class APIClient:
    """Base client for interacting with the Archiver Appliance HTTP API."""

    def __init__(
        self,
        settings: ArchiverSettings,
        data_timeout: int = constants.DATA_TIMEOUT,
        status_timeout: int = constants.STATUS_TIMEOUT,
        pool_size: int = constants.DEFAULT_MAX_WORKERS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            settings: Archiver host and ports
            data_timeout: Timeout for data retrieval calls in seconds
            status_timeout: Timeout for management calls in seconds
            pool_size: Connections kept per host, one per concurrent query
            logger: Logger instance
        """
        self.settings = settings
        self.data_timeout = data_timeout
        self.status_timeout = status_timeout
        self.logger = logger or logging.getLogger(__name__)

        # Failures are final for a query, so the adapter never retries
        self.session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=2,
            pool_maxsize=pool_size,
            max_retries=0
        )
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({
            "Accept": "application/json"
        })

    def _make_request(
        self,
        method: str,
        url: str,
        timeout: float,
        params: Optional[Dict[str, Any]] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> bytes:
        """
        Make HTTP request and return the raw body.

        The status code is logged but not checked; whether the body is usable
        is decided by whoever parses it.

        Args:
            method: HTTP method
            url: Absolute URL
            timeout: Overall deadline in seconds
            params: Query parameters
            cancel_event: Set by the caller to abandon the request

        Returns:
            Response body bytes

        Raises:
            NetworkError: On connection, timeout or read failure
            QueryCancelledError: If cancel_event is set before the body is read
        """
        self._check_cancelled(cancel_event, url)
        self.logger.debug(f"{method} {url} params={params}")

        deadline = time.monotonic() + timeout
        try:
            with self.session.request(
                method=method,
                url=url,
                params=params,
                timeout=timeout,
                stream=True
            ) as response:
                if not response.ok:
                    self.logger.warning(
                        f"Archiver replied {response.status_code} for {method} {url}"
                    )
                return self._read_body(response, deadline, cancel_event, url)

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise NetworkError(f"Request to {url} failed: {e}") from e

    def _read_body(
        self,
        response: requests.Response,
        deadline: float,
        cancel_event: Optional[threading.Event],
        url: str
    ) -> bytes:
        chunks = []
        for chunk in response.iter_content(chunk_size=constants.READ_CHUNK_SIZE):
            self._check_cancelled(cancel_event, url)
            if time.monotonic() > deadline:
                raise NetworkError(f"Request to {url} timed out while reading the reply")
            chunks.append(chunk)
        return b"".join(chunks)

    def _check_cancelled(self, cancel_event: Optional[threading.Event], url: str) -> None:
        if cancel_event is not None and cancel_event.is_set():
            self.logger.info(f"Request cancelled: {url}")
            raise QueryCancelledError(f"Request to {url} was cancelled")

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
