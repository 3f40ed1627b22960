"""
Query execution service.

Runs queries through the pipeline: bin size selection, retrieval, decoding,
unit conversion, transform and frame assembly. A batch fans out across worker
threads; each query succeeds or fails on its own.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from ..api import ArchiverAPI
from ..core import constants
from ..core.errors import ArchiverError, QueryError
from ..models.query import Query, TimeRange, optional_time_range
from ..models.series import QueryResult
from ..models.settings import ArchiverSettings
from ..processing import SeriesProcessor, select_bin_size
from .assembler import FrameAssembler


class QueryRunner:
    """Execute archive queries and batches of queries."""

    def __init__(
        self,
        api_client: ArchiverAPI,
        processor: Optional[SeriesProcessor] = None,
        assembler: Optional[FrameAssembler] = None,
        max_workers: int = constants.DEFAULT_MAX_WORKERS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize query runner.

        Args:
            api_client: API client instance
            processor: Series processor (created if not given)
            assembler: Frame assembler (created if not given)
            max_workers: Worker threads for batches
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)
        self.processor = processor or SeriesProcessor(logger)
        self.assembler = assembler or FrameAssembler(logger)
        self.max_workers = max_workers

    def run_batch(
        self,
        payloads: List[Dict[str, Any]],
        default_range: Optional[TimeRange] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> Dict[str, QueryResult]:
        """
        Run a batch of query payloads.

        Args:
            payloads: Query JSON objects
            default_range: Range for queries without their own timeRange
            cancel_event: Optional cancellation signal shared by the batch

        Returns:
            Results keyed by RefID, in request order
        """
        self.logger.info(f"Running batch of {len(payloads)} queries")

        if self.max_workers > 1 and len(payloads) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(self.run_payload, payload, default_range, cancel_event)
                    for payload in payloads
                ]
                results = [future.result() for future in futures]
        else:
            results = [
                self.run_payload(payload, default_range, cancel_event)
                for payload in payloads
            ]

        failed = sum(1 for result in results if not result.ok)
        self.logger.info(f"Batch complete: {len(results) - failed}/{len(results)} successful")

        return {result.ref_id: result for result in results}

    def run_payload(
        self,
        payload: Dict[str, Any],
        default_range: Optional[TimeRange] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> QueryResult:
        """
        Accept and run one query payload.

        Args:
            payload: Query JSON object
            default_range: Range used when the payload has no timeRange
            cancel_event: Optional cancellation signal

        Returns:
            Result for the payload's RefID
        """
        ref_id = str(payload.get("refId") or "")

        # Hidden queries produce nothing, not even a placeholder
        if payload.get("hide") is True:
            self.logger.debug(f"Query {ref_id} is hidden, skipping")
            return QueryResult(ref_id=ref_id)

        try:
            time_range = optional_time_range(payload, default_range)
        except QueryError as e:
            self.logger.error(f"Query {ref_id} rejected: {e}")
            return QueryResult(ref_id=ref_id, error=str(e))

        try:
            query = Query.from_dict(payload, time_range)
        except QueryError as e:
            return self.assembler.failure(time_range, ref_id, e)

        try:
            return self.run(query, cancel_event)
        except Exception as e:
            self.logger.error(f"Unexpected failure in query {ref_id}: {e}", exc_info=True)
            return self.assembler.failure(time_range, ref_id, e)

    def run(self, query: Query, cancel_event: Optional[threading.Event] = None) -> QueryResult:
        """
        Run an accepted query through the pipeline.

        Args:
            query: Accepted query
            cancel_event: Optional cancellation signal

        Returns:
            Result with the series frame, or a placeholder frame and error
        """
        if query.hide:
            return QueryResult(ref_id=query.ref_id)

        if not query.channel:
            return self.assembler.empty(query.time_range, query.ref_id)

        if not query.format:
            self.logger.warning("format is empty. defaulting to time series")

        bin_size = select_bin_size(
            query.time_range.duration_seconds,
            query.max_data_points,
            query.disable_binning
        )
        self.logger.debug(
            f"querylength = {query.time_range.duration_seconds}  "
            f"binSize = {bin_size or 'raw'}  MaxDataPoints = {query.max_data_points}"
        )

        try:
            body = self.api_client.fetch_data(query, bin_size, cancel_event)
            decoded = self.processor.decode(body)
            series = self.processor.process(decoded, query)
        except ArchiverError as e:
            return self.assembler.failure(query.time_range, query.ref_id, e)

        return self.assembler.assemble(query, series)


def query_data(
    json_data: Any,
    payloads: List[Dict[str, Any]],
    default_range: Optional[TimeRange] = None,
    max_workers: int = constants.DEFAULT_MAX_WORKERS,
    cancel_event: Optional[threading.Event] = None,
    logger: Optional[logging.Logger] = None
) -> Dict[str, QueryResult]:
    """
    Answer a batch of queries against the archiver named by json_data.

    Args:
        json_data: Datasource settings ({server, managePort, dataPort})
        payloads: Query JSON objects
        default_range: Range for queries without their own timeRange
        max_workers: Worker threads for the batch
        cancel_event: Optional cancellation signal
        logger: Logger instance

    Returns:
        Results keyed by RefID

    Raises:
        ConfigError: If the settings are malformed; no query is run
    """
    settings = ArchiverSettings.from_dict(json_data)

    with ArchiverAPI(settings, pool_size=max_workers, logger=logger) as api_client:
        runner = QueryRunner(api_client, max_workers=max_workers, logger=logger)
        return runner.run_batch(payloads, default_range, cancel_event)
