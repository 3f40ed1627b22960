"""
Main entry point for the archiver query pipeline.

Runs query batches, channel discovery and health checks from the command line.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .core import Config, DateUtils, LoggerContext, setup_logger
from .core.errors import QueryError
from .api import ArchiverAPI
from .models import ArchiverSettings, QueryResult, TimeRange
from .services import ChannelDiscovery, HealthChecker, HealthResult, QueryRunner, ResultWriter


class ArchiverQueryApp:
    """Main application for querying an EPICS Archiver Appliance."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info(f"Configuration: {self.config}")

        # Initialize components (will be set in initialize_components)
        self.api_client: Optional[ArchiverAPI] = None
        self.runner: Optional[QueryRunner] = None
        self.discovery: Optional[ChannelDiscovery] = None
        self.health: Optional[HealthChecker] = None
        self.writer: Optional[ResultWriter] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.debug("Initializing components...")

        settings = ArchiverSettings.from_config(self.config)

        self.api_client = ArchiverAPI(
            settings=settings,
            data_timeout=self.config.data_timeout,
            status_timeout=self.config.status_timeout,
            pool_size=self.config.max_workers,
            logger=self.logger
        )

        self.runner = QueryRunner(
            api_client=self.api_client,
            max_workers=self.config.max_workers,
            logger=self.logger
        )

        self.discovery = ChannelDiscovery(api_client=self.api_client, logger=self.logger)
        self.health = HealthChecker(discovery=self.discovery, logger=self.logger)
        self.writer = ResultWriter(logger=self.logger)

    def close(self) -> None:
        if self.api_client:
            self.api_client.close()

    def run_queries(
        self,
        queries_file: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
        output_file: Optional[str] = None
    ) -> Dict[str, QueryResult]:
        """
        Run a batch of queries from a JSON file and write the frames.

        Args:
            queries_file: JSON file with a list of queries, or
                          {"range": {"from", "to"}, "queries": [...]}
            start: Batch range start, overrides the file's range
            end: Batch range end, overrides the file's range
            output_file: Where to write results; stdout if None

        Returns:
            Results keyed by RefID
        """
        payloads, default_range = load_batch(queries_file, start, end)

        with LoggerContext(self.logger, f"batch of {len(payloads)} queries"):
            results = self.runner.run_batch(payloads, default_range)

        self.writer.write_results(results, output_file)
        self.writer.log_write_summary(results)
        return results

    def list_channels(self, system: str = "") -> Dict[str, str]:
        with LoggerContext(self.logger, "channel discovery"):
            return self.discovery.list_channels(system)

    def list_systems(self) -> Dict[str, str]:
        with LoggerContext(self.logger, "system discovery"):
            return self.discovery.list_systems()

    def check_health(self) -> HealthResult:
        result = self.health.check()
        self.logger.info(f"Health {result.status.value}: {result.message}")
        return result


def load_batch(
    queries_file: str,
    start: Optional[str] = None,
    end: Optional[str] = None
) -> Tuple[List[Dict[str, Any]], Optional[TimeRange]]:
    """
    Read query payloads and the batch time range.

    Args:
        queries_file: Path to the batch JSON
        start: Range start override
        end: Range end override

    Returns:
        Tuple of (query payloads, default range or None)

    Raises:
        QueryError: If the file does not hold a valid batch
    """
    with open(Path(queries_file), "r", encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise QueryError(f"Invalid query file {queries_file}: {e}") from e

    if isinstance(document, list):
        payloads, range_payload = document, None
    elif isinstance(document, dict):
        payloads, range_payload = document.get("queries", []), document.get("range")
    else:
        raise QueryError("Query file must hold a list of queries or a batch object")

    if not isinstance(payloads, list) or not all(isinstance(p, dict) for p in payloads):
        raise QueryError("Queries must be a list of JSON objects")

    if start or end:
        range_payload = dict(range_payload or {})
        if start:
            range_payload["from"] = start
        if end:
            range_payload["to"] = end

    default_range = TimeRange.from_dict(range_payload) if range_payload else None
    return payloads, default_range


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="EPICS Archiver Appliance query tool"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--queries",
        type=str,
        default=None,
        help="JSON file with the queries to run"
    )
    parser.add_argument(
        "--from",
        dest="start",
        type=str,
        default=None,
        help="Range start (ISO 8601 or epoch ms)"
    )
    parser.add_argument(
        "--to",
        dest="end",
        type=str,
        default=None,
        help="Range end (ISO 8601 or epoch ms)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write results to this file instead of stdout"
    )
    parser.add_argument(
        "--channels",
        nargs="?",
        const="",
        default=None,
        metavar="SYSTEM",
        help="List channels, optionally filtered by system"
    )
    parser.add_argument(
        "--systems",
        action="store_true",
        help="List system prefixes"
    )
    parser.add_argument(
        "--health",
        action="store_true",
        help="Check archiver connectivity"
    )

    args = parser.parse_args()

    if not (args.queries or args.systems or args.health or args.channels is not None):
        parser.error("one of --queries, --channels, --systems or --health is required")

    # Validate range overrides before connecting
    for value in (args.start, args.end):
        if value:
            try:
                DateUtils.parse_datetime(value)
            except ValueError:
                print(f"Invalid time: {value}. Use ISO 8601 or epoch milliseconds")
                sys.exit(1)

    app = None
    try:
        app = ArchiverQueryApp(config_file=args.config)
        app.initialize_components()

        if args.health:
            result = app.check_health()
            print(result.message)
            if not result.ok:
                sys.exit(1)
        elif args.systems:
            print(json.dumps(app.list_systems(), indent=2))
        elif args.channels is not None:
            print(json.dumps(app.list_channels(args.channels), indent=2))
        else:
            app.run_queries(args.queries, args.start, args.end, args.output)

    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    finally:
        if app:
            app.close()


if __name__ == "__main__":
    main()
