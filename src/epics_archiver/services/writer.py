"""
Result writer module.

Serializes query results to JSON, on stdout or in a file.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.series import QueryResult


class ResultWriter:
    """Write query results as JSON."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize result writer.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def to_document(results: Dict[str, QueryResult]) -> Dict[str, Any]:
        """Response document: {"results": {refId: {"frames": [...], "error"?: ...}}}."""
        return {
            "results": {ref_id: result.to_dict() for ref_id, result in results.items()}
        }

    def write_results(
        self,
        results: Dict[str, QueryResult],
        output_file: Optional[str] = None
    ) -> None:
        """
        Write results to a file, or to stdout when no file is given.

        Args:
            results: Results keyed by RefID
            output_file: Destination path
        """
        document = self.to_document(results)

        if output_file is None:
            json.dump(document, sys.stdout, indent=2)
            sys.stdout.write("\n")
            return

        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)

        self.logger.info(f"Wrote {len(results)} results to {path}")

    def log_write_summary(self, results: Dict[str, QueryResult]) -> None:
        """
        Log a summary of the batch.

        Args:
            results: Results keyed by RefID
        """
        self.logger.info("=" * 60)
        self.logger.info("Query Summary")
        self.logger.info("=" * 60)

        for ref_id, result in results.items():
            if not result.frames:
                self.logger.info(f"  {ref_id}: {result.error or 'hidden'}")
                continue

            frame = result.frames[0]
            if result.error:
                self.logger.info(f"  ✗ {ref_id}: {result.error}")
            elif frame.is_placeholder:
                self.logger.info(f"  - {ref_id}: no channel")
            else:
                self.logger.info(f"  ✓ {ref_id} ({frame.name}): {len(frame.times)} points")

        failed = sum(1 for r in results.values() if r.error)
        self.logger.info(f"Total: {len(results) - failed}/{len(results)} successful")
        self.logger.info("=" * 60)
