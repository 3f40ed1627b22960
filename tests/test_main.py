"""
Tests for batch file loading and the command-line entry point.
"""

import json
import sys
from unittest.mock import patch

import pytest

from epics_archiver.core.errors import QueryError
from epics_archiver.main import load_batch, main


@pytest.fixture
def batch_file(tmp_path):
    """Write a batch document and return its path."""
    def _write(document):
        path = tmp_path / "queries.json"
        path.write_text(json.dumps(document) if not isinstance(document, str) else document)
        return str(path)
    return _write


class TestLoadBatch:
    """Test cases for load_batch."""

    def test_batch_object(self, batch_file):
        path = batch_file({
            "range": {"from": "2024-01-01T00:00:00Z", "to": "2024-01-01T01:00:00Z"},
            "queries": [{"refId": "A", "queryText": "k1:a"}],
        })

        payloads, default_range = load_batch(path)

        assert payloads == [{"refId": "A", "queryText": "k1:a"}]
        assert default_range.duration_seconds == 3600.0

    def test_plain_list_has_no_range(self, batch_file):
        payloads, default_range = load_batch(batch_file([{"refId": "A"}]))

        assert len(payloads) == 1
        assert default_range is None

    def test_command_line_range_overrides_file(self, batch_file):
        path = batch_file({
            "range": {"from": "2024-01-01T00:00:00Z", "to": "2024-01-01T01:00:00Z"},
            "queries": [],
        })

        _, default_range = load_batch(path, end="2024-01-01T00:10:00Z")

        assert default_range.duration_seconds == 600.0

    def test_range_from_command_line_only(self, batch_file):
        _, default_range = load_batch(batch_file([]), "1704067200000", "1704067260000")
        assert default_range.duration_seconds == 60.0

    def test_invalid_json(self, batch_file):
        with pytest.raises(QueryError):
            load_batch(batch_file("[{"))

    def test_queries_must_be_objects(self, batch_file):
        with pytest.raises(QueryError):
            load_batch(batch_file({"queries": ["k1:a"]}))

    def test_scalar_document(self, batch_file):
        with pytest.raises(QueryError):
            load_batch(batch_file(42))


class TestMain:
    """Test cases for argument handling."""

    def test_requires_an_action(self):
        with patch.object(sys, "argv", ["epics-archiver"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 2

    def test_rejects_invalid_time(self, capsys):
        with patch.object(sys, "argv", ["epics-archiver", "--queries", "q.json", "--from", "noon"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        assert "Invalid time: noon" in capsys.readouterr().out

    def test_missing_config_fails(self, tmp_path, capsys):
        argv = ["epics-archiver", "--health", "--config", str(tmp_path / "absent.json")]
        with patch.object(sys, "argv", argv):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        assert "Application failed" in capsys.readouterr().out
