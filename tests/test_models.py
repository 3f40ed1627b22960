"""
Tests for query, settings and series models, and date utilities.
"""

import math
import unittest
from datetime import datetime

import pytz

from epics_archiver.core.date_utils import DateUtils
from epics_archiver.core.errors import ConfigError, QueryError, UnknownEnumError
from epics_archiver.models import (
    ArchiverSettings,
    ChannelStatus,
    Frame,
    Query,
    QueryResult,
    ResponseSeries,
    TimeRange,
    Transform,
    UnitConversion,
)
from epics_archiver.models.query import optional_time_range

RANGE = TimeRange(
    start=pytz.UTC.localize(datetime(2024, 1, 1, 0, 0, 0)),
    end=pytz.UTC.localize(datetime(2024, 1, 1, 0, 10, 0)),
)


class TestQuery(unittest.TestCase):
    """Test query acceptance."""

    def test_from_dict(self):
        query = Query.from_dict({
            "refId": "A",
            "queryText": "k1:met:primtemp",
            "maxDataPoints": 100,
            "disablebinning": True,
            "unitConversion": 6,
            "transform": 5,
            "format": "time_series",
            "intervalMs": 50,
        }, RANGE)

        self.assertEqual(query.ref_id, "A")
        self.assertEqual(query.channel, "k1:met:primtemp")
        self.assertEqual(query.max_data_points, 100)
        self.assertTrue(query.disable_binning)
        self.assertIs(query.unit_conversion, UnitConversion.F_TO_C)
        self.assertIs(query.transform, Transform.DELTA)
        self.assertEqual(query.interval_ms, 50)
        self.assertFalse(query.hide)

    def test_defaults(self):
        query = Query.from_dict({"refId": "B"}, RANGE)

        self.assertEqual(query.channel, "")
        self.assertEqual(query.max_data_points, 0)
        self.assertIs(query.unit_conversion, UnitConversion.NONE)
        self.assertIs(query.transform, Transform.NONE)

    def test_unknown_unit_conversion(self):
        with self.assertRaises(UnknownEnumError) as ctx:
            Query.from_dict({"unitConversion": 99}, RANGE)
        self.assertEqual(str(ctx.exception), "Unknown unit conversion: 99")

    def test_unknown_transform(self):
        with self.assertRaises(UnknownEnumError):
            Query.from_dict({"transform": 7}, RANGE)

    def test_boolean_code_rejected(self):
        with self.assertRaises(UnknownEnumError):
            Query.from_dict({"transform": True}, RANGE)

    def test_wrong_field_type(self):
        with self.assertRaises(QueryError):
            Query.from_dict({"maxDataPoints": "100"}, RANGE)

    def test_query_is_immutable(self):
        query = Query.from_dict({"queryText": "a"}, RANGE)
        with self.assertRaises(Exception):
            query.channel = "b"

    def test_enum_ordinals(self):
        self.assertEqual([c.value for c in UnitConversion], list(range(8)))
        self.assertEqual([t.value for t in Transform], list(range(7)))


class TestTimeRange(unittest.TestCase):
    """Test time range parsing."""

    def test_duration(self):
        self.assertEqual(RANGE.duration_seconds, 600.0)

    def test_from_iso_strings(self):
        time_range = TimeRange.from_dict({"from": "2024-01-01T00:00:00Z", "to": "2024-01-01T00:10:00Z"})
        self.assertEqual(time_range, RANGE)

    def test_from_epoch_millis(self):
        time_range = TimeRange.from_dict({"from": 1704067200000, "to": "1704067800000"})
        self.assertEqual(time_range, RANGE)

    def test_missing_boundary(self):
        with self.assertRaises(QueryError):
            TimeRange.from_dict({"from": "2024-01-01T00:00:00Z"})

    def test_invalid_boundary(self):
        with self.assertRaises(QueryError):
            TimeRange.from_dict({"from": "yesterday", "to": "today"})

    def test_optional_time_range(self):
        override = {"from": "2024-01-02T00:00:00Z", "to": "2024-01-02T01:00:00Z"}
        self.assertEqual(optional_time_range({}, RANGE), RANGE)
        self.assertEqual(optional_time_range({"timeRange": override}, RANGE).duration_seconds, 3600.0)
        with self.assertRaises(QueryError):
            optional_time_range({}, None)


class TestDateUtils(unittest.TestCase):
    """Test timestamp conversions."""

    def test_epoch_nanos(self):
        self.assertEqual(DateUtils.to_epoch_nanos(RANGE.start), 1704067200 * 1_000_000_000)

    def test_format_rfc3339_nanos(self):
        dt = pytz.UTC.localize(datetime(2024, 1, 1, 12, 30, 5, 123456))
        self.assertEqual(DateUtils.format_rfc3339_nanos(dt), "2024-01-01T12:30:05.123456000Z")

    def test_format_nanos(self):
        self.assertEqual(
            DateUtils.format_nanos(1592956800123456789),
            "2020-06-24T00:00:00.123456789Z"
        )

    def test_parse_offset_is_normalized_to_utc(self):
        dt = DateUtils.parse_datetime("2024-01-01T02:00:00+02:00")
        self.assertEqual(dt, RANGE.start)
        self.assertEqual(dt.utcoffset().total_seconds(), 0)

    def test_parse_nanosecond_fraction(self):
        dt = DateUtils.parse_datetime("2024-01-01T00:00:00.123456789Z")
        self.assertEqual(dt.microsecond, 123456)

    def test_parse_short_fractions(self):
        self.assertEqual(DateUtils.parse_datetime("2024-01-01T00:00:00.5Z").microsecond, 500000)
        self.assertEqual(DateUtils.parse_datetime("2024-01-01T00:00:00.25+00:00").microsecond, 250000)
        self.assertEqual(DateUtils.parse_datetime("2024-01-01T00:00:00.1234Z").microsecond, 123400)

    def test_range_with_short_fraction(self):
        time_range = TimeRange.from_dict({"from": "2024-01-01T00:00:00.5Z", "to": "2024-01-01T00:10:00Z"})
        self.assertEqual(time_range.duration_seconds, 599.5)

    def test_parse_naive_datetime_is_utc(self):
        self.assertEqual(DateUtils.parse_datetime(datetime(2024, 1, 1)), RANGE.start)

    def test_truncate_to_second(self):
        self.assertEqual(DateUtils.truncate_to_second(1_999_999_999), 1_000_000_000)

    def test_from_epoch_nanos(self):
        self.assertEqual(DateUtils.from_epoch_nanos(1704067200 * 1_000_000_000 + 999), RANGE.start)


class TestArchiverSettings(unittest.TestCase):
    """Test datasource settings."""

    def test_from_dict(self):
        settings = ArchiverSettings.from_dict({"server": "k1dataserver", "managePort": "17665", "dataPort": 17668})

        self.assertEqual(settings.data_url, "http://k1dataserver:17668")
        self.assertEqual(settings.manage_url, "http://k1dataserver:17665")

    def test_missing_server(self):
        with self.assertRaises(ConfigError):
            ArchiverSettings.from_dict({"managePort": "17665", "dataPort": "17668"})

    def test_bad_port(self):
        with self.assertRaises(ConfigError):
            ArchiverSettings.from_dict({"server": "h", "managePort": "abc", "dataPort": "17668"})

    def test_not_an_object(self):
        with self.assertRaises(ConfigError):
            ArchiverSettings.from_dict("k1dataserver:17665")


class TestSeriesModels(unittest.TestCase):
    """Test series and frame models."""

    def test_length_mismatch_rejected(self):
        with self.assertRaises(ValueError):
            ResponseSeries(times=(1, 2), values=(1.0,))

    def test_frame_to_dict(self):
        frame = Frame(name="k1:a:b", ref_id="A", times=(0, 1_500_000_000), values=(1.0, math.nan))
        document = frame.to_dict()

        self.assertEqual(document["name"], "k1:a:b")
        self.assertEqual(document["refId"], "A")
        self.assertEqual(document["fields"][0]["name"], "Time")
        self.assertEqual(document["fields"][0]["values"][1], "1970-01-01T00:00:01.500000000Z")
        self.assertEqual(document["fields"][1], {"name": "Value", "values": [1.0, None]})

    def test_placeholder_frame_has_no_value_field(self):
        frame = Frame(name="response", ref_id="A", times=(0, 1))
        self.assertTrue(frame.is_placeholder)
        self.assertEqual(len(frame.to_dict()["fields"]), 1)

    def test_query_result_to_dict(self):
        result = QueryResult(ref_id="A", error="boom")
        self.assertFalse(result.ok)
        self.assertEqual(result.to_dict(), {"frames": [], "error": "boom"})


class TestChannelStatus(unittest.TestCase):
    """Test getPVStatus row parsing."""

    def test_string_encoded_fields(self):
        status = ChannelStatus.from_dict({
            "pvName": "k1:dcs:axe:az",
            "connectionState": "true",
            "isMonitored": "false",
            "samplingPeriod": "0.1",
        })

        self.assertTrue(status.connection_state)
        self.assertFalse(status.is_monitored)
        self.assertEqual(status.sampling_period, 0.1)

    def test_missing_fields_use_defaults(self):
        status = ChannelStatus.from_dict({"pvName": "x", "samplingPeriod": "n/a"})
        self.assertEqual(status.sampling_period, 0.0)
        self.assertFalse(status.connection_state)
