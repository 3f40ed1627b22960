"""
Query data models.

The numeric codes for unit conversions and transforms are shared with the
query editor side. These enums are the single definition of what each
ordinal means.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional

from ..core.date_utils import DateUtils
from ..core.errors import QueryError, UnknownEnumError


class UnitConversion(IntEnum):
    """Per-sample engineering unit conversions."""

    NONE = 0
    DEG_TO_RAD = 1
    RAD_TO_DEG = 2
    RAD_TO_ARCSEC = 3
    # Labels do not match the arithmetic (K_TO_C adds 273.15); kept as deployed
    K_TO_C = 4
    C_TO_K = 5
    F_TO_C = 6
    C_TO_F = 7

    @classmethod
    def parse(cls, code: Any) -> "UnitConversion":
        return _parse_code(cls, code, "unit conversion")


class Transform(IntEnum):
    """Whole-series transforms applied after unit conversion."""

    NONE = 0
    FIRST_DERIVATIVE = 1
    FIRST_DERIVATIVE_1HZ = 2
    FIRST_DERIVATIVE_10HZ = 3
    FIRST_DERIVATIVE_100HZ = 4
    DELTA = 5
    TRUNCATE_FRAC_SECS = 6

    @classmethod
    def parse(cls, code: Any) -> "Transform":
        return _parse_code(cls, code, "transform")


def _parse_code(enum_cls, code: Any, kind: str):
    if isinstance(code, enum_cls):
        return code
    if isinstance(code, bool) or not isinstance(code, int):
        raise UnknownEnumError(kind, code)
    try:
        return enum_cls(code)
    except ValueError:
        raise UnknownEnumError(kind, code) from None


@dataclass(frozen=True)
class TimeRange:
    """Requested time range, [start, end)."""

    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()

    @property
    def start_nanos(self) -> int:
        return DateUtils.to_epoch_nanos(self.start)

    @property
    def end_nanos(self) -> int:
        return DateUtils.to_epoch_nanos(self.end)

    @classmethod
    def from_dict(cls, payload: Any) -> "TimeRange":
        """
        Build a range from {"from": ..., "to": ...}.

        Raises:
            QueryError: If either boundary is missing or unparseable
        """
        if not isinstance(payload, dict):
            raise QueryError(f"Invalid time range: {payload!r}")
        try:
            return cls(
                start=DateUtils.parse_datetime(payload["from"]),
                end=DateUtils.parse_datetime(payload["to"]),
            )
        except KeyError as e:
            raise QueryError(f"Time range is missing {e.args[0]!r}") from None
        except ValueError as e:
            raise QueryError(str(e)) from None


@dataclass(frozen=True)
class Query:
    """A single archive query, immutable once accepted."""

    ref_id: str
    channel: str
    time_range: TimeRange
    max_data_points: int = 0
    disable_binning: bool = False
    unit_conversion: UnitConversion = UnitConversion.NONE
    transform: Transform = Transform.NONE
    hide: bool = False
    format: str = ""
    interval_ms: int = 0

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], time_range: TimeRange) -> "Query":
        """
        Accept a query payload in the dashboard's JSON shape.

        Args:
            payload: Query JSON (queryText, unitConversion, transform, ...)
            time_range: Range the query covers

        Returns:
            Query instance

        Raises:
            UnknownEnumError: For unrecognized unitConversion/transform codes
            QueryError: For fields of the wrong type
        """
        return cls(
            ref_id=_string_field(payload, "refId"),
            channel=_string_field(payload, "queryText"),
            time_range=time_range,
            max_data_points=_int_field(payload, "maxDataPoints"),
            disable_binning=_bool_field(payload, "disablebinning"),
            unit_conversion=UnitConversion.parse(payload.get("unitConversion", 0)),
            transform=Transform.parse(payload.get("transform", 0)),
            hide=_bool_field(payload, "hide"),
            format=_string_field(payload, "format"),
            interval_ms=_int_field(payload, "intervalMs"),
        )


def _string_field(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise QueryError(f"{key} must be a string, got {value!r}")
    return value


def _int_field(payload: Dict[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise QueryError(f"{key} must be an integer, got {value!r}")
    return value


def _bool_field(payload: Dict[str, Any], key: str, default: bool = False) -> bool:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise QueryError(f"{key} must be a boolean, got {value!r}")
    return value


def optional_time_range(payload: Dict[str, Any], default: Optional[TimeRange]) -> TimeRange:
    """Pick the query's own timeRange, falling back to the batch range."""
    if payload.get("timeRange") is not None:
        return TimeRange.from_dict(payload["timeRange"])
    if default is None:
        raise QueryError("Query has no time range")
    return default
