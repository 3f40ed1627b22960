"""
Payload decoding module.

Parses getData.json replies into ordered sample series. Most channels carry
numeric samples; enumerated and text channels carry strings, and are detected
by a type mismatch on the numeric schema.
"""

import json
import logging
import math
from typing import Any, Callable, List, Optional, Tuple

from ..core import constants
from ..core.errors import DecodeError
from ..models.series import DecodedSeries, RawSample, SampleValue


class SchemaMismatch(Exception):
    """A field held a JSON value of the wrong type for the schema."""


def _reject_constant(token: str) -> Any:
    # NaN/Infinity are not JSON; only the sanitized ': NaN' form is tolerated
    raise ValueError(f"invalid literal {token}")


def _numeric_value(value: Any) -> float:
    if value is None:
        return math.nan
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaMismatch(f"cannot decode {type(value).__name__} into float val")
    return float(value)


def _string_value(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaMismatch(f"cannot decode {type(value).__name__} into string val")
    return value


def _int_value(row: dict, key: str) -> int:
    value = row.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaMismatch(f"cannot decode {type(value).__name__} into int {key}")
    return value


class PayloadDecoder:
    """Decode archiver replies into DecodedSeries."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize payload decoder.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def sanitize(body: bytes) -> bytes:
        """Rewrite the archiver's ': NaN' tokens to ': null'."""
        return body.replace(constants.NAN_TOKEN, constants.NULL_TOKEN)

    def decode(self, body: bytes) -> DecodedSeries:
        """
        Decode a raw reply body.

        Args:
            body: Raw getData.json body

        Returns:
            Numeric series, or a string series for text/enum channels

        Raises:
            DecodeError: If the body is not JSON or matches neither schema
        """
        sanitized = self.sanitize(body)

        try:
            payload = json.loads(sanitized, parse_constant=_reject_constant)
        except ValueError as e:
            raise DecodeError(f"Invalid archiver reply: {e}") from e

        try:
            return self._decode_schema(payload, _numeric_value, is_numeric=True)
        except SchemaMismatch as numeric_error:
            self.logger.debug(f"Numeric decode failed ({numeric_error}), trying string schema")
            try:
                series = self._decode_schema(payload, _string_value, is_numeric=False)
            except SchemaMismatch as string_error:
                raise DecodeError(
                    f"Reply matches neither numeric nor string schema: {string_error}"
                ) from string_error

        self.logger.debug(f"Decoded {len(series)} string samples for {series.name}")
        return series

    def _decode_schema(
        self,
        payload: Any,
        value_parser: Callable[[Any], SampleValue],
        is_numeric: bool
    ) -> DecodedSeries:
        if payload is None:
            payload = []
        if not isinstance(payload, list):
            raise SchemaMismatch(f"cannot decode {type(payload).__name__} into dataset list")

        samples: List[RawSample] = []
        name, precision = "", 0.0

        for index, dataset in enumerate(payload):
            if dataset is None:
                continue
            if not isinstance(dataset, dict):
                raise SchemaMismatch(f"cannot decode {type(dataset).__name__} into dataset")

            if index == 0:
                name, precision = self._decode_meta(dataset.get("meta"))

            rows = dataset.get("data") or []
            if not isinstance(rows, list):
                raise SchemaMismatch(f"cannot decode {type(rows).__name__} into data list")

            for row in rows:
                samples.append(self._decode_row(row or {}, value_parser))

        times: Tuple[int, ...] = tuple(sample.timestamp for sample in samples)
        values: Tuple[SampleValue, ...] = tuple(sample.value for sample in samples)

        return DecodedSeries(
            name=name,
            precision=precision,
            is_numeric=is_numeric,
            times=times,
            values=values,
        )

    @staticmethod
    def _decode_row(row: Any, value_parser: Callable[[Any], SampleValue]) -> RawSample:
        if not isinstance(row, dict):
            raise SchemaMismatch(f"cannot decode {type(row).__name__} into sample")

        return RawSample(
            secs=_int_value(row, "secs"),
            nanos=_int_value(row, "nanos"),
            severity=_int_value(row, "severity"),
            status=_int_value(row, "status"),
            value=value_parser(row.get("val")),
        )

    @staticmethod
    def _decode_meta(meta: Any) -> Tuple[str, float]:
        if not isinstance(meta, dict):
            return "", 0.0

        name = meta.get("name")
        precision = meta.get("PREC")
        try:
            # PREC arrives as a numeric string
            precision = float(precision) if precision is not None else 0.0
        except (TypeError, ValueError):
            precision = 0.0

        return (name if isinstance(name, str) else ""), precision
