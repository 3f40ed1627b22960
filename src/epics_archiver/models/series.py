"""
Series data models.

Contains DTOs for decoded archive samples, pipeline series and the frames
returned per query.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core import constants
from ..core.date_utils import DateUtils

SampleValue = Union[float, str]


@dataclass(frozen=True)
class RawSample:
    """One archived sample as returned by getData.json."""

    secs: int
    nanos: int
    severity: int
    status: int
    value: SampleValue

    @property
    def timestamp(self) -> int:
        """Epoch nanoseconds."""
        return self.secs * constants.NANOS_PER_SECOND + self.nanos


@dataclass(frozen=True)
class DecodedSeries:
    """Samples in archive-return order plus channel metadata."""

    name: str
    precision: float
    is_numeric: bool
    times: Tuple[int, ...] = ()
    values: Tuple[SampleValue, ...] = ()

    def __len__(self) -> int:
        return len(self.times)

    def to_response(self) -> "ResponseSeries":
        return ResponseSeries(times=self.times, values=self.values)


@dataclass(frozen=True)
class ResponseSeries:
    """Index-aligned timestamps and values."""

    times: Tuple[int, ...] = ()
    values: Tuple[SampleValue, ...] = ()

    def __post_init__(self):
        if len(self.times) != len(self.values):
            raise ValueError(
                f"Series length mismatch: {len(self.times)} times, {len(self.values)} values"
            )

    def __len__(self) -> int:
        return len(self.times)


@dataclass(frozen=True)
class Frame:
    """
    Outgoing series for one query.

    A placeholder frame spans the requested range with two timestamps and
    carries no value field.
    """

    name: str
    ref_id: str
    times: Tuple[int, ...]
    values: Optional[Tuple[SampleValue, ...]] = None

    @property
    def is_placeholder(self) -> bool:
        return self.values is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with RFC 3339 times; NaN and infinities become null."""
        fields: List[Dict[str, Any]] = [
            {
                "name": constants.TIME_FIELD,
                "values": [DateUtils.format_nanos(t) for t in self.times],
            }
        ]
        if self.values is not None:
            fields.append({
                "name": constants.VALUE_FIELD,
                "values": [_json_value(v) for v in self.values],
            })
        return {"name": self.name, "refId": self.ref_id, "fields": fields}


@dataclass
class QueryResult:
    """Frames and error for one RefID."""

    ref_id: str
    frames: List[Frame] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"frames": [f.to_dict() for f in self.frames]}
        if self.error is not None:
            result["error"] = self.error
        return result


def _json_value(value: SampleValue) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
