"""
Channel status data models.

Contains DTOs for the management API's getPVStatus rows.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ChannelStatus:
    """Archiving status of a single PV."""

    pv_name: str
    status: str = ""
    connection_state: bool = False
    is_monitored: bool = False
    sampling_period: float = 0.0
    appliance: str = ""
    last_event: str = ""

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "ChannelStatus":
        """
        Build from a getPVStatus row.

        The appliance encodes booleans and numbers as strings; fields that
        are absent (e.g. for PVs that are not archived) keep their defaults.
        """
        return cls(
            pv_name=str(row.get("pvName", "")),
            status=str(row.get("status", "")),
            connection_state=_as_bool(row.get("connectionState")),
            is_monitored=_as_bool(row.get("isMonitored")),
            sampling_period=_as_float(row.get("samplingPeriod")),
            appliance=str(row.get("appliance", "")),
            last_event=str(row.get("lastEvent", "")),
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
