"""
EPICS Archiver Query Pipeline

This package answers time-range queries against an EPICS Archiver Appliance,
returning aligned time/value frames with optional unit conversion and
derivative/delta transforms.
"""

__version__ = "0.1.0"
__description__ = "Time-range queries against an EPICS Archiver Appliance"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "ArchiverQueryApp":
        from .main import ArchiverQueryApp
        return ArchiverQueryApp
    if name == "query_data":
        from .services import query_data
        return query_data
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ArchiverQueryApp",
    "query_data",
]
