"""
Application-wide constants for the archiver query pipeline.

Endpoint paths and timeouts for the EPICS Archiver Appliance HTTP API.
"""

# Archiver Appliance endpoints
DATA_RETRIEVAL_PATH = "/retrieval/data/getData.json"
PV_STATUS_PATH = "/mgmt/bpl/getPVStatus"

# Request timeouts (seconds)
DATA_TIMEOUT = 60
STATUS_TIMEOUT = 30

# Server-side decimation operator, "last sample in each window"
BINNING_OPERATOR = "lastSample"

# Invalid JSON literal emitted by the archiver for missing samples
NAN_TOKEN = b": NaN"
NULL_TOKEN = b": null"

# Batch execution
DEFAULT_MAX_WORKERS = 4

# Body read size when streaming replies
READ_CHUNK_SIZE = 64 * 1024

NANOS_PER_SECOND = 1_000_000_000

# Frame field names
TIME_FIELD = "Time"
VALUE_FIELD = "Value"
PLACEHOLDER_FRAME_NAME = "response"
